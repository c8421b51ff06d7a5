"""Static component rules shared by the validator and the compilers."""

import re

# Allowed child types per parent type. A type missing from the table accepts
# any children. An empty list means no children, except for the transparent
# containers below.
NESTING_RULES: dict[str, list[str]] = {
    "view": [],
    "scroll-view": ["view", "text", "image"],
    "swiper": ["swiper-item"],
    "swiper-item": [],
    "movable-area": ["movable-view"],
    "movable-view": [],
    "cover-view": ["cover-view", "cover-image", "text"],
    "form": ["input", "checkbox", "radio", "slider", "switch", "picker", "textarea", "text", "view"],
    "text": [],
    "button": ["text"],
    "label": [],
    "map": [],
    "canvas": [],
    "video": [],
    "audio": [],
    "image": [],
    "input": [],
    "textarea": [],
    "picker": [],
    "checkbox": [],
    "radio": [],
    "slider": [],
    "switch": [],
    "progress": [],
}

TRANSPARENT_CONTAINERS = frozenset({"view", "swiper-item", "label", "movable-view"})

SELF_CLOSING_TAGS = frozenset(
    {"input", "image", "import", "include", "progress", "checkbox", "radio"}
)

TEXT_TYPE = "text"

REQUIRED_ATTRIBUTES: dict[str, list[str]] = {
    "image": ["src"],
    "video": ["src"],
    "audio": ["src"],
}

ENUMERATED_VALUES: dict[tuple[str, str], frozenset[str]] = {
    ("button", "type"): frozenset({"default", "primary", "warn"}),
    ("input", "type"): frozenset({"text", "number", "idcard", "digit"}),
}

KNOWN_PROPERTIES = frozenset(
    {
        "id",
        "class",
        "style",
        "content",
        "value",
        "placeholder",
        "type",
        "checked",
        "disabled",
        "readonly",
        "required",
    }
)

BUILTIN_COMPONENTS = frozenset(
    {
        "view", "scroll-view", "swiper", "swiper-item", "movable-view", "movable-area",
        "cover-view", "cover-image", "icon", "text", "rich-text", "progress", "button",
        "checkbox", "checkbox-group", "form", "input", "label", "picker", "picker-view",
        "picker-view-column", "radio", "radio-group", "slider", "switch", "textarea",
        "navigator", "audio", "image", "video", "camera", "live-player", "live-pusher",
        "map", "canvas", "open-data", "web-view", "ad", "official-account",
        # Template-level tags
        "block", "template", "import", "include", "slot",
    }
)

DATA_PATH_PATTERN = re.compile(
    r"^[a-zA-Z_$][a-zA-Z0-9_$]*(\.[a-zA-Z_$][a-zA-Z0-9_$]*|\[\d+\])*$"
)
IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")


def allows_child(parent_type: str, child_type: str) -> bool:
    """Check a parent/child pair against the nesting table."""
    allowed = NESTING_RULES.get(parent_type)
    if allowed is None:
        return True
    if not allowed:
        return parent_type in TRANSPARENT_CONTAINERS
    return child_type in allowed


def is_self_closing(component_type: str) -> bool:
    return component_type != TEXT_TYPE and component_type in SELF_CLOSING_TAGS


def is_valid_data_path(path: str) -> bool:
    return bool(DATA_PATH_PATTERN.match(path))


def is_valid_identifier(name: str) -> bool:
    return bool(IDENTIFIER_PATTERN.match(name))


def is_builtin(component_type: str) -> bool:
    return component_type in BUILTIN_COMPONENTS


def is_valid_page_path(path: str) -> bool:
    """Relative, at least two segments, no empty, ``.`` or ``..`` segments."""
    if not path or path.startswith("/") or "\\" in path:
        return False
    segments = path.split("/")
    return len(segments) >= 2 and all(segment not in ("", ".", "..") for segment in segments)
