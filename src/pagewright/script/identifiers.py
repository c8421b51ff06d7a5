"""Script identifier rules."""

from pagewright.validation import is_valid_identifier

JS_RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends",
        "false", "finally", "for", "function", "if", "implements", "import",
        "in", "instanceof", "interface", "let", "new", "null", "package",
        "private", "protected", "public", "return", "static", "super",
        "switch", "this", "throw", "true", "try", "typeof", "var", "void",
        "while", "with", "yield", "await", "async", "arguments", "eval",
        "undefined", "NaN", "Infinity",
    }
)

# Globals injected by the mini-app runtime
RUNTIME_GLOBALS = frozenset(
    {"wx", "App", "Page", "Component", "Behavior", "getCurrentPages", "getApp", "requirePlugin"}
)

RESERVED_WORDS = JS_RESERVED_WORDS | RUNTIME_GLOBALS


def is_reserved(name: str) -> bool:
    return name in RESERVED_WORDS


def is_usable_name(name: str) -> bool:
    """Valid identifier that does not shadow a keyword or runtime global."""
    return is_valid_identifier(name) and not is_reserved(name)


__all__ = ["JS_RESERVED_WORDS", "RUNTIME_GLOBALS", "RESERVED_WORDS", "is_reserved", "is_usable_name"]
