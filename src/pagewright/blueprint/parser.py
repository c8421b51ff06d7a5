"""Blueprint Parser - project documents to ``Project`` with validation."""

from collections import defaultdict
from typing import Any

from pydantic import ValidationError as ModelValidationError
from returns.result import Failure, Result, Success

from pagewright.core import (
    Issue,
    PagewrightError,
    Settings,
    ValidationError,
    get_logger,
    get_settings,
    validate_json_depth,
    validate_json_size,
)
from pagewright.core.json import JSONParseError, extract_json
from pagewright.models import Project

logger = get_logger(__name__)

# Keys with a fixed meaning in the compact node shape
_STRUCTURAL_KEYS = frozenset({"if", "for", "style", "responsive", "children", "name"})


def _property_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return "string"


def _expand_event(name: str, value: Any) -> dict[str, Any]:
    """
    Expand an ``@event`` entry.

    Supports:
    - Handler name: {"@tap": "onSave"}
    - Single action: {"@tap": {"kind": "navigateBack"}}
    - Action list: {"@tap": [{"kind": "showToast", "title": "Saved"}]}
    """
    if isinstance(value, str):
        return {"name": name, "handler": value}
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise ValidationError(f"Event '@{name}' must be a handler name or a list of actions")

    actions = [{"kind": item} if isinstance(item, str) else item for item in value]
    return {"name": name, "actions": actions}


def _expand_list_rendering(value: Any) -> dict[str, Any]:
    if isinstance(value, str):
        return {"data_source": value}
    if isinstance(value, dict):
        return value
    raise ValidationError("'for' must be a data path or a list rendering object")


class BlueprintParser:
    """Parses project documents, expanding the compact node shape."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.max_size = settings.max_project_size
        self.max_depth = settings.max_json_depth

    def parse(self, text: str) -> Project:
        """
        Parse a project document.

        Args:
            text: JSON document, optionally wrapped in a markdown code fence

        Returns:
            Validated ``Project``

        Raises:
            ValidationError: If the document is too large, too deep, not JSON,
                or does not describe a project
        """
        validate_json_size(text, self.max_size, "Project document")

        try:
            document = extract_json(text, repair=True)
        except JSONParseError as e:
            logger.error("json_parse_failed", error=str(e))
            raise ValidationError(f"Invalid JSON: {e}", code="INVALID_JSON") from e

        validate_json_depth(document, self.max_depth)

        # {"project": {...}} wrapper
        if "project" in document and isinstance(document["project"], dict) and "pages" not in document:
            document = document["project"]

        expanded = dict(document)
        expanded["pages"] = [self._expand_page(page) for page in document.get("pages") or []]
        components_key = "globalComponents" if "globalComponents" in document else "global_components"
        expanded[components_key] = [
            self._expand_definition(definition) for definition in document.get(components_key) or []
        ]

        try:
            project = Project.model_validate(expanded)
        except ModelValidationError as e:
            logger.error("invalid_project", errors=e.error_count())
            raise ValidationError(
                f"Invalid project: {e.errors()[0]['msg']}",
                code="INVALID_PROJECT",
                details={"errors": e.errors(include_url=False)},
            ) from e

        logger.info(
            "blueprint_parsed",
            project=project.id,
            pages=len(project.pages),
            nodes=sum(page.node_count for page in project.pages),
        )
        return project

    def _expand_page(self, page: Any) -> Any:
        if not isinstance(page, dict):
            return page

        expanded = dict(page)
        path = page.get("path")
        if "id" not in expanded and isinstance(path, str):
            expanded["id"] = path.rstrip("/").rsplit("/", 1)[-1]
        expanded["components"] = self.expand_components(page.get("components") or [])
        return expanded

    def _expand_definition(self, definition: Any) -> Any:
        if not isinstance(definition, dict):
            return definition

        expanded = dict(definition)
        expanded["template"] = self.expand_components(definition.get("template") or [])
        return expanded

    def expand_components(self, components: list[Any]) -> list[dict[str, Any]]:
        """Expand one tree and fill in missing ids as ``{type}-{n}``."""
        if not isinstance(components, list):
            raise ValidationError("Component list expected")

        nodes = [self._expand_node(component) for component in components]
        self._assign_ids(nodes)
        return nodes

    def _expand_node(self, node: Any) -> dict[str, Any]:
        """
        Expand a single node.

        Special cases:
        - Simple strings: "Hello" -> text node with a ``content`` property
        - Explicit nodes (have ``type``) keep their shape; children are expanded
        - Compact nodes: {"type#id": {...}}
        """
        if isinstance(node, str):
            return {"type": "text", "properties": [{"name": "content", "value": node}]}

        if not isinstance(node, dict):
            raise ValidationError(f"Invalid node: expected object or string, got {type(node).__name__}")

        if "type" in node:
            expanded = dict(node)
            expanded["children"] = [self._expand_node(child) for child in node.get("children") or []]
            return expanded

        if len(node) != 1:
            raise ValidationError("Compact node must have exactly one 'type#id' key")

        key, body = next(iter(node.items()))
        return self._expand_compact(key, body)

    def _expand_compact(self, key: str, body: Any) -> dict[str, Any]:
        node_type, _, node_id = key.partition("#")
        result: dict[str, Any] = {"type": node_type}
        if node_id:
            result["id"] = node_id

        if body is None:
            body = {}
        elif isinstance(body, str):
            body = {"content": body}
        elif isinstance(body, list):
            body = {"children": body}
        elif not isinstance(body, dict):
            body = {"content": body}

        properties: list[dict[str, Any]] = []
        bindings: list[dict[str, Any]] = []
        events: list[dict[str, Any]] = []

        for name, value in body.items():
            if name.startswith("@"):
                events.append(_expand_event(name[1:], value))
            elif name.startswith("::"):
                bindings.append({"property": name[2:], "data_path": value, "mode": "twoWay"})
            elif name.startswith(":"):
                bindings.append({"property": name[1:], "data_path": value, "mode": "oneWay"})
            elif name not in _STRUCTURAL_KEYS:
                properties.append({"name": name, "value": value, "type": _property_type(value)})

        if properties:
            result["properties"] = properties
        if bindings:
            result["data_bindings"] = bindings
        if events:
            result["events"] = events
        if "name" in body:
            result["name"] = body["name"]
        if "if" in body:
            result["condition"] = body["if"]
        if "for" in body:
            result["list_rendering"] = _expand_list_rendering(body["for"])
        if "style" in body:
            result["style"] = body["style"]
        if "responsive" in body:
            result["responsive"] = body["responsive"]

        children = body.get("children") or []
        if not isinstance(children, list):
            children = [children]
        result["children"] = [self._expand_node(child) for child in children]
        return result

    @staticmethod
    def _assign_ids(nodes: list[dict[str, Any]]) -> None:
        def walk(items: list[dict[str, Any]]):
            for item in items:
                yield item
                yield from walk(item.get("children") or [])

        used = {node["id"] for node in walk(nodes) if node.get("id")}
        counters: dict[str, int] = defaultdict(int)

        for node in walk(nodes):
            if node.get("id"):
                continue
            node_type = node.get("type") or "node"
            while True:
                counters[node_type] += 1
                candidate = f"{node_type}-{counters[node_type]}"
                if candidate not in used:
                    break
            node["id"] = candidate
            used.add(candidate)


def parse_blueprint(content: str, settings: Settings | None = None) -> Project:
    """Convenience function to parse a project document."""
    return BlueprintParser(settings).parse(content)


def load_project(text: str, settings: Settings | None = None) -> Result[Project, Issue]:
    """
    Parse a project document (Result pattern version).

    Returns:
        Success with the project, or Failure with the issue that stopped parsing
    """
    try:
        return Success(BlueprintParser(settings).parse(text))
    except PagewrightError as e:
        return Failure(e.to_issue())


__all__ = ["BlueprintParser", "parse_blueprint", "load_project"]
