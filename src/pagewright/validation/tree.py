"""Component tree validation.

A single pre-order walk collects every violation; nothing short-circuits,
so one bad node never hides problems elsewhere in the tree.
"""

from pagewright.core import ValidationReport, get_logger
from pagewright.models import ComponentNode

from .rules import (
    ENUMERATED_VALUES,
    KNOWN_PROPERTIES,
    REQUIRED_ATTRIBUTES,
    allows_child,
    is_valid_data_path,
    is_valid_identifier,
)

logger = get_logger(__name__)

DEFAULT_MAX_CHILDREN = 10


def strip_mustache(expression: str) -> str:
    """``{{ a.b }}`` -> ``a.b``; plain expressions pass through trimmed."""
    text = expression.strip()
    if text.startswith("{{") and text.endswith("}}"):
        return text[2:-2].strip()
    return text


class TreeValidator:
    """Walks a component forest and accumulates a ``ValidationReport``."""

    def __init__(self, max_children: int = DEFAULT_MAX_CHILDREN) -> None:
        self.max_children = max_children

    def validate(self, nodes: list[ComponentNode]) -> ValidationReport:
        report = ValidationReport()
        seen: set[str] = set()
        for index, node in enumerate(nodes):
            self._visit(node, None, f"[{index}]", seen, report)

        if not report.valid:
            logger.debug(
                "tree_invalid", errors=len(report.errors), warnings=len(report.warnings)
            )
        return report

    def _visit(
        self,
        node: ComponentNode,
        parent: ComponentNode | None,
        position: str,
        seen: set[str],
        report: ValidationReport,
    ) -> None:
        path = node.id or position

        if not node.id:
            report.error("MISSING_ID", "Component must have an id", path)
        elif node.id in seen:
            report.error("DUPLICATE_ID", f"Duplicate component id: {node.id}", path)
        else:
            seen.add(node.id)

        if not node.type:
            report.error("MISSING_TYPE", "Component must have a type", path)
        else:
            self._check_attributes(node, path, report)
            if parent is not None and parent.type and not allows_child(parent.type, node.type):
                report.error(
                    "INVALID_NESTING",
                    f"{parent.type} cannot contain {node.type}",
                    path,
                )
            self._check_warnings(node, path, report)

        self._check_bindings(node, path, report)
        self._check_condition(node, path, report)
        self._check_list_rendering(node, path, report)

        for index, child in enumerate(node.children):
            self._visit(child, node, f"{position}.children[{index}]", seen, report)

    def _check_attributes(self, node: ComponentNode, path: str, report: ValidationReport) -> None:
        for required in REQUIRED_ATTRIBUTES.get(node.type, []):
            if node.get_property(required) is None and not node.has_binding(required):
                report.error(
                    "MISSING_REQUIRED_ATTRIBUTE",
                    f"{node.type} requires attribute: {required}",
                    path,
                )

        for prop in node.properties:
            if prop.is_binding:
                continue
            allowed = ENUMERATED_VALUES.get((node.type, prop.name))
            if prop.value is None or (allowed is not None and str(prop.value) not in allowed):
                report.error(
                    "INVALID_PROPERTY_VALUE",
                    f"Invalid value for {node.type}.{prop.name}: {prop.value}",
                    path,
                )

    def _check_bindings(self, node: ComponentNode, path: str, report: ValidationReport) -> None:
        for binding in node.data_bindings:
            if not binding.property:
                report.error("INVALID_BINDING", "Data binding requires a property", path)
            if not binding.data_path:
                report.error("INVALID_BINDING", "Data binding requires a data path", path)
            elif not is_valid_data_path(strip_mustache(binding.data_path)):
                report.error("INVALID_DATA_PATH", f"Invalid data path: {binding.data_path}", path)

    def _check_condition(self, node: ComponentNode, path: str, report: ValidationReport) -> None:
        if node.condition is None:
            return
        text = node.condition.strip()
        if not text or not strip_mustache(text):
            report.error("EMPTY_CONDITION", "Render condition cannot be empty", path)
        elif text.count("{{") != text.count("}}"):
            report.error("INVALID_CONDITION", f"Unbalanced render condition: {text}", path)

    def _check_list_rendering(
        self, node: ComponentNode, path: str, report: ValidationReport
    ) -> None:
        config = node.list_rendering
        if config is None:
            return
        source = strip_mustache(config.data_source)
        if not source:
            report.error("MISSING_DATA_SOURCE", "List rendering requires a data source", path)
        elif not is_valid_data_path(source):
            report.error("INVALID_DATA_SOURCE", f"Invalid data source: {config.data_source}", path)
        if config.item_name is not None and not is_valid_identifier(config.item_name):
            report.error("INVALID_ITEM_NAME", f"Invalid item name: {config.item_name}", path)
        if config.index_name is not None and not is_valid_identifier(config.index_name):
            report.error("INVALID_INDEX_NAME", f"Invalid index name: {config.index_name}", path)

    def _check_warnings(self, node: ComponentNode, path: str, report: ValidationReport) -> None:
        has_content = node.get_property("content") is not None or node.has_binding("content")

        if node.type == "text" and not has_content and not node.children:
            report.warn("EMPTY_TEXT", "text component has no content", path)

        if node.type == "button":
            has_label = has_content or any(child.type == "text" for child in node.children)
            if not has_label:
                report.warn("EMPTY_BUTTON", "button should contain text", path)

        if len(node.children) > self.max_children:
            report.warn(
                "TOO_MANY_CHILDREN",
                f"Component has {len(node.children)} children, consider splitting it",
                path,
            )

        for prop in node.properties:
            if prop.name not in KNOWN_PROPERTIES and not node.has_binding(prop.name):
                report.warn("UNUSED_PROPERTY", f"Property {prop.name} may be unused", path)


def validate_tree(
    nodes: list[ComponentNode], max_children: int = DEFAULT_MAX_CHILDREN
) -> ValidationReport:
    """Validate a component forest in one pass."""
    return TreeValidator(max_children).validate(nodes)


__all__ = ["TreeValidator", "validate_tree", "strip_mustache"]
