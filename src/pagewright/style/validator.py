"""Stylesheet rule validation.

Empty declarations and malformed names are errors. Properties outside the
runtime whitelist, unsupported selector forms and deep selector chains are
only warnings: they may still work, they are just not guaranteed to.
"""

import re

from pagewright.core import ValidationReport
from pagewright.models import StyleRule

from .selectors import selector_depth
from .units import PX_PROPERTIES

SUPPORTED_UNITS = frozenset(
    {
        "rpx", "px", "%", "vw", "vh", "vmin", "vmax", "rem", "em", "ex", "ch",
        "cm", "mm", "in", "pt", "pc", "deg", "rad", "turn", "s", "ms",
    }
)

SUPPORTED_PROPERTIES = frozenset(
    {
        "display", "position", "top", "right", "bottom", "left",
        "width", "height", "min-width", "min-height", "max-width", "max-height",
        "margin", "margin-top", "margin-right", "margin-bottom", "margin-left",
        "padding", "padding-top", "padding-right", "padding-bottom", "padding-left",
        "border", "border-width", "border-style", "border-color",
        "border-top", "border-right", "border-bottom", "border-left",
        "border-radius", "border-top-left-radius", "border-top-right-radius",
        "border-bottom-left-radius", "border-bottom-right-radius",
        "box-sizing", "overflow", "overflow-x", "overflow-y", "z-index",
        "flex-direction", "flex-wrap", "justify-content", "align-items",
        "align-content", "align-self", "flex", "flex-grow", "flex-shrink", "flex-basis",
        "order", "gap", "row-gap", "column-gap",
        "background", "background-color", "background-image", "background-size",
        "background-position", "background-repeat", "background-attachment",
        "color", "font-size", "font-weight", "font-family", "font-style",
        "line-height", "text-align", "text-decoration", "text-transform",
        "letter-spacing", "word-spacing", "word-break", "word-wrap",
        "white-space", "text-overflow", "text-indent", "vertical-align",
        "transform", "transform-origin", "transition", "animation",
        "opacity", "visibility", "cursor", "filter", "box-shadow", "text-shadow",
    }
)

# Characters a selector may legally contain. Characters used by selector
# forms the runtime does not support are admitted here and warned about below.
SELECTOR_FORMAT = re.compile(r"^[a-zA-Z0-9_\-.:# (),*\[\]=\"'>~+^$|@%]+$")
PROPERTY_NAME = re.compile(r"^(--)?[a-z][a-z0-9-]*$")
UNIT_TOKEN = re.compile(r"(?<![#\w.-])-?(\d+(?:\.\d+)?)([a-zA-Z%]+)")

UNSUPPORTED_SELECTORS = (
    (re.compile(r"\*"), "Universal selector is not supported"),
    (re.compile(r"\[[^\]]*\]"), "Attribute selectors are not supported"),
    (re.compile(r"[>~+]"), "Sibling and child combinators are not supported"),
)

DEFAULT_MAX_DEPTH = 4


class StyleValidator:
    """Validates compiled rules and reports issues keyed by selector."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def validate_rules(self, rules: list[StyleRule]) -> ValidationReport:
        report = ValidationReport()
        for rule in rules:
            report.merge(self.validate_selector(rule.selector))
            for name, value in rule.properties.items():
                report.merge(self.validate_property(name, value, rule.selector))
        return report

    def validate_selector(self, selector: str) -> ValidationReport:
        report = ValidationReport()
        if not selector or not selector.strip():
            report.error("INVALID_SELECTOR", "Selector must be a non-empty string", selector)
            return report

        if not SELECTOR_FORMAT.match(selector):
            report.error(
                "INVALID_SELECTOR_FORMAT", f"Selector contains illegal characters: {selector}", selector
            )

        for pattern, reason in UNSUPPORTED_SELECTORS:
            if pattern.search(selector):
                report.warn("UNSUPPORTED_SELECTOR", f"{reason}: {selector}", selector)

        depth = selector_depth(selector)
        if depth > self.max_depth:
            report.warn("DEEP_NESTING", f"Selector is nested {depth} levels deep", selector)
        return report

    def validate_property(self, name: str, value: str, path: str | None = None) -> ValidationReport:
        report = ValidationReport()
        if not name or value is None or not str(value).strip():
            report.error("INVALID_PROPERTY", f"Empty declaration: {name!r}: {value!r}", path)
            return report

        if not PROPERTY_NAME.match(name):
            report.error("INVALID_PROPERTY_NAME", f"Invalid property name: {name}", path)
        elif not name.startswith("--") and name not in SUPPORTED_PROPERTIES:
            report.warn("UNSUPPORTED_PROPERTY", f"Property {name} may not be supported", path)

        report.merge(self.validate_unit(str(value), name, path))
        return report

    def validate_unit(self, value: str, name: str = "", path: str | None = None) -> ValidationReport:
        report = ValidationReport()
        # url() arguments are paths, not dimensions
        if "url(" in value:
            return report
        for _, unit in UNIT_TOKEN.findall(value):
            if unit.lower() not in SUPPORTED_UNITS:
                report.error("UNSUPPORTED_UNIT", f"Unsupported unit: {unit} in {value}", path)
            elif unit.lower() == "px" and name not in PX_PROPERTIES:
                report.warn("PREFER_RPX", f"Prefer rpx over px: {value}", path)
        return report


__all__ = ["StyleValidator", "SUPPORTED_PROPERTIES", "SUPPORTED_UNITS"]
