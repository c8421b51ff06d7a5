"""Component style compilation.

Turns a node's style dictionary into ``StyleRule`` objects. A style is
either a flat mapping of camelCase properties or a nested spec::

    {"base": {...}, "nested": {"&:hover": {...}, ".title": {...}}}

Nested keys starting with ``&`` or ``:`` attach to the current selector;
other keys are descendants. Nesting recurses to any depth.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from pagewright.core import Settings, get_logger, get_settings
from pagewright.models import Breakpoint, ComponentNode, StyleRule

from .cache import CompiledStyle, StyleCache
from .formatter import format_media, format_rules
from .selectors import combine_selectors, default_selector
from .units import camel_to_kebab, process_value, px_to_rpx

logger = get_logger(__name__)

BREAKPOINTS: dict[Breakpoint, str] = {
    Breakpoint.XS: "(max-width: 375px)",
    Breakpoint.SM: "(min-width: 375px) and (max-width: 667px)",
    Breakpoint.MD: "(min-width: 667px) and (max-width: 768px)",
    Breakpoint.LG: "(min-width: 768px) and (max-width: 1024px)",
    Breakpoint.XL: "(min-width: 1024px)",
}


class StyleOptions(BaseModel):
    """Per-call style compilation options."""

    model_config = ConfigDict(frozen=True)

    minify: bool = False
    px_to_rpx: bool = False
    px_ratio: float = 2.0
    validate_rules: bool = True
    max_selector_depth: int = 4
    use_cache: bool = True

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "StyleOptions":
        settings = settings or get_settings()
        values = {
            "px_ratio": settings.px_to_rpx_ratio,
            "max_selector_depth": settings.max_selector_depth,
            "use_cache": settings.enable_cache,
        }
        values.update(overrides)
        return cls(**values)


def is_nested_spec(style: Any) -> bool:
    return isinstance(style, dict) and (
        isinstance(style.get("base"), dict) or isinstance(style.get("nested"), dict)
    )


def resolve_breakpoint(name: str) -> str | None:
    """Media predicate for a breakpoint name, or a raw ``(...)`` query."""
    try:
        return BREAKPOINTS[Breakpoint(name)]
    except ValueError:
        if name.strip().startswith("("):
            return name.strip()
        return None


class StyleCompiler:
    """Compiles node styles to rules; ``compile_component`` is cached."""

    def __init__(self, options: StyleOptions | None = None, cache: StyleCache | None = None):
        self.options = options or StyleOptions()
        self.cache = cache

    def compile_style(
        self,
        style: dict[str, Any],
        selector: str,
        source_id: str | None = None,
        media: str | None = None,
    ) -> StyleRule:
        """Compile one flat style mapping into a single rule."""
        properties: dict[str, str] = {}
        for key, value in style.items():
            if value is None:
                continue
            name = camel_to_kebab(key)
            processed = process_value(value, name)
            if self.options.px_to_rpx and processed:
                processed = px_to_rpx(processed, self.options.px_ratio)
            properties[name] = processed
        return StyleRule(selector=selector, properties=properties, media=media, source_id=source_id)

    def compile_nested(
        self,
        spec: dict[str, Any],
        parent_selector: str = "",
        source_id: str | None = None,
        media: str | None = None,
    ) -> list[StyleRule]:
        """Expand a ``{base, nested}`` spec into rules, narrowing the selector as it recurses."""
        rules: list[StyleRule] = []

        base = spec.get("base")
        if isinstance(base, dict):
            rule = self.compile_style(base, parent_selector, source_id, media)
            if rule.properties:
                rules.append(rule)

        nested = spec.get("nested")
        if isinstance(nested, dict):
            for key, child in nested.items():
                selector = combine_selectors(parent_selector, key)
                if is_nested_spec(child):
                    rules.extend(self.compile_nested(child, selector, source_id, media))
                elif isinstance(child, dict):
                    rule = self.compile_style(child, selector, source_id, media)
                    if rule.properties:
                        rules.append(rule)

        return rules

    def _compile_any(
        self, style: dict[str, Any], selector: str, source_id: str, media: str | None
    ) -> list[StyleRule]:
        if is_nested_spec(style):
            return self.compile_nested(style, selector, source_id, media)
        rule = self.compile_style(style, selector, source_id, media)
        return [rule] if rule.properties else []

    def compile_rules(self, node: ComponentNode) -> list[StyleRule]:
        """Rules for one node (children are not included)."""
        selector = default_selector(node)
        rules = self._compile_any(node.style, selector, node.id, None) if node.style else []

        for breakpoint, style in node.responsive.items():
            media = resolve_breakpoint(breakpoint)
            if media is None:
                logger.warning("unknown_breakpoint", breakpoint=breakpoint, component=node.id)
                continue
            rules.extend(self._compile_any(style, selector, node.id, media))

        return rules

    def _compile_node(self, node: ComponentNode) -> CompiledStyle:
        rules = self.compile_rules(node)
        return CompiledStyle(
            text=format_rules(rules, minify=self.options.minify), rules=tuple(rules)
        )

    def compile_node(self, node: ComponentNode) -> CompiledStyle:
        if self.cache is None or not self.options.use_cache:
            return self._compile_node(node)
        return self.cache.get_or_compile(node, self.options.model_dump(), self._compile_node)

    def compile_component(self, node: ComponentNode) -> str:
        """Stylesheet text for one node."""
        return self.compile_node(node).text

    def compile_tree(self, nodes: list[ComponentNode]) -> list[StyleRule]:
        """Rules for a forest in pre-order."""
        rules: list[StyleRule] = []
        for root in nodes:
            for node in root.walk():
                if node.style or node.responsive:
                    rules.extend(self.compile_node(node).rules)
        return rules

    def generate_media_query(self, breakpoint: Breakpoint | str, rules: list[StyleRule]) -> str:
        """Wrap rules in the media block for ``breakpoint``."""
        query = resolve_breakpoint(breakpoint.value if isinstance(breakpoint, Breakpoint) else breakpoint)
        if query is None:
            raise ValueError(f"Unknown breakpoint: {breakpoint}")
        return format_media(query, rules, minify=self.options.minify)


__all__ = [
    "BREAKPOINTS",
    "StyleOptions",
    "StyleCompiler",
    "is_nested_spec",
    "resolve_breakpoint",
]
