"""Page stylesheet generation."""

import time
from dataclasses import dataclass, field
from typing import Protocol

from pagewright.core import ErrorCategory, Issue, ValidationReport, get_logger
from pagewright.models import ComponentNode, Page, StyleRule

from .cache import StyleCache
from .compiler import StyleCompiler, StyleOptions
from .formatter import format_rules
from .theme import ThemeManager
from .validator import StyleValidator

logger = get_logger(__name__)


class StylePlugin(Protocol):
    """Transforms the rule list before formatting."""

    name: str

    def transform(self, rules: list[StyleRule]) -> list[StyleRule]:
        ...


@dataclass(frozen=True)
class StyleResult:
    text: str
    success: bool
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    rule_count: int = 0
    duration: float = 0.0


class StyleGenerator:
    """Compiles, validates and formats stylesheets for pages and components."""

    def __init__(
        self,
        options: StyleOptions | None = None,
        theme_manager: ThemeManager | None = None,
        cache: StyleCache | None = None,
    ) -> None:
        self.options = options or StyleOptions()
        self.theme_manager = theme_manager or ThemeManager()
        self.compiler = StyleCompiler(self.options, cache)
        self.validator = StyleValidator(self.options.max_selector_depth)
        self._plugins: list[StylePlugin] = []

    def use(self, plugin: StylePlugin) -> "StyleGenerator":
        """Register a plugin; plugins run in registration order."""
        self._plugins.append(plugin)
        return self

    def _apply_plugins(self, rules: list[StyleRule], report: ValidationReport) -> list[StyleRule]:
        """Run plugins in order; a failing plugin is skipped and reported."""
        for plugin in self._plugins:
            name = getattr(plugin, "name", type(plugin).__name__)
            try:
                rules = plugin.transform(rules)
            except Exception as e:
                logger.error("style_plugin_failed", plugin=name, error=str(e))
                report.error(
                    "STYLE_PLUGIN_FAILED",
                    f"Style plugin {name!r} failed: {e}",
                    name,
                    ErrorCategory.GENERATION,
                )
        return rules

    def generate_tree(self, nodes: list[ComponentNode]) -> StyleResult:
        start_time = time.time()

        report = ValidationReport()
        rules = self._apply_plugins(self.compiler.compile_tree(nodes), report)
        if self.options.validate_rules:
            report.merge(self.validator.validate_rules(rules))
        text = format_rules(rules, minify=self.options.minify)

        return StyleResult(
            text=text,
            success=report.valid,
            errors=report.errors,
            warnings=report.warnings,
            rule_count=len(rules),
            duration=time.time() - start_time,
        )

    def generate_page(self, page: Page) -> StyleResult:
        """Stylesheet for every styled node on a page."""
        result = self.generate_tree(page.components)
        logger.debug(
            "page_styles_generated",
            page=page.path,
            rules=result.rule_count,
            duration_ms=result.duration * 1000,
        )
        return result

    def generate_theme(self, theme_name: str | None = None) -> str:
        """``:root`` variables for a theme (the active one by default)."""
        theme = self.theme_manager.get_theme(theme_name)
        return format_rules(
            self.theme_manager.generate_theme_rules(theme), minify=self.options.minify
        )


__all__ = ["StylePlugin", "StyleResult", "StyleGenerator"]
