"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from pagewright.core.config import Settings, get_settings
from pagewright.export import Exporter, ExporterOptions, PageCompiler
from pagewright.markup import MarkupCompiler, MarkupOptions
from pagewright.monitoring import MetricsCollector, metrics_collector
from pagewright.script import ScriptGenerator, ScriptOptions
from pagewright.style import StyleCache, StyleGenerator, StyleOptions, ThemeManager


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        """Provide the process-wide metrics collector."""
        return metrics_collector

    @singleton
    @provider
    def provide_theme_manager(self) -> ThemeManager:
        return ThemeManager()

    @provider
    def provide_style_cache(self, metrics: MetricsCollector) -> StyleCache:
        """Provide a style cache sized from settings; one per page compiler."""
        return StyleCache(
            max_size=self.settings.cache_size,
            ttl_seconds=self.settings.cache_ttl,
            metrics=metrics,
        )

    @provider
    def provide_style_generator(self, themes: ThemeManager, cache: StyleCache) -> StyleGenerator:
        return StyleGenerator(StyleOptions.from_settings(self.settings), themes, cache)

    @singleton
    @provider
    def provide_markup_compiler(self) -> MarkupCompiler:
        return MarkupCompiler(MarkupOptions.from_settings(self.settings))

    @singleton
    @provider
    def provide_script_generator(self) -> ScriptGenerator:
        return ScriptGenerator(ScriptOptions.from_settings(self.settings))

    @provider
    def provide_page_compiler(
        self, markup: MarkupCompiler, style: StyleGenerator, script: ScriptGenerator
    ) -> PageCompiler:
        """Provide a page compiler owning its style cache."""
        return PageCompiler(markup, style, script)

    @provider
    def provide_exporter(self, pages: PageCompiler, metrics: MetricsCollector) -> Exporter:
        """Provide a fresh exporter; progress, cancellation and style cache are per instance."""
        return Exporter(ExporterOptions.from_settings(self.settings), pages, metrics=metrics)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
