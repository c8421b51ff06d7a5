"""Configuration tests."""

import pytest

from pagewright.core import create_container, get_settings
from pagewright.core.config import Settings
from pagewright.export import Exporter, ExporterOptions, PageCompiler
from pagewright.markup import MarkupOptions
from pagewright.style import StyleCache, StyleGenerator, StyleOptions, ThemeManager


def test_settings_defaults():
    """Test default settings load correctly."""
    settings = get_settings()

    assert settings.concurrency == 5
    assert settings.output_dir_name == "miniprogram"
    assert settings.log_level == "DEBUG"  # set in conftest
    assert settings.enable_cache is True
    assert settings.px_to_rpx_ratio == 2.0
    assert settings.max_json_depth == 64


def test_settings_from_environment(monkeypatch):
    """Test PAGEWRIGHT_ variables override defaults."""
    monkeypatch.setenv("PAGEWRIGHT_CONCURRENCY", "8")
    monkeypatch.setenv("PAGEWRIGHT_OPTIMIZE", "true")

    settings = Settings()
    assert settings.concurrency == 8
    assert settings.optimize is True


def test_settings_validation():
    """Test settings validation."""
    # Valid settings
    settings = Settings(concurrency=3, px_to_rpx_ratio=1.5)
    assert settings.concurrency == 3

    # Batch width must be positive
    with pytest.raises(Exception):
        Settings(concurrency=0)

    # Ratio must be positive
    with pytest.raises(Exception):
        Settings(px_to_rpx_ratio=-1)


def test_options_from_settings():
    """Test component options derive from settings with overrides."""
    settings = Settings(concurrency=3, add_comments=False, cache_size=10)

    exporter_options = ExporterOptions.from_settings(settings, optimize=True)
    assert exporter_options.concurrency == 3
    assert exporter_options.optimize is True

    assert MarkupOptions.from_settings(settings).add_comments is False
    assert StyleOptions.from_settings(settings, px_ratio=1.0).px_ratio == 1.0

    with pytest.raises(Exception):
        ExporterOptions(concurrency=0)


# ============================================================================
# Dependency injection
# ============================================================================

@pytest.mark.unit
def test_container_wiring(di_container):
    compiler = di_container.get(PageCompiler)
    other = di_container.get(PageCompiler)

    assert isinstance(compiler.style, StyleGenerator)
    assert compiler.markup is other.markup
    assert compiler.script is other.script
    assert compiler.style.theme_manager is di_container.get(ThemeManager)
    assert compiler.style.compiler.cache is not other.style.compiler.cache


@pytest.mark.unit
def test_container_exporters_are_fresh():
    container = create_container(Settings(concurrency=4))
    first = container.get(Exporter)
    second = container.get(Exporter)

    assert first is not second
    assert first.options.concurrency == 4
    assert first.page_compiler.markup is second.page_compiler.markup
    assert first.page_compiler.style.compiler.cache is not second.page_compiler.style.compiler.cache
    assert isinstance(first.page_compiler.style.compiler.cache, StyleCache)

