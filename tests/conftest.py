"""Pytest configuration and fixtures."""

import os
import pytest
from prometheus_client import CollectorRegistry

from pagewright.core import create_container, get_settings
from pagewright.export import Exporter, ExporterOptions, PageCompiler
from pagewright.markup import MarkupCompiler
from pagewright.models import ComponentNode, Page, Project
from pagewright.monitoring import MetricsCollector
from pagewright.script import ScriptGenerator
from pagewright.style import StyleCache, StyleGenerator, ThemeManager


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['PAGEWRIGHT_LOG_LEVEL'] = 'DEBUG'
    os.environ['PAGEWRIGHT_CONCURRENCY'] = '5'


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def di_container():
    """Dependency injection container for testing."""
    return create_container()


@pytest.fixture
def metrics():
    """Metrics collector on an isolated registry."""
    return MetricsCollector(registry=CollectorRegistry())


# ============================================================================
# Compiler Fixtures
# ============================================================================

@pytest.fixture
def theme_manager():
    """Theme manager with the built-in default theme."""
    return ThemeManager()


@pytest.fixture
def style_generator(theme_manager, metrics):
    """Style generator with its own cache."""
    return StyleGenerator(theme_manager=theme_manager, cache=StyleCache(metrics=metrics))


@pytest.fixture
def markup_compiler():
    return MarkupCompiler()


@pytest.fixture
def script_generator():
    return ScriptGenerator()


@pytest.fixture
def page_compiler(markup_compiler, style_generator, script_generator):
    return PageCompiler(markup_compiler, style_generator, script_generator)


@pytest.fixture
def exporter(page_compiler, metrics):
    """Exporter with two pages per batch."""
    return Exporter(ExporterOptions(concurrency=2), page_compiler, metrics=metrics)


# ============================================================================
# Data Fixtures
# ============================================================================

def make_page(index: int, **overrides) -> Page:
    """Small valid page at ``pages/p{index}/index``."""
    values = {
        "id": f"p{index}",
        "name": f"Page {index}",
        "path": f"pages/p{index}/index",
        "components": [
            {
                "id": f"title{index}",
                "type": "text",
                "properties": [{"name": "content", "value": f"Page {index}"}],
            }
        ],
    }
    values.update(overrides)
    return Page.model_validate(values)


def make_project(page_count: int = 1, **overrides) -> Project:
    values = {
        "id": "demo",
        "name": "Demo",
        "appId": "wx1234567890",
        "pages": [make_page(i) for i in range(page_count)],
    }
    values.update(overrides)
    return Project.model_validate(values)


@pytest.fixture
def page_factory():
    """Build small valid pages by index."""
    return make_page


@pytest.fixture
def project_factory():
    """Build projects with N generated pages."""
    return make_project


@pytest.fixture
def sample_node():
    """Styled view with a text child and a tap event."""
    return ComponentNode.model_validate(
        {
            "id": "card",
            "type": "view",
            "style": {"padding": 16, "backgroundColor": "#fff"},
            "events": [{"name": "tap", "actions": [{"kind": "navigateBack"}]}],
            "children": [
                {
                    "id": "label",
                    "type": "text",
                    "properties": [{"name": "content", "value": "Hello"}],
                }
            ],
        }
    )


@pytest.fixture
def sample_page():
    """Page exercising data, bindings, lifecycle and custom events."""
    return Page.model_validate(
        {
            "id": "index",
            "name": "Home",
            "path": "pages/index/index",
            "config": {"navigationBarTitleText": "Home"},
            "variables": [
                {"name": "count", "type": "number", "initialValue": 0},
                {"name": "items", "type": "array", "initialValue": []},
            ],
            "lifecycleEvents": [
                {"name": "onLoad", "actions": [{"kind": "setData", "key": "count", "value": 1}]}
            ],
            "customEvents": [
                {
                    "name": "reset",
                    "actions": [{"kind": "setData", "key": "count", "value": 0}],
                }
            ],
            "components": [
                {
                    "id": "container",
                    "type": "view",
                    "style": {"padding": 20},
                    "children": [
                        {
                            "id": "counter",
                            "type": "text",
                            "dataBindings": [{"property": "content", "dataPath": "count"}],
                        },
                        {
                            "id": "inc",
                            "type": "button",
                            "properties": [{"name": "content", "value": "Add"}],
                            "events": [
                                {
                                    "name": "tap",
                                    "actions": [
                                        {"kind": "setData", "key": "count", "expression": "this.data.count + 1"}
                                    ],
                                }
                            ],
                        },
                        {
                            "id": "row",
                            "type": "view",
                            "listRendering": {"dataSource": "items", "itemName": "entry"},
                        },
                    ],
                }
            ],
        }
    )


@pytest.fixture
def sample_project():
    """Three-page project."""
    return make_project(3)


@pytest.fixture
def sample_blueprint():
    """Project document in the compact node shape."""
    return """{
  "id": "shop",
  "name": "Shop",
  "appId": "wx0000000001",
  "pages": [
    {
      "name": "Home",
      "path": "pages/home/index",
      "components": [
        {
          "view#hero": {
            "style": {"padding": 24},
            "children": [
              "Welcome",
              {"text#greeting": {":content": "user.name"}},
              {"input#search": {"::value": "query", "placeholder": "Search"}},
              {"button#buy": {"content": "Buy", "@tap": [{"kind": "showToast", "title": "Added"}]}},
              {"view": {"for": "products", "if": "products.length > 0", "children": ["Item"]}}
            ]
          }
        }
      ]
    }
  ]
}"""
