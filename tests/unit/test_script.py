"""Tests for script generation."""

import pytest
from hypothesis import given, strategies as st

from pagewright.core import ScriptError
from pagewright.models import (
    ComponentDefinition,
    CustomAction,
    NavigateAction,
    NavigateBackAction,
    Page,
    RequestAction,
    ShowModalAction,
    ShowToastAction,
    SetDataAction,
)
from pagewright.script import (
    JsExpression,
    LifecycleTarget,
    ScriptGenerator,
    ScriptOptions,
    format_script,
    generate_app_script,
    generate_data,
    signature,
    to_js_literal,
    translate_action,
)


# ============================================================================
# Literals and formatting
# ============================================================================

@pytest.mark.unit
def test_js_literals():
    assert to_js_literal(None) == "null"
    assert to_js_literal(True) == "true"
    assert to_js_literal(3.0) == "3"
    assert to_js_literal(float("nan")) == "null"
    assert to_js_literal("it's\n") == "'it\\'s\\n'"
    assert to_js_literal({"a": 1, "b-c": [1, 2]}, inline=True) == "{ a: 1, 'b-c': [1, 2] }"
    assert to_js_literal({"a": {"b": 1}}) == "{\n  a: {\n    b: 1\n  }\n}"
    assert to_js_literal(JsExpression("res.data")) == "res.data"


@pytest.mark.unit
def test_format_script_normalizes():
    code = 'const a = "x";\n\n\nif (a) {\n\nfoo();\n}'
    assert format_script(code) == "const a = 'x'\n\nif (a) {\n  foo()\n}"


@pytest.mark.unit
def test_format_script_keeps_template_lines():
    code = "const s = `a\n   b`\nlog(s)"
    assert format_script(code) == "const s = `a\n   b`\nlog(s)"


@pytest.mark.unit
def test_format_script_strips_semicolon_before_comment():
    assert format_script("run(); // go") == "run() // go"


_JSON = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=10),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(min_size=1, max_size=6), children, max_size=4),
    max_leaves=20,
)


@given(_JSON)
def test_format_script_idempotent(value):
    """Property test: formatting formatted script is a no-op."""
    code = f"Page({{\ndata: {to_js_literal(value)},\n\nonLoad() {{\nrun();\n}}\n}})"
    once = format_script(code)
    assert format_script(once) == once


# ============================================================================
# Actions
# ============================================================================

@pytest.mark.unit
def test_translate_navigation_and_feedback():
    assert translate_action(NavigateAction(kind="redirectTo", url="/pages/a/index")) == (
        "wx.redirectTo({ url: '/pages/a/index' })"
    )
    assert translate_action(NavigateBackAction(delta=2)) == "wx.navigateBack({ delta: 2 })"
    assert translate_action(ShowToastAction(title="Saved")) == "wx.showToast({ title: 'Saved', icon: 'none' })"
    assert translate_action(ShowModalAction(title="T", content="C")) == (
        "wx.showModal({ title: 'T', content: 'C', showCancel: true })"
    )


@pytest.mark.unit
def test_translate_set_data():
    assert translate_action(SetDataAction(key="n", value=[1])) == "this.setData({ n: [1] })"
    action = SetDataAction(key="n", value=5, expression="this.data.n + 1")
    assert translate_action(action) == "this.setData({ n: this.data.n + 1 })"


@pytest.mark.unit
def test_translate_custom():
    assert translate_action(CustomAction(method="refresh", args=[1, "a"])) == "this.refresh(1, 'a')"
    assert translate_action(CustomAction(method="bad-name")) == "// unsupported action: custom bad-name"


@pytest.mark.unit
def test_translate_request():
    statement = translate_action(RequestAction(url="https://example.com/api", method="post", result_key="list"))

    assert statement.startswith("wx.request({")
    assert "method: 'POST'" in statement
    assert "this.setData({ list: res.data })" in statement
    assert "console.error('request failed', err)" in statement


@pytest.mark.unit
def test_unknown_and_legacy_actions():
    page = Page.model_validate(
        {
            "id": "p",
            "name": "P",
            "path": "pages/p/index",
            "customEvents": [
                {
                    "name": "go",
                    "actions": [
                        {"kind": "vibrate", "strength": 3},
                        {"type": "navigate", "params": {"url": "/pages/b/index"}},
                    ],
                }
            ],
        }
    )
    statements = [translate_action(action) for action in page.custom_events[0].actions]
    assert statements == ["// unsupported action: vibrate", "wx.navigateTo({ url: '/pages/b/index' })"]


# ============================================================================
# Lifecycle and data
# ============================================================================

@pytest.mark.unit
def test_lifecycle_signature():
    assert signature("onLoad", LifecycleTarget.PAGE) == ["options"]
    assert signature("resize", LifecycleTarget.PAGE_LIFETIMES) == ["size"]
    with pytest.raises(ScriptError) as exc_info:
        signature("onLoad", LifecycleTarget.COMPONENT)
    assert exc_info.value.code == "INVALID_LIFECYCLE"


@pytest.mark.unit
def test_generate_data_zero_values():
    page = Page.model_validate(
        {
            "id": "p",
            "name": "P",
            "path": "pages/p/index",
            "data": {"title": "Hi"},
            "variables": [{"name": "ready", "type": "boolean"}, {"name": "tags", "type": "array"}],
        }
    )
    assert generate_data(page.variables, page.data) == "{\n  title: 'Hi',\n  ready: false,\n  tags: []\n}"


@pytest.mark.unit
def test_generate_data_rejects_reserved():
    page = Page.model_validate(
        {"id": "p", "name": "P", "path": "pages/p/index", "variables": [{"name": "class"}]}
    )
    with pytest.raises(ScriptError) as exc_info:
        generate_data(page.variables)
    assert exc_info.value.code == "RESERVED_WORD"


# ============================================================================
# Page and component scripts
# ============================================================================

@pytest.mark.unit
def test_generate_page(script_generator, sample_page):
    result = script_generator.generate_page(sample_page)

    assert result.success
    assert result.text == (
        "// Page: Home\n"
        "Page({\n"
        "  data: {\n"
        "    count: 0,\n"
        "    items: []\n"
        "  },\n"
        "\n"
        "  onLoad(options) {\n"
        "    this.setData({ count: 1 })\n"
        "  },\n"
        "\n"
        "  reset(e) {\n"
        "    this.setData({ count: 0 })\n"
        "  },\n"
        "\n"
        "  onIncTap(e) {\n"
        "    this.setData({ count: this.data.count + 1 })\n"
        "  }\n"
        "})\n"
    )


@pytest.mark.unit
def test_generated_page_is_stable(script_generator, sample_page):
    text = script_generator.generate_page(sample_page).text
    assert format_script(text) + "\n" == text


@pytest.mark.unit
def test_custom_event_overrides_component_handler(script_generator, sample_page):
    page = sample_page.model_copy(
        update={
            "custom_events": [
                *sample_page.custom_events,
                *Page.model_validate(
                    {"id": "x", "name": "x", "path": "x/y", "customEvents": [{"name": "onIncTap"}]}
                ).custom_events,
            ]
        }
    )
    result = script_generator.generate_page(page)

    assert result.success
    assert result.text.count("onIncTap(") == 1
    assert "console.log('onIncTap', e)" in result.text


@pytest.mark.unit
def test_invalid_names_abort(script_generator):
    page = Page.model_validate(
        {
            "id": "p",
            "name": "P",
            "path": "pages/p/index",
            "variables": [{"name": "count"}, {"name": "count"}, {"name": "2fast"}],
            "lifecycleEvents": [{"name": "onFoo"}],
            "customEvents": [{"name": "wx"}],
        }
    )
    result = script_generator.generate_page(page)

    assert not result.success
    assert result.text == ""
    assert {issue.code for issue in result.errors} == {
        "DUPLICATE_VARIABLE",
        "INVALID_VARIABLE_NAME",
        "INVALID_LIFECYCLE",
        "INVALID_HANDLER_NAME",
    }


@pytest.mark.unit
def test_no_header_comment():
    page = Page(id="p", name="P", path="pages/p/index")
    text = ScriptGenerator(ScriptOptions(add_comments=False)).generate_page(page).text
    assert text == "Page({\n  data: {}\n})\n"


@pytest.mark.unit
def test_generate_component(script_generator):
    definition = ComponentDefinition.model_validate(
        {
            "name": "counter",
            "properties": [{"name": "start", "type": "number"}],
            "variables": [{"name": "value", "type": "number"}],
            "lifecycleEvents": [
                {"name": "attached", "actions": [{"kind": "setData", "key": "value", "value": 0}]},
                {"name": "show"},
            ],
            "events": [
                {
                    "name": "increment",
                    "actions": [{"kind": "setData", "key": "value", "expression": "this.data.value + 1"}],
                }
            ],
        }
    )
    result = script_generator.generate_component(definition)

    assert result.success
    assert [issue.code for issue in result.warnings] == ["EMPTY_LIFECYCLE"]
    assert result.text.startswith("// Component: counter\nComponent({\n  properties: {\n")
    assert "      type: Number,\n      value: 0\n" in result.text
    assert "  lifetimes: {\n    attached() {\n      this.setData({ value: 0 })\n    }\n  },\n" in result.text
    assert "  pageLifetimes: {\n    show() {}\n  },\n" in result.text
    assert "  methods: {\n    increment(e) {\n" in result.text


@pytest.mark.unit
def test_generate_app_script():
    assert generate_app_script({"user": None}) == (
        "App({\n"
        "  onLaunch() {\n"
        "    const logs = wx.getStorageSync('logs') || []\n"
        "    logs.unshift(Date.now())\n"
        "    wx.setStorageSync('logs', logs)\n"
        "  },\n"
        "\n"
        "  globalData: {\n"
        "    user: null\n"
        "  }\n"
        "})\n"
    )
