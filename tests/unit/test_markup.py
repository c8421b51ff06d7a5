"""Tests for markup compilation and formatting."""

import pytest
from hypothesis import given, strategies as st

from pagewright.markup import (
    MarkupCompiler,
    MarkupOptions,
    check_balance,
    escape_attribute,
    escape_text,
    event_attribute,
    event_handler_name,
    format_markup,
    to_binding_expression,
)
from pagewright.models import ComponentNode, Page


def _page(*components, **overrides) -> Page:
    values = {"id": "index", "name": "Home", "path": "pages/index/index", "components": list(components)}
    values.update(overrides)
    return Page.model_validate(values)


# ============================================================================
# Bindings and escaping
# ============================================================================

@pytest.mark.unit
def test_escaping():
    assert escape_text('a < b & "c"') == 'a &lt; b &amp; "c"'
    assert escape_attribute("it's \"x\" <y>") == "it&#39;s &quot;x&quot; &lt;y&gt;"


@pytest.mark.unit
def test_binding_expression():
    assert to_binding_expression("user.name") == "{{user.name}}"
    assert to_binding_expression("{{ a }}") == "{{ a }}"


@pytest.mark.unit
def test_event_names():
    assert event_attribute("tap") == "bindtap"
    assert event_attribute("catchtap") == "catchtap"
    assert event_handler_name("submit-btn", "tap") == "onSubmitBtnTap"
    assert event_handler_name("form", "catchsubmit") == "onFormSubmit"
    assert event_handler_name("x", "tap", "handleX") == "handleX"


# ============================================================================
# Compilation
# ============================================================================

@pytest.mark.unit
def test_text_leaf_is_never_self_closing(markup_compiler):
    node = {"id": "greeting", "type": "text", "properties": [{"name": "content", "value": "Hello"}]}
    result = markup_compiler.compile(_page(node))

    assert result.success
    assert '<text id="greeting">Hello</text>' in result.text
    assert "/>" not in result.text


@pytest.mark.unit
def test_text_content_is_escaped(markup_compiler):
    node = {"id": "t", "type": "text", "properties": [{"name": "content", "value": "1 < 2 & 3"}]}
    result = markup_compiler.compile(_page(node))
    assert "<text id=\"t\">1 &lt; 2 &amp; 3</text>" in result.text


@pytest.mark.unit
def test_self_closing_vs_with_child(markup_compiler):
    leaf = ComponentNode(id="field", type="input")
    assert markup_compiler.compile_fragment(leaf) == '<input id="field" />'

    parent = leaf.model_copy(update={"children": [ComponentNode(id="hint", type="text")]})
    assert markup_compiler.compile_fragment(parent) == (
        '<input id="field">\n  <text id="hint"></text>\n</input>'
    )


@pytest.mark.unit
def test_self_closing_type_with_children_through_compile(markup_compiler):
    """``include`` is self-closing as a leaf but may wrap children."""
    result = markup_compiler.compile(
        _page(
            {"id": "header", "type": "include", "properties": [{"name": "src", "value": "/tpl/header.wxml"}]},
            {
                "id": "footer",
                "type": "include",
                "properties": [{"name": "src", "value": "/tpl/footer.wxml"}],
                "children": [{"id": "note", "type": "text", "properties": [{"name": "content", "value": "fin"}]}],
            },
        )
    )

    assert result.success
    assert '<include id="header" src="/tpl/header.wxml" />' in result.text
    assert '<include id="footer" src="/tpl/footer.wxml">\n  <text id="note">fin</text>\n</include>' in result.text


@pytest.mark.unit
def test_content_binding_renders_once(markup_compiler):
    node = {"id": "buy", "type": "button", "dataBindings": [{"property": "content", "dataPath": "label"}]}
    result = markup_compiler.compile(_page(node))

    assert '<button id="buy">{{label}}</button>' in result.text
    assert result.text.count("{{label}}") == 1


@pytest.mark.unit
def test_header_comments(markup_compiler):
    result = markup_compiler.compile(_page({"id": "v", "type": "view"}))
    lines = result.text.split("\n")

    assert lines[0] == "<!-- Page: Home -->"
    assert lines[1] == "<!-- Path: pages/index/index.wxml -->"
    assert lines[2] == '<view id="v"></view>'


@pytest.mark.unit
def test_comments_can_be_disabled():
    compiler = MarkupCompiler(MarkupOptions(add_comments=False))
    result = compiler.compile(_page({"id": "v", "type": "view"}))
    assert result.text == '<view id="v"></view>'


@pytest.mark.unit
def test_empty_page_warns(markup_compiler):
    result = markup_compiler.compile(_page())

    assert result.success
    assert [issue.code for issue in result.warnings] == ["EMPTY_MARKUP"]


@pytest.mark.unit
def test_attribute_order(markup_compiler, sample_page):
    result = markup_compiler.compile(sample_page)

    assert result.success
    assert result.node_count == 4
    assert '<text id="counter">{{count}}</text>' in result.text
    assert '<button id="inc" bindtap="onIncTap">Add</button>' in result.text
    assert (
        '<view id="row" wx:for="{{items}}" wx:for-item="entry" wx:key="*this"></view>'
        in result.text
    )
    assert '<view id="container" class="view-container">' in result.text


@pytest.mark.unit
def test_two_way_binding_and_condition(markup_compiler):
    node = {
        "id": "name",
        "type": "input",
        "condition": "editing",
        "dataBindings": [{"property": "value", "dataPath": "form.name", "mode": "twoWay"}],
    }
    result = markup_compiler.compile(_page(node))
    assert '<input id="name" model:value="{{form.name}}" wx:if="{{editing}}" />' in result.text


@pytest.mark.unit
def test_literal_class_merges(markup_compiler):
    node = {
        "id": "box",
        "type": "view",
        "style": {"margin": 4},
        "properties": [{"name": "class", "value": "card"}, {"name": "hidden", "value": True}],
    }
    result = markup_compiler.compile(_page(node))
    assert '<view id="box" hidden="true" class="card view-box"></view>' in result.text


@pytest.mark.unit
def test_invalid_tree_produces_no_text(markup_compiler):
    nodes = [{"id": "a", "type": "view"}, {"id": "a", "type": "swiper", "children": [{"id": "b", "type": "text"}]}]
    result = markup_compiler.compile(_page(*nodes))

    assert not result.success
    assert result.text == ""
    assert {issue.code for issue in result.errors} == {"DUPLICATE_ID", "INVALID_NESTING"}


# ============================================================================
# Formatting
# ============================================================================

@pytest.mark.unit
def test_format_markup_reindents():
    raw = "<view>\n<text>  hi   there </text><image src=\"a.png\" />\n</view>"
    assert format_markup(raw) == '<view>\n  <text>hi there</text>\n  <image src="a.png" />\n</view>'


@pytest.mark.unit
def test_check_balance():
    assert check_balance("<view><text>a</text></view>") == []
    issues = check_balance("<view><text>a</view>")
    assert issues
    assert all(issue.code == "GENERATION_ERROR" for issue in issues)


_TAGS = st.sampled_from(["view", "text", "button", "label"])
_WORDS = st.text(alphabet="abcxyz 0123", min_size=1, max_size=8)


def _element(children):
    return st.builds(
        lambda tag, inner, gap: f"<{tag}>{gap}{''.join(inner)}{gap}</{tag}>",
        _TAGS,
        st.lists(children, max_size=3),
        st.sampled_from(["", "\n", "  ", "\n    "]),
    )


_MARKUP = st.recursive(
    st.one_of(_WORDS, st.just('<image src="x.png" />'), st.just("<!-- note -->")),
    _element,
    max_leaves=12,
)


@given(_MARKUP)
def test_format_markup_idempotent(markup):
    """Property test: formatting formatted markup is a no-op."""
    once = format_markup(markup)
    assert format_markup(once) == once
