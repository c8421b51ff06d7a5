"""Validation tests."""

import pytest
from hypothesis import given, strategies as st

from pagewright.core import (
    JSONParseError,
    ValidationError,
    parse_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
    validate_project_document,
)
from pagewright.models import ComponentNode
from pagewright.validation import (
    allows_child,
    is_self_closing,
    is_valid_data_path,
    is_valid_page_path,
    strip_mustache,
    validate_output,
    validate_project,
    validate_tree,
)


def _nodes(*raw):
    return [ComponentNode.model_validate(node) for node in raw]


# ============================================================================
# Input limits
# ============================================================================

def test_json_size_limit():
    """Test encoded size is checked."""
    validate_json_size("x" * 10, max_size=10)
    with pytest.raises(ValidationError) as exc_info:
        validate_json_size("é" * 6, max_size=10)  # 12 bytes
    assert exc_info.value.code == "DOCUMENT_TOO_LARGE"


def test_json_depth_limit():
    """Test nesting depth is checked."""
    validate_json_depth({"a": {"b": 1}}, max_depth=2)
    with pytest.raises(ValidationError) as exc_info:
        validate_json_depth({"a": [{"b": [1]}]}, max_depth=3)
    assert exc_info.value.code == "DOCUMENT_TOO_DEEP"


def test_validate_project_document():
    """Test Result-based document check."""
    assert validate_project_document('{"id": "x"}').unwrap() == {"id": "x"}
    assert validate_project_document("{oops").failure().code == "INVALID_JSON"
    assert validate_project_document("[1, 2]").failure().code == "INVALID_FORMAT"
    assert validate_project_document('{"a": 1}', max_size=3).failure().code == "DOCUMENT_TOO_LARGE"


@given(st.integers(min_value=1, max_value=30))
def test_depth_limit_matches_nesting(depth):
    """Property test: a document nested N levels passes at N and fails below."""
    document: object = 0
    for _ in range(depth):
        document = {"k": document}

    validate_json_depth(document, max_depth=depth)
    with pytest.raises(ValidationError):
        validate_json_depth(document, max_depth=depth - 1)


# ============================================================================
# Rules
# ============================================================================

@pytest.mark.unit
def test_nesting_rules():
    assert allows_child("view", "button")
    assert allows_child("swiper", "swiper-item")
    assert not allows_child("swiper", "view")
    assert not allows_child("image", "text")
    assert allows_child("my-card", "view")


@pytest.mark.unit
def test_self_closing_and_paths():
    assert is_self_closing("image")
    assert not is_self_closing("text")
    assert not is_self_closing("view")

    assert is_valid_data_path("user.items[0].name")
    assert not is_valid_data_path("user..name")
    assert not is_valid_data_path("1abc")
    assert strip_mustache(" {{ user.name }} ") == "user.name"


# ============================================================================
# Tree validation
# ============================================================================

@pytest.mark.unit
def test_errors_accumulate():
    """One walk reports every violation."""
    report = validate_tree(
        _nodes(
            {"type": "view"},
            {"id": "img", "type": "image"},
            {"id": "img", "type": ""},
            {
                "id": "list",
                "type": "view",
                "condition": "{{ }}",
                "listRendering": {"dataSource": "a..b", "itemName": "1x"},
                "dataBindings": [{"property": "value", "dataPath": "bad path"}],
            },
            {"id": "btn", "type": "button", "properties": [{"name": "type", "value": "huge"}]},
        )
    )

    assert [issue.code for issue in report.errors] == [
        "MISSING_ID",
        "MISSING_REQUIRED_ATTRIBUTE",
        "DUPLICATE_ID",
        "MISSING_TYPE",
        "INVALID_DATA_PATH",
        "EMPTY_CONDITION",
        "INVALID_DATA_SOURCE",
        "INVALID_ITEM_NAME",
        "INVALID_PROPERTY_VALUE",
    ]
    assert report.errors[0].path == "[0]"
    assert report.errors[1].path == "img"


@pytest.mark.unit
def test_duplicate_id_across_depths():
    report = validate_tree(
        _nodes({"id": "a", "type": "view", "children": [{"id": "b", "type": "view", "children": [{"id": "a", "type": "view"}]}]})
    )
    assert [issue.code for issue in report.errors] == ["DUPLICATE_ID"]


@pytest.mark.unit
def test_invalid_nesting():
    report = validate_tree(_nodes({"id": "s", "type": "swiper", "children": [{"id": "v", "type": "view"}]}))

    assert [issue.code for issue in report.errors] == ["INVALID_NESTING"]
    assert report.errors[0].message == "swiper cannot contain view"


@pytest.mark.unit
def test_none_property_is_invalid():
    report = validate_tree(_nodes({"id": "t", "type": "text", "properties": [{"name": "content"}]}))
    assert [issue.code for issue in report.errors] == ["INVALID_PROPERTY_VALUE"]


@pytest.mark.unit
def test_warnings():
    children = [{"id": f"c{i}", "type": "view"} for i in range(3)]
    report = validate_tree(
        _nodes(
            {"id": "t", "type": "text"},
            {"id": "b", "type": "button"},
            {"id": "box", "type": "view", "children": children, "properties": [{"name": "foo", "value": 1}]},
        ),
        max_children=2,
    )

    assert report.valid
    assert [issue.code for issue in report.warnings] == [
        "EMPTY_TEXT",
        "EMPTY_BUTTON",
        "TOO_MANY_CHILDREN",
        "UNUSED_PROPERTY",
    ]


@pytest.mark.unit
def test_bound_required_attribute_is_satisfied():
    report = validate_tree(
        _nodes({"id": "img", "type": "image", "dataBindings": [{"property": "src", "dataPath": "cover"}]})
    )
    assert report.valid


# ============================================================================
# Project validation
# ============================================================================

@pytest.mark.unit
def test_valid_project(sample_project):
    report = validate_project(sample_project, known_themes={"light"}, deep=True)
    assert report.valid
    assert report.warnings == []


@pytest.mark.unit
def test_project_errors(project_factory, page_factory):
    project = project_factory(
        0,
        name=" ",
        appId="",
        theme="midnight",
        pages=[page_factory(0), page_factory(1, path="pages/p0/index"), page_factory(2, path="flat")],
        resources=[{"id": "r1", "name": "logo"}],
    )
    report = validate_project(project, known_themes={"light"})

    assert [issue.code for issue in report.errors] == [
        "MISSING_NAME",
        "DUPLICATE_PATH",
        "INVALID_PAGE_PATH",
        "INVALID_RESOURCE",
    ]
    assert [issue.code for issue in report.warnings] == ["MISSING_APPID", "THEME_NOT_FOUND"]
    assert report.errors[1].path == "pages[1]"


@pytest.mark.unit
def test_page_path_rules():
    assert is_valid_page_path("pages/home/index")
    assert is_valid_page_path("sub/page")
    for path in ("", "flat", "/pages/home", "pages//home", "pages/home/", "pages/./home", "pages/../home", "pages\\home"):
        assert not is_valid_page_path(path), path


@pytest.mark.unit
def test_escaping_page_paths_are_rejected(project_factory, page_factory):
    pages = [page_factory(i, path=path) for i, path in enumerate(["/abs/page", "pages/../../up", "pages/./x"])]
    report = validate_project(project_factory(0, pages=pages))

    assert [issue.code for issue in report.errors] == ["INVALID_PAGE_PATH"] * 3
    assert [issue.path for issue in report.errors] == ["pages[0]", "pages[1]", "pages[2]"]


@pytest.mark.unit
def test_empty_project(project_factory):
    report = validate_project(project_factory(0))
    assert [issue.code for issue in report.errors] == ["NO_PAGES"]


@pytest.mark.unit
def test_deep_validation_prefixes_page_path(project_factory, page_factory):
    page = page_factory(0, components=[{"id": "x", "type": "view"}, {"id": "x", "type": "view"}])
    report = validate_project(project_factory(0, pages=[page]), deep=True)

    assert [issue.code for issue in report.errors] == ["DUPLICATE_ID"]
    assert report.errors[0].path == "pages/p0/index#x"


@pytest.mark.unit
def test_report_to_dict(project_factory):
    payload = validate_project(project_factory(0)).to_dict()

    assert payload["valid"] is False
    assert payload["errors"] == [{"code": "NO_PAGES", "message": "Project must contain at least one page", "path": "pages"}]
    assert payload["warnings"] == []


# ============================================================================
# Output validation
# ============================================================================

def _output(**overrides):
    files = {
        "app.json": safe_json_dumps({"pages": ["pages/index/index"]}),
        "app.js": "App({})",
        "app.wxss": "",
        "project.config.json": safe_json_dumps({"appid": "wx1", "projectname": "Demo"}),
        "pages/index/index.wxml": "<view></view>",
        "pages/index/index.js": "Page({})",
    }
    files.update(overrides)
    return {name: content for name, content in files.items() if content is not None}


@pytest.mark.unit
def test_valid_output():
    report = validate_output(_output())
    assert report.valid
    assert report.warnings == []


@pytest.mark.unit
def test_output_errors():
    report = validate_output(_output(**{"app.js": None, "pages/index/index.js": None}))
    assert [issue.code for issue in report.errors] == ["MISSING_FILE", "MISSING_PAGE_FILE"]
    assert report.errors[1].path == "pages/index/index.js"


@pytest.mark.unit
def test_output_app_json_checks():
    assert [i.code for i in validate_output(_output(**{"app.json": "{"})).errors] == ["INVALID_JSON"]
    assert [i.code for i in validate_output(_output(**{"app.json": '{"pages": []}'})).errors] == ["EMPTY_PAGES"]
    assert [i.code for i in validate_output(_output(**{"app.json": "{}"})).errors] == ["INVALID_APP_JSON"]


@pytest.mark.unit
def test_output_project_config_warnings():
    report = validate_output(_output(**{"project.config.json": '{"appid": ""}'}))

    assert report.valid
    assert [issue.code for issue in report.warnings] == ["MISSING_APPID", "MISSING_PROJECT_NAME"]


def test_parse_errors_are_json_parse_errors():
    with pytest.raises(JSONParseError):
        parse_json("{not json")
