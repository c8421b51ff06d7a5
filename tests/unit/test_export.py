"""Tests for project files, optimizer passes, resources and packaging."""

import io
import zipfile

import pytest
from hypothesis import given, strategies as st

from pagewright.core import parse_json
from pagewright.export import (
    PROGRESS,
    ExportProgress,
    ExportState,
    Optimizer,
    OptimizationOptions,
    analyze_dependencies,
    can_transition,
    compression_ratio,
    copy_resources,
    count_files,
    directory_size,
    generate_app_js,
    generate_app_json,
    generate_app_wxss,
    generate_package_json,
    generate_page_json,
    generate_project_config_json,
    generate_util_files,
    pack_directory,
    pack_files,
    pack_for_upload,
    sanitize_package_name,
)
from pagewright.export.optimizer import (
    compress_tag,
    minify_script,
    minify_style,
    optimize_markup,
    remove_console_statements,
    strip_script_comments,
)
from pagewright.export.options import ScriptOptimization
from pagewright.export.resources import asset_path
from pagewright.export.state import ORDER
from pagewright.models import Resource
from pagewright.style import ThemeManager


# ============================================================================
# Project files
# ============================================================================

@pytest.mark.unit
def test_app_json(project_factory):
    project = project_factory(
        2,
        config={
            "window": {"navigationBarTextStyle": "black"},
            "tabBar": {"list": [{"pagePath": "pages/p0/index", "text": "Home"}]},
        },
        globalComponents=[{"name": "badge"}],
    )
    config = parse_json(generate_app_json(project))

    assert config["pages"] == ["pages/p0/index", "pages/p1/index"]
    assert config["window"]["navigationBarTitleText"] == "Demo"
    assert config["window"]["navigationBarTextStyle"] == "black"
    assert config["window"]["backgroundColor"] == "#ffffff"
    assert config["tabBar"]["selectedColor"] == "#07c160"
    assert config["tabBar"]["list"] == [{"pagePath": "pages/p0/index", "text": "Home"}]
    assert config["usingComponents"] == {"badge": "/components/badge/badge"}
    assert config["debug"] is False
    assert config["sitemapLocation"] == "sitemap.json"


@pytest.mark.unit
def test_project_config_lists_first_pages(project_factory):
    config = parse_json(generate_project_config_json(project_factory(7)))

    assert config["appid"] == "wx1234567890"
    assert config["projectname"] == "Demo"
    assert config["compileType"] == "miniprogram"
    conditions = config["condition"]["miniprogram"]["list"]
    assert [entry["pathName"] for entry in conditions] == [f"pages/p{i}/index" for i in range(5)]


@pytest.mark.unit
def test_page_json(page_factory):
    assert parse_json(generate_page_json(page_factory(0))) == {"navigationBarTitleText": "Page 0"}

    page = page_factory(
        1,
        config={"navigationBarTitleText": "Custom", "usingComponents": {"chart": "/libs/chart/index"}},
        components=[{"id": "b", "type": "badge"}],
    )
    config = parse_json(generate_page_json(page))

    assert config["navigationBarTitleText"] == "Custom"
    assert config["usingComponents"] == {"badge": "/components/badge/badge", "chart": "/libs/chart/index"}


@pytest.mark.unit
def test_app_wxss_with_theme(project_factory):
    themed = generate_app_wxss(project_factory(1, theme="light"), ThemeManager())
    plain = generate_app_wxss(project_factory(1))

    assert themed.startswith("/* Demo */\n\n:root {")
    assert "--color-primary: #007aff;" in themed
    assert ".flex-center {" in themed
    assert plain.startswith("/* Demo */\n\npage {")
    assert plain.endswith("}\n")


@pytest.mark.unit
def test_app_js_and_utils(project_factory):
    project = project_factory(1, globalVariables=[{"name": "user", "type": "object"}])
    script = generate_app_js(project)

    assert script.startswith("// Demo\nApp({\n")
    assert "globalData" in script
    assert "user:" in script
    assert set(generate_util_files()) == {"utils/util.js", "utils/request.js"}


# ============================================================================
# Dependencies
# ============================================================================

@pytest.mark.unit
def test_request_action_adds_promise_package(project_factory, page_factory):
    page = page_factory(
        0,
        customEvents=[{"name": "load", "actions": [{"kind": "request", "url": "https://example.com/api"}]}],
    )
    deps = analyze_dependencies(project_factory(0, pages=[page]))

    assert deps.apis == ["wx.request"]
    assert deps.npm == {"miniprogram-api-promise": "^1.0.4"}


@pytest.mark.unit
def test_external_components(project_factory):
    project = project_factory(
        1,
        globalComponents=[
            {"name": "van-button", "external": True, "npmPackage": "@vant/weapp", "version": "^1.11.0"},
            {"name": "badge"},
        ],
    )
    deps = analyze_dependencies(project)

    assert deps.components == ["van-button"]
    assert deps.npm == {"@vant/weapp": "^1.11.0"}
    assert deps.apis == []


@pytest.mark.unit
def test_package_json(project_factory):
    package = parse_json(generate_package_json(project_factory(1, name="My Shop")))

    assert package["name"] == "my-shop"
    assert package["version"] == "1.0.0"
    assert package["dependencies"] == {}
    assert package["devDependencies"] == {"miniprogram-api-typings": "^3.12.2"}


@pytest.mark.unit
def test_sanitize_package_name():
    assert sanitize_package_name("My Shop!! 2") == "my-shop-2"
    assert sanitize_package_name("--a__b--") == "a-b"
    assert sanitize_package_name("!!!") == "miniprogram"


# ============================================================================
# Optimizer
# ============================================================================

@pytest.mark.unit
def test_optimize_markup():
    markup = '<!-- header -->\n<view id="a">\n  <text>hi   there</text>\n</view>'

    assert optimize_markup(markup) == '<view id="a"><text>hi there</text></view>'
    assert optimize_markup(markup, remove_whitespace=False) == '\n<view id="a">\n  <text>hi   there</text>\n</view>'


@pytest.mark.unit
def test_compress_tag_keeps_quoted_values():
    assert compress_tag('<view  id = "a  b"   class="x">') == '<view id="a  b" class="x">'


@pytest.mark.unit
def test_minify_style():
    css = '.a {\n  color: red;\n}\n/* note */\n.b .c {\n  margin: 0 auto;\n  content: "x  y";\n}'
    assert minify_style(css) == '.a{color:red}.b .c{margin:0 auto;content:"x  y"}'


@pytest.mark.unit
def test_strip_script_comments_respects_strings():
    code = "const a = 'x // y' // note\n/* block\n */run()"
    assert strip_script_comments(code) == "const a = 'x // y' \n\nrun()"


@pytest.mark.unit
def test_remove_multiline_console_call():
    code = "a()\nconsole.log(\n  'x',\n  y\n)\nb()"
    assert remove_console_statements(code) == "a()\nb()"


@pytest.mark.unit
def test_minify_script():
    assert minify_script("Page({\n  // c\n  data: {}\n\n})") == "Page({\ndata: {}\n})"


@pytest.mark.unit
def test_optimizer_dispatches_by_extension():
    optimizer = Optimizer(OptimizationOptions(script=ScriptOptimization(minify=False)))
    files = {
        "a.js": "console.log(1)\nrun()",
        "a.wxss": ".a {\n  color: red;\n}",
        "a.json": '{\n  "x": 1\n}',
    }
    optimized = optimizer.optimize_files(files)

    assert optimized == {"a.js": "run()", "a.wxss": ".a{color:red}", "a.json": files["a.json"]}


@pytest.mark.unit
def test_compression_ratio():
    assert compression_ratio(200, 50) == 75.0
    assert compression_ratio(0, 0) == 0.0


# ============================================================================
# Resources
# ============================================================================

@pytest.mark.unit
def test_asset_path():
    font = Resource(id="f", name="font", type="font", path="fonts\\brand\\Inter.ttf")
    assert asset_path(font) == "assets/fonts/Inter.ttf"


@pytest.mark.unit
def test_copy_resources(tmp_path):
    source = tmp_path / "src"
    (source / "img").mkdir(parents=True)
    (source / "img" / "logo.png").write_bytes(b"png")
    resources = [
        Resource(id="logo", name="logo.png", path="img/logo.png"),
        Resource(id="remote", name="banner.png", url="https://example.com/banner.png"),
        Resource(id="missing", name="gone.png", path="gone.png"),
    ]

    report = copy_resources(resources, source, tmp_path / "out")

    assert report.copied == ["assets/images/logo.png"]
    assert report.skipped == ["remote"]
    assert [issue.code for issue in report.warnings] == ["RESOURCE_COPY_FAILED"]
    assert report.warnings[0].path == "gone.png"
    assert (tmp_path / "out" / "assets" / "images" / "logo.png").read_bytes() == b"png"


# ============================================================================
# Packaging
# ============================================================================

@pytest.mark.unit
def test_pack_files():
    data = pack_files({"b.txt": "B", "a/x.bin": b"\x00\x01"})

    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.namelist() == ["a/x.bin", "b.txt"]
        assert archive.read("b.txt") == b"B"
        assert archive.read("a/x.bin") == b"\x00\x01"


@pytest.mark.unit
def test_pack_directory(tmp_path):
    source = tmp_path / "mp"
    (source / "pages").mkdir(parents=True)
    (source / "node_modules" / "pkg").mkdir(parents=True)
    (source / "app.js").write_text("App({})")
    (source / "pages" / "index.wxml").write_text("<view></view>")
    (source / "node_modules" / "pkg" / "index.js").write_text("x")
    (source / "app.js.map").write_text("{}")

    full = pack_directory(source, source / "bundle.zip")
    with zipfile.ZipFile(full) as archive:
        names = archive.namelist()
    assert "bundle.zip" not in names
    assert "node_modules/pkg/index.js" in names

    upload = pack_for_upload(source, tmp_path / "dist" / "upload.zip")
    with zipfile.ZipFile(upload) as archive:
        assert sorted(archive.namelist()) == ["app.js", "bundle.zip", "pages/index.wxml"]


@pytest.mark.unit
def test_directory_stats(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "one.txt").write_text("12345")
    (tmp_path / "two.txt").write_text("678")

    assert count_files(tmp_path) == 2
    assert directory_size(tmp_path) == 8


# ============================================================================
# State machine
# ============================================================================

@pytest.mark.unit
def test_transitions():
    assert can_transition(ExportState.IDLE, ExportState.VALIDATING)
    assert can_transition(ExportState.COPYING_RESOURCES, ExportState.VALIDATING_OUTPUT)
    assert can_transition(ExportState.VALIDATING_OUTPUT, ExportState.COMPLETED)
    assert can_transition(ExportState.GENERATING_CODE, ExportState.FAILED)

    assert not can_transition(ExportState.GENERATING_CODE, ExportState.VALIDATING)
    assert not can_transition(ExportState.GENERATING_STRUCTURE, ExportState.COPYING_RESOURCES)
    assert not can_transition(ExportState.COMPLETED, ExportState.FAILED)
    assert not can_transition(ExportState.FAILED, ExportState.VALIDATING)


@given(st.sampled_from(ORDER), st.sampled_from(ORDER))
def test_forward_transitions_raise_progress(current, target):
    """Property test: an allowed forward step never lowers progress."""
    if can_transition(current, target):
        assert PROGRESS[target] > PROGRESS[current]


@pytest.mark.unit
def test_progress_snapshot():
    progress = ExportProgress(state=ExportState.GENERATING_CODE, progress=50, total_pages=4)
    updated = progress.with_task("Generating page code (2/4)", processed_pages=2)

    assert progress.processed_pages == 0
    assert updated.to_dict() == {
        "state": "generating_code",
        "progress": 50,
        "current_task": "Generating page code (2/4)",
        "processed_pages": 2,
        "total_pages": 4,
    }
