"""Project-level and output validation."""

from typing import Mapping

from pagewright.core import ErrorCategory, Issue, JSONParseError, ValidationReport, parse_json
from pagewright.models import Project

from .rules import is_valid_page_path
from .tree import DEFAULT_MAX_CHILDREN, validate_tree

REQUIRED_FILES = ("app.json", "app.js", "app.wxss")


def validate_project(
    project: Project,
    known_themes: set[str] | None = None,
    deep: bool = False,
    max_children: int = DEFAULT_MAX_CHILDREN,
) -> ValidationReport:
    """
    Validate project metadata.

    Args:
        project: Project to check
        known_themes: Registered theme names; when given, an unknown
            ``project.theme`` produces a warning
        deep: Also validate every page's component tree
        max_children: Child-count warning threshold for deep validation
    """
    report = ValidationReport()

    if not project.name.strip():
        report.error("MISSING_NAME", "Project name is required", "name")
    if not project.id.strip():
        report.error("MISSING_ID", "Project id is required", "id")
    if not project.app_id:
        report.warn("MISSING_APPID", "No appid configured; a test id will be used", "appId")
    if not project.pages:
        report.error("NO_PAGES", "Project must contain at least one page", "pages")

    seen_paths: set[str] = set()
    for index, page in enumerate(project.pages):
        location = f"pages[{index}]"
        if not page.name.strip():
            report.error("MISSING_PAGE_NAME", "Page name is required", location)

        if not is_valid_page_path(page.path):
            report.error(
                "INVALID_PAGE_PATH",
                f"Page path must be relative with at least two segments: {page.path!r}",
                location,
            )
        if page.path in seen_paths:
            report.error("DUPLICATE_PATH", f"Duplicate page path: {page.path}", location)
        seen_paths.add(page.path)

        if deep:
            page_report = validate_tree(page.components, max_children)
            report.merge(_prefix(page_report, page.path))

    for index, resource in enumerate(project.resources):
        if not resource.path and not resource.url:
            report.error(
                "INVALID_RESOURCE",
                f"Resource {resource.id} has neither path nor url",
                f"resources[{index}]",
                ErrorCategory.RESOURCE,
            )

    if project.theme and known_themes is not None:
        declared = {theme.name for theme in project.themes}
        if project.theme not in known_themes and project.theme not in declared:
            report.warn("THEME_NOT_FOUND", f"Theme not found: {project.theme}", "theme")

    return report


def _prefix(report: ValidationReport, page_path: str) -> ValidationReport:
    def rebase(issue: Issue) -> Issue:
        path = f"{page_path}#{issue.path}" if issue.path else page_path
        return issue.model_copy(update={"path": path})

    return ValidationReport(
        errors=[rebase(issue) for issue in report.errors],
        warnings=[rebase(issue) for issue in report.warnings],
    )


def validate_output(files: Mapping[str, str | bytes]) -> ValidationReport:
    """Check that an in-memory output tree forms a loadable mini-app."""
    report = ValidationReport()

    for name in REQUIRED_FILES:
        if name not in files:
            report.error("MISSING_FILE", f"Missing required file: {name}", name, ErrorCategory.GENERATION)

    app_json = files.get("app.json")
    if app_json is not None:
        try:
            app_config = parse_json(app_json)
        except JSONParseError as e:
            report.error("INVALID_JSON", f"app.json is not valid JSON: {e}", "app.json", ErrorCategory.GENERATION)
            app_config = None

        if app_config is not None:
            pages = app_config.get("pages") if isinstance(app_config, dict) else None
            if not isinstance(pages, list):
                report.error("INVALID_APP_JSON", "app.json must contain a pages list", "app.json", ErrorCategory.GENERATION)
            elif not pages:
                report.error("EMPTY_PAGES", "app.json pages list is empty", "app.json", ErrorCategory.GENERATION)
            else:
                for page_path in pages:
                    for ext in (".wxml", ".js"):
                        if f"{page_path}{ext}" not in files:
                            report.error(
                                "MISSING_PAGE_FILE",
                                f"Missing page file: {page_path}{ext}",
                                f"{page_path}{ext}",
                                ErrorCategory.GENERATION,
                            )

    project_config = files.get("project.config.json")
    if project_config is not None:
        try:
            config = parse_json(project_config)
        except JSONParseError:
            config = None
        if not isinstance(config, dict):
            report.warn("INVALID_PROJECT_CONFIG", "project.config.json is not a JSON object", "project.config.json")
        else:
            if not config.get("appid"):
                report.warn("MISSING_APPID", "project.config.json has no appid", "project.config.json")
            if not config.get("projectname"):
                report.warn("MISSING_PROJECT_NAME", "project.config.json has no projectname", "project.config.json")

    return report


__all__ = ["validate_project", "validate_output", "REQUIRED_FILES"]
