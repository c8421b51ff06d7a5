"""
Pagewright CLI - Main Entry Point
Exports and validates project documents
"""

import argparse
import asyncio
import sys
from pathlib import Path

from pagewright import __version__
from pagewright.blueprint import load_project
from pagewright.core import Issue, configure_logging, create_container, get_logger, get_settings, safe_json_dumps
from pagewright.export import Exporter, ExporterOptions, PageCompiler
from pagewright.models import Project
from pagewright.style import ThemeManager
from pagewright.validation import validate_project

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagewright",
        description="Compile page models into mini-program packages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    export_parser = subparsers.add_parser("export", help="Export a project to a directory")
    export_parser.add_argument("project", help="Project document (JSON)")
    export_parser.add_argument("--out", default="dist", help="Output directory")
    export_parser.add_argument("--zip", action="store_true", help="Also package the output as a zip")
    export_parser.add_argument("--optimize", action="store_true", help="Run optimizer passes")
    export_parser.add_argument("--concurrency", type=int, default=None, help="Pages per batch")

    validate_parser = subparsers.add_parser("validate", help="Validate a project document")
    validate_parser.add_argument("project", help="Project document (JSON)")

    return parser


def _print_issues(errors: list[Issue], warnings: list[Issue]) -> None:
    for issue in errors:
        location = f" ({issue.path})" if issue.path else ""
        print(f"error {issue.code}: {issue.message}{location}", file=sys.stderr)
    for issue in warnings:
        location = f" ({issue.path})" if issue.path else ""
        print(f"warning {issue.code}: {issue.message}{location}", file=sys.stderr)


def _load(path: str) -> Project | None:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {path}: {e}", file=sys.stderr)
        return None

    result = load_project(text)
    project = result.value_or(None)
    if project is None:
        issue = result.failure()
        _print_issues([issue], [])
    return project


async def _export(args: argparse.Namespace) -> int:
    project = _load(args.project)
    if project is None:
        return 1

    settings = get_settings()
    container = create_container(settings)
    overrides = {"optimize": args.optimize, "resource_root": str(Path(args.project).resolve().parent)}
    if args.concurrency is not None:
        overrides["concurrency"] = args.concurrency

    exporter = Exporter(
        ExporterOptions.from_settings(settings, **overrides),
        container.get(PageCompiler),
    )
    logger.info("cli_export", project=project.id, out=args.out, package=args.zip)
    if args.zip:
        result = await exporter.export_to_zip(project, args.out)
    else:
        result = await exporter.export(project, args.out)

    _print_issues(result.errors, result.warnings)
    print(safe_json_dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


def _validate(args: argparse.Namespace) -> int:
    project = _load(args.project)
    if project is None:
        return 1

    themes = ThemeManager()
    report = validate_project(project, known_themes=set(themes.list_themes()), deep=True)
    print(safe_json_dumps(report.to_dict(), indent=2))
    return 0 if report.valid else 1


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    if args.command == "export":
        code = asyncio.run(_export(args))
    else:
        code = _validate(args)
    sys.exit(code)


__all__ = ["main"]


if __name__ == "__main__":
    main()
