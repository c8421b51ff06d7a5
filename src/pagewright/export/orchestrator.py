"""Export orchestration.

``Exporter`` drives a project through the export states, compiling pages
in fixed-size concurrent batches. A batch finishes before the next starts
and cancellation is honored only between batches. Page failures are
collected per page; the call always returns an ``ExportResult`` holding
whatever files were produced.
"""

import asyncio
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pagewright.core import (
    ErrorCategory,
    ExportCancelledError,
    GenerationError,
    Issue,
    LogContext,
    PagewrightError,
    ValidationReport,
    get_logger,
    trace_operation_async,
)
from pagewright.core.id import new_export_id
from pagewright.models import Page, Project
from pagewright.monitoring import MetricsCollector, metrics_collector
from pagewright.style import StyleError, ThemeManager
from pagewright.validation import validate_output, validate_project

from .config_files import (
    generate_app_js,
    generate_app_json,
    generate_app_wxss,
    generate_project_config_json,
    generate_sitemap_json,
    generate_util_files,
)
from .dependencies import analyze_dependencies, generate_package_json, sanitize_package_name
from .hooks import ExportHooks
from .optimizer import Optimizer, compression_ratio
from .options import ExporterOptions
from .packager import count_files, directory_size, pack_directory
from .pages import PageCompiler, PageOutput
from .resources import copy_resources
from .state import PROGRESS, ExportProgress, ExportState, can_transition

logger = get_logger(__name__)


@dataclass
class ExportStats:
    total_files: int = 0
    total_size: int = 0
    page_count: int = 0
    component_count: int = 0
    resource_count: int = 0
    batch_count: int = 0
    duration: float = 0.0
    compression_ratio: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_size": self.total_size,
            "page_count": self.page_count,
            "component_count": self.component_count,
            "resource_count": self.resource_count,
            "batch_count": self.batch_count,
            "duration": self.duration,
            "compression_ratio": self.compression_ratio,
        }


@dataclass
class ExportResult:
    success: bool
    files: dict[str, str] = field(default_factory=dict)
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    stats: ExportStats = field(default_factory=ExportStats)
    output_path: str | None = None
    package_path: str | None = None
    export_id: str = ""
    cancelled: bool = False

    @property
    def report(self) -> ValidationReport:
        return ValidationReport(errors=self.errors, warnings=self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "export_id": self.export_id,
            "output_path": self.output_path,
            "package_path": self.package_path,
            "cancelled": self.cancelled,
            **self.report.to_dict(),
            "stats": self.stats.to_dict(),
        }


@dataclass
class _Run:
    """Mutable state of one export call."""

    project: Project
    output_dir: Path | None
    package_path: Path | None
    export_id: str
    start_time: float = field(default_factory=time.time)
    files: dict[str, str] = field(default_factory=dict)
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    batch_count: int = 0
    ratio: float | None = None


class Exporter:
    """Exports projects to a file map, a directory or a zip archive."""

    def __init__(
        self,
        options: ExporterOptions | None = None,
        page_compiler: PageCompiler | None = None,
        optimizer: Optimizer | None = None,
        hooks: ExportHooks | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.options = options or ExporterOptions()
        self.page_compiler = page_compiler or PageCompiler()
        self.optimizer = optimizer or Optimizer(self.options.optimization)
        self.hooks = hooks or ExportHooks()
        self.metrics = metrics or metrics_collector

        self._lock = threading.Lock()
        self._progress = ExportProgress()
        self._cancelled = threading.Event()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def export(self, project: Project, output_path: str | Path) -> ExportResult:
        """Export to ``output_path/{output_dir_name}``; packages when ``auto_package`` is set."""
        root = Path(output_path)
        package = self._package_path(project, root) if self.options.auto_package else None
        return await self._run(project, root / self.options.output_dir_name, package)

    async def export_to_memory(self, project: Project) -> ExportResult:
        """Generate the file map without touching the filesystem."""
        return await self._run(project, None, None)

    async def export_to_zip(self, project: Project, output_path: str | Path) -> ExportResult:
        """Export to disk and always package the result."""
        root = Path(output_path)
        return await self._run(project, root / self.options.output_dir_name, self._package_path(project, root))

    def get_progress(self) -> ExportProgress:
        with self._lock:
            return self._progress

    def cancel(self) -> None:
        """Stop before the next page batch starts."""
        self._cancelled.set()
        logger.info("export_cancel_requested")

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _run(self, project: Project, output_dir: Path | None, package_path: Path | None) -> ExportResult:
        self._cancelled.clear()
        with self._lock:
            self._progress = ExportProgress(total_pages=len(project.pages))

        run = _Run(project=project, output_dir=output_dir, package_path=package_path, export_id=new_export_id())

        with LogContext(export_id=run.export_id):
            try:
                async with trace_operation_async("export", project=project.id, pages=len(project.pages)):
                    result = await self._pipeline(run)
            except ExportCancelledError as e:
                result = await self._abort(run, e.to_issue(), cancelled=True)
            except Exception as e:
                if not isinstance(e, PagewrightError):
                    logger.error("export_error", error=str(e), exc_info=True)
                issue = Issue(
                    code="EXPORT_FAILED",
                    message=str(e),
                    category=ErrorCategory.ORCHESTRATION,
                )
                result = await self._abort(run, issue)

        self.metrics.record_export("success" if result.success else "failed", result.stats.duration)
        return result

    async def _pipeline(self, run: _Run) -> ExportResult:
        project = run.project
        await self.hooks.call("before_export", project)

        self._transition(ExportState.VALIDATING, "Validating project")
        theme_manager = self._theme_manager(run)
        report = validate_project(project, known_themes=set(theme_manager.list_themes()))
        run.errors.extend(report.errors)
        run.warnings.extend(report.warnings)
        if not report.valid:
            raise PagewrightError("Project validation failed", code="VALIDATION_FAILED")
        await self.hooks.call("after_validation", report)

        self._transition(ExportState.GENERATING_STRUCTURE, "Generating project files")
        run.files.update(self._project_files(project, theme_manager))
        await self._compile_components(run)

        self._transition(ExportState.GENERATING_CODE, "Generating page code")
        await self._compile_pages(run)
        await self._write(run, run.files)

        self._transition(ExportState.COPYING_RESOURCES, "Copying resources")
        if run.output_dir is not None:
            copied = await asyncio.to_thread(
                copy_resources, project.resources, self.options.resource_root, run.output_dir
            )
            run.warnings.extend(copied.warnings)

        if self.options.optimize:
            self._transition(ExportState.OPTIMIZING, "Optimizing code")
            await self.hooks.call("before_optimize", run.files)
            optimized = self.optimizer.optimize_files(run.files)
            run.ratio = compression_ratio(_size(run.files), _size(optimized))
            run.files = optimized
            await self._write(run, optimized)
            await self.hooks.call("after_optimize", optimized)

        self._transition(ExportState.VALIDATING_OUTPUT, "Validating output")
        output_report = validate_output(run.files)
        run.errors.extend(output_report.errors)
        run.warnings.extend(output_report.warnings)

        packaged: Path | None = None
        if run.package_path is not None and run.output_dir is not None:
            self._transition(ExportState.PACKAGING, "Packaging project")
            packaged = await asyncio.to_thread(pack_directory, run.output_dir, run.package_path)

        self._transition(ExportState.COMPLETED, "Export complete")
        result = self._result(run, package_path=packaged)
        logger.info(
            "export_completed",
            success=result.success,
            errors=len(result.errors),
            warnings=len(result.warnings),
            files=result.stats.total_files,
            batches=result.stats.batch_count,
            duration_ms=result.stats.duration * 1000,
        )
        await self.hooks.call("on_complete", result)
        return result

    async def _abort(self, run: _Run, issue: Issue, cancelled: bool = False) -> ExportResult:
        self._transition(ExportState.FAILED, "Export cancelled" if cancelled else "Export failed", force=True)
        run.errors.append(issue)
        self.metrics.record_error(issue.code, "exporter")
        logger.warning("export_aborted", code=issue.code, message=issue.message, files=len(run.files))
        try:
            await self.hooks.call("on_error", issue)
        except Exception as e:
            logger.error("hook_failed", hook="on_error", error=str(e))
        return self._result(run, cancelled=cancelled)

    def _theme_manager(self, run: _Run) -> ThemeManager:
        """Per-export registry seeded with the project's own themes."""
        manager = ThemeManager()
        for index, theme in enumerate(run.project.themes):
            try:
                manager.define_theme(theme)
            except StyleError as e:
                run.errors.append(e.to_issue(f"themes[{index}]"))
        return manager

    def _project_files(self, project: Project, theme_manager: ThemeManager) -> dict[str, str]:
        files = {
            "app.json": generate_app_json(project),
            "project.config.json": generate_project_config_json(project),
            "sitemap.json": generate_sitemap_json(),
            "app.js": generate_app_js(project),
            "app.wxss": generate_app_wxss(project, theme_manager),
            "package.json": generate_package_json(project, analyze_dependencies(project)),
        }
        files.update(generate_util_files())
        return files

    async def _compile_components(self, run: _Run) -> None:
        for definition in run.project.global_components:
            if definition.external:
                continue
            output = await asyncio.to_thread(self.page_compiler.compile_component, definition)
            self._collect(run, output)

    async def _compile_pages(self, run: _Run) -> None:
        pages = run.project.pages
        width = self.options.concurrency

        for start in range(0, len(pages), width):
            if self._cancelled.is_set():
                raise ExportCancelledError()

            batch = pages[start:start + width]
            outputs = await asyncio.gather(*(self._compile_page(page) for page in batch))
            run.batch_count += 1
            self.metrics.record_batch()
            for output in outputs:
                self._collect(run, output)

            done = min(start + width, len(pages))
            self._update_task(f"Generating page code ({done}/{len(pages)})", processed_pages=done)
            logger.debug("batch_completed", batch=run.batch_count, pages=len(batch))

    async def _compile_page(self, page: Page) -> PageOutput:
        start_time = time.time()
        try:
            await self.hooks.call("before_generate", page)
            output = await asyncio.to_thread(self.page_compiler.compile_page, page)
        except Exception as e:
            logger.error("page_generation_failed", page=page.path, error=str(e), exc_info=True)
            output = PageOutput(path=page.path)
            output.errors.append(
                Issue(
                    code="PAGE_GENERATION_ERROR",
                    message=f"Failed to generate page: {e}",
                    path=page.path,
                    category=ErrorCategory.ORCHESTRATION,
                )
            )

        try:
            await self.hooks.call("after_generate", output)
        except Exception as e:
            logger.error("hook_failed", hook="after_generate", page=page.path, error=str(e))
            output.errors.append(
                Issue(
                    code="PAGE_GENERATION_ERROR",
                    message=f"after_generate hook failed: {e}",
                    path=page.path,
                    category=ErrorCategory.ORCHESTRATION,
                )
            )

        self.metrics.record_page("success" if output.success else "failed", time.time() - start_time)
        for issue in output.errors:
            self.metrics.record_error(issue.code, "page")
        return output

    @staticmethod
    def _collect(run: _Run, output: PageOutput) -> None:
        run.files.update(output.files())
        run.errors.extend(output.errors)
        run.warnings.extend(output.warnings)

    async def _write(self, run: _Run, files: dict[str, str]) -> None:
        if run.output_dir is None:
            return
        await asyncio.to_thread(_write_files, run.output_dir, files)

    def _result(self, run: _Run, package_path: Path | None = None, cancelled: bool = False) -> ExportResult:
        if run.output_dir is not None and run.output_dir.exists():
            total_files = count_files(run.output_dir)
            total_size = directory_size(run.output_dir)
        else:
            total_files = len(run.files)
            total_size = _size(run.files)

        stats = ExportStats(
            total_files=total_files,
            total_size=total_size,
            page_count=len(run.project.pages),
            component_count=len(run.project.global_components),
            resource_count=len(run.project.resources),
            batch_count=run.batch_count,
            duration=time.time() - run.start_time,
            compression_ratio=run.ratio,
        )
        return ExportResult(
            success=not run.errors,
            files=dict(run.files),
            errors=list(run.errors),
            warnings=list(run.warnings),
            stats=stats,
            output_path=str(run.output_dir) if run.output_dir is not None else None,
            package_path=str(package_path) if package_path is not None else None,
            export_id=run.export_id,
            cancelled=cancelled,
        )

    def _package_path(self, project: Project, root: Path) -> Path:
        return root / f"{sanitize_package_name(project.name)}-{project.version}.zip"

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def _transition(self, state: ExportState, task: str, force: bool = False) -> None:
        with self._lock:
            current = self._progress.state
            if not force and not can_transition(current, state):
                raise GenerationError(
                    f"Invalid export transition: {current.value} -> {state.value}",
                    details={"from": current.value, "to": state.value},
                )
            self._progress = ExportProgress(
                state=state,
                progress=PROGRESS[state],
                current_task=task,
                processed_pages=self._progress.processed_pages,
                total_pages=self._progress.total_pages,
            )
            progress = self._progress

        logger.debug("export_state_changed", state=state.value, progress=progress.progress)
        self.hooks.notify("on_progress", progress)

    def _update_task(self, task: str, processed_pages: int | None = None) -> None:
        with self._lock:
            self._progress = self._progress.with_task(task, processed_pages)
            progress = self._progress
        self.hooks.notify("on_progress", progress)


def _size(files: dict[str, str]) -> int:
    return sum(len(content.encode("utf-8")) for content in files.values())


def _write_files(root: Path, files: dict[str, str]) -> None:
    """
    Write a file map under ``root``.

    Raises:
        GenerationError: If a key resolves outside ``root``
    """
    base = root.resolve()
    for relative, content in files.items():
        target = (root / relative).resolve()
        if not target.is_relative_to(base):
            raise GenerationError(
                f"Output path escapes the output directory: {relative}",
                details={"path": relative, "root": str(base)},
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


__all__ = ["ExportStats", "ExportResult", "Exporter"]
