"""Project export: page batching, project files, optimization and packaging."""

from .state import ExportState, ExportProgress, PROGRESS, can_transition
from .options import ExporterOptions, OptimizationOptions
from .config_files import (
    generate_app_json,
    generate_project_config_json,
    generate_sitemap_json,
    generate_page_json,
    generate_app_js,
    generate_app_wxss,
    generate_util_files,
)
from .dependencies import Dependencies, analyze_dependencies, generate_package_json, sanitize_package_name
from .optimizer import Optimizer, compression_ratio
from .packager import pack_directory, pack_files, pack_for_upload, directory_size, count_files
from .resources import CopyReport, copy_resources
from .hooks import ExportHooks
from .pages import PageCompiler, PageOutput
from .orchestrator import Exporter, ExportResult, ExportStats

__all__ = [
    "ExportState",
    "ExportProgress",
    "PROGRESS",
    "can_transition",
    "ExporterOptions",
    "OptimizationOptions",
    "generate_app_json",
    "generate_project_config_json",
    "generate_sitemap_json",
    "generate_page_json",
    "generate_app_js",
    "generate_app_wxss",
    "generate_util_files",
    "Dependencies",
    "analyze_dependencies",
    "generate_package_json",
    "sanitize_package_name",
    "Optimizer",
    "compression_ratio",
    "pack_directory",
    "pack_files",
    "pack_for_upload",
    "directory_size",
    "count_files",
    "CopyReport",
    "copy_resources",
    "ExportHooks",
    "PageCompiler",
    "PageOutput",
    "Exporter",
    "ExportResult",
    "ExportStats",
]
