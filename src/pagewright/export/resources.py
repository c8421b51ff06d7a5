"""Local resource materialization."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from pagewright.core import ErrorCategory, Issue, get_logger
from pagewright.models import Resource, ResourceType

logger = get_logger(__name__)

ASSET_DIRS: dict[ResourceType, str] = {
    ResourceType.IMAGE: "assets/images",
    ResourceType.ICON: "assets/icons",
    ResourceType.AUDIO: "assets/audio",
    ResourceType.VIDEO: "assets/video",
    ResourceType.FONT: "assets/fonts",
    ResourceType.DATA: "assets/data",
}


@dataclass
class CopyReport:
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)


def asset_path(resource: Resource) -> str:
    """Output-relative destination, e.g. ``assets/images/logo.png``."""
    name = PurePosixPath((resource.path or "").replace("\\", "/")).name or resource.name
    return f"{ASSET_DIRS.get(resource.type, 'assets')}/{name}"


def copy_resources(resources: list[Resource], source_root: str | Path, output_dir: str | Path) -> CopyReport:
    """
    Copy local resources into the asset tree.

    Remote resources are skipped. A failed copy becomes a
    ``RESOURCE_COPY_FAILED`` warning for that resource only.
    """
    report = CopyReport()
    source_root = Path(source_root)
    output_dir = Path(output_dir)

    for resource in resources:
        if resource.is_remote or not resource.path:
            report.skipped.append(resource.id)
            continue

        source = Path(resource.path)
        if not source.is_absolute():
            source = source_root / source
        target = output_dir / asset_path(resource)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as e:
            logger.warning("resource_copy_failed", resource=resource.id, path=str(source), error=str(e))
            report.warnings.append(
                Issue(
                    code="RESOURCE_COPY_FAILED",
                    message=f"Failed to copy resource {resource.name}: {e}",
                    path=resource.path,
                    category=ErrorCategory.RESOURCE,
                )
            )
            continue
        report.copied.append(asset_path(resource))

    logger.debug("resources_copied", copied=len(report.copied), skipped=len(report.skipped))
    return report


__all__ = ["ASSET_DIRS", "CopyReport", "asset_path", "copy_resources"]
