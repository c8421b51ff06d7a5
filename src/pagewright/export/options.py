"""Exporter and optimizer options."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pagewright.core import Settings, get_settings


class MarkupOptimization(BaseModel):
    model_config = ConfigDict(frozen=True)

    remove_comments: bool = True
    remove_whitespace: bool = True
    compress_attributes: bool = False


class StyleOptimization(BaseModel):
    model_config = ConfigDict(frozen=True)

    minify: bool = True


class ScriptOptimization(BaseModel):
    model_config = ConfigDict(frozen=True)

    minify: bool = True
    remove_console: bool = True


class OptimizationOptions(BaseModel):
    """Per-artifact optimizer toggles."""

    model_config = ConfigDict(frozen=True)

    markup: MarkupOptimization = Field(default_factory=MarkupOptimization)
    style: StyleOptimization = Field(default_factory=StyleOptimization)
    script: ScriptOptimization = Field(default_factory=ScriptOptimization)


class ExporterOptions(BaseModel):
    """Options for one exporter instance."""

    model_config = ConfigDict(frozen=True)

    optimize: bool = False
    optimization: OptimizationOptions = Field(default_factory=OptimizationOptions)
    auto_package: bool = False
    output_dir_name: str = "miniprogram"
    concurrency: int = Field(default=5, gt=0)
    # Resolves relative resource paths
    resource_root: str = "."

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "ExporterOptions":
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "optimize": settings.optimize,
            "auto_package": settings.auto_package,
            "output_dir_name": settings.output_dir_name,
            "concurrency": settings.concurrency,
        }
        values.update(overrides)
        return cls(**values)


__all__ = [
    "MarkupOptimization",
    "StyleOptimization",
    "ScriptOptimization",
    "OptimizationOptions",
    "ExporterOptions",
]
