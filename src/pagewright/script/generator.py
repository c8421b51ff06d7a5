"""Page and component script generation."""

import time
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from pagewright.core import Issue, ScriptError, Settings, ValidationReport, get_logger, get_settings
from pagewright.models import ComponentDefinition, Page

from .data import generate_data, generate_properties, validate_properties, validate_variables
from .events import collect_component_handlers, generate_event_handlers, merge_handlers, validate_handlers
from .formatter import ScriptFormatter, to_js_literal
from .lifecycle import (
    LifecycleTarget,
    generate_lifecycle_block,
    split_component_lifecycles,
    validate_lifecycle,
)

logger = get_logger(__name__)


class ScriptOptions(BaseModel):
    """Per-call script options."""

    model_config = ConfigDict(frozen=True)

    indent: str = "  "
    add_comments: bool = True
    format: bool = True

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "ScriptOptions":
        settings = settings or get_settings()
        values = {"add_comments": settings.add_comments}
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class ScriptResult:
    text: str
    success: bool
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    duration: float = 0.0


class ScriptGenerator:
    """Builds ``Page({...})`` and ``Component({...})`` scripts."""

    def __init__(self, options: ScriptOptions | None = None) -> None:
        self.options = options or ScriptOptions()
        self.formatter = ScriptFormatter(self.options.indent)

    def generate_page(self, page: Page) -> ScriptResult:
        """
        Generate a page script.

        The script holds the data object, one method per lifecycle event,
        one per custom event and one per component event bound in the tree.
        Any naming or lifecycle error aborts with no text.
        """
        start_time = time.time()
        component_handlers = collect_component_handlers(page.components)

        report = validate_variables(page.variables, page.data)
        report.merge(validate_lifecycle(page.lifecycle_events, LifecycleTarget.PAGE))
        report.merge(validate_handlers(page.custom_events, component_handlers))
        if not report.valid:
            return self._failed(report, start_time, page=page.path)

        try:
            sections = [f"data: {generate_data(page.variables, page.data, self.options.indent)}"]
            lifecycle = generate_lifecycle_block(page.lifecycle_events, LifecycleTarget.PAGE)
            handlers = generate_event_handlers(merge_handlers(page.custom_events, component_handlers))
        except ScriptError as e:
            report.errors.append(e.to_issue(page.path))
            return self._failed(report, start_time, page=page.path)

        sections.extend(section for section in (lifecycle, handlers) if section)
        header = [f"// Page: {page.name}"] if self.options.add_comments else []
        text = self._finish(header, "Page", sections)

        logger.debug("page_script_generated", page=page.path, handlers=len(component_handlers))
        return ScriptResult(
            text=text,
            success=True,
            warnings=report.warnings,
            duration=time.time() - start_time,
        )

    def generate_component(self, definition: ComponentDefinition) -> ScriptResult:
        """Generate ``Component({ properties, data, lifetimes, pageLifetimes, methods })``."""
        start_time = time.time()
        component_handlers = collect_component_handlers(definition.template)

        report = validate_properties(definition.properties)
        report.merge(validate_variables(definition.variables))
        report.merge(validate_lifecycle(definition.lifecycle_events, LifecycleTarget.COMPONENT))
        report.merge(validate_handlers(definition.events, component_handlers))
        if not report.valid:
            return self._failed(report, start_time, component=definition.name)

        lifetimes, page_lifetimes = split_component_lifecycles(definition.lifecycle_events)
        try:
            sections = [
                f"properties: {generate_properties(definition.properties, self.options.indent)}",
                f"data: {generate_data(definition.variables, indent=self.options.indent)}",
                f"lifetimes: {self._block(generate_lifecycle_block(lifetimes, LifecycleTarget.COMPONENT))}",
                "pageLifetimes: "
                + self._block(generate_lifecycle_block(page_lifetimes, LifecycleTarget.PAGE_LIFETIMES)),
                "methods: "
                + self._block(generate_event_handlers(merge_handlers(definition.events, component_handlers))),
            ]
        except ScriptError as e:
            report.errors.append(e.to_issue(definition.name))
            return self._failed(report, start_time, component=definition.name)

        header = [f"// Component: {definition.name}"] if self.options.add_comments else []
        text = self._finish(header, "Component", sections)
        return ScriptResult(
            text=text,
            success=True,
            warnings=report.warnings,
            duration=time.time() - start_time,
        )

    @staticmethod
    def _block(methods: str) -> str:
        return f"{{\n{methods}\n}}" if methods else "{}"

    def _finish(self, header: list[str], constructor: str, sections: list[str]) -> str:
        body = ",\n\n".join(sections)
        text = "\n".join([*header, f"{constructor}({{", body, "})", ""])
        return self.formatter.format(text) + "\n" if self.options.format else text

    @staticmethod
    def _failed(report: ValidationReport, start_time: float, **context: Any) -> ScriptResult:
        logger.info("script_validation_failed", errors=[e.code for e in report.errors], **context)
        return ScriptResult(
            text="",
            success=False,
            errors=report.errors,
            warnings=report.warnings,
            duration=time.time() - start_time,
        )


def generate_app_script(global_data: dict[str, Any], indent: str = "  ") -> str:
    """``App({...})`` with ``globalData``."""
    text = "\n".join(
        [
            "App({",
            "onLaunch() {",
            "const logs = wx.getStorageSync('logs') || []",
            "logs.unshift(Date.now())",
            "wx.setStorageSync('logs', logs)",
            "},",
            "",
            f"globalData: {to_js_literal(global_data, indent)}",
            "})",
        ]
    )
    return ScriptFormatter(indent).format(text) + "\n"


__all__ = ["ScriptOptions", "ScriptResult", "ScriptGenerator", "generate_app_script"]
