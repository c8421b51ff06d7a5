"""Page markup compilation."""

import time
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from pagewright.core import Issue, Settings, get_logger, get_settings
from pagewright.models import ComponentNode, Page
from pagewright.validation import validate_tree

from .attributes import render_attributes, renders_inline_content
from .bindings import escape_comment, escape_text, to_binding_expression
from .formatter import check_balance, format_markup

logger = get_logger(__name__)


class MarkupOptions(BaseModel):
    """Per-call markup options."""

    model_config = ConfigDict(frozen=True)

    indent: str = "  "
    add_comments: bool = True
    format: bool = True
    validate_tree: bool = True
    max_children: int = 10

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "MarkupOptions":
        settings = settings or get_settings()
        values = {"add_comments": settings.add_comments, "max_children": settings.max_children}
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class MarkupResult:
    text: str
    success: bool
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    node_count: int = 0
    duration: float = 0.0


class MarkupCompiler:
    """Renders a page's component tree as markup."""

    def __init__(self, options: MarkupOptions | None = None) -> None:
        self.options = options or MarkupOptions()

    def compile(self, page: Page) -> MarkupResult:
        """
        Compile a page.

        The tree is validated first; any validation error aborts with no
        text. After formatting, tag balance is re-checked and a mismatch is
        reported as ``GENERATION_ERROR``.
        """
        start_time = time.time()
        errors: list[Issue] = []
        warnings: list[Issue] = []

        if self.options.validate_tree:
            report = validate_tree(page.components, self.options.max_children)
            warnings.extend(report.warnings)
            if not report.valid:
                logger.info("markup_validation_failed", page=page.path, errors=len(report.errors))
                return MarkupResult(
                    text="",
                    success=False,
                    errors=report.errors,
                    warnings=warnings,
                    duration=time.time() - start_time,
                )

        counter = [0]
        body = "\n".join(self._render(node, 0, counter) for node in page.components)
        if not body:
            warnings.append(Issue(code="EMPTY_MARKUP", message="Page has no components", path=page.path))

        parts = []
        if self.options.add_comments:
            parts.append(f"<!-- Page: {escape_comment(page.name)} -->")
            parts.append(f"<!-- Path: {escape_comment(page.path)}.wxml -->")
        if body:
            parts.append(body)
        text = "\n".join(parts)

        if self.options.format:
            text = format_markup(text, self.options.indent)

        errors.extend(check_balance(text))
        if errors:
            logger.error("markup_unbalanced", page=page.path, errors=[e.message for e in errors])

        return MarkupResult(
            text=text,
            success=not errors,
            errors=errors,
            warnings=warnings,
            node_count=counter[0],
            duration=time.time() - start_time,
        )

    def compile_fragment(self, node: ComponentNode) -> str:
        """Render a single subtree without validation or header comments."""
        text = self._render(node, 0, [0])
        if self.options.format:
            text = format_markup(text, self.options.indent)
        return text

    def _render(self, node: ComponentNode, level: int, counter: list[int]) -> str:
        counter[0] += 1
        pad = self.options.indent * level
        tag = node.type
        attributes = render_attributes(node)

        if renders_inline_content(node):
            return f"{pad}<{tag}{attributes}>{self._content(node)}</{tag}>"

        if not node.children:
            return f"{pad}<{tag}{attributes} />"

        children = "\n".join(self._render(child, level + 1, counter) for child in node.children)
        return f"{pad}<{tag}{attributes}>\n{children}\n{pad}</{tag}>"

    @staticmethod
    def _content(node: ComponentNode) -> str:
        content = node.get_property("content")
        if content is not None and content.value is not None:
            if content.is_binding:
                return to_binding_expression(str(content.value))
            return escape_text(str(content.value))
        for binding in node.data_bindings:
            if binding.property == "content":
                return to_binding_expression(binding.data_path)
        return ""


__all__ = ["MarkupOptions", "MarkupResult", "MarkupCompiler"]
