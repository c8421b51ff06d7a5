"""Per-page artifact generation.

``PageCompiler`` runs the markup, style and script compilers for one page
and collects their issues with file-scoped paths. It holds no per-call
state, so one instance serves concurrent pages.
"""

import time
from dataclasses import dataclass, field

from pagewright.core import Issue, get_logger, safe_json_dumps
from pagewright.markup import MarkupCompiler
from pagewright.models import ComponentDefinition, Page
from pagewright.script import ScriptGenerator, ScriptResult
from pagewright.style import StyleGenerator

from .config_files import generate_page_json, used_components

logger = get_logger(__name__)

EXTENSIONS = (".wxml", ".wxss", ".js", ".json")


@dataclass
class PageOutput:
    path: str
    markup: str = ""
    stylesheet: str = ""
    script: str = ""
    config: str = "{}\n"
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return not self.errors

    def files(self) -> dict[str, str]:
        """Output-relative file map for this page."""
        contents = (self.markup, self.stylesheet, self.script, self.config)
        return {f"{self.path}{ext}": text for ext, text in zip(EXTENSIONS, contents)}


def scoped(issues: list[Issue], file_path: str) -> list[Issue]:
    """Prefix issue paths with the file they belong to."""
    return [
        issue.model_copy(update={"path": f"{file_path}#{issue.path}" if issue.path else file_path})
        for issue in issues
    ]


class PageCompiler:
    """Compiles pages and custom component definitions."""

    def __init__(
        self,
        markup: MarkupCompiler | None = None,
        style: StyleGenerator | None = None,
        script: ScriptGenerator | None = None,
    ) -> None:
        self.markup = markup or MarkupCompiler()
        self.style = style or StyleGenerator()
        self.script = script or ScriptGenerator()

    def _compile_views(self, page: Page) -> PageOutput:
        output = PageOutput(path=page.path)

        markup = self.markup.compile(page)
        output.markup = markup.text
        output.errors.extend(scoped(markup.errors, f"{page.path}.wxml"))
        output.warnings.extend(scoped(markup.warnings, f"{page.path}.wxml"))

        style = self.style.generate_page(page)
        output.stylesheet = style.text
        output.errors.extend(scoped(style.errors, f"{page.path}.wxss"))
        output.warnings.extend(scoped(style.warnings, f"{page.path}.wxss"))
        return output

    @staticmethod
    def _add_script(output: PageOutput, result: ScriptResult) -> None:
        output.script = result.text
        output.errors.extend(scoped(result.errors, f"{output.path}.js"))
        output.warnings.extend(scoped(result.warnings, f"{output.path}.js"))

    def compile_page(self, page: Page) -> PageOutput:
        start_time = time.time()

        output = self._compile_views(page)
        self._add_script(output, self.script.generate_page(page))
        output.config = generate_page_json(page)
        output.duration = time.time() - start_time

        logger.debug(
            "page_compiled",
            page=page.path,
            errors=len(output.errors),
            warnings=len(output.warnings),
            duration_ms=output.duration * 1000,
        )
        return output

    def compile_component(self, definition: ComponentDefinition) -> PageOutput:
        """Compile a custom component into ``components/{name}/{name}.*``."""
        start_time = time.time()
        base = f"components/{definition.name}/{definition.name}"
        shell = Page(id=definition.name, name=definition.name, path=base, components=definition.template)

        output = self._compile_views(shell)
        self._add_script(output, self.script.generate_component(definition))
        config = {"component": True, "usingComponents": used_components(shell)}
        output.config = safe_json_dumps(config, indent=2) + "\n"
        output.duration = time.time() - start_time
        return output


__all__ = ["PageOutput", "PageCompiler", "scoped", "EXTENSIONS"]
