"""Text-to-text optimizer passes.

Every pass is pure and string-aware: quoted literals are never rewritten.
Passes toggle independently per artifact kind through
``OptimizationOptions``.
"""

import re

from pagewright.core import get_logger
from pagewright.markup import tokenize
from pagewright.markup.formatter import TokenKind

from .options import OptimizationOptions

logger = get_logger(__name__)

_TAG_PART = re.compile(r"(\"[^\"]*\"|'[^']*')|(\s*=\s*)|(\s+)")
_CSS_TOKEN = re.compile(
    r"""
    (?P<string>"(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*')
    |(?P<comment>/\*.*?\*/)
    |(?P<space>\s+)
    |(?P<punct>[{}:;,])
    |(?P<other>[^"'/\s{}:;,]+|/)
    """,
    re.VERBOSE | re.DOTALL,
)
_CONSOLE_CALL = re.compile(r"^console\.(log|warn|error|info|debug)\s*\(")


def remove_markup_comments(text: str) -> str:
    return re.sub(r"<!--.*?-->", "", text, flags=re.DOTALL)


def compress_tag(tag: str) -> str:
    """Collapse whitespace between attributes and around ``=`` outside quoted values."""

    def replace(match: re.Match) -> str:
        if match.group(1):
            return match.group(1)
        if match.group(2):
            return "="
        return " "

    return _TAG_PART.sub(replace, tag)


def optimize_markup(text: str, remove_comments: bool = True, remove_whitespace: bool = True,
                    compress_attributes: bool = False) -> str:
    if not remove_whitespace:
        if remove_comments:
            text = remove_markup_comments(text)
        if compress_attributes:
            text = re.sub(r"<[^>]+>", lambda m: compress_tag(m.group(0)), text)
        return text

    parts = []
    for token in tokenize(text):
        if token.kind == TokenKind.COMMENT and remove_comments:
            continue
        value = token.value
        if compress_attributes and token.kind in (TokenKind.OPEN, TokenKind.SELF_CLOSING):
            value = compress_tag(value)
        parts.append(value)
    return "".join(parts)


def minify_style(text: str) -> str:
    out: list[str] = []
    pending_space = False

    for match in _CSS_TOKEN.finditer(text):
        kind = match.lastgroup
        value = match.group(0)
        if kind in ("space", "comment"):
            pending_space = True
            continue
        if kind == "punct":
            if value == "}" and out and out[-1] == ";":
                out.pop()
            out.append(value)
        else:
            if pending_space and out and out[-1] not in "{}:;,":
                out.append(" ")
            out.append(value)
        pending_space = False

    return "".join(out).strip()


def strip_script_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside string and template literals."""
    out: list[str] = []
    i = 0
    n = len(text)
    quote: str | None = None

    while i < n:
        char = text[i]
        if quote:
            out.append(char)
            if char == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if char == quote:
                quote = None
            i += 1
            continue
        if char in "'\"`":
            quote = char
            out.append(char)
            i += 1
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            skipped = text[i:n if end == -1 else end + 2]
            out.append("\n" * skipped.count("\n"))
            i = n if end == -1 else end + 2
            continue
        out.append(char)
        i += 1

    return "".join(out)


def _paren_balance(line: str) -> int:
    balance = 0
    quote: str | None = None
    escaped = False
    for char in line:
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char == "(":
            balance += 1
        elif char == ")":
            balance -= 1
    return balance


def remove_console_statements(text: str) -> str:
    """Drop ``console.*(...)`` statements, including calls spanning several lines."""
    kept: list[str] = []
    depth = 0
    for line in text.split("\n"):
        if depth > 0:
            depth += _paren_balance(line)
            continue
        if _CONSOLE_CALL.match(line.strip()):
            depth = _paren_balance(line)
            continue
        kept.append(line)
    return "\n".join(kept)


def minify_script(text: str) -> str:
    """Strip comments, indentation and blank lines; one statement per line is kept."""
    lines = (line.strip() for line in strip_script_comments(text).split("\n"))
    return "\n".join(line for line in lines if line)


def compression_ratio(original_size: int, optimized_size: int) -> float:
    """Percentage saved; 0 for empty input."""
    if original_size <= 0:
        return 0.0
    return (original_size - optimized_size) / original_size * 100


class Optimizer:
    """Applies the enabled passes to a file map by extension."""

    def __init__(self, options: OptimizationOptions | None = None) -> None:
        self.options = options or OptimizationOptions()

    def optimize_markup(self, text: str) -> str:
        opts = self.options.markup
        return optimize_markup(text, opts.remove_comments, opts.remove_whitespace, opts.compress_attributes)

    def optimize_style(self, text: str) -> str:
        return minify_style(text) if self.options.style.minify else text

    def optimize_script(self, text: str) -> str:
        if self.options.script.remove_console:
            text = remove_console_statements(text)
        if self.options.script.minify:
            text = minify_script(text)
        return text

    def optimize_file(self, path: str, content: str) -> str:
        if path.endswith(".wxml"):
            return self.optimize_markup(content)
        if path.endswith(".wxss"):
            return self.optimize_style(content)
        if path.endswith(".js"):
            return self.optimize_script(content)
        return content

    def optimize_files(self, files: dict[str, str]) -> dict[str, str]:
        optimized = {path: self.optimize_file(path, content) for path, content in files.items()}
        before = sum(len(c.encode("utf-8")) for c in files.values())
        after = sum(len(c.encode("utf-8")) for c in optimized.values())
        logger.info(
            "files_optimized",
            files=len(files),
            bytes_before=before,
            bytes_after=after,
            ratio=round(compression_ratio(before, after), 2),
        )
        return optimized


__all__ = [
    "remove_markup_comments",
    "compress_tag",
    "optimize_markup",
    "minify_style",
    "strip_script_comments",
    "remove_console_statements",
    "minify_script",
    "compression_ratio",
    "Optimizer",
]
