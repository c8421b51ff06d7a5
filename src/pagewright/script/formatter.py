"""Script literal rendering and pretty-printing.

``ScriptFormatter.format`` normalizes generated script text: string
literals use single quotes, statement terminators are dropped, indentation
follows bracket structure (one level per line that leaves brackets open)
and runs of blank lines collapse to one. Output is stable under a second
pass.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from pagewright.validation import is_valid_identifier

OPENERS = "{[("
CLOSERS = "}])"


class JsExpression(str):
    """Script source emitted verbatim instead of being quoted."""


def quote_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f"'{escaped}'"


def object_key(key: str) -> str:
    return key if is_valid_identifier(key) else quote_string(key)


def to_js_literal(value: Any, indent: str = "  ", level: int = 0, inline: bool = False) -> str:
    """
    Render a Python value as a script literal.

    Args:
        value: None, bool, number, str, ``JsExpression``, list or dict
        indent: Indent unit for multi-line output
        level: Current nesting level
        inline: Keep objects and arrays on one line

    Returns:
        Script source text
    """
    if isinstance(value, JsExpression):
        return str(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return "null"
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, dict):
        return _object_literal(value, indent, level, inline)
    if isinstance(value, (list, tuple)):
        return _array_literal(list(value), indent, level, inline)
    return quote_string(str(value))


def _object_literal(value: dict, indent: str, level: int, inline: bool) -> str:
    if not value:
        return "{}"
    if inline:
        items = ", ".join(
            f"{object_key(str(k))}: {to_js_literal(v, indent, level, True)}" for k, v in value.items()
        )
        return f"{{ {items} }}"
    inner = indent * (level + 1)
    items = ",\n".join(
        f"{inner}{object_key(str(k))}: {to_js_literal(v, indent, level + 1)}" for k, v in value.items()
    )
    return f"{{\n{items}\n{indent * level}}}"


def _array_literal(value: list, indent: str, level: int, inline: bool) -> str:
    if not value:
        return "[]"
    scalar = all(not isinstance(v, (dict, list, tuple)) for v in value)
    if inline or scalar:
        return "[" + ", ".join(to_js_literal(v, indent, level, True) for v in value) + "]"
    inner = indent * (level + 1)
    items = ",\n".join(f"{inner}{to_js_literal(v, indent, level + 1)}" for v in value)
    return f"[\n{items}\n{indent * level}]"


@dataclass
class _LineScan:
    text: str
    leading_closers: int = 0
    brackets: list[str] = field(default_factory=list)

    @property
    def opens_with_closer(self) -> bool:
        return self.leading_closers > 0

    @property
    def ends_with_opener(self) -> bool:
        return self.text.endswith(tuple(OPENERS))


class ScriptFormatter:
    """Idempotent pretty-printer for generated scripts."""

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def format(self, code: str) -> str:
        lines: list[str] = []
        stack: list[int] = []
        in_block_comment = False
        in_template = False
        pending_blank = False
        previous: _LineScan | None = None

        for raw in code.split("\n"):
            verbatim = in_template
            stripped = raw if verbatim else raw.strip()
            if not stripped and not verbatim:
                pending_blank = bool(lines)
                continue

            scan, in_block_comment, in_template = self._scan(stripped, in_block_comment, in_template)
            if not scan.text and not verbatim:
                continue

            for _ in range(scan.leading_closers):
                self._close(stack)
            level = len(stack)

            line_opens = 0
            for char in scan.brackets:
                if char in OPENERS:
                    line_opens += 1
                elif line_opens:
                    line_opens -= 1
                else:
                    self._close(stack)
            if line_opens:
                stack.append(line_opens)

            if pending_blank and previous is not None:
                if not previous.ends_with_opener and not scan.opens_with_closer:
                    lines.append("")
            pending_blank = False

            lines.append(raw if verbatim else f"{self.indent * level}{scan.text}")
            previous = scan

        return "\n".join(lines)

    @staticmethod
    def _close(stack: list[int]) -> None:
        if not stack:
            return
        stack[-1] -= 1
        if stack[-1] <= 0:
            stack.pop()

    def _scan(self, line: str, in_block_comment: bool, in_template: bool) -> tuple[_LineScan, bool, bool]:
        """Split one line into normalized text and the brackets it contains outside literals."""
        out: list[str] = []
        brackets: list[str] = []
        leading_closers = 0
        seen_code = in_template
        last_code_index = -1
        i = 0
        n = len(line)

        while i < n:
            char = line[i]

            if in_block_comment:
                end = line.find("*/", i)
                if end == -1:
                    out.append(line[i:])
                    i = n
                else:
                    out.append(line[i:end + 2])
                    i = end + 2
                    in_block_comment = False
                continue

            if in_template:
                out.append(char)
                if char == "\\" and i + 1 < n:
                    out.append(line[i + 1])
                    i += 2
                    continue
                if char == "`":
                    in_template = False
                    last_code_index = len(out) - 1
                i += 1
                continue

            if line.startswith("//", i):
                out.append(line[i:])
                break
            if line.startswith("/*", i):
                out.append("/*")
                in_block_comment = True
                i += 2
                continue

            if char == "`":
                in_template = True
                seen_code = True
                out.append(char)
                i += 1
                continue

            if char in "'\"":
                literal, i = self._read_string(line, i)
                out.append(literal)
                seen_code = True
                last_code_index = len(out) - 1
                continue

            if char in CLOSERS and not seen_code:
                leading_closers += 1
            else:
                if char in OPENERS or char in CLOSERS:
                    brackets.append(char)
                if not char.isspace():
                    seen_code = True
            if not char.isspace():
                last_code_index = len(out)
            out.append(char)
            i += 1

        if last_code_index >= 0 and out[last_code_index] == ";":
            head = "".join(out[:last_code_index]).rstrip()
            tail = "".join(out[last_code_index + 1:]).strip()
            text = f"{head} {tail}" if head and tail else head or tail
        else:
            text = "".join(out).rstrip()

        return _LineScan(text, leading_closers, brackets), in_block_comment, in_template

    @staticmethod
    def _read_string(line: str, start: int) -> tuple[str, int]:
        """Read a quoted literal starting at ``start`` and re-quote it with single quotes."""
        quote = line[start]
        i = start + 1
        body: list[str] = []
        while i < len(line):
            char = line[i]
            if char == "\\" and i + 1 < len(line):
                body.append(line[i:i + 2])
                i += 2
                continue
            if char == quote:
                i += 1
                break
            body.append(char)
            i += 1

        if quote == "'":
            return "'" + "".join(body) + "'", i

        converted = []
        for piece in body:
            if piece == '\\"':
                converted.append('"')
            elif piece == "'":
                converted.append("\\'")
            else:
                converted.append(piece)
        return "'" + "".join(converted) + "'", i


def format_script(code: str, indent: str = "  ") -> str:
    return ScriptFormatter(indent).format(code)


__all__ = [
    "JsExpression",
    "quote_string",
    "object_key",
    "to_js_literal",
    "ScriptFormatter",
    "format_script",
]
