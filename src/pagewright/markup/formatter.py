"""Markup pretty-printer and tag balance check.

The printer tokenizes into comments, tags and text, then re-emits one
token per line indented by tag depth. An element whose only content is a
single text run, or nothing at all, stays on one line. Text whitespace is
collapsed. Formatting already formatted markup returns it unchanged.
"""

import re
from dataclasses import dataclass
from enum import Enum

from pagewright.core import ErrorCategory, Issue

_TOKEN = re.compile(
    r"""
    (?P<comment><!--.*?-->)
    |(?P<tag></?[a-zA-Z][\w:.-]*(?:[^>"']|"[^"]*"|'[^']*')*>)
    |(?P<text>[^<]+|<)
    """,
    re.VERBOSE | re.DOTALL,
)
_TAG_NAME = re.compile(r"</?\s*([a-zA-Z][\w:.-]*)")
_WHITESPACE = re.compile(r"\s+")


class TokenKind(str, Enum):
    COMMENT = "comment"
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self_closing"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    name: str = ""


def tokenize(markup: str) -> list[Token]:
    tokens: list[Token] = []
    for match in _TOKEN.finditer(markup):
        if match.group("comment"):
            tokens.append(Token(TokenKind.COMMENT, match.group("comment").strip()))
        elif match.group("tag"):
            raw = match.group("tag").strip()
            name_match = _TAG_NAME.match(raw)
            name = name_match.group(1) if name_match else ""
            if raw.startswith("</"):
                kind = TokenKind.CLOSE
            elif raw.endswith("/>"):
                kind = TokenKind.SELF_CLOSING
            else:
                kind = TokenKind.OPEN
            tokens.append(Token(kind, raw, name))
        else:
            text = _WHITESPACE.sub(" ", match.group("text")).strip()
            if text:
                tokens.append(Token(TokenKind.TEXT, text))
    return tokens


def format_markup(markup: str, indent: str = "  ") -> str:
    """Re-indent markup by tag depth."""
    tokens = tokenize(markup)
    lines: list[str] = []
    depth = 0
    i = 0

    while i < len(tokens):
        token = tokens[i]
        pad = indent * depth

        if token.kind == TokenKind.OPEN:
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            after = tokens[i + 2] if i + 2 < len(tokens) else None

            if following and following.kind == TokenKind.CLOSE and following.name == token.name:
                lines.append(f"{pad}{token.value}{following.value}")
                i += 2
                continue
            if (
                following
                and following.kind == TokenKind.TEXT
                and after
                and after.kind == TokenKind.CLOSE
                and after.name == token.name
            ):
                lines.append(f"{pad}{token.value}{following.value}{after.value}")
                i += 3
                continue

            lines.append(f"{pad}{token.value}")
            depth += 1
        elif token.kind == TokenKind.CLOSE:
            depth = max(depth - 1, 0)
            lines.append(f"{indent * depth}{token.value}")
        else:
            lines.append(f"{pad}{token.value}")
        i += 1

    return "\n".join(lines)


def check_balance(markup: str) -> list[Issue]:
    """Stack-match open and close tags; any mismatch is a generator fault."""
    issues: list[Issue] = []
    stack: list[str] = []

    for token in tokenize(markup):
        if token.kind == TokenKind.OPEN:
            stack.append(token.name)
        elif token.kind == TokenKind.CLOSE:
            if not stack:
                issues.append(_unbalanced(f"Unexpected closing tag: {token.value}"))
            elif stack[-1] != token.name:
                issues.append(_unbalanced(f"Expected </{stack[-1]}>, found {token.value}"))
                stack.pop()
            else:
                stack.pop()

    for name in reversed(stack):
        issues.append(_unbalanced(f"Unclosed tag: <{name}>"))
    return issues


def _unbalanced(message: str) -> Issue:
    return Issue(code="GENERATION_ERROR", message=message, category=ErrorCategory.GENERATION)


__all__ = ["TokenKind", "Token", "tokenize", "format_markup", "check_balance"]
