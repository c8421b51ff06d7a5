"""Property naming and unit handling."""

import re
from typing import Any

from .errors import UnitConversionError

KNOWN_UNITS = ("rpx", "px", "%", "vw", "vh", "rem", "em", "deg", "ms", "s")

KEYWORDS = frozenset({"auto", "inherit", "initial", "unset", "none", "normal"})

PX_PROPERTIES = frozenset({"font-size", "line-height", "letter-spacing", "word-spacing"})

# Bare numbers stay bare for these
UNITLESS_PROPERTIES = frozenset(
    {"opacity", "z-index", "font-weight", "flex", "flex-grow", "flex-shrink", "order", "zoom"}
)

NUMBER_PATTERN = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")
VALUE_PATTERN = re.compile(r"^(-?(?:\d+\.?\d*|\.\d+))(rpx|px|%|vw|vh|rem|em|deg|ms|s)?$", re.I)
HAS_UNIT_PATTERN = re.compile(r"\d(rpx|px|%|vw|vh|rem|em|deg|ms|s)\b", re.I)
FUNCTION_PATTERN = re.compile(r"^[a-zA-Z-]+\(.*\)$")


def camel_to_kebab(name: str) -> str:
    """``backgroundColor`` -> ``background-color``; already-kebab names pass."""
    if name.startswith("--"):
        return name
    kebab = re.sub(r"([A-Z])", r"-\1", name).lower()
    if name[:1].isupper():
        kebab = kebab.lstrip("-")
    return kebab


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def stringify(value: Any) -> str:
    """Render a style value as text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value).strip()


def is_numeric(value: str) -> bool:
    return bool(NUMBER_PATTERN.match(value.strip()))


def has_unit(value: str) -> bool:
    return bool(HAS_UNIT_PATTERN.search(value))


def is_literal(value: str) -> bool:
    """Keywords, CSS variables and function-call values pass through untouched."""
    text = value.strip()
    return text.lower() in KEYWORDS or text.startswith("var(") or bool(FUNCTION_PATTERN.match(text))


def default_unit(property_name: str) -> str:
    return "px" if property_name in PX_PROPERTIES else "rpx"


def process_value(value: Any, property_name: str) -> str:
    """
    Normalize a declaration value.

    Bare numbers receive the property's default unit. Shorthand values are
    handled token by token, so ``"10 20"`` becomes ``"10rpx 20rpx"``.
    """
    text = stringify(value)
    if not text or is_literal(text) or property_name in UNITLESS_PROPERTIES:
        return text
    if property_name.startswith("--"):
        return text

    unit = default_unit(property_name)
    tokens = text.split()
    if len(tokens) == 1:
        return f"{text}{unit}" if is_numeric(text) else text
    return " ".join(f"{token}{unit}" if is_numeric(token) else token for token in tokens)


def parse_value(value: str) -> tuple[float, str | None] | None:
    """Split ``"12px"`` into ``(12.0, "px")``; None for non-numeric values."""
    match = VALUE_PATTERN.match(value.strip())
    if not match:
        return None
    return float(match.group(1)), (match.group(2) or "").lower() or None


def convert_unit(value: str, unit: str, ratio: float = 2.0, source_unit: str | None = None) -> str:
    """
    Convert between px and rpx.

    Args:
        value: Value such as ``"16px"``
        unit: Target unit
        ratio: rpx per px
        source_unit: Unit assumed for a bare number

    Returns:
        Converted value; keywords and non-numeric values are returned unchanged

    Raises:
        UnitConversionError: For conversions other than px <-> rpx
    """
    parsed = parse_value(value)
    if parsed is None:
        return value

    number, current = parsed
    current = current or source_unit
    if current is None or current == unit:
        return value

    if current == "px" and unit == "rpx":
        return f"{format_number(number * ratio)}rpx"
    if current == "rpx" and unit == "px":
        return f"{format_number(number / ratio)}px"

    raise UnitConversionError(
        f"Cannot convert {value} to {unit}", details={"from": current, "to": unit}
    )


def px_to_rpx(value: str, ratio: float) -> str:
    """Convert every px token in a (possibly shorthand) value."""
    tokens = value.split()
    converted = []
    for token in tokens:
        parsed = parse_value(token)
        if parsed is not None and parsed[1] == "px":
            converted.append(convert_unit(token, "rpx", ratio))
        else:
            converted.append(token)
    return " ".join(converted)


__all__ = [
    "KNOWN_UNITS",
    "camel_to_kebab",
    "stringify",
    "is_numeric",
    "has_unit",
    "is_literal",
    "default_unit",
    "process_value",
    "parse_value",
    "convert_unit",
    "px_to_rpx",
]
