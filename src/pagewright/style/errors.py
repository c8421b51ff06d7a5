"""Style compiler errors."""

from pagewright.core import PagewrightError


class StyleError(PagewrightError):
    code = "STYLE_ERROR"


class InvalidSelectorError(StyleError):
    code = "INVALID_SELECTOR"


class InvalidPropertyError(StyleError):
    code = "INVALID_PROPERTY"


class UnitConversionError(StyleError):
    code = "UNIT_CONVERSION_ERROR"


class ThemeNotFoundError(StyleError):
    code = "THEME_NOT_FOUND"


class InvalidThemeError(StyleError):
    code = "INVALID_THEME"


__all__ = [
    "StyleError",
    "InvalidSelectorError",
    "InvalidPropertyError",
    "UnitConversionError",
    "ThemeNotFoundError",
    "InvalidThemeError",
]
