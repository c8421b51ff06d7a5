"""Theme registry and CSS variable emission.

Themes are stored as defined and resolved on lookup by walking the
``extends`` chain: each token group is shallow-merged parent first, then
overridden by the child. Parents must be registered before children, and
chains may not loop back on themselves.
"""

import re
import threading
from typing import Any

from pagewright.core import get_logger
from pagewright.models import StyleRule, Theme, Typography

from .errors import InvalidThemeError, ThemeNotFoundError
from .formatter import format_rules

logger = get_logger(__name__)

REQUIRED_COLORS = (
    "primary",
    "secondary",
    "success",
    "warning",
    "error",
    "text",
    "background",
    "border",
)

DEFAULT_THEME = Theme(
    name="light",
    colors={
        "primary": "#007aff",
        "secondary": "#5856d6",
        "success": "#34c759",
        "warning": "#ff9500",
        "error": "#ff3b30",
        "info": "#00bfff",
        "text": "#000000",
        "textSecondary": "#666666",
        "background": "#ffffff",
        "backgroundSecondary": "#f5f5f5",
        "border": "#e0e0e0",
        "divider": "#eeeeee",
    },
    spacing={"xs": "4rpx", "sm": "8rpx", "md": "16rpx", "lg": "24rpx", "xl": "32rpx", "xxl": "48rpx"},
    typography=Typography(
        font_size={
            "xs": "12px",
            "sm": "13px",
            "base": "14px",
            "lg": "16px",
            "xl": "18px",
            "2xl": "20px",
            "3xl": "24px",
        },
        font_weight={"light": "300", "normal": "400", "medium": "500", "semibold": "600", "bold": "700"},
        line_height={"tight": "1.2", "normal": "1.5", "relaxed": "1.75", "loose": "2"},
    ),
    border_radius={"sm": "4rpx", "md": "8rpx", "lg": "12rpx", "xl": "16rpx", "full": "9999rpx"},
    shadows={
        "sm": "0 1px 2px 0 rgba(0, 0, 0, 0.05)",
        "md": "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
        "lg": "0 10px 15px -3px rgba(0, 0, 0, 0.1)",
        "xl": "0 20px 25px -5px rgba(0, 0, 0, 0.1)",
    },
)


def token_name(key: str) -> str:
    """``textSecondary`` -> ``text-secondary``; ``2xl`` is left alone."""
    key = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", key)
    key = re.sub(r"([A-Z])([A-Z])(?=[a-z])", r"\1-\2", key)
    return key.lower()


def merge_themes(base: Theme, override: Theme) -> Theme:
    """Shallow-merge every token group, override winning."""
    typography = Typography(
        font_size={**base.typography.font_size, **override.typography.font_size},
        font_weight={**base.typography.font_weight, **override.typography.font_weight},
        line_height={**base.typography.line_height, **override.typography.line_height},
        font_family={**base.typography.font_family, **override.typography.font_family},
    )
    return Theme(
        name=override.name,
        colors={**base.colors, **override.colors},
        spacing={**base.spacing, **override.spacing},
        typography=typography,
        border_radius={**base.border_radius, **override.border_radius},
        shadows={**base.shadows, **override.shadows},
        custom={**base.custom, **override.custom},
        extends=override.extends,
    )


def check_theme(theme: Theme) -> None:
    """
    Validate a fully resolved theme.

    Raises:
        InvalidThemeError: If a token group is empty or a required color is missing
    """
    groups = {
        "colors": theme.colors,
        "spacing": theme.spacing,
        "typography": not theme.typography.is_empty(),
        "borderRadius": theme.border_radius,
        "shadows": theme.shadows,
    }
    for group, present in groups.items():
        if not present:
            raise InvalidThemeError(f"Theme {theme.name!r} has no {group} tokens")

    missing = [color for color in REQUIRED_COLORS if not theme.colors.get(color)]
    if missing:
        raise InvalidThemeError(
            f"Theme {theme.name!r} is missing colors: {', '.join(missing)}",
            details={"missing": missing},
        )


class ThemeManager:
    """Thread-safe registry of named themes."""

    def __init__(self, default_theme: Theme | None = DEFAULT_THEME) -> None:
        self._themes: dict[str, Theme] = {}
        self._lock = threading.RLock()
        self._active: str | None = None
        if default_theme is not None:
            self.define_theme(default_theme)
            self._active = default_theme.name

    def define_theme(self, theme: Theme | dict[str, Any]) -> Theme:
        """
        Register a theme.

        Returns:
            The resolved theme

        Raises:
            ThemeNotFoundError: If ``extends`` names an unregistered theme
            InvalidThemeError: If the theme is malformed or its chain loops
        """
        if isinstance(theme, dict):
            theme = Theme.model_validate(theme)
        if not theme.name:
            raise InvalidThemeError("Theme must have a name")

        with self._lock:
            if theme.extends:
                if theme.extends == theme.name:
                    raise InvalidThemeError(f"Theme {theme.name!r} cannot extend itself")
                if theme.extends not in self._themes:
                    raise ThemeNotFoundError(
                        f"Theme not found: {theme.extends}", details={"theme": theme.extends}
                    )
                if theme.name in self._chain(theme.extends):
                    raise InvalidThemeError(f"Theme {theme.name!r} would create an extends cycle")

            resolved = self._resolve(theme)
            check_theme(resolved)
            self._themes[theme.name] = theme

        logger.debug("theme_defined", theme=theme.name, extends=theme.extends)
        return resolved

    def _chain(self, name: str) -> list[str]:
        chain: list[str] = []
        current: str | None = name
        while current and current in self._themes and current not in chain:
            chain.append(current)
            current = self._themes[current].extends
        return chain

    def _resolve(self, theme: Theme) -> Theme:
        if not theme.extends:
            return theme
        parent = self._themes[theme.extends]
        return merge_themes(self._resolve(parent), theme)

    def has_theme(self, name: str) -> bool:
        with self._lock:
            return name in self._themes

    def get_theme(self, name: str | None = None) -> Theme:
        """
        Look up a resolved theme (the active one by default).

        Raises:
            ThemeNotFoundError: If the theme is not registered
        """
        with self._lock:
            key = name or self._active
            if key is None or key not in self._themes:
                raise ThemeNotFoundError(f"Theme not found: {key}", details={"theme": key})
            return self._resolve(self._themes[key])

    def list_themes(self) -> list[str]:
        with self._lock:
            return list(self._themes)

    @property
    def active_theme(self) -> str | None:
        return self._active

    def apply_theme(self, name: str, minify: bool = False) -> str:
        """Activate a theme and return its ``:root`` variable block."""
        theme = self.get_theme(name)
        with self._lock:
            self._active = name
        return format_rules(self.generate_theme_rules(theme), minify=minify)

    def extend_theme(
        self, base_name: str, overrides: dict[str, Any], name: str | None = None
    ) -> Theme:
        """Build (without registering) a theme derived from ``base_name``."""
        base = self.get_theme(base_name)
        data = {**overrides, "name": name or overrides.get("name") or f"{base_name}-extended"}
        override = Theme.model_validate(data)
        return merge_themes(base, override).model_copy(update={"extends": base_name})

    def generate_theme_rules(self, theme: Theme) -> list[StyleRule]:
        properties: dict[str, str] = {}

        def add(prefix: str, tokens: dict[str, str]) -> None:
            for key, value in tokens.items():
                if value:
                    properties[f"--{prefix}-{token_name(key)}"] = value

        add("color", theme.colors)
        add("spacing", theme.spacing)
        add("font-size", theme.typography.font_size)
        add("font-weight", theme.typography.font_weight)
        add("line-height", theme.typography.line_height)
        add("font-family", theme.typography.font_family)
        add("border-radius", theme.border_radius)
        add("shadow", theme.shadows)
        add("custom", theme.custom)

        return [StyleRule(selector=":root", properties=properties)]

    def get_theme_variables(self, name: str | None = None) -> dict[str, str]:
        theme = self.get_theme(name)
        variables: dict[str, str] = {}
        for rule in self.generate_theme_rules(theme):
            variables.update(
                {key: value for key, value in rule.properties.items() if key.startswith("--")}
            )
        return variables


__all__ = [
    "DEFAULT_THEME",
    "REQUIRED_COLORS",
    "ThemeManager",
    "merge_themes",
    "check_theme",
    "token_name",
]
