"""Stylesheet and theme models."""

from enum import Enum

from pydantic import Field

from .base import CamelModel


class Breakpoint(str, Enum):
    XS = "xs"
    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"


class StyleRule(CamelModel):
    """One selector block, optionally scoped to a media predicate."""

    selector: str
    properties: dict[str, str] = Field(default_factory=dict)
    media: str | None = None
    source_id: str | None = None


class Typography(CamelModel):
    font_size: dict[str, str] = Field(default_factory=dict)
    font_weight: dict[str, str] = Field(default_factory=dict)
    line_height: dict[str, str] = Field(default_factory=dict)
    font_family: dict[str, str] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.font_size or self.font_weight or self.line_height or self.font_family)


class Theme(CamelModel):
    """
    Named design token set.

    A theme may name a parent via ``extends``; groups are shallow-merged
    parent first, so a child only needs to list the tokens it overrides.
    """

    name: str
    colors: dict[str, str] = Field(default_factory=dict)
    spacing: dict[str, str] = Field(default_factory=dict)
    typography: Typography = Field(default_factory=Typography)
    border_radius: dict[str, str] = Field(default_factory=dict)
    shadows: dict[str, str] = Field(default_factory=dict)
    custom: dict[str, str] = Field(default_factory=dict)
    extends: str | None = None


__all__ = ["Breakpoint", "StyleRule", "Typography", "Theme"]
