"""Color theme consulted by the theme-aware default styles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from runmark.style import Color


class Brightness(Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True, slots=True)
class Theme:
    """The handful of theme colors the default styles need.

    Defaults follow the Material 3 baseline light scheme.

    Attributes:
        brightness: Whether the theme is light or dark
        primary: Link color
        surface_container: Code background
        on_surface_variant: Code foreground
        on_surface: Regular text color

    """

    brightness: Brightness = Brightness.LIGHT
    primary: Color = 0xFF6750A4
    surface_container: Color = 0xFFF3EDF7
    on_surface_variant: Color = 0xFF49454F
    on_surface: Color = 0xFF1D1B20

    @property
    def is_dark(self) -> bool:
        return self.brightness is Brightness.DARK

    @classmethod
    def light(cls) -> Theme:
        return cls()

    @classmethod
    def dark(cls) -> Theme:
        return cls(
            brightness=Brightness.DARK,
            primary=0xFFD0BCFF,
            surface_container=0xFF211F26,
            on_surface_variant=0xFFCAC4D0,
            on_surface=0xFFE6E0E9,
        )
