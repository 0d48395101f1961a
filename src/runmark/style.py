"""Host-neutral text style model.

TextStyle describes how a run should look without depending on any UI
toolkit. Renderers translate it to their own style objects. Every field is
optional: None means "inherit from the enclosing style".

Colors are 0xAARRGGBB integers.

Thread Safety:
All types are immutable and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum, Flag, IntEnum
from typing import Any, TypeAlias

Color: TypeAlias = int

TRANSPARENT: Color = 0x00000000
BLACK: Color = 0xFF000000
WHITE: Color = 0xFFFFFFFF
YELLOW: Color = 0xFFFFEB3B
BLUE: Color = 0xFF2196F3


def with_alpha(color: Color, alpha: float) -> Color:
    """Return color with its alpha channel replaced.

    Args:
        color: 0xAARRGGBB color
        alpha: Opacity between 0.0 and 1.0 (clamped)

    Example:
        >>> hex(with_alpha(0xFFFFEB3B, 0.5))
        '0x80ffeb3b'

    """
    alpha = min(max(alpha, 0.0), 1.0)
    return (round(alpha * 255) << 24) | (color & 0x00FFFFFF)


def alpha_of(color: Color) -> float:
    """Opacity of a 0xAARRGGBB color between 0.0 and 1.0."""
    return ((color >> 24) & 0xFF) / 255


class TextDecoration(Flag):
    """Lines drawn on text. Members combine with ``|``."""

    NONE = 0
    UNDERLINE = 1
    OVERLINE = 2
    LINE_THROUGH = 4


class FontWeight(IntEnum):
    THIN = 100
    EXTRA_LIGHT = 200
    LIGHT = 300
    NORMAL = 400
    MEDIUM = 500
    SEMI_BOLD = 600
    BOLD = 700
    EXTRA_BOLD = 800
    BLACK = 900


class FontStyle(Enum):
    NORMAL = "normal"
    ITALIC = "italic"


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Immutable text style.

    Attributes:
        color: Foreground color
        background_color: Color painted behind the text
        font_size: Font size in logical pixels
        font_weight: Glyph weight
        font_style: Normal or italic glyphs
        font_family: Primary font family name
        font_family_fallback: Families tried in order when the primary is missing
        letter_spacing: Extra space between glyphs in logical pixels
        decoration: Lines drawn on the text
        decoration_color: Color of decoration lines
        decoration_thickness: Thickness multiplier of decoration lines

    """

    color: Color | None = None
    background_color: Color | None = None
    font_size: float | None = None
    font_weight: FontWeight | None = None
    font_style: FontStyle | None = None
    font_family: str | None = None
    font_family_fallback: tuple[str, ...] | None = None
    letter_spacing: float | None = None
    decoration: TextDecoration | None = None
    decoration_color: Color | None = None
    decoration_thickness: float | None = None

    def merge(self, other: TextStyle | None) -> TextStyle:
        """Return a style where every non-None field of ``other`` wins.

        Decorations are replaced, not combined; use merge_text_styles() for
        decoration-aware merging.
        """
        if other is None:
            return self
        changes: dict[str, Any] = {}
        for field in fields(other):
            value = getattr(other, field.name)
            if value is not None:
                changes[field.name] = value
        if not changes:
            return self
        return replace(self, **changes)

    def copy_with(self, **changes: Any) -> TextStyle:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        """True if no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))


EMPTY_STYLE = TextStyle()


__all__ = [
    "BLACK",
    "BLUE",
    "EMPTY_STYLE",
    "TRANSPARENT",
    "WHITE",
    "YELLOW",
    "Color",
    "FontStyle",
    "FontWeight",
    "TextDecoration",
    "TextStyle",
    "alpha_of",
    "with_alpha",
]
