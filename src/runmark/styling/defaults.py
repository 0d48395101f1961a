"""Built-in style constants and relative default styles.

Relative defaults derive a marker's style from the inherited style alone
(bold sets the weight, strikethrough adds a line). Theme-aware defaults for
code, links and highlight live in DefaultStyleResolver.
"""

from __future__ import annotations

from runmark.style import (
    FontStyle,
    FontWeight,
    TextDecoration,
    TextStyle,
)
from runmark.styling.merge import combine_decorations

LINK_CURSOR: str = "click"

DEFAULT_FONT_SIZE: float = 14.0
SCRIPT_FONT_SIZE_FACTOR: float = 0.6
SUPERSCRIPT_BASELINE_FACTOR: float = -0.4
SUBSCRIPT_BASELINE_FACTOR: float = 0.4

STRIKETHROUGH_THICKNESS: float = 1.5
UNDERLINE_THICKNESS: float = 1.0

HIGHLIGHT_ALPHA_LIGHT: float = 0.5
HIGHLIGHT_ALPHA_DARK: float = 0.4

CODE_FONT_FAMILY: str = "monospace"
CODE_FONT_FAMILY_FALLBACK: tuple[str, ...] = ("RobotoMono", "Menlo", "Courier New", "monospace")


def bold_style(base: TextStyle) -> TextStyle:
    return base.copy_with(font_weight=FontWeight.BOLD)


def italic_style(base: TextStyle) -> TextStyle:
    return base.copy_with(font_style=FontStyle.ITALIC)


def bold_italic_style(base: TextStyle) -> TextStyle:
    return base.copy_with(font_weight=FontWeight.BOLD, font_style=FontStyle.ITALIC)


def strikethrough_style(base: TextStyle, thickness: float = STRIKETHROUGH_THICKNESS) -> TextStyle:
    """Add a line through the text, keeping existing decoration lines.

    The line takes the inherited decoration color, falling back to the text
    color.
    """
    return base.copy_with(
        decoration=combine_decorations(base.decoration, TextDecoration.LINE_THROUGH),
        decoration_color=base.decoration_color if base.decoration_color is not None else base.color,
        decoration_thickness=thickness,
    )


def underline_style(base: TextStyle) -> TextStyle:
    """Add an underline, keeping existing decoration lines and thickness."""
    return base.copy_with(
        decoration=combine_decorations(base.decoration, TextDecoration.UNDERLINE),
        decoration_color=base.decoration_color if base.decoration_color is not None else base.color,
        decoration_thickness=(
            base.decoration_thickness if base.decoration_thickness is not None else UNDERLINE_THICKNESS
        ),
    )


def script_base_style(base: TextStyle, factor: float = SCRIPT_FONT_SIZE_FACTOR) -> TextStyle:
    """Scale the font size for superscript and subscript text."""
    size = base.font_size if base.font_size is not None else DEFAULT_FONT_SIZE
    return base.copy_with(font_size=size * factor)
