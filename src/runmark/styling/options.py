"""Explicit style override layers.

A resolver receives an ordered sequence of StyleOptions, nearest first.
Two lookup rules apply:

- Styles merge across layers from the outermost to the nearest, so an
  outer layer can set a color and an inner layer the weight.
- Scalar values and callbacks come from the nearest layer that sets them.

Example:
    >>> site = StyleOptions(bold_style=TextStyle(color=0xFFFF0000))
    >>> page = StyleOptions(bold_style=TextStyle(font_size=20.0))
    >>> merged = effective_style((page, site), "bold_style")
    >>> hex(merged.color), merged.font_size
    ('0xffff0000', 20.0)

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from runmark.runs import LinkHoverCallback, LinkTapCallback, PlaceholderAlignment
from runmark.style import TextStyle
from runmark.tokens import TokenKind


@dataclass(frozen=True, slots=True)
class StyleOptions:
    """One override layer. Fields left as None defer to outer layers."""

    bold_style: TextStyle | None = None
    italic_style: TextStyle | None = None
    bold_italic_style: TextStyle | None = None
    strikethrough_style: TextStyle | None = None
    underline_style: TextStyle | None = None
    highlight_style: TextStyle | None = None
    code_style: TextStyle | None = None
    superscript_style: TextStyle | None = None
    subscript_style: TextStyle | None = None
    link_style: TextStyle | None = None
    link_hover_style: TextStyle | None = None
    link_cursor: str | None = None
    link_alignment: PlaceholderAlignment | None = None
    strikethrough_thickness: float | None = None
    script_font_size_factor: float | None = None
    superscript_baseline_factor: float | None = None
    subscript_baseline_factor: float | None = None
    on_link_tap: LinkTapCallback | None = None
    on_link_hover: LinkHoverCallback | None = None


# Option field holding the override style for each marker kind
MARKER_STYLE_FIELDS: dict[TokenKind, str] = {
    TokenKind.BOLD: "bold_style",
    TokenKind.ITALIC: "italic_style",
    TokenKind.BOLD_ITALIC: "bold_italic_style",
    TokenKind.STRIKETHROUGH: "strikethrough_style",
    TokenKind.UNDERLINE: "underline_style",
    TokenKind.HIGHLIGHT: "highlight_style",
    TokenKind.CODE: "code_style",
    TokenKind.SUPERSCRIPT: "superscript_style",
    TokenKind.SUBSCRIPT: "subscript_style",
}


def effective_style(layers: Sequence[StyleOptions], name: str) -> TextStyle | None:
    """Merge the named style across layers, outermost first.

    Args:
        layers: Override layers, nearest first
        name: StyleOptions field name

    Returns:
        The merged style, or None when no layer sets it.

    """
    result: TextStyle | None = None
    for layer in reversed(layers):
        style = getattr(layer, name)
        if style is None:
            continue
        result = style if result is None else result.merge(style)
    return result


def effective_value(layers: Sequence[StyleOptions], name: str) -> Any:
    """Return the named value from the nearest layer that sets it, else None."""
    for layer in layers:
        value = getattr(layer, name)
        if value is not None:
            return value
    return None
