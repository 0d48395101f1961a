"""Decoration-aware style merging.

TextStyle.merge() replaces the decoration outright, so an inner underline
would erase an outer strikethrough. These helpers union decoration lines
instead. When both styles set a decoration color or thickness, the
override (innermost, most recently applied) wins.
"""

from __future__ import annotations

from runmark.style import TextDecoration, TextStyle


def combine_decorations(
    base: TextDecoration | None, extra: TextDecoration | None
) -> TextDecoration | None:
    """Union two decorations, treating None as "not set".

    ``TextDecoration.NONE`` in ``extra`` clears every line.
    """
    if extra is None:
        return base
    if extra == TextDecoration.NONE or base is None:
        return extra
    return base | extra


def merge_text_styles(base: TextStyle, override: TextStyle | None) -> TextStyle:
    """Merge ``override`` onto ``base`` keeping both styles' decoration lines.

    Example:
        >>> struck = TextStyle(decoration=TextDecoration.LINE_THROUGH)
        >>> merged = merge_text_styles(struck, TextStyle(decoration=TextDecoration.UNDERLINE))
        >>> merged.decoration == TextDecoration.LINE_THROUGH | TextDecoration.UNDERLINE
        True

    """
    if override is None:
        return base
    merged = base.merge(override)
    decoration = combine_decorations(base.decoration, override.decoration)
    if decoration == merged.decoration:
        return merged
    return merged.copy_with(decoration=decoration)


def apply_link_style_to_span(span_style: TextStyle, link_appearance: TextStyle) -> TextStyle:
    """Apply link color and decoration onto the style of a run inside a link.

    Only the link's color and decoration properties are taken; the run keeps
    its own weight, slant and font. Decoration lines are unioned.
    """
    decoration = span_style.decoration
    link_decoration = link_appearance.decoration
    if link_decoration is not None and link_decoration != TextDecoration.NONE:
        if decoration is None or decoration == TextDecoration.NONE:
            decoration = link_decoration
        else:
            decoration = decoration | link_decoration

    return span_style.copy_with(
        color=link_appearance.color if link_appearance.color is not None else span_style.color,
        decoration=decoration,
        decoration_color=(
            link_appearance.decoration_color
            if link_appearance.decoration_color is not None
            else span_style.decoration_color
        ),
        decoration_thickness=(
            link_appearance.decoration_thickness
            if link_appearance.decoration_thickness is not None
            else span_style.decoration_thickness
        ),
    )
