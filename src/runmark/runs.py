"""Output run types.

A parse produces an ordered list of runs. A TextRun is styled text; an
EmbeddedRun wraps an opaque inline object (a caller-supplied placeholder
value, a Link, or a ScriptSpan) that the renderer lays out inline.

Thread Safety:
All run types are frozen dataclasses. Embedded placeholder content is
whatever the caller supplied and is never touched by the parser.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from runmark.style import TextStyle

LinkTapCallback: TypeAlias = Callable[[str, str], None]
LinkHoverCallback: TypeAlias = Callable[[str, str, bool], None]


class PlaceholderAlignment(Enum):
    """Vertical placement of an embedded run relative to the text line."""

    BASELINE = "baseline"
    ABOVE_BASELINE = "above_baseline"
    BELOW_BASELINE = "below_baseline"
    TOP = "top"
    BOTTOM = "bottom"
    MIDDLE = "middle"


@dataclass(frozen=True, slots=True)
class TextRun:
    """Styled text."""

    text: str
    style: TextStyle


@dataclass(frozen=True, slots=True)
class EmbeddedRun:
    """Inline object laid out within the text flow."""

    content: object
    style: TextStyle
    alignment: PlaceholderAlignment = PlaceholderAlignment.BASELINE


@dataclass(frozen=True, slots=True)
class Link:
    """An interactive link.

    Exactly one of ``text`` and ``children`` carries the display content:
    ``text`` for plain link text, ``children`` for link text that contained
    formatting and was parsed into runs.

    Attributes:
        url: Normalized target URL
        raw_text: Link text exactly as written between the brackets
        style: Resolved normal style
        hover_style: Resolved style while hovered
        cursor: Mouse cursor name shown over the link
        on_tap: Called with (url, raw_text) when activated
        on_hover: Called with (url, raw_text, is_hovering)
        text: Display text with escape backslashes removed
        children: Runs of formatted link text

    """

    url: str
    raw_text: str
    style: TextStyle
    hover_style: TextStyle
    cursor: str
    on_tap: LinkTapCallback | None = None
    on_hover: LinkHoverCallback | None = None
    text: str | None = None
    children: tuple[Run, ...] = ()

    @property
    def display_text(self) -> str:
        """Plain display text, flattening formatted children."""
        if self.text is not None:
            return self.text
        from runmark.text import extract_text

        return extract_text(self.children)


@dataclass(frozen=True, slots=True)
class ScriptSpan:
    """Superscript or subscript text with geometry adjustments.

    The renderer places the span with middle alignment and shifts it by
    ``baseline_offset``; the padding reserves room on the opposite side so
    line height stays stable.
    """

    text: str
    style: TextStyle
    is_superscript: bool
    baseline_offset: float
    padding_top: float = 0.0
    padding_bottom: float = 0.0


Run: TypeAlias = TextRun | EmbeddedRun


__all__ = [
    "EmbeddedRun",
    "Link",
    "LinkHoverCallback",
    "LinkTapCallback",
    "PlaceholderAlignment",
    "Run",
    "ScriptSpan",
    "TextRun",
]
