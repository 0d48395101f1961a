"""Lossless runs for live editing.

Unlike parse(), the editing builder never hides source characters: every
marker, bracket, URL and escape backslash stays in the output so that the
concatenated run text equals the input exactly. Cursor offsets therefore map
1:1 between the editor and the rendered runs.

Markers are drawn in a dimmed style. With a cursor position, markers of
pairs and links that do not contain the cursor use the inactive style,
which hides them entirely at ``marker_opacity == 0``.

Example:
    >>> runs = build_editing_runs("a **b**")
    >>> [run.text for run in runs]
    ['a ', '**', 'b', '**']

"""

from __future__ import annotations

from collections import OrderedDict
from enum import Enum
from typing import TYPE_CHECKING

from runmark.cache import DEFAULT_MAX_ENTRIES, DEFAULT_MAX_KEY_LENGTH
from runmark.config import get_parse_config
from runmark.parsing import has_formatting, identify_pairs, tokenize, validate_pairs
from runmark.parsing.links import is_link_window
from runmark.runs import TextRun
from runmark.stringbuilder import StringBuilder
from runmark.style import BLACK, EMPTY_STYLE, TRANSPARENT, with_alpha
from runmark.styling.resolver import DefaultStyleResolver
from runmark.tokens import TokenKind

if TYPE_CHECKING:
    from runmark.style import TextStyle
    from runmark.styling.protocol import StyleResolver
    from runmark.tokens import Token

MARKER_ALPHA = 0.4
HIDDEN_FONT_SIZE = 0.01
HIDDEN_LETTER_SPACING = -HIDDEN_FONT_SIZE * 2


class MarkerVisibility(Enum):
    """When markers are shown while editing."""

    ALWAYS = "always"
    WHEN_ACTIVE = "when_active"


def marker_style(base_style: TextStyle) -> TextStyle:
    """Dimmed style for markers next to the cursor."""
    color = base_style.color if base_style.color is not None else BLACK
    return base_style.copy_with(color=with_alpha(color, MARKER_ALPHA))


def inactive_marker_style(base_style: TextStyle, opacity: float) -> TextStyle:
    """Style for markers away from the cursor; hidden at zero opacity."""
    if opacity == 0.0:
        return base_style.copy_with(
            color=TRANSPARENT,
            font_size=HIDDEN_FONT_SIZE,
            letter_spacing=HIDDEN_LETTER_SPACING,
        )
    color = base_style.color if base_style.color is not None else BLACK
    return base_style.copy_with(color=with_alpha(color, opacity * MARKER_ALPHA))


class EditingRunBuilder:
    """Builds lossless editing runs, caching tokenization per text.

    Args:
        resolver: Style resolution; DefaultStyleResolver() when None
        visibility: ALWAYS ignores cursor positions; WHEN_ACTIVE dims or
            hides markers away from the cursor
        marker_opacity: Opacity multiplier for inactive markers
        max_entries: Tokenizations kept in the LRU cache
        max_key_length: Texts longer than this are not cached

    """

    __slots__ = (
        "_cache",
        "_max_entries",
        "_max_key_length",
        "_resolver",
        "marker_opacity",
        "visibility",
    )

    def __init__(
        self,
        resolver: StyleResolver | None = None,
        visibility: MarkerVisibility = MarkerVisibility.ALWAYS,
        marker_opacity: float = 1.0,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_key_length: int = DEFAULT_MAX_KEY_LENGTH,
    ) -> None:
        self._resolver = resolver if resolver is not None else DefaultStyleResolver()
        self.visibility = visibility
        self.marker_opacity = marker_opacity
        self._cache: OrderedDict[tuple[str, int], tuple[list[Token], dict[int, int]]] = OrderedDict()
        self._max_entries = max_entries
        self._max_key_length = max_key_length

    def clear_cache(self) -> None:
        self._cache.clear()

    def build(
        self,
        text: str,
        base_style: TextStyle | None = None,
        cursor_position: int | None = None,
    ) -> list[TextRun]:
        """Build editing runs for text.

        Args:
            text: Markup source being edited
            base_style: Style of unformatted text
            cursor_position: Caret offset; ignored with MarkerVisibility.ALWAYS

        Returns:
            Text runs whose concatenated text equals ``text``.

        """
        if base_style is None:
            base_style = EMPTY_STYLE
        if not text:
            return []
        if not has_formatting(text):
            return [TextRun(text, base_style)]
        if self.visibility is MarkerVisibility.ALWAYS:
            cursor_position = None

        tokens, pairs = self._analyze(text)
        return _EditingPass(
            text, tokens, pairs, base_style, self._resolver, cursor_position, self.marker_opacity
        ).run()

    def _analyze(self, text: str) -> tuple[list[Token], dict[int, int]]:
        max_depth = get_parse_config().max_nesting_depth
        if len(text) > self._max_key_length:
            tokens = tokenize(text)
            return tokens, validate_pairs(tokens, identify_pairs(tokens), max_depth)

        key = (text, max_depth)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        tokens = tokenize(text)
        entry = (tokens, validate_pairs(tokens, identify_pairs(tokens), max_depth))
        self._cache[key] = entry
        if len(self._cache) > self._max_entries:
            self._cache.popitem(last=False)
        return entry


class _EditingPass:
    """State of a single editing build."""

    __slots__ = (
        "_active",
        "_base_style",
        "_buffer",
        "_cursor",
        "_inactive",
        "_pairs",
        "_resolver",
        "_runs",
        "_source_pos",
        "_stack",
        "_text",
        "_tokens",
    )

    def __init__(
        self,
        text: str,
        tokens: list[Token],
        pairs: dict[int, int],
        base_style: TextStyle,
        resolver: StyleResolver,
        cursor_position: int | None,
        marker_opacity: float,
    ) -> None:
        self._text = text
        self._tokens = tokens
        self._pairs = pairs
        self._base_style = base_style
        self._resolver = resolver
        self._cursor = cursor_position
        self._active = marker_style(base_style)
        self._inactive = (
            inactive_marker_style(base_style, marker_opacity)
            if cursor_position is not None
            else self._active
        )
        self._stack: list[tuple[int, TokenKind]] = []
        self._buffer = StringBuilder()
        self._runs: list[TextRun] = []
        self._source_pos = 0

    def run(self) -> list[TextRun]:
        tokens = self._tokens
        token_count = len(tokens)
        index = 0
        while index < token_count:
            token = tokens[index]
            self._emit_gap(token.position)
            kind = token.kind

            if kind is TokenKind.LINK_START and is_link_window(tokens, index):
                self._emit_link(index)
                index += 5
                continue

            match = self._pairs.get(index) if kind.is_formatting else None
            if match is None:
                self._buffer.append(token.literal)
            elif match > index:
                self._emit_marker(token.value, self._style_for_span(index, match))
                self._stack.append((index, kind))
            else:
                self._emit_marker(token.value, self._style_for_span(match, index))
                for pos in range(len(self._stack) - 1, -1, -1):
                    if self._stack[pos][0] == match:
                        del self._stack[pos]
                        break

            self._source_pos = token.end
            index += 1

        self._emit_gap(len(self._text))
        self._flush()
        return self._runs

    def _current_style(self) -> TextStyle:
        style = self._base_style
        for _, kind in self._stack:
            style = self._resolver.resolve_marker_style(kind, style)
        return style

    def _style_for_span(self, open_index: int, close_index: int) -> TextStyle:
        if self._cursor is None:
            return self._active
        start = self._tokens[open_index].position
        end = self._tokens[close_index].end
        return self._active if start <= self._cursor <= end else self._inactive

    def _flush(self) -> None:
        if not self._buffer:
            return
        self._runs.append(TextRun(self._buffer.build(), self._current_style()))
        self._buffer.clear()

    def _emit_marker(self, text: str, style: TextStyle) -> None:
        self._flush()
        self._runs.append(TextRun(text, style))

    def _emit_gap(self, position: int) -> None:
        """Emit source characters the tokens skipped (escape backslashes)."""
        if position > self._source_pos:
            self._emit_marker(self._text[self._source_pos : position], self._active)
            self._source_pos = position

    def _emit_link(self, index: int) -> None:
        tokens = self._tokens
        self._flush()
        marker = self._style_for_span(index, index + 4)
        link_style = self._resolver.resolve_link_style(self._current_style())
        runs = self._runs
        runs.append(TextRun("[", marker))
        if tokens[index + 1].value:
            runs.append(TextRun(tokens[index + 1].value, link_style))
        runs.append(TextRun("](", marker))
        if tokens[index + 3].value:
            runs.append(TextRun(tokens[index + 3].value, marker))
        runs.append(TextRun(")", marker))
        self._source_pos = tokens[index + 4].end


def build_editing_runs(
    text: str,
    base_style: TextStyle | None = None,
    *,
    resolver: StyleResolver | None = None,
    cursor_position: int | None = None,
    marker_opacity: float = 1.0,
) -> list[TextRun]:
    """Build lossless editing runs without keeping a cache.

    Passing ``cursor_position`` enables "when active" visibility.
    """
    visibility = MarkerVisibility.ALWAYS if cursor_position is None else MarkerVisibility.WHEN_ACTIVE
    builder = EditingRunBuilder(resolver, visibility, marker_opacity, max_entries=1)
    return builder.build(text, base_style, cursor_position)


__all__ = [
    "EditingRunBuilder",
    "MarkerVisibility",
    "build_editing_runs",
    "inactive_marker_style",
    "marker_style",
]
