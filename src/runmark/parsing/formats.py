"""Formatting marker handling for the span generator.

Validated openers push a FormatStackEntry and validated closers pop it.
Every push or pop first flushes the text buffer, so each emitted run has
one uniform style.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from runmark.errors import StyleResolutionError
from runmark.runs import EmbeddedRun, PlaceholderAlignment, TextRun
from runmark.tokens import TokenKind
from runmark.utils.logger import get_logger

if TYPE_CHECKING:
    from runmark.runs import Run
    from runmark.stringbuilder import StringBuilder
    from runmark.style import TextStyle
    from runmark.styling.protocol import StyleResolver
    from runmark.tokens import Token

logger = get_logger(__name__)


class FormatStackEntry(NamedTuple):
    """An open formatting pair."""

    open_index: int
    close_index: int
    kind: TokenKind


class FormatHandlingMixin:
    """Format stack, style folding and text flushing.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pairs: dict[int, int]
        - _stack: list[FormatStackEntry]
        - _buffer: StringBuilder
        - _runs: list[Run]
        - _base_style: TextStyle
        - _resolver: StyleResolver

    """

    _tokens: list[Token]
    _pairs: dict[int, int]
    _stack: list[FormatStackEntry]
    _buffer: StringBuilder
    _runs: list[Run]
    _base_style: TextStyle
    _resolver: StyleResolver

    def _handle_format(self, index: int) -> None:
        """Open or close the pair at ``index``, or keep an unpaired marker as text."""
        token = self._tokens[index]
        match = self._pairs.get(index)
        if match is None:
            self._buffer.append(token.value)
            return

        self._flush()
        if match > index:
            self._stack.append(FormatStackEntry(index, match, token.kind))
            return

        stack = self._stack
        for pos in range(len(stack) - 1, -1, -1):
            if stack[pos].open_index == match:
                del stack[pos]
                return
        logger.warning(
            "Closing %r at offset %d has no open entry; skipped",
            token.value,
            token.position,
        )

    def _current_style(self) -> TextStyle:
        """Fold the format stack onto the base style, outermost first."""
        style = self._base_style
        resolve = self._resolver.resolve_marker_style
        for entry in self._stack:
            style = resolve(entry.kind, style)
            if style is None:
                raise StyleResolutionError(
                    "resolve_marker_style", f"returned None for {entry.kind.name}"
                )
        return style

    def _active_script(self) -> TokenKind | None:
        """Innermost open superscript or subscript kind, if any."""
        for entry in reversed(self._stack):
            if entry.kind.is_script:
                return entry.kind
        return None

    def _flush(self) -> None:
        """Emit the buffered text as one run in the current style."""
        if not self._buffer:
            return
        text = self._buffer.build()
        self._buffer.clear()
        style = self._current_style()

        script = self._active_script()
        if script is None:
            self._runs.append(TextRun(text, style))
            return

        span = self._resolver.create_script_span(
            text, style, script is TokenKind.SUPERSCRIPT
        )
        self._runs.append(EmbeddedRun(span, style, PlaceholderAlignment.MIDDLE))
