"""Span generator producing styled runs.

Consumes the token list, the validated pair map and a StyleResolver and
emits runs in document order.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `FormatHandlingMixin`: format stack, style folding and flushing
- `LinkParsingMixin`: link windows and recursive link text
- `PlaceholderMixin`: placeholder substitution

Thread Safety:
- Parser instances are single-use; create one per parse
- Configuration is read from ContextVar (thread-local)
- Output runs are immutable and safe to share

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from runmark.config import get_parse_config
from runmark.errors import ParseError
from runmark.parsing import (
    FormatHandlingMixin,
    LinkParsingMixin,
    PlaceholderMixin,
    has_formatting,
    identify_pairs,
    tokenize,
    validate_pairs,
)
from runmark.runs import TextRun
from runmark.stringbuilder import StringBuilder
from runmark.style import EMPTY_STYLE
from runmark.styling.resolver import DefaultStyleResolver
from runmark.tokens import TokenKind

if TYPE_CHECKING:
    from runmark.parsing import FormatStackEntry, Placeholders
    from runmark.runs import Run
    from runmark.style import TextStyle
    from runmark.styling.protocol import StyleResolver
    from runmark.tokens import Token


class Parser(
    FormatHandlingMixin,
    LinkParsingMixin,
    PlaceholderMixin,
):
    """Inline markup parser.

    Usage:
        >>> parser = Parser("Hello **bold** world")
        >>> [run.text for run in parser.parse()]
        ['Hello ', 'bold', ' world']

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = (
        "_text",
        "_base_style",
        "_placeholders",
        "_resolver",
        "_depth",
        "_tokens",
        "_pairs",
        "_candidate_count",
        "_stack",
        "_buffer",
        "_runs",
    )

    def __init__(
        self,
        text: str,
        base_style: TextStyle | None = None,
        placeholders: Placeholders | None = None,
        resolver: StyleResolver | None = None,
        *,
        depth: int = 0,
    ) -> None:
        """Initialize parser with source text.

        Args:
            text: Markup source text
            base_style: Style of unformatted text
            placeholders: Objects substituted for ``{key}`` placeholders
            resolver: Style resolution; DefaultStyleResolver() when None
            depth: Link text nesting level (0 for top-level text)

        Raises:
            ParseError: If depth exceeds ParseConfig.max_link_depth.

        """
        max_link_depth = get_parse_config().max_link_depth
        if depth > max_link_depth:
            raise ParseError(f"link text nested {depth} deep, limit is {max_link_depth}")
        if resolver is None:
            resolver = DefaultStyleResolver()

        self._text = text
        self._base_style = base_style if base_style is not None else EMPTY_STYLE
        self._placeholders = placeholders
        self._resolver = resolver
        self._depth = depth
        self._tokens: list[Token] = []
        self._pairs: dict[int, int] = {}
        self._candidate_count = 0
        self._stack: list[FormatStackEntry] = []
        self._buffer = StringBuilder()
        self._runs: list[Run] = []

    @property
    def tokens(self) -> list[Token]:
        """Tokens of the last parse (empty when the fast path was taken)."""
        return self._tokens

    @property
    def demoted_pairs(self) -> int:
        """Number of candidate pairs dropped by nesting validation."""
        return (self._candidate_count - len(self._pairs)) // 2

    def parse(self) -> list[Run]:
        """Parse the source into runs.

        Returns:
            Runs in document order. Empty input yields an empty list.

        """
        text = self._text
        if not text:
            return []

        config = get_parse_config()
        if config.fast_path_enabled and not has_formatting(text):
            return [TextRun(text, self._base_style)]

        tokens = tokenize(text)
        candidates = identify_pairs(tokens)
        self._tokens = tokens
        self._candidate_count = len(candidates)
        self._pairs = validate_pairs(tokens, candidates, config.max_nesting_depth)

        buffer = self._buffer
        token_count = len(tokens)
        index = 0
        while index < token_count:
            token = tokens[index]
            kind = token.kind

            if kind is TokenKind.TEXT:
                buffer.append(token.value)
                index += 1
                continue

            if kind is TokenKind.PLACEHOLDER:
                self._handle_placeholder(token)
                index += 1
                continue

            if kind is TokenKind.LINK_START:
                index = self._handle_link(index)
                continue

            if kind.is_formatting:
                self._handle_format(index)
                index += 1
                continue

            # Separator or end outside a link window
            buffer.append(token.value)
            index += 1

        self._flush()
        return self._runs

    def _parse_nested(self, text: str, base_style: TextStyle) -> list[Run]:
        """Parse link text one level deeper with its own state."""
        return Parser(
            text,
            base_style,
            self._placeholders,
            self._resolver,
            depth=self._depth + 1,
        ).parse()
