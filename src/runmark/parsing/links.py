"""Link handling for the span generator.

A link is the fixed five-token window produced by the tokenizer:

    LINK_START  TEXT(link text)  LINK_SEPARATOR  TEXT(url)  LINK_END

Recognized links become one EmbeddedRun wrapping a Link. Link text that
contains markup is parsed recursively with the link style as its base, and
the link color and underline are reapplied to every resulting text run so
inner formatting such as code keeps looking like a link. The recursion
depth is bounded by ParseConfig.max_link_depth.

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from runmark.config import get_parse_config
from runmark.parsing.tokenizer import tokenize
from runmark.runs import EmbeddedRun, Link, TextRun
from runmark.styling.merge import apply_link_style_to_span
from runmark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from runmark.parsing.placeholders import Placeholders
    from runmark.runs import Run
    from runmark.stringbuilder import StringBuilder
    from runmark.style import TextStyle
    from runmark.styling.protocol import StyleResolver

_LINK_WINDOW = (
    TokenKind.LINK_START,
    TokenKind.TEXT,
    TokenKind.LINK_SEPARATOR,
    TokenKind.TEXT,
    TokenKind.LINK_END,
)


def normalize_url(url: str, default_scheme: str = "https://") -> str:
    """Trim a link target and add a scheme to bare targets.

    A target already has a scheme when a ``:`` appears before any ``/``,
    ``?`` or ``#``. Such targets, fragments and absolute paths are kept as
    written; every other non-empty target gets ``default_scheme`` prepended.

    Example:
        >>> normalize_url(" example.com ")
        'https://example.com'
        >>> normalize_url("mailto:me@example.com")
        'mailto:me@example.com'
        >>> normalize_url("example.com/a:b")
        'https://example.com/a:b'
        >>> normalize_url("#section")
        '#section'

    """
    url = url.strip()
    if not url or url.startswith(("/", "#")) or _has_scheme(url):
        return url
    return f"{default_scheme}{url}"


def _has_scheme(url: str) -> bool:
    for char in url:
        if char == ":":
            return True
        if char in "/?#":
            return False
    return False


def is_link_window(tokens: Sequence[Token], index: int) -> bool:
    """True if tokens[index:index + 5] form a complete link."""
    if index + 4 >= len(tokens):
        return False
    for offset, kind in enumerate(_LINK_WINDOW):
        if tokens[index + offset].kind is not kind:
            return False
    return True


def unescape(tokens: Sequence[Token]) -> str:
    """Join token text, dropping escape backslashes."""
    return "".join(token.literal for token in tokens)


class LinkParsingMixin:
    """Link window recognition and Link construction.

    Required Host Attributes:
        - _tokens: list[Token]
        - _buffer: StringBuilder
        - _runs: list[Run]
        - _resolver: StyleResolver
        - _placeholders: Placeholders | None
        - _depth: int

    Required Host Methods:
        - _flush() -> None
        - _current_style() -> TextStyle
        - _parse_nested(text, base_style) -> list[Run]

    """

    _tokens: list[Token]
    _buffer: StringBuilder
    _runs: list[Run]
    _resolver: StyleResolver
    _placeholders: Placeholders | None
    _depth: int

    def _links_enabled(self) -> bool:
        """Whether link windows at this depth become links."""
        if self._depth == 0:
            return True
        config = get_parse_config()
        return config.nested_links_enabled and self._depth < config.max_link_depth

    def _handle_link(self, index: int) -> int:
        """Process the token at ``index`` as a link start.

        Returns:
            Index of the next unprocessed token.

        """
        tokens = self._tokens
        if not is_link_window(tokens, index) or not self._links_enabled():
            self._buffer.append(tokens[index].value)
            return index + 1

        config = get_parse_config()
        raw_text = tokens[index + 1].value
        url = normalize_url(tokens[index + 3].value, config.default_link_scheme)

        self._flush()
        inherited = self._current_style()
        resolver = self._resolver
        style = resolver.resolve_link_style(inherited)
        hover_style = resolver.resolve_link_hover_style(inherited)

        text_tokens = tokenize(raw_text)
        plain = all(token.kind is TokenKind.TEXT for token in text_tokens)
        if plain or self._depth >= config.max_link_depth:
            text: str | None = unescape(text_tokens) if plain else raw_text
            children: tuple[Run, ...] = ()
        else:
            text = None
            children = tuple(
                TextRun(run.text, apply_link_style_to_span(run.style, style))
                if isinstance(run, TextRun)
                else run
                for run in self._parse_nested(raw_text, style)
            )

        link = Link(
            url=url,
            raw_text=raw_text,
            style=style,
            hover_style=hover_style,
            cursor=resolver.resolve_link_cursor(),
            on_tap=resolver.resolve_on_link_tap(),
            on_hover=resolver.resolve_on_link_hover(),
            text=text,
            children=children,
        )
        self._runs.append(EmbeddedRun(link, style, resolver.resolve_link_alignment()))
        return index + 5
