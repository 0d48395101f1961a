"""Single-pass tokenizer for inline markup.

Converts a raw string into a flat list of Token NamedTuples in O(n).
Longest match wins at every position: ``***`` is one bold-italic marker,
``~~`` one strikethrough marker. Bracket and parenthesis matches are
computed once per call, so each ``[`` resolves to a link or to plain text
in constant time. Placeholders are ``{key}`` or ``{{key}}``; when either
scan fails the opening character is ordinary text.

Every loop iteration advances ``pos``, so the tokenizer always terminates.

Thread Safety:
Pure function over its argument. Safe to call from any thread.

"""

from __future__ import annotations

from runmark.parsing.charsets import (
    EMPHASIS_CHARS,
    ESCAPABLE_CHARS,
    PLACEHOLDER_KEY_CHARS,
    STYLE_MARKER_CHARS,
    TRIGGER_CHARS,
)
from runmark.tokens import Token, TokenKind

# Marker kinds by run length for * and _
_EMPHASIS_KINDS: dict[int, TokenKind] = {
    3: TokenKind.BOLD_ITALIC,
    2: TokenKind.BOLD,
    1: TokenKind.ITALIC,
}

# Markers that are only markup when doubled; a single one is text
_DOUBLED_ONLY: dict[str, TokenKind] = {
    "+": TokenKind.UNDERLINE,
    "=": TokenKind.HIGHLIGHT,
}


def has_formatting(text: str) -> bool:
    """Return True if text contains any character that may start markup.

    A False result means the text renders as a single plain run.
    """
    return not TRIGGER_CHARS.isdisjoint(text)


def has_formatting_markers(text: str) -> bool:
    """Return True if text contains a styling marker or escape.

    Brackets, parentheses and braces are ignored, so link or placeholder
    syntax alone does not count.
    """
    return not STYLE_MARKER_CHARS.isdisjoint(text)


def tokenize(text: str) -> list[Token]:
    """Tokenize text into markers, link structure, placeholders and text.

    Args:
        text: Raw markup string

    Returns:
        Tokens in source order. Adjacent plain characters are merged into a
        single TEXT token; escaped characters become their own 1-length TEXT
        token.

    Example:
        >>> [t.kind.name for t in tokenize("a **b**")]
        ['TEXT', 'BOLD', 'TEXT', 'BOLD']

    """
    tokens: list[Token] = []
    tokens_append = tokens.append
    closers: tuple[dict[int, int], dict[int, int]] | None = None
    pos = 0
    run_start = 0  # Start of the pending plain-text run
    text_len = len(text)

    while pos < text_len:
        char = text[pos]

        if char not in TRIGGER_CHARS:
            pos += 1
            continue

        # Escape: \* emits "*" as text, backslash dropped
        if char == "\\":
            if pos + 1 < text_len and text[pos + 1] in ESCAPABLE_CHARS:
                if run_start < pos:
                    tokens_append(Token(TokenKind.TEXT, text[run_start:pos], run_start, pos - run_start))
                tokens_append(Token(TokenKind.TEXT, text[pos + 1], pos + 1, 1))
                pos += 2
                run_start = pos
            else:
                pos += 1
            continue

        if char in EMPHASIS_CHARS:
            width = 1
            while width < 3 and pos + width < text_len and text[pos + width] == char:
                width += 1
            kind = _EMPHASIS_KINDS[width]
        elif char == "~":
            if pos + 1 < text_len and text[pos + 1] == "~":
                kind, width = TokenKind.STRIKETHROUGH, 2
            else:
                kind, width = TokenKind.SUBSCRIPT, 1
        elif char == "`":
            kind, width = TokenKind.CODE, 1
        elif char == "^":
            kind, width = TokenKind.SUPERSCRIPT, 1
        elif char in _DOUBLED_ONLY:
            if pos + 1 < text_len and text[pos + 1] == char:
                kind, width = _DOUBLED_ONLY[char], 2
            else:
                pos += 1
                continue
        elif char == "[":
            if closers is None:
                closers = _match_closers(text)
            bounds = _scan_link(text, pos, *closers)
            if bounds is None:
                pos += 1
                continue
            if run_start < pos:
                tokens_append(Token(TokenKind.TEXT, text[run_start:pos], run_start, pos - run_start))
            close_bracket, close_paren = bounds
            tokens_append(Token(TokenKind.LINK_START, "[", pos, 1))
            tokens_append(
                Token(TokenKind.TEXT, text[pos + 1 : close_bracket], pos + 1, close_bracket - pos - 1)
            )
            tokens_append(Token(TokenKind.LINK_SEPARATOR, "](", close_bracket, 2))
            tokens_append(
                Token(
                    TokenKind.TEXT,
                    text[close_bracket + 2 : close_paren],
                    close_bracket + 2,
                    close_paren - close_bracket - 2,
                )
            )
            tokens_append(Token(TokenKind.LINK_END, ")", close_paren, 1))
            pos = close_paren + 1
            run_start = pos
            continue
        else:
            # char == "{"
            braces = 2 if text.startswith("{{", pos) else 1
            key_end = _scan_placeholder(text, pos, braces)
            if key_end == -1:
                pos += 1
                continue
            if run_start < pos:
                tokens_append(Token(TokenKind.TEXT, text[run_start:pos], run_start, pos - run_start))
            end = key_end + braces
            tokens_append(Token(TokenKind.PLACEHOLDER, text[pos + braces : key_end], pos, end - pos))
            pos = end
            run_start = pos
            continue

        if run_start < pos:
            tokens_append(Token(TokenKind.TEXT, text[run_start:pos], run_start, pos - run_start))
        tokens_append(Token(kind, text[pos : pos + width], pos, width))
        pos += width
        run_start = pos

    if run_start < text_len:
        tokens_append(Token(TokenKind.TEXT, text[run_start:], run_start, text_len - run_start))

    return tokens


def _match_closers(text: str) -> tuple[dict[int, int], dict[int, int]]:
    """Pair every ``[`` with its ``]`` and every ``(`` with its ``)`` in one pass.

    Brackets and parentheses nest independently; a backslash skips the next
    character. Unbalanced openers are absent from the result.

    Returns:
        (brackets, parens) maps from opener offset to closer offset.

    """
    brackets: dict[int, int] = {}
    parens: dict[int, int] = {}
    open_brackets: list[int] = []
    open_parens: list[int] = []
    text_len = len(text)
    pos = 0
    while pos < text_len:
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == "[":
            open_brackets.append(pos)
        elif char == "]":
            if open_brackets:
                brackets[open_brackets.pop()] = pos
        elif char == "(":
            open_parens.append(pos)
        elif char == ")":
            if open_parens:
                parens[open_parens.pop()] = pos
        pos += 1
    return brackets, parens


def _scan_link(
    text: str,
    start: int,
    brackets: dict[int, int],
    parens: dict[int, int],
) -> tuple[int, int] | None:
    """Find the bounds of ``[text](url)`` starting at ``start``.

    The closing bracket must be immediately followed by ``(``.

    Returns:
        (close_bracket, close_paren) offsets, or None if the link is malformed.

    """
    close_bracket = brackets.get(start)
    if close_bracket is None:
        return None
    close_paren = parens.get(close_bracket + 1)
    if close_paren is None:
        return None
    return close_bracket, close_paren


def _scan_placeholder(text: str, start: int, braces: int = 1) -> int:
    """Return the offset of the closing braces of ``{key}`` or ``{{key}}``, or -1."""
    text_len = len(text)
    key_start = start + braces
    pos = key_start
    while pos < text_len and text[pos] in PLACEHOLDER_KEY_CHARS:
        pos += 1
    if pos == key_start or not text.startswith("}" * braces, pos):
        return -1
    return pos
