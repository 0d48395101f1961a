"""Token types for the runmark tokenizer.

Tokens are NamedTuples: immutable, cheap to create, and comparable by value.
The tokenizer produces a flat list; pairing and nesting validation refer to
tokens by their index in that list.

Thread Safety:
All types are immutable and safe to share across threads.

"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    """Kind of a token produced by the tokenizer.

    Formatting kinds pair with another token of the same kind. Link kinds
    describe the fixed ``[ text ]( url )`` window.
    """

    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"
    HIGHLIGHT = "highlight"
    CODE = "code"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    LINK_START = "link_start"
    LINK_SEPARATOR = "link_separator"
    LINK_END = "link_end"
    PLACEHOLDER = "placeholder"

    @property
    def is_formatting(self) -> bool:
        """True for marker kinds that take part in pairing."""
        return self in FORMATTING_KINDS

    @property
    def is_link(self) -> bool:
        """True for the structural tokens of a link."""
        return self in LINK_KINDS

    @property
    def is_script(self) -> bool:
        """True for superscript and subscript markers."""
        return self is TokenKind.SUPERSCRIPT or self is TokenKind.SUBSCRIPT


FORMATTING_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.BOLD,
        TokenKind.ITALIC,
        TokenKind.BOLD_ITALIC,
        TokenKind.STRIKETHROUGH,
        TokenKind.UNDERLINE,
        TokenKind.HIGHLIGHT,
        TokenKind.CODE,
        TokenKind.SUPERSCRIPT,
        TokenKind.SUBSCRIPT,
    }
)

LINK_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.LINK_START, TokenKind.LINK_SEPARATOR, TokenKind.LINK_END}
)


class Token(NamedTuple):
    """A single token.

    Attributes:
        kind: What the token is.
        value: The consumed source text. For escapes, the escaped character
            alone; for placeholders, the key without braces.
        position: Start offset in the source string. Escapes point at the
            escaped character, not the backslash.
        length: Number of source characters covered by the token's own text.

    """

    kind: TokenKind
    value: str
    position: int
    length: int

    @property
    def end(self) -> int:
        """Offset one past the last source character of the token."""
        return self.position + self.length

    @property
    def literal(self) -> str:
        """The token as it appears in the source (braces restored for placeholders)."""
        if self.kind is TokenKind.PLACEHOLDER:
            braces = (self.length - len(self.value)) // 2
            return "{" * braces + self.value + "}" * braces
        return self.value


__all__ = [
    "FORMATTING_KINDS",
    "LINK_KINDS",
    "Token",
    "TokenKind",
]
