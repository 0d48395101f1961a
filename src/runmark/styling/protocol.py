"""Style resolution protocol.

The parser never decides what bold or a link looks like. It asks a
StyleResolver, so hosts can plug in their own theme or configuration
system. DefaultStyleResolver is the built-in implementation.

Thread Safety:
The parser calls the resolver synchronously from the parsing thread.
Implementations shared between threads must be reentrant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from runmark.runs import LinkHoverCallback, LinkTapCallback, PlaceholderAlignment
    from runmark.style import TextStyle
    from runmark.tokens import TokenKind


class StyleResolver(Protocol):
    """Protocol for style resolution.

    Implementations resolve marker styles from an inherited style, provide
    link appearance and behavior, and build the inline object for
    superscript and subscript text.

    Run caches key on an optional ``cache_key`` attribute: a string that
    changes whenever the resolver would produce different runs. Resolvers
    without one are never cached.
    """

    def resolve_marker_style(self, kind: TokenKind, base_style: TextStyle) -> TextStyle:
        """Return base_style with the formatting of ``kind`` applied."""
        ...

    def resolve_link_style(self, base_style: TextStyle) -> TextStyle:
        """Return the normal link style on top of base_style."""
        ...

    def resolve_link_hover_style(self, base_style: TextStyle) -> TextStyle:
        """Return the hovered link style on top of base_style."""
        ...

    def resolve_link_cursor(self) -> str:
        """Return the mouse cursor name for links."""
        ...

    def resolve_link_alignment(self) -> PlaceholderAlignment:
        """Return the vertical alignment of embedded link runs."""
        ...

    def resolve_on_link_tap(self) -> LinkTapCallback | None:
        """Return the tap callback for links, if any."""
        ...

    def resolve_on_link_hover(self) -> LinkHoverCallback | None:
        """Return the hover callback for links, if any."""
        ...

    def create_script_span(self, text: str, style: TextStyle, is_superscript: bool) -> object:
        """Build the inline object rendering superscript or subscript text."""
        ...
