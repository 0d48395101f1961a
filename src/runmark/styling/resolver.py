"""Default style resolver.

Precedence for every marker, highest first:

1. Explicit StyleOptions layers (merged outermost to nearest).
2. Theme-aware defaults for code, links and highlight.
3. Relative defaults for bold, italic, strikethrough and underline.

Superscript and subscript scale the font size before anything else is
applied, so an override that only changes color keeps the smaller size.

Thread Safety:
Instances are immutable after construction and safe to share.

"""

from __future__ import annotations

from collections.abc import Sequence

from runmark.runs import (
    LinkHoverCallback,
    LinkTapCallback,
    PlaceholderAlignment,
    ScriptSpan,
)
from runmark.style import WHITE, TextDecoration, TextStyle, with_alpha
from runmark.styling import defaults
from runmark.styling.merge import merge_text_styles
from runmark.styling.options import (
    MARKER_STYLE_FIELDS,
    StyleOptions,
    effective_style,
    effective_value,
)
from runmark.styling.theme import Theme
from runmark.tokens import TokenKind
from runmark.utils.hashing import subtree_hash

# Highlighter yellow (light) and its darker shade for dark themes
_HIGHLIGHT_LIGHT = 0xFFFFEB3B
_HIGHLIGHT_DARK = 0xFFFBC02D
_HIGHLIGHT_TEXT_LIGHT = 0xDD000000


class DefaultStyleResolver:
    """StyleResolver backed by override layers and a theme.

    Args:
        options: Override layers, nearest first. A single StyleOptions is
            accepted as a one-layer sequence.
        theme: Colors for the theme-aware defaults.

    Example:
        >>> resolver = DefaultStyleResolver(StyleOptions(link_cursor="pointer"))
        >>> resolver.resolve_link_cursor()
        'pointer'

    """

    __slots__ = ("_options", "_theme")

    def __init__(
        self,
        options: StyleOptions | Sequence[StyleOptions] = (),
        theme: Theme | None = None,
    ) -> None:
        if isinstance(options, StyleOptions):
            options = (options,)
        self._options: tuple[StyleOptions, ...] = tuple(options)
        self._theme = theme if theme is not None else Theme.light()

    @property
    def options(self) -> tuple[StyleOptions, ...]:
        return self._options

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def cache_key(self) -> str:
        """Fingerprint of the settings that shape resolved styles."""
        return subtree_hash((type(self).__qualname__, self._options, self._theme))

    def resolve_marker_style(self, kind: TokenKind, base_style: TextStyle) -> TextStyle:
        effective_base = base_style
        if kind.is_script:
            effective_base = defaults.script_base_style(base_style, self._script_font_size_factor())

        field = MARKER_STYLE_FIELDS.get(kind)
        if field is not None:
            override = effective_style(self._options, field)
            if override is not None:
                return merge_text_styles(effective_base, override)

        match kind:
            case TokenKind.BOLD:
                return defaults.bold_style(base_style)
            case TokenKind.ITALIC:
                return defaults.italic_style(base_style)
            case TokenKind.BOLD_ITALIC:
                return defaults.bold_italic_style(base_style)
            case TokenKind.STRIKETHROUGH:
                thickness = effective_value(self._options, "strikethrough_thickness")
                if thickness is None:
                    thickness = defaults.STRIKETHROUGH_THICKNESS
                return defaults.strikethrough_style(base_style, thickness)
            case TokenKind.UNDERLINE:
                return defaults.underline_style(base_style)
            case TokenKind.CODE:
                return self._code_style(base_style)
            case TokenKind.HIGHLIGHT:
                return self._highlight_style(base_style)
            case TokenKind.SUPERSCRIPT | TokenKind.SUBSCRIPT:
                return effective_base
            case _:
                return base_style

    def resolve_link_style(self, base_style: TextStyle) -> TextStyle:
        override = effective_style(self._options, "link_style")
        if override is not None:
            return merge_text_styles(base_style, override)
        primary = self._theme.primary
        return merge_text_styles(
            base_style,
            TextStyle(color=primary, decoration=TextDecoration.UNDERLINE, decoration_color=primary),
        )

    def resolve_link_hover_style(self, base_style: TextStyle) -> TextStyle:
        normal = self.resolve_link_style(base_style)
        hover = effective_style(self._options, "link_hover_style")
        if hover is None:
            return normal
        return merge_text_styles(normal, hover)

    def resolve_link_cursor(self) -> str:
        cursor = effective_value(self._options, "link_cursor")
        return cursor if cursor is not None else defaults.LINK_CURSOR

    def resolve_link_alignment(self) -> PlaceholderAlignment:
        alignment = effective_value(self._options, "link_alignment")
        return alignment if alignment is not None else PlaceholderAlignment.BASELINE

    def resolve_on_link_tap(self) -> LinkTapCallback | None:
        return effective_value(self._options, "on_link_tap")

    def resolve_on_link_hover(self) -> LinkHoverCallback | None:
        return effective_value(self._options, "on_link_hover")

    def create_script_span(self, text: str, style: TextStyle, is_superscript: bool) -> ScriptSpan:
        """Build a ScriptSpan shifted by the baseline factor.

        The span is laid out with middle alignment, so the shift is produced
        by padding twice the offset on the opposite side.
        """
        font_size = style.font_size if style.font_size is not None else defaults.DEFAULT_FONT_SIZE
        if is_superscript:
            factor = effective_value(self._options, "superscript_baseline_factor")
            if factor is None:
                factor = defaults.SUPERSCRIPT_BASELINE_FACTOR
        else:
            factor = effective_value(self._options, "subscript_baseline_factor")
            if factor is None:
                factor = defaults.SUBSCRIPT_BASELINE_FACTOR

        offset = font_size * factor
        padding = abs(offset) * 2
        return ScriptSpan(
            text=text,
            style=style,
            is_superscript=is_superscript,
            baseline_offset=offset,
            padding_top=0.0 if is_superscript else padding,
            padding_bottom=padding if is_superscript else 0.0,
        )

    def _script_font_size_factor(self) -> float:
        factor = effective_value(self._options, "script_font_size_factor")
        return factor if factor is not None else defaults.SCRIPT_FONT_SIZE_FACTOR

    def _code_style(self, base_style: TextStyle) -> TextStyle:
        return base_style.copy_with(
            font_family=defaults.CODE_FONT_FAMILY,
            font_family_fallback=defaults.CODE_FONT_FAMILY_FALLBACK,
            background_color=self._theme.surface_container,
            color=self._theme.on_surface_variant,
            letter_spacing=base_style.letter_spacing if base_style.letter_spacing is not None else 0.0,
        )

    def _highlight_style(self, base_style: TextStyle) -> TextStyle:
        if self._theme.is_dark:
            background = with_alpha(_HIGHLIGHT_DARK, defaults.HIGHLIGHT_ALPHA_DARK)
            fallback_color = WHITE
        else:
            background = with_alpha(_HIGHLIGHT_LIGHT, defaults.HIGHLIGHT_ALPHA_LIGHT)
            fallback_color = _HIGHLIGHT_TEXT_LIGHT
        return base_style.copy_with(
            background_color=background,
            color=base_style.color if base_style.color is not None else fallback_color,
        )
