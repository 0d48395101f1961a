"""
runmark: inline markup to styled runs.

Parses a small Markdown-like inline language (bold, italic, strikethrough,
underline, highlight, code, superscript, subscript, links, escapes and
``{key}`` placeholders) into an ordered list of styled runs for a renderer.
Malformed markup never raises; it degrades to literal text.

Quick Start:
    >>> from runmark import parse
    >>> runs = parse("Hello **bold** world")
    >>> [run.text for run in runs]
    ['Hello ', 'bold', ' world']

    >>> # Placeholders embed caller objects inline
    >>> runs = parse("Press {key} to continue", placeholders={"key": icon})

    >>> # Or configure once with the Formatter class
    >>> from runmark import Formatter, StyleOptions
    >>> fmt = Formatter(options=StyleOptions(link_cursor="pointer"))
    >>> runs = fmt("[docs](example.com)")

Installation:
    pip install runmark              # Zero runtime dependencies
"""

from collections.abc import Iterable

from runmark.cache import DictRunCache, LRURunCache, RunCache, hash_config, make_cache_key
from runmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from runmark.editing import EditingRunBuilder, MarkerVisibility, build_editing_runs
from runmark.errors import ConfigError, ParseError, RunmarkError, StyleResolutionError
from runmark.parser import Parser
from runmark.parsing import (
    Placeholders,
    has_formatting,
    has_formatting_markers,
    identify_pairs,
    normalize_url,
    tokenize,
    validate_pairs,
)
from runmark.runs import (
    EmbeddedRun,
    Link,
    PlaceholderAlignment,
    Run,
    ScriptSpan,
    TextRun,
)
from runmark.style import (
    FontStyle,
    FontWeight,
    TextDecoration,
    TextStyle,
    with_alpha,
)
from runmark.styling import (
    Brightness,
    DefaultStyleResolver,
    StyleOptions,
    StyleResolver,
    Theme,
    merge_text_styles,
)
from runmark.text import extract_text
from runmark.tokens import Token, TokenKind

__version__ = "0.3.0"


def parse(
    text: str,
    base_style: TextStyle | None = None,
    placeholders: Placeholders | None = None,
    *,
    resolver: StyleResolver | None = None,
    cache: RunCache | None = None,
) -> list[Run]:
    """Parse inline markup into styled runs.

    Args:
        text: Markup source text
        base_style: Style of unformatted text (empty style when None)
        placeholders: Objects substituted for ``{key}`` placeholders. A
            mapping is looked up by key; a sequence by decimal index.
        resolver: Style resolution (DefaultStyleResolver() when None)
        cache: Optional run cache. Bypassed when placeholders are given, when
            the text is longer than the cache's max_key_length, or when the
            resolver has no ``cache_key``.

    Returns:
        Runs in document order. A new list on every call, including cache hits.

    Example:
        >>> runs = parse("a *b")
        >>> runs[0].text
        'a *b'

        >>> # With a run cache
        >>> cache = LRURunCache()
        >>> runs = parse("**Hello**", cache=cache)

    """
    from runmark.profiling import get_parse_accumulator

    if base_style is None:
        base_style = TextStyle()
    if resolver is None:
        resolver = _default_resolver()

    key = None
    if cache is not None and placeholders is None and len(text) <= cache.max_key_length:
        key = make_cache_key(text, base_style, get_parse_config(), resolver)
        cached = cache.get(key) if key is not None else None
        if cached is not None:
            acc = get_parse_accumulator()
            if acc is not None:
                acc.record_parse(len(text), len(cached), cache_hit=True)
            return list(cached)

    parser = Parser(text, base_style, placeholders, resolver)
    runs = parser.parse()

    if key is not None:
        cache.put(key, tuple(runs))

    acc = get_parse_accumulator()
    if acc is not None:
        acc.record_parse(len(text), len(runs), len(parser.tokens), parser.demoted_pairs)

    return runs


_DEFAULT_RESOLVER: DefaultStyleResolver | None = None


def _default_resolver() -> DefaultStyleResolver:
    """Shared resolver for calls without one."""
    global _DEFAULT_RESOLVER
    if _DEFAULT_RESOLVER is None:
        _DEFAULT_RESOLVER = DefaultStyleResolver()
    return _DEFAULT_RESOLVER


class Formatter:
    """High-level interface holding a resolver, cache and configuration.

    Usage:
        >>> fmt = Formatter(theme=Theme.dark())
        >>> runs = fmt("==highlighted==")

        >>> # Parse many strings with the same settings
        >>> results = fmt.parse_many(["*a*", "**b**"])

    Thread Safety:
        Configuration is applied through a ContextVar for the duration of
        each call, so one Formatter can serve several threads. The default
        LRURunCache is itself thread-safe.

    """

    __slots__ = ("_cache", "_config", "_resolver")

    def __init__(
        self,
        *,
        options: StyleOptions | Iterable[StyleOptions] = (),
        theme: Theme | None = None,
        resolver: StyleResolver | None = None,
        config: ParseConfig | None = None,
        cache: RunCache | None = None,
    ) -> None:
        """Initialize formatter.

        Args:
            options: Override layers for the default resolver, nearest first
            theme: Theme for the default resolver
            resolver: Custom resolver (options and theme are then ignored)
            config: Parse configuration applied during each call
            cache: Run cache (an LRURunCache when None)

        """
        if resolver is None:
            if not isinstance(options, StyleOptions):
                options = tuple(options)
            resolver = DefaultStyleResolver(options, theme)
        self._resolver = resolver
        self._config = config if config is not None else ParseConfig()
        self._cache = cache if cache is not None else LRURunCache()

    @property
    def resolver(self) -> StyleResolver:
        return self._resolver

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(
        self,
        text: str,
        base_style: TextStyle | None = None,
        placeholders: Placeholders | None = None,
    ) -> list[Run]:
        return self.parse(text, base_style, placeholders)

    def parse(
        self,
        text: str,
        base_style: TextStyle | None = None,
        placeholders: Placeholders | None = None,
    ) -> list[Run]:
        """Parse text with this formatter's settings."""
        with parse_config_context(self._config):
            return parse(
                text,
                base_style,
                placeholders,
                resolver=self._resolver,
                cache=self._cache,
            )

    def parse_many(
        self,
        texts: Iterable[str],
        base_style: TextStyle | None = None,
    ) -> list[list[Run]]:
        """Parse several texts with the same base style."""
        with parse_config_context(self._config):
            return [
                parse(text, base_style, resolver=self._resolver, cache=self._cache)
                for text in texts
            ]

    def editing_runs(
        self,
        text: str,
        base_style: TextStyle | None = None,
        cursor_position: int | None = None,
        marker_opacity: float = 1.0,
    ) -> list[TextRun]:
        """Lossless editing runs using this formatter's resolver."""
        with parse_config_context(self._config):
            return build_editing_runs(
                text,
                base_style,
                resolver=self._resolver,
                cursor_position=cursor_position,
                marker_opacity=marker_opacity,
            )


__all__ = [
    "Brightness",
    "ConfigError",
    "DefaultStyleResolver",
    "DictRunCache",
    "EditingRunBuilder",
    "EmbeddedRun",
    "FontStyle",
    "FontWeight",
    "Formatter",
    "LRURunCache",
    "Link",
    "MarkerVisibility",
    "ParseConfig",
    "ParseError",
    "Parser",
    "PlaceholderAlignment",
    "Placeholders",
    "Run",
    "RunCache",
    "RunmarkError",
    "ScriptSpan",
    "StyleOptions",
    "StyleResolutionError",
    "StyleResolver",
    "TextDecoration",
    "TextRun",
    "TextStyle",
    "Theme",
    "Token",
    "TokenKind",
    "__version__",
    "build_editing_runs",
    "extract_text",
    "get_parse_config",
    "has_formatting",
    "has_formatting_markers",
    "hash_config",
    "identify_pairs",
    "merge_text_styles",
    "normalize_url",
    "parse",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    "tokenize",
    "validate_pairs",
    "with_alpha",
]
