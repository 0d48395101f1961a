"""ContextVar-based parse configuration for runmark.

Configuration is read once per parse call from a ContextVar, so each thread
(and each asyncio task) sees its own settings without locks.

Usage:
    from runmark import parse
    from runmark.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(max_nesting_depth=3)):
        runs = parse("**bold *italic ~~strike~~* bold**")

    # Or set it for the whole context
    set_parse_config(ParseConfig(default_link_scheme="http://"))
    try:
        runs = parse("[docs](example.com)")
    finally:
        reset_parse_config()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from runmark.errors import ConfigError

DEFAULT_MAX_NESTING_DEPTH = 2


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        max_nesting_depth: Maximum number of simultaneously open formatting
            pairs. Deeper pairs are demoted to literal text.
        max_link_depth: How many levels of link text may be parsed
            recursively. Link text is parsed one level deep by default.
        default_link_scheme: Prefix added to domain-like URLs that carry no
            scheme (``example.com`` becomes ``https://example.com``).
        fast_path_enabled: Return a single run without tokenizing when the
            input holds no markup trigger characters.
        nested_links_enabled: When False, link syntax inside link text is
            rendered as literal text.

    """

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_link_depth: int = 1
    default_link_scheme: str = "https://"
    fast_path_enabled: bool = True
    nested_links_enabled: bool = False

    def __post_init__(self) -> None:
        if self.max_nesting_depth < 0:
            raise ConfigError("max_nesting_depth", f"must be >= 0, got {self.max_nesting_depth}")
        if self.max_link_depth < 0:
            raise ConfigError("max_link_depth", f"must be >= 0, got {self.max_link_depth}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only keys that are ParseConfig fields are used; unknown keys are
        silently ignored.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({"max_nesting_depth": 3, "theme": "dark"})
            >>> config.max_nesting_depth
            3

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "runmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration active in this context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous configuration even if an exception is raised.

    Args:
        config: ParseConfig to use within the context.

    Example:
        >>> with parse_config_context(ParseConfig(max_nesting_depth=1)):
        ...     runs = parse("**a *b* a**")
        >>> # Previous config restored here

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_MAX_NESTING_DEPTH",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
