"""Content-addressed run cache for runmark.

Maps a key derived from (text, base style, config, resolver) to the runs a
parse produced. Cached runs are stored as tuples and handed out as fresh
lists, so a cache hit is indistinguishable from a fresh parse.

Calls with placeholders are never cached: placeholder values are opaque
caller objects that cannot be hashed reliably. Neither are calls whose
resolver has no ``cache_key`` fingerprint.

Thread Safety:
    DictRunCache is not thread-safe. LRURunCache guards its state with a
    lock and may be shared between threads.

Example:
    >>> from runmark import parse, LRURunCache
    >>> cache = LRURunCache(max_entries=100)
    >>> runs1 = parse("**Hello**", cache=cache)
    >>> runs2 = parse("**Hello**", cache=cache)  # Cache hit, no re-parse
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import TYPE_CHECKING, Protocol

from runmark.utils.hashing import hash_str, subtree_hash

if TYPE_CHECKING:
    from runmark.config import ParseConfig
    from runmark.runs import Run
    from runmark.style import TextStyle
    from runmark.styling.protocol import StyleResolver

DEFAULT_MAX_ENTRIES = 200
DEFAULT_MAX_KEY_LENGTH = 1000


class RunCache(Protocol):
    """Protocol for run caches.

    ``max_key_length`` bounds the length of texts worth caching; longer
    texts bypass the cache.
    """

    max_key_length: int

    def get(self, key: str) -> tuple[Run, ...] | None:
        """Return cached runs if present, else None."""
        ...

    def put(self, key: str, runs: tuple[Run, ...]) -> None:
        """Store runs in cache."""
        ...


class DictRunCache:
    """Unbounded in-memory cache using a dict.

    Not thread-safe. Suitable for short-lived batch work.
    """

    __slots__ = ("_data", "max_key_length")

    def __init__(self, max_key_length: int = DEFAULT_MAX_KEY_LENGTH) -> None:
        self._data: dict[str, tuple[Run, ...]] = {}
        self.max_key_length = max_key_length

    def get(self, key: str) -> tuple[Run, ...] | None:
        return self._data.get(key)

    def put(self, key: str, runs: tuple[Run, ...]) -> None:
        self._data[key] = runs

    def __len__(self) -> int:
        return len(self._data)


class LRURunCache:
    """Bounded cache evicting the least recently used entry.

    Args:
        max_entries: Number of entries kept before eviction
        max_key_length: Texts longer than this are not cached

    """

    __slots__ = ("_data", "_lock", "max_entries", "max_key_length")

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_key_length: int = DEFAULT_MAX_KEY_LENGTH,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._data: OrderedDict[str, tuple[Run, ...]] = OrderedDict()
        self._lock = threading.Lock()
        self.max_entries = max_entries
        self.max_key_length = max_key_length

    def get(self, key: str) -> tuple[Run, ...] | None:
        with self._lock:
            runs = self._data.get(key)
            if runs is not None:
                self._data.move_to_end(key)
            return runs

    def put(self, key: str, runs: tuple[Run, ...]) -> None:
        with self._lock:
            self._data[key] = runs
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def hash_config(config: ParseConfig) -> str:
    """Compute hash of the ParseConfig fields that affect output."""
    parts = (
        str(config.max_nesting_depth),
        str(config.max_link_depth),
        config.default_link_scheme,
        str(config.nested_links_enabled),
    )
    return hash_str("|".join(parts), truncate=16)


def make_cache_key(
    text: str,
    base_style: TextStyle,
    config: ParseConfig,
    resolver: StyleResolver,
) -> str | None:
    """Build the cache key for one parse call.

    The resolver contributes its ``cache_key`` fingerprint, so resolvers
    with equal settings share entries and differing ones never collide.

    Returns:
        The key, or None when the resolver has no ``cache_key`` and its
        output therefore cannot be cached.

    """
    resolver_key = getattr(resolver, "cache_key", None)
    if resolver_key is None:
        return None
    parts = (
        hash_str(text),
        subtree_hash(base_style),
        hash_config(config),
        str(resolver_key),
    )
    return "|".join(parts)


__all__ = [
    "DictRunCache",
    "LRURunCache",
    "RunCache",
    "hash_config",
    "make_cache_key",
]
