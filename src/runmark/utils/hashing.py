"""Hashing helpers for run cache keys.

Example:
    >>> from runmark.utils.hashing import hash_str
    >>> hash_str("hello", truncate=16)
    '2cf24dba5fb0a30e'
"""

import hashlib
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any


def hash_str(
    content: str,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Hash string content using specified algorithm.

    Args:
        content: String content to hash
        truncate: Truncate result to N characters (None = full hash)
        algorithm: Hash algorithm ('sha256', 'md5')

    Returns:
        Hex digest of hash, optionally truncated
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content.encode("utf-8"))
    digest = hasher.hexdigest()
    return digest[:truncate] if truncate is not None else digest


def subtree_hash(value: Any, *, truncate: int = 16) -> str:
    """Deterministic structural hash for styles and other dataclass values.

    Walks dataclass fields, tuples and enums so equal styles hash equally
    across processes. Callables hash by qualified name and identity.
    """

    def update(hasher: Any, item: Any) -> None:
        if is_dataclass(item) and not isinstance(item, type):
            hasher.update(type(item).__name__.encode("utf-8"))
            for field in fields(item):
                hasher.update(field.name.encode("utf-8"))
                update(hasher, getattr(item, field.name))
            return

        if isinstance(item, tuple | list):
            hasher.update(b"seq[")
            for element in item:
                update(hasher, element)
            hasher.update(b"]")
            return

        if isinstance(item, Enum):
            hasher.update(f"{type(item).__name__}.{item.value}".encode())
            return

        if item is None:
            hasher.update(b"None")
            return

        if callable(item):
            name = getattr(item, "__qualname__", type(item).__qualname__)
            hasher.update(f"{name}@{id(item)}".encode())
            return

        hasher.update(repr(item).encode("utf-8"))

    hasher = hashlib.sha256()
    update(hasher, value)
    return hasher.hexdigest()[:truncate]
