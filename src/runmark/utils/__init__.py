"""Shared utilities for runmark."""

from runmark.utils.hashing import hash_str, subtree_hash
from runmark.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
    "subtree_hash",
]
