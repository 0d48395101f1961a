"""StringBuilder for O(n) string accumulation.

Appends to a list and joins once, avoiding quadratic concatenation when a
parse accumulates many small text fragments.

Thread Safety:
Instances are local to a single parse call. No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> _ = sb.append("Hello ").append("world")
        >>> sb.build()
        'Hello world'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped) and return self."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def clear(self) -> None:
        """Remove all parts so the builder can be reused."""
        self._parts.clear()

    def __bool__(self) -> bool:
        return bool(self._parts)

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)
