"""Placeholder substitution for the span generator.

``{key}`` is replaced by the caller-supplied object for ``key``. Unknown
keys stay in the text buffer as literal ``{key}`` without flushing, so the
surrounding text remains a single run.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, TypeAlias

from runmark.runs import EmbeddedRun

if TYPE_CHECKING:
    from runmark.runs import Run
    from runmark.stringbuilder import StringBuilder
    from runmark.tokens import Token

Placeholders: TypeAlias = Mapping[str, object] | Sequence[object]


def lookup_placeholder(placeholders: Placeholders | None, key: str) -> object | None:
    """Return the value for ``key``, or None when it is missing.

    Mappings are looked up by key. Sequences accept decimal index keys
    (``{0}``, ``{1}``). A None value counts as missing.
    """
    if placeholders is None:
        return None
    if isinstance(placeholders, Mapping):
        return placeholders.get(key)
    if isinstance(placeholders, str) or not key.isdigit():
        return None
    index = int(key)
    if index >= len(placeholders):
        return None
    return placeholders[index]


class PlaceholderMixin:
    """Placeholder token handling.

    Required Host Attributes:
        - _placeholders: Placeholders | None
        - _buffer: StringBuilder
        - _runs: list[Run]

    Required Host Methods:
        - _flush() -> None
        - _current_style() -> TextStyle

    """

    _placeholders: Placeholders | None
    _buffer: StringBuilder
    _runs: list[Run]

    def _handle_placeholder(self, token: Token) -> None:
        value = lookup_placeholder(self._placeholders, token.value)
        if value is None:
            self._buffer.append(token.literal)
            return
        self._flush()
        self._runs.append(EmbeddedRun(value, self._current_style()))
