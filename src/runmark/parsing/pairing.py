"""Pairing of formatting markers.

Each marker kind has its own stack. A marker pushes when its kind's stack is
empty and otherwise pops and pairs with the top entry. Ordering across kinds
is not considered here; crossing pairs are removed by validate_pairs().

The resulting pair map is symmetric: ``pairs[i] == j`` implies
``pairs[j] == i``, and the opener is always the smaller index.

"""

from __future__ import annotations

from collections.abc import Sequence

from runmark.tokens import Token, TokenKind


def identify_pairs(tokens: Sequence[Token]) -> dict[int, int]:
    """Pair same-kind formatting markers.

    Args:
        tokens: Output of tokenize()

    Returns:
        Symmetric map between opener and closer token indices. Markers left
        on a stack at the end are absent (unpaired).

    Example:
        >>> identify_pairs(tokenize("**a** *b"))
        {0: 2, 2: 0}

    """
    pairs: dict[int, int] = {}
    stacks: dict[TokenKind, list[int]] = {}

    for index, token in enumerate(tokens):
        kind = token.kind
        if not kind.is_formatting:
            continue
        stack = stacks.get(kind)
        if stack:
            opener = stack.pop()
            pairs[opener] = index
            pairs[index] = opener
        elif stack is None:
            stacks[kind] = [index]
        else:
            stack.append(index)

    return pairs

