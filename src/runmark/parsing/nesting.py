"""Nesting validation for candidate marker pairs.

Two rules narrow the raw pair map:

1. Depth: an opener that would exceed ``max_depth`` simultaneously open
   pairs is dropped together with its closer.
2. Crossing: a closer whose opener is not on top of the open stack drops its
   own pair and every pair opened after it.

Dropped markers render as literal text. The input map is never mutated.

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from runmark.config import DEFAULT_MAX_NESTING_DEPTH
from runmark.tokens import Token
from runmark.utils.logger import get_logger

logger = get_logger(__name__)


def validate_pairs(
    tokens: Sequence[Token],
    pairs: Mapping[int, int],
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> dict[int, int]:
    """Remove over-nested and crossing pairs.

    Args:
        tokens: Output of tokenize()
        pairs: Candidate pair map from identify_pairs()
        max_depth: Maximum number of simultaneously open pairs

    Returns:
        New symmetric pair map holding only well-nested pairs.

    Example:
        >>> tokens = tokenize("*a~~b*c~~")
        >>> validate_pairs(tokens, identify_pairs(tokens))
        {}

    """
    if not pairs:
        return {}

    invalid: set[int] = set()
    stack: list[int] = []

    for index in range(len(tokens)):
        match = pairs.get(index)
        if match is None or index in invalid:
            continue

        if match > index:
            if len(stack) >= max_depth:
                invalid.add(index)
                invalid.add(match)
                logger.debug(
                    "Nesting depth %d exceeded by %r at offset %d",
                    max_depth,
                    tokens[index].value,
                    tokens[index].position,
                )
                continue
            stack.append(index)
            continue

        if stack and stack[-1] == match:
            stack.pop()
            continue

        if match not in stack:
            continue

        # Crossing: drop this pair and everything opened inside it
        cut = stack.index(match)
        for opener in stack[cut:]:
            invalid.add(opener)
            invalid.add(pairs[opener])
        logger.debug(
            "Dropped %d crossing pair(s) closed by %r at offset %d",
            len(stack) - cut,
            tokens[index].value,
            tokens[index].position,
        )
        del stack[cut:]

    if not invalid:
        return dict(pairs)
    return {i: j for i, j in pairs.items() if i not in invalid}
