"""Opt-in profiling for runmark parsing.

Accumulates metrics across parse calls inside a profiled_parse() block:
- Total time
- Source length, token and run counts
- Pairs demoted by nesting validation
- Cache hits

Zero overhead when disabled (get_parse_accumulator() returns None).

Example:
    from runmark import parse
    from runmark.profiling import profiled_parse

    with profiled_parse() as metrics:
        runs = parse("Hello **World**")

    print(metrics.summary())
    # {"total_ms": 0.1, "parse_calls": 1, "source_length": 15, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ParseAccumulator:
    """Accumulated metrics during parsing.

    Attributes:
        start_time: Profiling start timestamp.
        parse_calls: Number of parse() calls recorded.
        source_length: Total length of parsed sources.
        token_count: Tokens produced (0 for fast-path and cached parses).
        run_count: Top-level runs produced.
        demoted_pairs: Marker pairs dropped for depth or crossing.
        cache_hits: Parses answered from a run cache.

    """

    start_time: float = field(default_factory=perf_counter)
    parse_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    run_count: int = 0
    demoted_pairs: int = 0
    cache_hits: int = 0

    def record_parse(
        self,
        source_length: int,
        run_count: int,
        token_count: int = 0,
        demoted_pairs: int = 0,
        *,
        cache_hit: bool = False,
    ) -> None:
        """Record a parse call."""
        self.parse_calls += 1
        self.source_length += source_length
        self.run_count += run_count
        self.token_count += token_count
        self.demoted_pairs += demoted_pairs
        if cache_hit:
            self.cache_hits += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of parse metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "parse_calls": self.parse_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "run_count": self.run_count,
            "demoted_pairs": self.demoted_pairs,
            "cache_hits": self.cache_hits,
        }


_accumulator: ContextVar[ParseAccumulator | None] = ContextVar(
    "runmark_parse_accumulator",
    default=None,
)


def get_parse_accumulator() -> ParseAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_parse() -> Iterator[ParseAccumulator]:
    """Context manager for profiled parsing.

    Yields:
        ParseAccumulator populated by parse calls inside the block.

    """
    acc = ParseAccumulator()
    token: Token[ParseAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
