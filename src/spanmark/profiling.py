"""Opt-in profiling for Spanmark parsing.

Accumulates parse calls, source length, and span count while a
``profiled_parse()`` block is active. Zero overhead otherwise
(``get_parse_accumulator()`` returns None).

Example:
    from spanmark import parse
    from spanmark.profiling import profiled_parse

    with profiled_parse() as metrics:
        doc = parse("***Hello*** @world")

    print(metrics.summary())
    # {"total_ms": 0.1, "source_length": 18, "span_count": 3, "parse_calls": 1}

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
        source_length: Total length of text parsed.
        span_count: Total spans produced.
        parse_calls: Number of parse calls recorded (cache hits included).

    """

    start_time: float = field(default_factory=perf_counter)
    source_length: int = 0
    span_count: int = 0
    parse_calls: int = 0

    def record_parse(self, source_length: int, span_count: int) -> None:
        """Record a parse call."""
        self.parse_calls += 1
        self.source_length += source_length
        self.span_count += span_count

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of parse metrics.

        Returns:
            Dict with total_ms, source_length, span_count, parse_calls.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "source_length": self.source_length,
            "span_count": self.span_count,
            "parse_calls": self.parse_calls,
        }


_accumulator: ContextVar[ParseAccumulator | None] = ContextVar(
    "spanmark_parse_accumulator",
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


__all__ = ["ParseAccumulator", "get_parse_accumulator", "profiled_parse"]
