"""Unique random sampling used to pick which walls to show.

Picks are drawn by rejection: draw a uniform integer in the range, keep it if
it has not been drawn before, repeat until enough values are collected. The
result keeps draw order, so callers must not rely on it being sorted.
"""

from __future__ import annotations
import random
from typing import Optional, Protocol, Tuple

from .errors import InsufficientRange
from .logging import log
from .types import SampleRequest

SampleResult = Tuple[int, ...]


class RandomSource(Protocol):
    """Anything that can draw a uniform integer from [start, stop)."""

    def randrange(self, start: int, stop: int) -> int: ...


def sample(count: int, range_start: int, range_end: int,
           rng: Optional[RandomSource] = None) -> SampleResult:
    """Draw `count` distinct integers from [range_start, range_end).

    Args:
        count: Number of values wanted, at least 0.
        range_start: Lowest value that may be drawn.
        range_end: One past the highest value that may be drawn.
        rng: Random source; a fresh `random.Random` when omitted.

    Returns:
        Tuple of distinct integers in draw order.

    Raises:
        ValueError: count is negative or the range is reversed.
        InsufficientRange: the range holds fewer than `count` values.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if range_start > range_end:
        raise ValueError(f"empty range [{range_start}, {range_end})")

    available = range_end - range_start
    if count > available:
        raise InsufficientRange(count, available)

    rng = rng if rng is not None else random.Random()
    seen = set()
    picked = []
    draws = 0
    while len(picked) < count:
        value = rng.randrange(range_start, range_end)
        draws += 1
        if value not in seen:
            seen.add(value)
            picked.append(value)

    log(f"[SAMPLER] {count} of [{range_start}, {range_end}) in {draws} draws: {picked}")
    return tuple(picked)


class Sampler:
    """Samples indices with a fixed random source."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else random.Random()

    def sample(self, count: int, range_start: int, range_end: int) -> SampleResult:
        return sample(count, range_start, range_end, self.rng)

    def sample_request(self, request: SampleRequest) -> SampleResult:
        return self.sample(request.count, request.range_start, request.range_end)
