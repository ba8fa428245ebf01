"""
Non-uniform histogram of per-run slowdown against the fastest run.

Bucket ranges (value is percent slower than the fastest run):
    0 <= v < 1:   0.1 step, indices 0-9
    1 <= v < 20:  1.0 step, indices 10-28
    v >= 20:      10.0 step, indices 29 and up
Indices past the last bucket are clamped into it, so the last bucket means
"this value or more".
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from pb_runner.models.results import RunSet

DEFAULT_BUCKETS = 200

FINE_LIMIT = 1.0
MEDIUM_LIMIT = 20.0
FINE_BUCKETS = 10
MEDIUM_FIRST = FINE_BUCKETS
COARSE_FIRST = MEDIUM_FIRST + int(MEDIUM_LIMIT - FINE_LIMIT)


def slower_pct(elapsed_us: int, fastest_us: int) -> float:
    """Percent by which ``elapsed_us`` is slower than ``fastest_us``."""
    return 100 * (elapsed_us / fastest_us - 1)


def bucket_index(value: float, buckets: int = DEFAULT_BUCKETS) -> int:
    """Map a percent-slower value to its bucket index."""
    if value < 0:
        raise ValueError(f"negative slowdown {value!r}")
    if value < FINE_LIMIT:
        idx = int(10 * value)
    elif value < MEDIUM_LIMIT:
        idx = MEDIUM_FIRST + int(value - FINE_LIMIT)
    else:
        idx = COARSE_FIRST + int((value - MEDIUM_LIMIT) / 10)
    return min(idx, buckets - 1)


def bucket_value(idx: int) -> float:
    """Minimum percent-slower value represented by bucket ``idx``."""
    if idx < 0:
        raise ValueError(f"negative bucket index {idx!r}")
    if idx < MEDIUM_FIRST:
        return idx / 10
    if idx < COARSE_FIRST:
        return float(idx - MEDIUM_FIRST) + FINE_LIMIT
    return float(idx - COARSE_FIRST) * 10 + MEDIUM_LIMIT


@dataclass
class Histogram:
    """Fixed-size bucket counts of per-run slowdown."""

    buckets: int = DEFAULT_BUCKETS
    counts: list[int] = field(default_factory=list)
    max_index: int = 0

    def __post_init__(self) -> None:
        if self.buckets < COARSE_FIRST + 1:
            raise ValueError(f"at least {COARSE_FIRST + 1} buckets are required")
        if not self.counts:
            self.counts = [0] * self.buckets

    @classmethod
    def from_elapsed(
        cls, elapsed_us: Iterable[int], fastest_us: int, buckets: int = DEFAULT_BUCKETS
    ) -> "Histogram":
        histogram = cls(buckets=buckets)
        for value in elapsed_us:
            histogram.add(slower_pct(value, fastest_us))
        return histogram

    @classmethod
    def from_run_set(cls, run_set: RunSet, buckets: int = DEFAULT_BUCKETS) -> "Histogram":
        run_set.ensure_not_empty()
        return cls.from_elapsed(run_set.elapsed_us, run_set.fastest_us, buckets)

    def add(self, value: float) -> int:
        idx = bucket_index(value, self.buckets)
        self.counts[idx] += 1
        self.max_index = max(self.max_index, idx)
        return idx

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def max_count(self) -> int:
        return max(self.counts[: self.max_index + 1])

    def is_last(self, idx: int) -> bool:
        return idx == self.buckets - 1

    def bar_length(self, idx: int, bar_width: int) -> int:
        """Bar length of bucket ``idx`` scaled against the fullest bucket."""
        peak = self.max_count
        if peak == 0:
            return 0
        return math.ceil(bar_width * self.counts[idx] / peak)

    def rows(self) -> list[tuple[int, float, int]]:
        """(index, bucket minimum, count) from bucket 0 to the last used one."""
        return [
            (idx, bucket_value(idx), self.counts[idx])
            for idx in range(self.max_index + 1)
        ]
