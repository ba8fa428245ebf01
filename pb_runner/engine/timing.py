"""Wall clock helpers shared by calibration and the run loop."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]

# Nanosecond monotonic clock; elapsed times are reported in microseconds.
DEFAULT_CLOCK: Clock = time.perf_counter_ns


def elapsed_us(start_ns: int, end_ns: int) -> int:
    """Whole microseconds between two clock readings, never below 1."""
    return max(1, (end_ns - start_ns) // 1000)
