"""Percentile deviations, absolute times and rates of a run set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from pb_runner.analysis.histogram import slower_pct
from pb_runner.models.results import RunSet

# Percentile -> minimum completed runs before it is reported.
PERCENTILE_MIN_RUNS: Dict[int, int] = {50: 3, 90: 10, 99: 100, 100: 1}


def percentile_rank(runs: int, percentile: int) -> int:
    """1-based rank of ``percentile`` in an ascending sequence of ``runs``."""
    return runs * percentile // 100


def percentile_value(sorted_us: list[int], percentile: int) -> int:
    """Value at the ``percentile`` rank, with the rank floored at 1."""
    rank = max(1, percentile_rank(len(sorted_us), percentile))
    return sorted_us[rank - 1]


def rate_per_second(iterations: int, elapsed_us: int) -> int:
    return iterations * 1_000_000 // elapsed_us


@dataclass(frozen=True)
class PercentileReport:
    """Summary of a completed run set.

    ``deviations`` holds percent-slower figures keyed by percentile, only for
    the percentiles whose minimum sample size was reached.
    """

    runs: int
    iterations: int
    fastest_us: int
    median_us: int
    mean_us: float
    slowest_us: int
    deviations: Dict[int, float] = field(default_factory=dict)

    def deviation(self, percentile: int) -> Optional[float]:
        return self.deviations.get(percentile)

    @property
    def fastest_rate(self) -> int:
        return rate_per_second(self.iterations, self.fastest_us)

    @property
    def median_rate(self) -> int:
        return rate_per_second(self.iterations, self.median_us)

    @property
    def mean_rate(self) -> int:
        return rate_per_second(self.iterations, max(1, int(self.mean_us)))

    @property
    def slowest_rate(self) -> int:
        return rate_per_second(self.iterations, self.slowest_us)


def summarize(run_set: RunSet) -> PercentileReport:
    """Build the percentile report from a sorted copy of the run set."""
    run_set.ensure_not_empty()
    sorted_us = run_set.sorted_elapsed_us()
    runs = len(sorted_us)
    fastest_us = sorted_us[0]

    deviations: Dict[int, float] = {}
    for percentile, min_runs in PERCENTILE_MIN_RUNS.items():
        if runs >= min_runs:
            deviations[percentile] = slower_pct(
                percentile_value(sorted_us, percentile), fastest_us
            )

    return PercentileReport(
        runs=runs,
        iterations=run_set.iterations,
        fastest_us=fastest_us,
        median_us=percentile_value(sorted_us, 50),
        mean_us=sum(sorted_us) / runs,
        slowest_us=sorted_us[-1],
        deviations=deviations,
    )
