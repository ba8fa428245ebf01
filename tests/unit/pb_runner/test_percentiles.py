"""Tests for percentile deviations and rates."""

from __future__ import annotations

import random

import pytest

from pb_common.errors import RunSetError
from pb_runner.analysis.percentiles import (
    percentile_rank,
    percentile_value,
    rate_per_second,
    summarize,
)
from pb_runner.models.results import RunRecord, RunSet


pytestmark = pytest.mark.unit_runner


def _run_set(elapsed: list[int], iterations: int = 1000) -> RunSet:
    run_set = RunSet(iterations=iterations, max_runs=max(1, len(elapsed)))
    for index, value in enumerate(elapsed):
        run_set.add(RunRecord(index=index, elapsed_us=value))
    return run_set


def test_rank_is_floor_of_share() -> None:
    assert percentile_rank(4, 50) == 2
    assert percentile_rank(5, 50) == 2
    assert percentile_rank(10, 90) == 9
    assert percentile_rank(100, 99) == 99
    assert percentile_rank(7, 100) == 7


def test_percentile_value_is_one_based() -> None:
    values = [10, 20, 30, 40]
    assert percentile_value(values, 50) == 20
    assert percentile_value(values, 100) == 40
    assert percentile_value([10], 50) == 10


def test_concrete_report() -> None:
    report = summarize(_run_set([300, 105, 100, 110]))

    assert report.runs == 4
    assert report.fastest_us == 100
    assert report.median_us == 105
    assert report.mean_us == pytest.approx(153.75)
    assert report.slowest_us == 300
    assert report.deviation(50) == pytest.approx(5.0)
    assert report.deviation(90) is None
    assert report.deviation(99) is None
    assert report.deviation(100) == pytest.approx(200.0)
    assert report.fastest_rate == 10_000_000
    assert report.median_rate == 9_523_809
    assert report.mean_rate == 6_535_947
    assert report.slowest_rate == 3_333_333


def test_summarize_does_not_reorder_run_set() -> None:
    run_set = _run_set([300, 105, 100, 110])
    summarize(run_set)
    assert run_set.elapsed_us == [300, 105, 100, 110]


def test_gating_with_five_runs() -> None:
    report = summarize(_run_set([100, 101, 102, 103, 104]))

    assert set(report.deviations) == {50, 100}


def test_gating_with_hundred_runs() -> None:
    report = summarize(_run_set(list(range(1000, 1100))))

    assert set(report.deviations) == {50, 90, 99, 100}
    # ranks 50, 90, 99, 100 -> values 1049, 1089, 1098, 1099
    assert report.deviation(50) == pytest.approx(4.9)
    assert report.deviation(90) == pytest.approx(8.9)
    assert report.deviation(99) == pytest.approx(9.8)
    assert report.deviation(100) == pytest.approx(9.9)


def test_two_runs_only_report_maximum() -> None:
    report = summarize(_run_set([200, 250]))

    assert set(report.deviations) == {100}
    assert report.deviation(100) == pytest.approx(25.0)
    assert report.median_us == 200
    assert report.fastest_rate == rate_per_second(1000, 200)


def test_identical_runs_report_zero_everywhere() -> None:
    report = summarize(_run_set([400, 400, 400]))

    assert report.deviations == {50: 0.0, 100: 0.0}


@pytest.mark.parametrize("seed", range(5))
def test_percentiles_are_monotonic(seed: int) -> None:
    rng = random.Random(seed)
    elapsed = [rng.randint(1000, 5000) for _ in range(rng.randint(100, 300))]

    report = summarize(_run_set(elapsed))

    deviations = [report.deviation(p) for p in (50, 90, 99, 100)]
    assert None not in deviations
    assert deviations == sorted(deviations)
    assert report.fastest_us <= report.median_us <= report.slowest_us


def test_empty_run_set_is_rejected() -> None:
    with pytest.raises(RunSetError):
        summarize(_run_set([]))
