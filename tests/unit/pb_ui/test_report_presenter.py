"""Tests for report formatting."""

from __future__ import annotations

import pytest

from pb_runner.api import CalibrationResult, Histogram, RunProgress, RunRecord, RunSet, summarize
from pb_ui.presenters.report import (
    HISTOGRAM_COLUMNS,
    VERBOSE_COLUMNS,
    build_histogram_table,
    calibration_line,
    percentile_line,
    progress_line,
    rates_line,
    times_line,
    verbose_header,
    verbose_line,
)


pytestmark = pytest.mark.unit_ui


def _run_set(elapsed: list[int], iterations: int = 1000) -> RunSet:
    run_set = RunSet(iterations=iterations, max_runs=len(elapsed))
    for index, value in enumerate(elapsed):
        run_set.add(RunRecord(index=index, elapsed_us=value))
    return run_set


def _progress(run: int, diff_pct: float, record: RunRecord) -> RunProgress:
    return RunProgress(
        run=run,
        max_runs=100,
        record=record,
        diff_pct=diff_pct,
        fastest_us=record.elapsed_us,
        slowest_us=record.elapsed_us,
    )


def test_calibration_line() -> None:
    result = CalibrationResult(
        iterations=123456, candidate_iterations=1000, best_trial_us=10, target_us=300_000
    )
    assert calibration_line(300, result) == "Calibrating for 300 ms... (target iteration count: 123456)"


def test_progress_line() -> None:
    line = progress_line(_progress(3, 1.234, RunRecord(index=2, elapsed_us=100)))
    assert line == "Run 3/100, Ctrl-C to stop (1.23% diff)"


def test_verbose_lines() -> None:
    record = RunRecord(
        index=0, elapsed_us=100_250, user_us=99_000, system_us=1_000, involuntary_ctx_switches=4
    )
    header = verbose_header()
    first = verbose_line(_progress(1, 0.0, record))
    second = verbose_line(_progress(2, -2.345, record))

    assert header == " ".join(VERBOSE_COLUMNS)
    assert first.split() == ["1", "100.25", "99.0", "1.0", "4", "-"]
    assert second.split() == ["2", "100.25", "99.0", "1.0", "4", "-2.3"]
    assert first == "  1   100.25         99.0          1.0               4     -"


def test_verbose_cells_end_under_their_headers() -> None:
    record = RunRecord(
        index=9, elapsed_us=1_234_567, user_us=5, system_us=0, involuntary_ctx_switches=0
    )
    header = verbose_header()
    line = verbose_line(_progress(10, 12.5, record))

    assert len(line) == len(header)
    header_ends = [header.index(col) + len(col) for col in VERBOSE_COLUMNS]
    line_ends = []
    position = 0
    for cell in line.split():
        position = line.index(cell, position) + len(cell)
        line_ends.append(position)
    assert line_ends == header_ends


def test_histogram_table_rows() -> None:
    histogram = Histogram.from_run_set(_run_set([100, 105, 110, 300]))

    table = build_histogram_table(histogram, runs=4, target_ms=100, bar_width=50)

    assert table.title == "Perturbation percent by count for 100 ms runs:"
    assert table.columns == HISTOGRAM_COLUMNS
    assert len(table.rows) == 48
    assert table.rows[0] == ["0.0%:", "1", "25.00%", "*" * 50]
    assert table.rows[1] == ["0.1%:", "0", "0.00%", ""]
    assert table.rows[14] == ["5.0%:", "1", "25.00%", "*" * 50]
    assert table.rows[47] == ["200.0%:", "1", "25.00%", "*" * 50]


def test_histogram_last_bucket_is_open_ended() -> None:
    histogram = Histogram.from_run_set(_run_set([100, 100, 100_000]))

    table = build_histogram_table(histogram, runs=3, target_ms=100, bar_width=10)

    assert table.rows[-1][0] == "1720.0%+"
    assert table.rows[-1][3] == "*" * 5
    assert table.rows[0][3] == "*" * 10


def test_percentile_line_omits_gated_percentiles() -> None:
    assert percentile_line(summarize(_run_set([100, 105, 110, 300]))) == (
        "Percentiles: 50th: 5.000%, 100th: 200.000%"
    )
    assert percentile_line(summarize(_run_set([100, 150]))) == "Percentiles: 100th: 50.000%"


def test_times_and_rates_lines() -> None:
    report = summarize(_run_set([1000, 2000, 3000], iterations=5000))

    assert times_line(report) == (
        "Fastest: 1.000 ms, 50th: 1.000 ms, mean: 2.000 ms, slowest: 3.000 ms"
    )
    assert rates_line(report) == (
        "Fastest rate: 5000000/s, 50th: 5000000/s, mean: 2500000/s, slowest: 1666666/s"
    )
