"""Presenter turning measurement results into report lines and tables."""

from __future__ import annotations

from typing import List

from pb_runner.api import CalibrationResult, Histogram, PercentileReport, RunProgress
from pb_ui.tui import theme
from pb_ui.tui.models import TableModel

VERBOSE_COLUMNS = [
    "run",
    "time(ms)",
    "usr_time(ms)",
    "sys_time(ms)",
    "involuntary_csw",
    "diff%",
]
HISTOGRAM_COLUMNS = ["Slower%", "Count", "Count%", "Histogram"]

REPORTED_PERCENTILES = (50, 90, 99, 100)


def _ms(value_us: float) -> float:
    return value_us / 1000


def allocation_line(memory_mb: int) -> str:
    return f"Allocating {memory_mb} Mbytes..."


def calibration_status(target_ms: int) -> str:
    return f"Calibrating for {target_ms} ms..."


def calibration_line(target_ms: int, result: CalibrationResult) -> str:
    return f"{calibration_status(target_ms)} (target iteration count: {result.iterations})"


def progress_line(progress: RunProgress) -> str:
    return (
        f"Run {progress.run}/{progress.max_runs}, Ctrl-C to stop "
        f"({progress.diff_pct:.2f}% diff)"
    )


def verbose_header() -> str:
    return " ".join(VERBOSE_COLUMNS)


def verbose_row(progress: RunProgress) -> List[str]:
    record = progress.record
    return [
        str(progress.run),
        f"{_ms(record.elapsed_us):.2f}",
        f"{_ms(record.user_us or 0):.1f}",
        f"{_ms(record.system_us or 0):.1f}",
        str(record.involuntary_ctx_switches or 0),
        "-" if progress.run == 1 else f"{progress.diff_pct:.1f}",
    ]


def verbose_line(progress: RunProgress) -> str:
    """Row right-aligned under the columns of ``verbose_header``."""
    cells = verbose_row(progress)
    return " ".join(cell.rjust(len(column)) for cell, column in zip(cells, VERBOSE_COLUMNS))


def histogram_title(target_ms: int) -> str:
    return f"Perturbation percent by count for {target_ms} ms runs:"


def bucket_label(histogram: Histogram, idx: int, minimum: float) -> str:
    suffix = "+" if histogram.is_last(idx) else ":"
    return f"{minimum:.1f}%{suffix}"


def build_histogram_table(
    histogram: Histogram, runs: int, target_ms: int, bar_width: int
) -> TableModel:
    """One row per bucket from the first up to the highest occupied one."""
    rows = []
    for idx, minimum, count in histogram.rows():
        bar = theme.HISTOGRAM_BAR_CHAR * histogram.bar_length(idx, bar_width)
        rows.append(
            [
                bucket_label(histogram, idx, minimum),
                str(count),
                f"{100 * count / runs:.2f}%",
                bar,
            ]
        )
    return TableModel(
        title=histogram_title(target_ms),
        columns=list(HISTOGRAM_COLUMNS),
        rows=rows,
        justify=["right", "right", "right", "left"],
    )


def percentile_line(report: PercentileReport) -> str:
    parts = []
    for percentile in REPORTED_PERCENTILES:
        deviation = report.deviation(percentile)
        if deviation is not None:
            parts.append(f"{percentile}th: {deviation:.3f}%")
    return "Percentiles: " + ", ".join(parts)


def times_line(report: PercentileReport) -> str:
    return (
        f"Fastest: {_ms(report.fastest_us):.3f} ms, "
        f"50th: {_ms(report.median_us):.3f} ms, "
        f"mean: {_ms(report.mean_us):.3f} ms, "
        f"slowest: {_ms(report.slowest_us):.3f} ms"
    )


def rates_line(report: PercentileReport) -> str:
    return (
        f"Fastest rate: {report.fastest_rate}/s, "
        f"50th: {report.median_rate}/s, "
        f"mean: {report.mean_rate}/s, "
        f"slowest: {report.slowest_rate}/s"
    )
