"""Public API surface for pb_ui."""

from pb_ui.cli.commands.measure import MeasurementOutcome, run_measurement
from pb_ui.presenters.report import (
    build_histogram_table,
    percentile_line,
    rates_line,
    times_line,
)
from pb_ui.tui.headless import HeadlessUI
from pb_ui.tui.models import TableModel

__all__ = [
    "HeadlessUI",
    "MeasurementOutcome",
    "TableModel",
    "build_histogram_table",
    "percentile_line",
    "rates_line",
    "run_measurement",
    "times_line",
]
