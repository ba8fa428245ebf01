"""Calibrate, run and report one perturbation measurement."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pb_runner.api import (
    BenchConfig,
    CalibrationResult,
    Calibrator,
    Histogram,
    PercentileReport,
    RunEngine,
    RunProgress,
    RunSet,
    StopToken,
    WorkingSet,
    WorkloadKind,
    create_workload,
    summarize,
)
from pb_ui.presenters.report import (
    allocation_line,
    build_histogram_table,
    calibration_line,
    calibration_status,
    percentile_line,
    progress_line,
    rates_line,
    times_line,
    verbose_header,
    verbose_line,
)
from pb_ui.tui.protocols import UI

logger = logging.getLogger(__name__)

StopTokenFactory = Callable[..., StopToken]


@dataclass(frozen=True)
class MeasurementOutcome:
    calibration: CalibrationResult
    run_set: RunSet
    histogram: Histogram
    report: PercentileReport


def _allocate(config: BenchConfig, ui: UI) -> Optional[WorkingSet]:
    if config.workload_kind is not WorkloadKind.MEMORY_SCAN:
        return None
    ui.present.line(allocation_line(config.memory_mb or 0))
    return WorkingSet.allocate(config.memory_bytes)


def _execute_runs(
    config: BenchConfig,
    ui: UI,
    engine_factory: Callable[[Callable[[RunProgress], None]], RunEngine],
) -> RunSet:
    if config.verbose:
        ui.present.line(verbose_header())
        return engine_factory(lambda progress: ui.present.line(verbose_line(progress))).execute()
    with ui.live_line.live():
        engine = engine_factory(lambda progress: ui.live_line.update(progress_line(progress)))
        return engine.execute()


def _report(config: BenchConfig, ui: UI, run_set: RunSet) -> tuple[Histogram, PercentileReport]:
    histogram = Histogram.from_run_set(run_set, config.buckets)
    report = summarize(run_set)

    ui.present.line()
    ui.tables.show(
        build_histogram_table(histogram, len(run_set), config.target_ms, config.bar_width)
    )
    ui.present.line()
    ui.present.line(percentile_line(report))
    ui.present.line(times_line(report))
    ui.present.line(rates_line(report))
    return histogram, report


def run_measurement(
    config: BenchConfig,
    ui: UI,
    *,
    stop_token_factory: StopTokenFactory = StopToken,
) -> MeasurementOutcome:
    """
    Run the whole measurement and print the report through ``ui``.

    Raises:
        PBError subclasses for allocation, worker control, calibration or
        empty run set failures.
    """
    working_set = _allocate(config, ui)
    workload = create_workload(config, working_set)

    calibrator = Calibrator(
        workload,
        test_us=config.calibration_test_us,
        trials=config.calibration_trials,
    )
    with ui.progress.status(calibration_status(config.target_ms)):
        calibration = calibrator.calibrate(config.target_us)
    ui.present.line(calibration_line(config.target_ms, calibration))

    with stop_token_factory(on_stop=lambda: ui.present.line("stopping...")) as stop_token:

        def _engine(on_run: Callable[[RunProgress], None]) -> RunEngine:
            return RunEngine(
                workload,
                calibration.iterations,
                max_runs=config.max_runs,
                verbose=config.verbose,
                stop_token=stop_token,
                on_run=on_run,
            )

        run_set = _execute_runs(config, ui, _engine)

    if run_set.interrupted:
        logger.info("Run loop interrupted after %d runs", len(run_set))
    histogram, report = _report(config, ui, run_set)
    return MeasurementOutcome(
        calibration=calibration,
        run_set=run_set,
        histogram=histogram,
        report=report,
    )
