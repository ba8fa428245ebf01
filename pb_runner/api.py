"""Stable runner API surface."""

from pb_runner.analysis.histogram import Histogram, bucket_index, bucket_value, slower_pct
from pb_runner.analysis.percentiles import PercentileReport, summarize
from pb_runner.engine.calibrator import Calibrator
from pb_runner.engine.context import WorkerContext
from pb_runner.engine.runner import RunEngine, RunProgress
from pb_runner.engine.stop_token import StopToken
from pb_runner.engine.usage import UsageSample, UsageSampler
from pb_runner.models.config import BenchConfig, WorkloadKind
from pb_runner.models.results import CalibrationResult, RunRecord, RunSet
from pb_runner.workloads import (
    CpuSpinWorkload,
    MemoryScanWorkload,
    WorkingSet,
    Workload,
    create_workload,
)

__all__ = [
    "BenchConfig",
    "CalibrationResult",
    "Calibrator",
    "CpuSpinWorkload",
    "Histogram",
    "MemoryScanWorkload",
    "PercentileReport",
    "RunEngine",
    "RunProgress",
    "RunRecord",
    "RunSet",
    "StopToken",
    "UsageSample",
    "UsageSampler",
    "WorkerContext",
    "WorkingSet",
    "Workload",
    "WorkloadKind",
    "bucket_index",
    "bucket_value",
    "create_workload",
    "slower_pct",
    "summarize",
]
