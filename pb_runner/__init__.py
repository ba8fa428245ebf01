"""Runner package for perturbation-bench.

Calibration, the measured run loop and the post-run analysis live here; no
terminal output happens in this package.
"""

from pb_runner.api import (
    BenchConfig,
    Calibrator,
    Histogram,
    RunEngine,
    StopToken,
    WorkloadKind,
    create_workload,
    summarize,
)

__all__ = [
    "BenchConfig",
    "Calibrator",
    "Histogram",
    "RunEngine",
    "StopToken",
    "WorkloadKind",
    "create_workload",
    "summarize",
]
