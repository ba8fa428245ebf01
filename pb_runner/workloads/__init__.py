"""Workload implementations and factory."""

from __future__ import annotations

from typing import Optional

from pb_common.errors import ConfigurationError
from pb_runner.models.config import BenchConfig, WorkloadKind
from pb_runner.workloads.cpu_spin import CpuSpinWorkload
from pb_runner.workloads.interface import Workload
from pb_runner.workloads.memory_scan import MemoryScanWorkload, WorkingSet


def create_workload(config: BenchConfig, working_set: Optional[WorkingSet] = None) -> Workload:
    """Return the workload selected by ``config``."""
    if config.workload_kind is WorkloadKind.CPU_SPIN:
        return CpuSpinWorkload()
    if working_set is None:
        raise ConfigurationError(
            "The memory scan workload needs an allocated working set",
            context={"memory_mb": config.memory_mb},
        )
    return MemoryScanWorkload(working_set, config.stride)


__all__ = [
    "CpuSpinWorkload",
    "MemoryScanWorkload",
    "WorkingSet",
    "Workload",
    "create_workload",
]
