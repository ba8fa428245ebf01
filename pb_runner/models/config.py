"""Benchmark configuration model."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from pb_common.config.env import env_int

DEFAULT_STRIDE = 64
BYTES_PER_MB = 1024 * 1024


class WorkloadKind(str, Enum):
    CPU_SPIN = "cpu_spin"
    MEMORY_SCAN = "memory_scan"


def default_stride() -> int:
    """Stride from ``PB_STRIDE`` when set to a positive integer."""
    value = env_int("STRIDE")
    if value is None or value <= 0:
        return DEFAULT_STRIDE
    return value


class BenchConfig(BaseModel):
    """Settings for one perturbation measurement."""

    target_ms: int = Field(default=100, gt=0, description="Target duration of each run in milliseconds")
    max_runs: int = Field(default=100, ge=1, description="Maximum number of measured runs")
    memory_mb: Optional[int] = Field(
        default=None,
        gt=0,
        description="Working set in Mbytes; selects the memory scan workload",
    )
    stride: int = Field(default_factory=default_stride, gt=0, description="Bytes between memory scan reads")
    verbose: bool = Field(default=False, description="Print per-run resource usage details")
    calibration_test_ms: int = Field(default=100, gt=0, description="Duration of the calibration probe in milliseconds")
    calibration_trials: int = Field(default=5, ge=1, description="Timed trials used to fine tune the iteration count")
    buckets: int = Field(default=200, ge=30, description="Histogram bucket count")
    bar_width: int = Field(default=50, ge=1, description="Maximum histogram bar length")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_stride_fits(self) -> "BenchConfig":
        if self.memory_mb is not None and self.stride > self.memory_bytes:
            raise ValueError("BenchConfig: 'stride' must not exceed the working set size")
        return self

    @property
    def workload_kind(self) -> WorkloadKind:
        if self.memory_mb is None:
            return WorkloadKind.CPU_SPIN
        return WorkloadKind.MEMORY_SCAN

    @property
    def target_us(self) -> int:
        return self.target_ms * 1000

    @property
    def calibration_test_us(self) -> int:
        return self.calibration_test_ms * 1000

    @property
    def memory_bytes(self) -> int:
        return (self.memory_mb or 0) * BYTES_PER_MB
