"""Process resource usage sampling for verbose runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import psutil


@dataclass(frozen=True)
class UsageSample:
    """Cumulative CPU times and involuntary context switches of the process."""

    user_us: int
    system_us: int
    involuntary_ctx_switches: int

    def __sub__(self, other: "UsageSample") -> "UsageSample":
        return UsageSample(
            user_us=self.user_us - other.user_us,
            system_us=self.system_us - other.system_us,
            involuntary_ctx_switches=self.involuntary_ctx_switches - other.involuntary_ctx_switches,
        )


class UsageSampler:
    """Read resource usage counters of one process via psutil."""

    def __init__(self, process: Optional[psutil.Process] = None):
        self._process = process or psutil.Process()

    def sample(self) -> UsageSample:
        with self._process.oneshot():
            times = self._process.cpu_times()
            switches = self._process.num_ctx_switches()
        return UsageSample(
            user_us=int(times.user * 1_000_000),
            system_us=int(times.system * 1_000_000),
            involuntary_ctx_switches=switches.involuntary,
        )
