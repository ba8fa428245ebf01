"""Per-run records and the run set produced by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pb_common.errors import RunSetError


@dataclass(frozen=True)
class CalibrationResult:
    """Iteration count expected to take the target duration."""

    iterations: int
    candidate_iterations: int
    best_trial_us: int
    target_us: int


@dataclass(frozen=True)
class RunRecord:
    """Timing of one completed run.

    The resource usage fields are only filled in verbose mode.
    """

    index: int
    elapsed_us: int
    user_us: Optional[int] = None
    system_us: Optional[int] = None
    involuntary_ctx_switches: Optional[int] = None


@dataclass
class RunSet:
    """Completed runs in chronological order."""

    iterations: int
    max_runs: int
    records: list[RunRecord] = field(default_factory=list)
    interrupted: bool = False

    def __len__(self) -> int:
        return len(self.records)

    def add(self, record: RunRecord) -> None:
        self.records.append(record)

    @property
    def elapsed_us(self) -> list[int]:
        return [record.elapsed_us for record in self.records]

    @property
    def fastest_us(self) -> int:
        self.ensure_not_empty()
        return min(self.elapsed_us)

    @property
    def slowest_us(self) -> int:
        self.ensure_not_empty()
        return max(self.elapsed_us)

    def sorted_elapsed_us(self) -> list[int]:
        """Ascending copy of the elapsed times; the records keep their order."""
        return sorted(self.elapsed_us)

    def ensure_not_empty(self) -> None:
        if not self.records:
            raise RunSetError(
                "No runs completed; nothing to summarize",
                context={"max_runs": self.max_runs},
            )
