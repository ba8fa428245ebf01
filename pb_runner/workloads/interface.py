"""Common interface for the measured workloads."""

from abc import ABC, abstractmethod

from pb_runner.engine.context import WorkerContext
from pb_runner.models.config import WorkloadKind


class Workload(ABC):
    """
    A unit of work repeated by calibration and by measured runs.

    Every implementation has two execution modes:
    1. ``run(count)``: exactly ``count`` units of work, synchronously.
    2. ``spin(context)``: units of work until the context is stopped,
       counting each one in ``context.count``.

    Each unit must have a real side effect so the loop measures actual work.
    """

    @property
    @abstractmethod
    def kind(self) -> WorkloadKind:
        """Workload selector this implementation answers to."""
        pass

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def run(self, count: int) -> int:
        """
        Perform ``count`` units of work.

        Returns:
            The number of units performed.
        """
        pass

    @abstractmethod
    def spin(self, context: WorkerContext) -> None:
        """Perform units of work until ``context`` is stopped."""
        pass
