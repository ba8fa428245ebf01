"""CPU-bound spin loop."""

from pb_runner.engine.context import WorkerContext
from pb_runner.models.config import WorkloadKind
from pb_runner.workloads.interface import Workload


class CpuSpinWorkload(Workload):
    """Each unit of work is a bare counter increment."""

    @property
    def kind(self) -> WorkloadKind:
        return WorkloadKind.CPU_SPIN

    def run(self, count: int) -> int:
        i = 0
        while i < count:
            i += 1
        return i

    def spin(self, context: WorkerContext) -> None:
        while context.keep_running():
            context.count += 1
