"""Repeated measured runs of a calibrated workload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pb_common.errors import RunSetError
from pb_runner.engine.stop_token import StopToken
from pb_runner.engine.timing import DEFAULT_CLOCK, Clock, elapsed_us
from pb_runner.engine.usage import UsageSampler
from pb_runner.models.results import RunRecord, RunSet
from pb_runner.workloads.interface import Workload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunProgress:
    """Live view of the loop after one run completed."""

    run: int
    max_runs: int
    record: RunRecord
    diff_pct: float
    fastest_us: int
    slowest_us: int


class RunEngine:
    """Execute the workload once per run, recording wall time per run.

    Runs are strictly sequential. The stop token is only consulted between
    runs, so a run in progress always completes.
    """

    def __init__(
        self,
        workload: Workload,
        iterations: int,
        *,
        max_runs: int = 100,
        verbose: bool = False,
        stop_token: Optional[StopToken] = None,
        clock: Clock = DEFAULT_CLOCK,
        usage_sampler: Optional[UsageSampler] = None,
        on_run: Optional[Callable[[RunProgress], None]] = None,
    ) -> None:
        if iterations < 0:
            raise ValueError("iterations must be non-negative")
        if max_runs < 1:
            raise ValueError("max_runs must be at least 1")
        self.workload = workload
        self.iterations = iterations
        self.max_runs = max_runs
        self.verbose = verbose
        self._stop_token = stop_token
        self._clock = clock
        self._usage_sampler = usage_sampler
        if verbose and self._usage_sampler is None:
            self._usage_sampler = UsageSampler()
        self._on_run = on_run

    def _stop_requested(self) -> bool:
        return bool(self._stop_token and self._stop_token.should_stop())

    def _measure(self, index: int) -> RunRecord:
        sampler = self._usage_sampler if self.verbose else None
        before = sampler.sample() if sampler else None
        start = self._clock()
        self.workload.run(self.iterations)
        end = self._clock()
        after = sampler.sample() if sampler else None

        run_us = elapsed_us(start, end)
        if before is None or after is None:
            return RunRecord(index=index, elapsed_us=run_us)
        usage = after - before
        return RunRecord(
            index=index,
            elapsed_us=run_us,
            user_us=usage.user_us,
            system_us=usage.system_us,
            involuntary_ctx_switches=usage.involuntary_ctx_switches,
        )

    def execute(self) -> RunSet:
        """
        Run until ``max_runs`` or a stop request.

        Raises:
            RunSetError: If no run completed.
        """
        run_set = RunSet(iterations=self.iterations, max_runs=self.max_runs)
        fastest_us: Optional[int] = None
        slowest_us = 0
        last_us = 0
        diff_pct = 0.0

        for index in range(self.max_runs):
            if self._stop_requested():
                run_set.interrupted = True
                logger.info("Stopping after %d of %d runs", index, self.max_runs)
                break
            record = self._measure(index)
            run_set.add(record)

            if fastest_us is None or record.elapsed_us < fastest_us:
                fastest_us = record.elapsed_us
            slowest_us = max(slowest_us, record.elapsed_us)
            if last_us:
                diff_pct = 100 * (record.elapsed_us / last_us - 1)
            last_us = record.elapsed_us

            if self._on_run:
                self._on_run(
                    RunProgress(
                        run=index + 1,
                        max_runs=self.max_runs,
                        record=record,
                        diff_pct=diff_pct,
                        fastest_us=fastest_us,
                        slowest_us=slowest_us,
                    )
                )

        if not run_set.records:
            raise RunSetError(
                "No runs completed",
                context={"max_runs": self.max_runs, "interrupted": run_set.interrupted},
            )
        logger.debug("Completed %d runs", len(run_set))
        return run_set
