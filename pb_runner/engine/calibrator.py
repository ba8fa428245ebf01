"""Convert a target wall-clock duration into a workload iteration count."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from pb_common.errors import CalibrationError, WorkerControlError
from pb_runner.engine.context import WorkerContext
from pb_runner.engine.timing import DEFAULT_CLOCK, Clock, elapsed_us
from pb_runner.models.results import CalibrationResult
from pb_runner.workloads.interface import Workload

logger = logging.getLogger(__name__)

DEFAULT_TEST_US = 100 * 1000
DEFAULT_TRIALS = 5
DEFAULT_JOIN_TIMEOUT = 5.0


class Calibrator:
    """
    Find the iteration count that makes ``workload.run`` last a target time.

    A worker thread spins the cancellable loop for a fixed probe duration to
    get a ballpark count. The iteration-bounded loop is then timed with that
    count a few times and the fastest trial is scaled linearly to the target.
    The fastest trial is used because interference only ever adds time.
    """

    def __init__(
        self,
        workload: Workload,
        *,
        test_us: int = DEFAULT_TEST_US,
        trials: int = DEFAULT_TRIALS,
        clock: Clock = DEFAULT_CLOCK,
        sleep: Callable[[float], None] = time.sleep,
        join_timeout: float = DEFAULT_JOIN_TIMEOUT,
    ) -> None:
        if test_us <= 0:
            raise ValueError("test_us must be positive")
        if trials < 1:
            raise ValueError("trials must be at least 1")
        self.workload = workload
        self.test_us = test_us
        self.trials = trials
        self._clock = clock
        self._sleep = sleep
        self._join_timeout = join_timeout

    def probe(self) -> int:
        """
        Run the cancellable workload for ``test_us`` and return its count.

        Raises:
            WorkerControlError: If the worker cannot be started, fails, or
                does not stop after cancellation.
        """
        context = WorkerContext()
        failure: list[Exception] = []

        def _worker() -> None:
            try:
                self.workload.spin(context)
            except Exception as exc:
                failure.append(exc)
                logger.exception("%s calibration worker crashed", self.workload.name)

        thread = threading.Thread(
            target=_worker, name=f"pb-calibrate-{self.workload.name}", daemon=True
        )
        try:
            thread.start()
        except RuntimeError as exc:
            raise WorkerControlError(
                "Thread create failed",
                context={"workload": self.workload.name},
                cause=exc,
            ) from exc

        self._sleep(self.test_us / 1_000_000)
        context.stop()
        thread.join(timeout=self._join_timeout)
        if thread.is_alive():
            raise WorkerControlError(
                "Couldn't terminate worker thread normally",
                context={"workload": self.workload.name, "timeout_s": self._join_timeout},
            )
        if failure:
            raise WorkerControlError(
                "Calibration worker failed",
                context={"workload": self.workload.name},
                cause=failure[0],
            )
        logger.debug("Probe of %d us reached %d iterations", self.test_us, context.count)
        return context.count

    def fastest_trial_us(self, count: int) -> int:
        """Time ``workload.run(count)`` ``trials`` times and keep the minimum."""
        fastest: Optional[int] = None
        for _ in range(self.trials):
            start = self._clock()
            self.workload.run(count)
            end = self._clock()
            trial_us = elapsed_us(start, end)
            if fastest is None or trial_us < fastest:
                fastest = trial_us
        assert fastest is not None
        return fastest

    def calibrate(self, target_us: int) -> CalibrationResult:
        """
        Return the iteration count expected to take ``target_us``.

        Raises:
            CalibrationError: If the probe completed no iterations.
            WorkerControlError: If the probe worker misbehaves.
        """
        if target_us <= 0:
            raise CalibrationError(
                "Target duration must be positive", context={"target_us": target_us}
            )
        candidate = self.probe()
        if candidate <= 0:
            raise CalibrationError(
                "Calibration probe completed no iterations",
                context={"workload": self.workload.name, "test_us": self.test_us},
            )
        best_us = self.fastest_trial_us(candidate)
        iterations = max(1, candidate * target_us // best_us)
        logger.info(
            "Calibrated %s: %d iterations in %d us, target %d us -> %d iterations",
            self.workload.name,
            candidate,
            best_us,
            target_us,
            iterations,
        )
        return CalibrationResult(
            iterations=iterations,
            candidate_iterations=candidate,
            best_trial_us=best_us,
            target_us=target_us,
        )
