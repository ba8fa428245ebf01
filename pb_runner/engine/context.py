"""Shared state between the calibration controller and its worker."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class WorkerContext:
    """Running count and cancellation flag handed to a cancellable workload.

    The worker is the only writer of ``count``; the controller reads it after
    joining the worker thread. ``stop()`` only ever moves the flag one way.
    """

    count: int = 0
    _stop_event: threading.Event = field(default_factory=threading.Event, repr=False)

    def keep_running(self) -> bool:
        return not self._stop_event.is_set()

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
