"""Stop token for graceful interruption of the run loop."""

from __future__ import annotations

import logging
import signal
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class StopToken:
    """
    Lightweight cooperative stop controller.

    It can be tripped by SIGINT/SIGTERM or programmatically. The signal
    handler only flips a flag; the run loop calls `should_stop()` between
    runs and winds down on its own.
    """

    def __init__(
        self,
        enable_signals: bool = True,
        on_stop: Optional[Callable[[], None]] = None,
    ) -> None:
        self._on_stop = on_stop
        self._stop_requested = False
        self._prev_handlers: Dict[int, Callable] = {}
        if enable_signals:
            self._install_signal_handlers()

    def _install_signal_handlers(self) -> None:
        """Capture SIGINT/SIGTERM and mark the token as stopped."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                self._prev_handlers[sig] = signal.getsignal(sig)
                signal.signal(sig, self._handle_signal)
            except (ValueError, OSError) as exc:
                # Only the main thread may install handlers.
                logger.debug("Cannot install handler for %s: %s", sig, exc)

    def _handle_signal(self, signum: int, frame) -> None:
        self.request_stop()

    def request_stop(self) -> None:
        """Mark the token as stopped and trigger the callback once."""
        if self._stop_requested:
            return
        self._stop_requested = True
        logger.info("Stop requested")
        if self._on_stop:
            try:
                self._on_stop()
            except Exception:
                # Runs inside a signal handler; the stop itself must still take effect.
                logger.warning("Stop callback failed", exc_info=True)

    def should_stop(self) -> bool:
        return self._stop_requested

    def restore(self) -> None:
        """Restore the previous signal handlers."""
        for sig, handler in self._prev_handlers.items():
            try:
                signal.signal(sig, handler)
            except (ValueError, OSError) as exc:
                logger.debug("Cannot restore handler for %s: %s", sig, exc)
        self._prev_handlers.clear()

    def __enter__(self) -> "StopToken":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
