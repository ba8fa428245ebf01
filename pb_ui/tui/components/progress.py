from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text

from pb_ui.tui.protocols import LiveLine, Progress


def _manual_live(console: Console, text: str, transient: bool) -> Live:
    """Live display redrawn only on explicit updates; it starts no refresh thread."""
    return Live(
        Text(text, no_wrap=True, overflow="ignore"),
        console=console,
        auto_refresh=False,
        transient=transient,
    )


class RichProgress(Progress):
    """Static status text shown while calibration runs; it never animates."""

    def __init__(self, console: Console):
        self._console = console

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        with _manual_live(self._console, message, transient=True):
            yield


class RichLiveLine(LiveLine):
    """Status line redrawn in place for every update."""

    def __init__(self, console: Console):
        self._console = console
        self._live: Optional[Live] = None

    @contextmanager
    def live(self) -> Iterator[None]:
        with _manual_live(self._console, "", transient=False) as live:
            self._live = live
            try:
                yield
            finally:
                self._live = None

    def update(self, text: str) -> None:
        if self._live is None:
            self._console.print(text, markup=False, highlight=False, soft_wrap=True)
            return
        self._live.update(Text(text, no_wrap=True, overflow="ignore"), refresh=True)
