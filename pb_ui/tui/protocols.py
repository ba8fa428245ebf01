from typing import ContextManager, Protocol

from pb_ui.tui.models import TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...
    def emit_line(self, message: str) -> None: ...


class Presenter:
    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def error(self, message: str) -> None:
        self._sink.emit("error", message)

    def line(self, message: str = "") -> None:
        """Print report text verbatim, without markup or decoration."""
        self._sink.emit_line(message)


class Progress(Protocol):
    def status(self, message: str) -> ContextManager[None]: ...


class LiveLine(Protocol):
    """A single status line rewritten in place."""

    def live(self) -> ContextManager[None]: ...
    def update(self, text: str) -> None: ...


class UI(Protocol):
    tables: TablePresenter
    present: Presenter
    progress: Progress
    live_line: LiveLine
