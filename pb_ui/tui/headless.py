from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from typing import ContextManager, Iterator

from pb_ui.tui.models import TableModel
from pb_ui.tui.protocols import LiveLine, Presenter, PresenterSink, Progress, TablePresenter, UI


@dataclass
class RecordedTable:
    model: TableModel


@dataclass
class HeadlessUI(UI):
    """UI that records everything it is asked to show."""

    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)
    recorded_live_lines: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)
        self.progress = _HeadlessProgress(self)
        self.live_line = _HeadlessLiveLine(self)

    @property
    def lines(self) -> list[str]:
        """Verbatim report lines, in order."""
        return [
            msg[len("LINE: "):] for msg in self.recorded_messages if msg.startswith("LINE: ")
        ]


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(RecordedTable(table))


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")

    def emit_line(self, message: str) -> None:
        self._ui.recorded_messages.append(f"LINE: {message}")


class _HeadlessPresenter(Presenter):
    def __init__(self, ui: HeadlessUI) -> None:
        super().__init__(_HeadlessPresenterSink(ui))


class _HeadlessProgress(Progress):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def status(self, message: str) -> ContextManager[None]:
        self._ui.recorded_messages.append(f"STATUS: {message}")
        return nullcontext()


class _HeadlessLiveLine(LiveLine):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    @contextmanager
    def live(self) -> Iterator[None]:
        yield

    def update(self, text: str) -> None:
        self._ui.recorded_live_lines.append(text)
