from rich.console import Console

from pb_ui.tui.components.presenter import RichPresenter
from pb_ui.tui.components.progress import RichLiveLine, RichProgress
from pb_ui.tui.components.table import RichTablePresenter
from pb_ui.tui.protocols import LiveLine, Presenter, Progress, TablePresenter, UI


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self.tables: TablePresenter = RichTablePresenter(self._console)
        self.present: Presenter = RichPresenter(self._console)
        self.progress: Progress = RichProgress(self._console)
        self.live_line: LiveLine = RichLiveLine(self._console)
