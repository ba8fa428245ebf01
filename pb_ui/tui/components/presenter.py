from rich.console import Console
from rich.markup import escape

from pb_ui.tui import theme
from pb_ui.tui.protocols import Presenter, PresenterSink


class _RichPresenterSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        template = theme.PRESENTER_TEMPLATES.get(level, "{message}")
        self._console.print(template.format(message=escape(message)))

    def emit_line(self, message: str) -> None:
        # Report lines are never wrapped at the console width.
        self._console.print(
            message, markup=False, highlight=False, soft_wrap=True, overflow="ignore"
        )


class RichPresenter(Presenter):
    def __init__(self, console: Console) -> None:
        super().__init__(_RichPresenterSink(console))
