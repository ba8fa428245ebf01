from rich.console import Console

from pb_ui.tui import theme
from pb_ui.tui.components.table_layout import build_rich_table
from pb_ui.tui.models import TableModel
from pb_ui.tui.protocols import TablePresenter


class RichTablePresenter(TablePresenter):
    """Prints report tables; the histogram bar column is coloured."""

    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableModel) -> None:
        self._console.print(
            build_rich_table(
                table,
                console=self._console,
                border_style=theme.RICH_BORDER_STYLE,
                header_style=theme.RICH_ACCENT_BOLD,
                title_style=theme.RICH_ACCENT_BOLD,
                column_styles=theme.COLUMN_STYLES,
            )
        )
