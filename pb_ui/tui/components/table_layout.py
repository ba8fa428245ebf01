from __future__ import annotations

from typing import Mapping

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pb_ui.tui.models import TableModel


def build_rich_table(
    model: TableModel,
    *,
    console: Console,
    border_style: str = "blue",
    header_style: str = "bold blue",
    title_style: str = "bold blue",
    column_styles: Mapping[str, str] | None = None,
) -> Table:
    """
    Render a TableModel as a borderless report table.

    Every cell stays on one line; text wider than the console is cut with an
    ellipsis rather than wrapped, so histogram bars keep their length.
    """
    styles = column_styles or {}
    title = Text(model.title, no_wrap=True, overflow="ellipsis")
    rich_table = Table(
        title=title,
        title_justify="left",
        title_style=title_style,
        header_style=header_style,
        border_style=border_style,
        box=box.SIMPLE_HEAD,
        pad_edge=False,
    )
    for idx, name in enumerate(model.columns):
        rich_table.add_column(
            name,
            justify=model.justify[idx] if idx < len(model.justify) else "left",
            style=styles.get(name),
            no_wrap=True,
            overflow="ellipsis",
            max_width=console.width,
        )
    for row in model.rows:
        rich_table.add_row(*(Text(cell) for cell in row))
    return rich_table
