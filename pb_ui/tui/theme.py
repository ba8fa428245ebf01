from __future__ import annotations

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT
HISTOGRAM_BAR_CHAR = "*"

PRESENTER_TEMPLATES: dict[str, str] = {
    "error": "[red]✖ {message}[/red]",
}

COLUMN_STYLES: dict[str, str] = {
    "Histogram": "green",
}
