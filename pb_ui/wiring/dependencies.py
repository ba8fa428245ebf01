from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pb_ui.tui.protocols import UI


@dataclass
class UIContext:
    """Container for the UI in use, initialized lazily."""

    headless: bool = False
    _ui: Optional[UI] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from pb_ui.tui.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                from pb_ui.tui.facade import TUI

                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI) -> None:
        self._ui = value
