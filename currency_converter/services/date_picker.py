from __future__ import annotations

import queue
from datetime import date
from typing import Callable, List, Optional

from .date_text import parse_date_text


class DatePickerBridge:
    """Hands dates picked in an external dialog over to the screen.

    The dialog may report from any thread, so deliver() only enqueues; the
    screen drains the queue from its own loop and treats each date as a
    date request.
    """

    def __init__(self, today: Callable[[], date] = date.today):
        self._today = today
        self._picked: "queue.SimpleQueue[date]" = queue.SimpleQueue()

    def open(self, display_text: Optional[str]) -> date:
        """Initial date for the dialog: the displayed date, else today."""
        return parse_date_text(display_text) or self._today()

    def deliver(self, day: date) -> None:
        self._picked.put(day)

    def drain(self) -> List[date]:
        days: List[date] = []
        while True:
            try:
                days.append(self._picked.get_nowait())
            except queue.Empty:
                return days
