from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping, Optional

"""Session rate cache.

Maps a calendar date to the full rate table fetched for it (units of each
currency per 1 unit of the base currency; the base itself is never stored).
Entries are only ever inserted or replaced whole and never evicted; the cache
lives as long as the process and is never persisted.

Single writer: only the reference-date controller calls put(), always from the
event loop that owns the screen.
"""


class RateCache:
    def __init__(self) -> None:
        self._tables: Dict[date, Dict[str, float]] = {}

    def has(self, day: date) -> bool:
        return day in self._tables

    def get(self, day: date) -> Optional[Mapping[str, float]]:
        return self._tables.get(day)

    def put(self, day: date, rates: Mapping[str, float]) -> None:
        # stored tables are private copies
        self._tables[day] = dict(rates)

    def has_any(self) -> bool:
        return bool(self._tables)

    def dates(self) -> List[date]:
        return sorted(self._tables)

    def __len__(self) -> int:
        return len(self._tables)
