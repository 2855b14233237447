from __future__ import annotations

"""Reference date controller.

Owns the date whose rates are displayed, the date currently being requested
and the fetch tasks. It is the only writer of the rate cache.

Fetch tasks never touch controller state: each finished fetch is posted to an
inbox and applied later by pump(), on the loop that owns the screen. Only one
requested date is authoritative at a time; a newer request supersedes the
pending one without cancelling its task, and a completion for a superseded
date only adds its table to the cache.
"""
import asyncio
import logging
import queue
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional, Protocol, Set, Union

from currency_converter.models.constants import FETCH_ERROR_MESSAGE
from currency_converter.models.rates import RateSnapshot
from currency_converter.services.rates.base import FetchError, NetworkError, RateFetcher
from currency_converter.services.rates.cache import RateCache

logger = logging.getLogger("currency_converter.reference_date")


class ControllerState(str, Enum):
    IDLE = "idle"
    AWAITING_FETCH = "awaiting_fetch"


class ReferenceListener(Protocol):
    def reference_changed(self, refresh_options: bool) -> None: ...

    def fetch_failed(self, message: str, cancelable: bool) -> None: ...

    def loading_changed(self, loading: bool) -> None: ...


@dataclass(frozen=True)
class FetchCompleted:
    requested: date
    latest: bool
    snapshot: RateSnapshot


@dataclass(frozen=True)
class FetchFailed:
    requested: date
    latest: bool
    error: FetchError


FetchOutcome = Union[FetchCompleted, FetchFailed]


class ReferenceDateController:
    def __init__(
        self,
        cache: RateCache,
        fetcher: RateFetcher,
        listener: ReferenceListener,
        *,
        today: Callable[[], date] = date.today,
    ):
        self._cache = cache
        self._fetcher = fetcher
        self._listener = listener
        self._today = today
        self._inbox: "queue.SimpleQueue[FetchOutcome]" = queue.SimpleQueue()
        self._tasks: Set[asyncio.Task] = set()
        self._in_flight = 0

        self.reference_date: Optional[date] = None
        self.latest = False
        self.pending_date: Optional[date] = None

    @property
    def state(self) -> ControllerState:
        return ControllerState.AWAITING_FETCH if self._in_flight else ControllerState.IDLE

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    # Requests --------------------------------------------------
    def request_date(self, day: date) -> bool:
        """Show ``day``; returns True when a fetch had to be started."""
        if self._cache.has(day):
            self.pending_date = None
            self.reference_date = day
            self.latest = day >= self._today()
            self._listener.reference_changed(refresh_options=True)
            return False
        self.pending_date = day
        self._start_fetch(day, latest=day >= self._today())
        return True

    def retry(self) -> bool:
        return self.request_date(self.pending_date or self._today())

    def _start_fetch(self, day: date, latest: bool) -> None:
        logger.info("fetching rates for %s", "latest" if latest else day.isoformat())
        task = asyncio.get_running_loop().create_task(self._run_fetch(day, latest))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._in_flight += 1
        if self._in_flight == 1:
            self._listener.loading_changed(True)

    async def _run_fetch(self, day: date, latest: bool) -> None:
        try:
            snapshot = await self._fetcher.fetch(day, latest)
        except FetchError as e:
            self._inbox.put(FetchFailed(day, latest, e))
        except Exception as e:
            logger.exception("rate fetcher crashed")
            self._inbox.put(FetchFailed(day, latest, NetworkError(str(e))))
        else:
            self._inbox.put(FetchCompleted(day, latest, snapshot))

    # Completion handling ---------------------------------------
    def pump(self) -> int:
        """Apply every finished fetch; returns how many were applied."""
        applied = 0
        while True:
            try:
                outcome = self._inbox.get_nowait()
            except queue.Empty:
                break
            self._in_flight -= 1
            if isinstance(outcome, FetchCompleted):
                self._apply_success(outcome)
            else:
                self._apply_failure(outcome)
            applied += 1
            if self._in_flight == 0:
                self._listener.loading_changed(False)
        return applied

    async def settle(self) -> None:
        """Wait for all in-flight fetches, then apply them."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        self.pump()

    def _apply_success(self, outcome: FetchCompleted) -> None:
        snapshot = outcome.snapshot
        self._cache.put(snapshot.actual_date, snapshot.rates)
        if outcome.requested != self.pending_date:
            logger.info(
                "stale rates for %s cached without display change",
                outcome.requested.isoformat(),
            )
            if snapshot.actual_date == self.reference_date:
                # displayed table was replaced
                self._listener.reference_changed(refresh_options=True)
            return
        self.pending_date = None
        self.reference_date = snapshot.actual_date
        self.latest = outcome.latest
        self._listener.reference_changed(refresh_options=True)

    def _apply_failure(self, outcome: FetchFailed) -> None:
        err = outcome.error
        if outcome.requested != self.pending_date:
            logger.info("dropping stale %s failure for %s", err.kind.value, outcome.requested.isoformat())
            return
        logger.warning("rate fetch failed (%s): %s", err.kind.value, err)
        has_fallback = self._cache.has_any()
        if has_fallback and self.reference_date is not None:
            self.latest = self.reference_date >= self._today()
            self._listener.reference_changed(refresh_options=False)
        self._listener.fetch_failed(FETCH_ERROR_MESSAGE, cancelable=has_fallback)
