import asyncio
from datetime import date
from typing import Dict, List, Optional, Tuple, Union

import pytest

from currency_converter.models.rates import RateSnapshot
from currency_converter.services.rates.base import FetchError, NetworkError, RateFetcher

TODAY = date(2024, 3, 2)

Outcome = Union[RateSnapshot, FetchError]


class FakeFetcher(RateFetcher):
    """Scripted fetcher: outcomes keyed by requested date, or "latest"."""

    def __init__(self) -> None:
        self.outcomes: Dict[Union[date, str], Outcome] = {}
        self.calls: List[Tuple[date, bool]] = []
        self.gate: Optional[asyncio.Event] = None

    async def fetch(self, day: date, latest: bool) -> RateSnapshot:  # type: ignore[override]
        self.calls.append((day, latest))
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.get("latest" if latest else day, NetworkError("unscripted"))
        if isinstance(outcome, FetchError):
            raise outcome
        return outcome


class RecordingListener:
    def __init__(self) -> None:
        self.events: List[Tuple[str, bool]] = []

    def reference_changed(self, refresh_options: bool) -> None:
        self.events.append(("reference", refresh_options))

    def fetch_failed(self, message: str, cancelable: bool) -> None:
        self.events.append(("failed", cancelable))

    def loading_changed(self, loading: bool) -> None:
        self.events.append(("loading", loading))


@pytest.fixture
def today():
    return lambda: TODAY


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def march_first():
    return RateSnapshot(actual_date=date(2024, 3, 1), rates={"USD": 1.10, "GBP": 0.86})
