from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, StrictStr


class RatePayload(BaseModel):
    """Expected shape of a provider response body.

    Only the structure is checked here; base/date/rate values are validated
    by the fetcher in a fixed order so each failure maps to its own error.
    """

    model_config = ConfigDict(extra="ignore")

    base: StrictStr
    date: StrictStr
    rates: Dict[str, Any]


@dataclass(frozen=True)
class RateSnapshot:
    """One date's complete rate table as returned by one successful fetch."""

    actual_date: date
    rates: Dict[str, float] = field(default_factory=dict)


class RateTableOut(BaseModel):
    base_currency: str
    date: date
    rates: Dict[str, float]


class CachedDatesOut(BaseModel):
    base_currency: str
    dates: List[date]
