from __future__ import annotations

"""Rate fetcher abstraction and its failure kinds.

A fetcher performs exactly one lookup of a full rate table for a date (or the
provider's latest table) and either returns a RateSnapshot or raises a
FetchError. It never retries and never touches the cache.
"""
from abc import ABC, abstractmethod
from datetime import date
from enum import Enum

from currency_converter.models.rates import RateSnapshot


class FetchErrorKind(str, Enum):
    NETWORK = "network"
    MALFORMED_RESPONSE = "malformed_response"
    UNEXPECTED_BASE = "unexpected_base"
    UNPARSEABLE_DATE = "unparseable_date"


class FetchError(Exception):
    kind: FetchErrorKind = FetchErrorKind.NETWORK


class NetworkError(FetchError):
    kind = FetchErrorKind.NETWORK


class MalformedResponseError(FetchError):
    kind = FetchErrorKind.MALFORMED_RESPONSE


class UnexpectedBaseError(FetchError):
    kind = FetchErrorKind.UNEXPECTED_BASE


class UnparseableDateError(FetchError):
    kind = FetchErrorKind.UNPARSEABLE_DATE


class RateFetcher(ABC):
    base_currency: str = "EUR"

    @abstractmethod
    async def fetch(self, day: date, latest: bool) -> RateSnapshot:
        """Return the rate table for ``day`` (or the latest one when ``latest``).

        The snapshot's ``actual_date`` is the date the provider reports, which
        may be earlier than the one requested.
        """
        raise NotImplementedError
