from __future__ import annotations

"""Concrete rate fetchers and factory.

'external-http' talks to an exchangeratesapi.io-compatible provider
(European Central Bank reference rates). 'static' serves a fixed table so the
screen works offline and in local development.
"""
import logging
import math
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

import httpx
from pydantic import ValidationError

from currency_converter.core.config import Settings
from currency_converter.models.rates import RatePayload, RateSnapshot
from currency_converter.services.http_client import HttpError, get_json
from .base import (
    MalformedResponseError,
    NetworkError,
    RateFetcher,
    UnexpectedBaseError,
    UnparseableDateError,
)

logger = logging.getLogger("currency_converter.rates.providers")

_STATIC_RATES: Dict[str, float] = {
    "USD": 1.0856,
    "JPY": 161.94,
    "GBP": 0.8544,
    "CHF": 0.9518,
    "SEK": 11.234,
    "NOK": 11.467,
    "DKK": 7.4572,
    "PLN": 4.3125,
    "CZK": 25.291,
    "HUF": 395.85,
    "AUD": 1.6432,
    "CAD": 1.4711,
    "CNY": 7.8352,
    "INR": 90.365,
    "SGD": 1.4598,
    "MYR": 5.1187,
}


def decode_rates(raw: Dict[str, Any]) -> Dict[str, float]:
    """Keep entries whose value is a finite JSON number; skip everything else.

    Zero and negative rates are kept: deciding they are unusable is the
    conversion engine's job.
    """
    rates: Dict[str, float] = {}
    for symbol, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.debug("skipping rate %s=%r (not a number)", symbol, value)
            continue
        try:
            rate = float(value)
        except OverflowError:
            logger.debug("skipping rate %s (out of float range)", symbol)
            continue
        if not math.isfinite(rate):
            logger.debug("skipping rate %s=%r (not finite)", symbol, value)
            continue
        rates[symbol] = rate
    return rates


def parse_rate_payload(body: Any, base_currency: str) -> RateSnapshot:
    """Validate a decoded response body in order: structure, base, date, rates."""
    try:
        payload = RatePayload.model_validate(body)
    except ValidationError as e:
        raise MalformedResponseError(f"unexpected response shape: {e.error_count()} error(s)") from e
    if payload.base != base_currency:
        logger.error("wrong base for exchange rates: %s", payload.base)
        raise UnexpectedBaseError(f"expected base {base_currency}, got {payload.base!r}")
    try:
        actual = datetime.strptime(payload.date, "%Y-%m-%d").date()
    except ValueError as e:
        logger.error("cannot parse date: %s", payload.date)
        raise UnparseableDateError(f"cannot parse date {payload.date!r}") from e
    return RateSnapshot(actual_date=actual, rates=decode_rates(payload.rates))


class HTTPRateFetcher(RateFetcher):
    def __init__(
        self,
        base_url: str,
        *,
        base_currency: str = "EUR",
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.base_currency = base_currency
        self._timeout = timeout
        self._client = client

    def url_for(self, day: date, latest: bool) -> str:
        # Providers clamp future dates to their newest table anyway; 'latest' just avoids asking.
        path = "latest" if latest else day.strftime("%Y-%m-%d")
        return f"{self.base_url}/{path}"

    async def fetch(self, day: date, latest: bool) -> RateSnapshot:  # type: ignore[override]
        url = self.url_for(day, latest)
        try:
            body = await get_json(
                url,
                params={"base": self.base_currency},
                timeout=self._timeout,
                client=self._client,
            )
        except HttpError as e:
            logger.error("rate request failed: %s", e)
            raise NetworkError(str(e)) from e
        except ValueError as e:
            logger.error("rate response is not JSON: %s", e)
            raise MalformedResponseError(str(e)) from e
        snapshot = parse_rate_payload(body, self.base_currency)
        logger.info(
            "fetched %d rates for %s",
            len(snapshot.rates),
            snapshot.actual_date.isoformat(),
            extra={"rate_requested": "latest" if latest else day.isoformat()},
        )
        return snapshot


class StaticRateFetcher(RateFetcher):
    """Fixed table stamped with the requested date (today in latest mode)."""

    def __init__(
        self,
        *,
        base_currency: str = "EUR",
        rates: Optional[Dict[str, float]] = None,
        today: Callable[[], date] = date.today,
    ):
        self.base_currency = base_currency
        self._rates = dict(rates if rates is not None else _STATIC_RATES)
        self._today = today

    async def fetch(self, day: date, latest: bool) -> RateSnapshot:  # type: ignore[override]
        actual = self._today() if latest else day
        return RateSnapshot(actual_date=actual, rates=dict(self._rates))


def _make_http(settings: Settings) -> RateFetcher:
    return HTTPRateFetcher(
        settings.exchange_api_base_url,
        base_currency=settings.base_currency,
        timeout=settings.http_timeout_seconds,
    )


def _make_static(settings: Settings) -> RateFetcher:
    return StaticRateFetcher(base_currency=settings.base_currency)


_PROVIDER_REGISTRY: Dict[str, Callable[[Settings], RateFetcher]] = {
    "static": _make_static,
    "external-http": _make_http,
}


def make_rate_fetcher(kind: str, settings: Settings) -> RateFetcher:
    factory = _PROVIDER_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings)
