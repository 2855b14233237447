"""Smoke script for the live rate provider.

Demonstrates:
 1. Opening the screen fetches the latest table (date may be earlier than today).
 2. Requesting the reference date again is served from the cache (no new fetch).
 3. Requesting a historical date fetches and caches a second table.
 4. Converting 100 EUR to USD at the reference date.

NOTE: This is a lightweight diagnostic and not a formal test; it needs network access.
"""

import asyncio
import os
import sys
from datetime import date
from pprint import pprint

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from currency_converter.core.config import get_settings  # noqa: E402
from currency_converter.core.logging import init_logging  # noqa: E402
from currency_converter.models.screen import Command, CommandKind  # noqa: E402
from currency_converter.services.rates.providers import make_rate_fetcher  # noqa: E402
from currency_converter.services.screen import ConverterScreen  # noqa: E402


async def run() -> None:
    settings = get_settings()
    init_logging(debug=settings.debug)
    screen = ConverterScreen(
        make_rate_fetcher(settings.exchange_rate_provider, settings),
        base_currency=settings.base_currency,
    )
    out = {}

    screen.dispatch(Command(kind=CommandKind.START))
    await screen.settle()
    out["latest"] = screen.state().model_dump(include={"date_text", "options", "popup"})

    reference = screen.controller.reference_date
    if reference is not None:
        screen.dispatch(Command(kind=CommandKind.REQUEST_DATE, value=reference.isoformat()))
        await screen.settle()
        out["cache_hit_loading"] = screen.loading

    screen.dispatch(Command(kind=CommandKind.REQUEST_DATE, value=date(2020, 1, 6).isoformat()))
    await screen.settle()
    out["historical"] = screen.state().model_dump(include={"date_text", "popup"})
    out["cached_dates"] = [d.isoformat() for d in screen.cache.dates()]

    if "USD" in screen.symbols:
        screen.dispatch(Command(kind=CommandKind.SELECT_OUTPUT, value=screen.symbols.index("USD")))
        screen.dispatch(Command(kind=CommandKind.SET_AMOUNT, value="100"))
        out["share"] = screen.share().text

    pprint(out)


if __name__ == "__main__":
    asyncio.run(run())
