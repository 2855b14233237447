from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from currency_converter.models.currency import Currency, supported_currencies
from currency_converter.models.rates import CachedDatesOut, RateTableOut
from currency_converter.routers.screen import get_screen
from currency_converter.services.screen import ConverterScreen

"""Read-only views of the session rate cache and the supported currency list.

The cache is filled only by screen date requests; these endpoints never fetch.
"""

router = APIRouter(tags=["rates"])


@router.get("/rates", response_model=CachedDatesOut, summary="Dates with cached rates")
async def list_cached_dates(screen: ConverterScreen = Depends(get_screen)):
    return CachedDatesOut(base_currency=screen.base_currency, dates=screen.cache.dates())


@router.get("/rates/{day}", response_model=RateTableOut, summary="Cached rate table for a date")
async def get_rate_table(day: date, screen: ConverterScreen = Depends(get_screen)):
    table = screen.cache.get(day)
    if table is None:
        raise HTTPException(status_code=404, detail=f"no cached rates for {day.isoformat()}")
    return RateTableOut(base_currency=screen.base_currency, date=day, rates=dict(table))


@router.get("/currencies", response_model=List[Currency], summary="Supported currencies")
async def list_currencies():
    return supported_currencies()
