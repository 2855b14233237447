from __future__ import annotations

import math
from datetime import date
from typing import Optional

from currency_converter.services.money import AmountLike, parse_amount
from .cache import RateCache

"""Conversion between two currencies at a reference date.

All cached rates are against the base currency, so converting X -> Y is
``amount * rate(Y) / rate(X)``. A missing table or missing symbol resolves to
rate 0, and any non-positive rate makes the conversion unavailable (None).
Pure: reads the cache, writes nothing, cheap enough for every keystroke.
"""


class ConversionEngine:
    def __init__(self, cache: RateCache, base_currency: str = "EUR"):
        self._cache = cache
        self.base_currency = base_currency

    def rate_for(self, reference_date: Optional[date], currency: str) -> float:
        if currency == self.base_currency:
            return 1.0
        if reference_date is None:
            return 0.0
        table = self._cache.get(reference_date)
        if table is None:
            return 0.0
        return table.get(currency, 0.0)

    def convert(
        self,
        reference_date: Optional[date],
        input_currency: str,
        output_currency: str,
        amount: AmountLike | None,
    ) -> Optional[float]:
        input_rate = self.rate_for(reference_date, input_currency)
        output_rate = self.rate_for(reference_date, output_currency)
        if input_rate <= 0 or output_rate <= 0:
            return None
        value = parse_amount(amount)
        if value is None:
            return None
        result = value * output_rate / input_rate
        if not math.isfinite(result):
            return None
        return result
