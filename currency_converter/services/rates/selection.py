from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from currency_converter.models.constants import CURRENCY_NAMES
from currency_converter.models.currency import Currency
from .cache import RateCache


@dataclass(frozen=True)
class Selection:
    options: List[str]  # display strings, base first
    symbols: List[str]  # parallel to options
    input_index: int
    output_index: int
    input_currency: str
    output_currency: str


class CurrencySelectionManager:
    """Restricts selectable currencies to those with a rate at the reference date.

    Options are the base currency followed by the cached symbols for the date,
    in the order the provider returned them, filtered to supported currencies.
    A current selection missing from the new list falls back to the base
    currency at index 0.
    """

    def __init__(self, cache: RateCache, currencies: Iterable[Currency], base_currency: str = "EUR"):
        self._cache = cache
        self._names = {c.symbol: c.full_name for c in currencies}
        self.base_currency = base_currency

    def display_name(self, symbol: str) -> str:
        if symbol in self._names:
            return self._names[symbol]
        name = CURRENCY_NAMES.get(symbol)
        return f"{symbol} ({name})" if name else symbol

    def refresh(
        self,
        reference_date: Optional[date],
        current_input: str,
        current_output: str,
    ) -> Selection:
        symbols = [self.base_currency]
        table = self._cache.get(reference_date) if reference_date is not None else None
        for symbol in table or ():
            if symbol in self._names and symbol != self.base_currency:
                symbols.append(symbol)

        input_index = symbols.index(current_input) if current_input in symbols else 0
        output_index = symbols.index(current_output) if current_output in symbols else 0
        return Selection(
            options=[self.display_name(s) for s in symbols],
            symbols=symbols,
            input_index=input_index,
            output_index=output_index,
            input_currency=symbols[input_index],
            output_currency=symbols[output_index],
        )
