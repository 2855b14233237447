from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field, field_validator
from .constants import SUPPORTED_CURRENCIES


class Currency(BaseModel):
    symbol: str = Field(..., min_length=1, description="Provider rate key, e.g. USD")
    name: str

    @field_validator("symbol")
    @classmethod
    def upper_symbol(cls, v: str) -> str:
        if " " in v:
            raise ValueError("symbol cannot contain spaces")
        return v.upper()

    @property
    def full_name(self) -> str:
        return f"{self.symbol} ({self.name})"

    @staticmethod
    def symbol_from_display(display: str | None) -> str:
        """Recover the symbol from a display string ("USD (US Dollar)" -> "USD")."""
        if not display:
            return ""
        return display.split(" ")[0]


def supported_currencies() -> List[Currency]:
    return [Currency(symbol=s, name=n) for s, n in SUPPORTED_CURRENCIES]
