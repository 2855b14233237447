"""Pydantic domain models for the currency converter screen."""

from .constants import (
    BASE_CURRENCY,
    CURRENCY_NAMES,
    FETCH_ERROR_MESSAGE,
    SUPPORTED_CURRENCIES,
)  # re-export
from .currency import Currency, supported_currencies
from .rates import CachedDatesOut, RatePayload, RateSnapshot, RateTableOut
from .screen import Command, CommandKind, PopupState, ScreenStateOut, ShareOut

__all__ = [
    "BASE_CURRENCY",
    "CURRENCY_NAMES",
    "FETCH_ERROR_MESSAGE",
    "SUPPORTED_CURRENCIES",
    "Currency",
    "supported_currencies",
    "CachedDatesOut",
    "RatePayload",
    "RateSnapshot",
    "RateTableOut",
    "Command",
    "CommandKind",
    "PopupState",
    "ScreenStateOut",
    "ShareOut",
]
