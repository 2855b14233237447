from __future__ import annotations

"""Converter screen: the display state and the commands that mutate it.

Widgets are not modelled; the screen keeps what they would show (date text,
option lists, selections, amount, output, loading indicator, error popup) and
exposes it as a ScreenStateOut document. Every user action arrives as a
Command and is dispatched on the owning event loop.
"""
import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Union

from currency_converter.core.errors import CommandError
from currency_converter.models.constants import BASE_CURRENCY, SHARE_TITLE
from currency_converter.models.currency import Currency, supported_currencies
from currency_converter.models.screen import (
    Command,
    CommandKind,
    PopupState,
    ScreenStateOut,
    ShareOut,
)
from currency_converter.services.date_picker import DatePickerBridge
from currency_converter.services.date_text import format_date, format_reference, parse_date_text
from currency_converter.services.money import format_amount
from currency_converter.services.rates.base import RateFetcher
from currency_converter.services.rates.cache import RateCache
from currency_converter.services.rates.conversion import ConversionEngine
from currency_converter.services.rates.selection import CurrencySelectionManager
from currency_converter.services.reference_date import ReferenceDateController

logger = logging.getLogger("currency_converter.screen")


class ConverterScreen:
    def __init__(
        self,
        fetcher: RateFetcher,
        *,
        currencies: Optional[Iterable[Currency]] = None,
        base_currency: str = BASE_CURRENCY,
        today: Callable[[], date] = date.today,
        cache: Optional[RateCache] = None,
    ):
        self.base_currency = base_currency
        self.cache = cache if cache is not None else RateCache()
        self.engine = ConversionEngine(self.cache, base_currency)
        self.selections = CurrencySelectionManager(
            self.cache,
            currencies if currencies is not None else supported_currencies(),
            base_currency,
        )
        self.controller = ReferenceDateController(self.cache, fetcher, self, today=today)
        self.date_picker = DatePickerBridge(today)
        self._today = today

        self.date_text = ""
        self.loading = False
        self.options: List[str] = []
        self.symbols: List[str] = []
        self.input_index = 0
        self.output_index = 0
        self.input_currency = base_currency
        self.output_currency = base_currency
        self.amount_text = ""
        self.output_value: Optional[float] = None
        self.popup = PopupState()

        self._handlers: Dict[CommandKind, Callable[[Optional[Union[int, str]]], None]] = {
            CommandKind.START: self._on_start,
            CommandKind.REQUEST_DATE: self._on_request_date,
            CommandKind.SET_DATE_TEXT: self._on_set_date_text,
            CommandKind.SELECT_INPUT: self._on_select_input,
            CommandKind.SELECT_OUTPUT: self._on_select_output,
            CommandKind.SET_AMOUNT: self._on_set_amount,
            CommandKind.SWAP: self._on_swap,
            CommandKind.RETRY: self._on_retry,
            CommandKind.DISMISS_ERROR: self._on_dismiss_error,
        }
        self.refresh_currencies()

    # Reference listener ----------------------------------------
    def reference_changed(self, refresh_options: bool) -> None:
        self.date_text = format_reference(self.controller.reference_date, self.controller.latest)
        if refresh_options:
            self.refresh_currencies()

    def fetch_failed(self, message: str, cancelable: bool) -> None:
        self.popup = PopupState(visible=True, message=message, cancelable=cancelable)

    def loading_changed(self, loading: bool) -> None:
        self.loading = loading

    # Derived state ---------------------------------------------
    def refresh_currencies(self) -> None:
        selection = self.selections.refresh(
            self.controller.reference_date, self.input_currency, self.output_currency
        )
        self.options = selection.options
        self.symbols = selection.symbols
        self.input_index = selection.input_index
        self.output_index = selection.output_index
        self.input_currency = selection.input_currency
        self.output_currency = selection.output_currency
        self.convert()

    def convert(self) -> Optional[float]:
        self.output_value = self.engine.convert(
            self.controller.reference_date,
            self.input_currency,
            self.output_currency,
            self.amount_text,
        )
        return self.output_value

    @property
    def output_text(self) -> str:
        return "" if self.output_value is None else format_amount(self.output_value)

    # Commands --------------------------------------------------
    def dispatch(self, command: Command) -> None:
        logger.debug("dispatch %s %r", command.kind.value, command.value)
        self._handlers[command.kind](command.value)

    def pump(self) -> None:
        for day in self.date_picker.drain():
            self.controller.request_date(day)
        self.controller.pump()

    async def settle(self) -> None:
        for day in self.date_picker.drain():
            self.controller.request_date(day)
        await self.controller.settle()

    def _on_start(self, _value: Optional[Union[int, str]]) -> None:
        self.controller.request_date(self._today())

    def _on_request_date(self, value: Optional[Union[int, str]]) -> None:
        try:
            day = date.fromisoformat(str(value))
        except ValueError as e:
            raise CommandError(f"expected an ISO date (YYYY-MM-DD), got {value!r}") from e
        self.controller.request_date(day)

    def _on_set_date_text(self, value: Optional[Union[int, str]]) -> None:
        text = "" if value is None else str(value)
        day = parse_date_text(text)
        if day is None:
            # unreadable text: show the reference date again
            self.date_text = format_reference(self.controller.reference_date, self.controller.latest)
            return
        self.date_text = text
        self.controller.request_date(day)

    def _option_index(self, value: Optional[Union[int, str]]) -> int:
        try:
            index = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise CommandError(f"expected an option index, got {value!r}") from e
        if not 0 <= index < len(self.symbols):
            raise CommandError(f"option index {index} out of range (0..{len(self.symbols) - 1})")
        return index

    def _on_select_input(self, value: Optional[Union[int, str]]) -> None:
        self.input_index = self._option_index(value)
        self.input_currency = Currency.symbol_from_display(self.options[self.input_index])
        self.convert()

    def _on_select_output(self, value: Optional[Union[int, str]]) -> None:
        self.output_index = self._option_index(value)
        self.output_currency = Currency.symbol_from_display(self.options[self.output_index])
        self.convert()

    def _on_set_amount(self, value: Optional[Union[int, str]]) -> None:
        self.amount_text = "" if value is None else str(value)
        self.convert()

    def _on_swap(self, _value: Optional[Union[int, str]]) -> None:
        self.input_currency, self.output_currency = self.output_currency, self.input_currency
        self.input_index, self.output_index = self.output_index, self.input_index
        self.convert()

    def _on_retry(self, _value: Optional[Union[int, str]]) -> None:
        self.popup = PopupState()
        self.controller.retry()

    def _on_dismiss_error(self, _value: Optional[Union[int, str]]) -> None:
        if self.popup.visible and not self.popup.cancelable:
            raise CommandError("error popup cannot be dismissed before rates are available")
        self.popup = PopupState()

    # Views -----------------------------------------------------
    def state(self) -> ScreenStateOut:
        return ScreenStateOut(
            date_text=self.date_text,
            reference_date=self.controller.reference_date,
            latest=self.controller.latest,
            pending_date=self.controller.pending_date,
            loading=self.loading,
            options=list(self.options),
            input_index=self.input_index,
            output_index=self.output_index,
            input_currency=self.input_currency,
            output_currency=self.output_currency,
            amount_text=self.amount_text,
            output_visible=self.output_value is not None,
            output_text=self.output_text,
            popup=self.popup,
        )

    def share(self) -> ShareOut:
        day = self.controller.reference_date
        text = (
            f"{format_date(day) if day else ''}: {self.amount_text} {self.input_currency}"
            f" = {self.output_text} {self.output_currency}"
        )
        return ShareOut(title=SHARE_TITLE, text=text)
