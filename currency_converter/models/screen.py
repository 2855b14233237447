from __future__ import annotations
from datetime import date
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, Field


class CommandKind(str, Enum):
    START = "start"
    REQUEST_DATE = "request_date"
    SET_DATE_TEXT = "set_date_text"
    SELECT_INPUT = "select_input"
    SELECT_OUTPUT = "select_output"
    SET_AMOUNT = "set_amount"
    SWAP = "swap"
    RETRY = "retry"
    DISMISS_ERROR = "dismiss_error"


class Command(BaseModel):
    kind: CommandKind
    value: Optional[Union[int, str]] = Field(
        None,
        description="ISO date, date text, option index or amount text depending on kind",
    )


class PopupState(BaseModel):
    visible: bool = False
    message: str = ""
    cancelable: bool = True


class ScreenStateOut(BaseModel):
    date_text: str
    reference_date: Optional[date]
    latest: bool
    pending_date: Optional[date]
    loading: bool
    options: List[str]
    input_index: int
    output_index: int
    input_currency: str
    output_currency: str
    amount_text: str
    output_visible: bool
    output_text: str
    popup: PopupState


class ShareOut(BaseModel):
    title: str
    text: str
