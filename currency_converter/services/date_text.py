"""Reference date <-> date field text."""

from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from currency_converter.models.constants import LATEST_SUFFIX

_INPUT_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%B %d, %Y", "%b %d, %Y")


def format_date(day: date) -> str:
    # en-US short date, no zero padding: 3/1/2024
    return f"{day.month}/{day.day}/{day.year}"


def format_reference(day: Optional[date], latest: bool) -> str:
    if day is None:
        return ""
    text = format_date(day)
    return text + LATEST_SUFFIX if latest else text


def parse_date_text(text: Optional[str]) -> Optional[date]:
    if not text:
        return None
    text = text.strip()
    if text.endswith(LATEST_SUFFIX.strip()):
        text = text[: -len(LATEST_SUFFIX.strip())].strip()
    for fmt in _INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
