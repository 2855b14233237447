"""Money formatting / parsing helpers.

Centralized so the screen output, the share text and the conversion engine use
identical rounding and parsing semantics.
"""

from __future__ import annotations
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Union

AmountLike = Union[str, int, float, Decimal]


def format_amount(value: float) -> str:
    """Thousands separators, at most two decimals, no trailing zeros (1234.5 -> "1,234.5")."""
    with localcontext() as ctx:
        ctx.prec = 400
        q = Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{q:,.2f}"
    text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def parse_amount(raw: AmountLike | None) -> Optional[float]:
    """Locale-invariant amount parsing; None when not a finite non-negative number.

    Accepts '.' as decimal point, ',' as thousands separator, surrounding
    whitespace and a leading '+'; digit-group underscores are rejected.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text or text.startswith("-") or "_" in text:
            return None
        try:
            value = float(Decimal(text))
        except (InvalidOperation, ValueError):
            return None
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError):
            return None
    if not math.isfinite(value) or value < 0:
        return None
    return value
