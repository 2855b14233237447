"""Domain constants: base currency, supported currencies, user-facing messages.

The supported list is fixed (the provider cannot report currency names); to
support more currencies, add them here.
"""

from typing import Dict, Tuple

BASE_CURRENCY = "EUR"

# (symbol, name) in display order. Symbols match the provider's rate keys.
SUPPORTED_CURRENCIES: Tuple[Tuple[str, str], ...] = (
    ("EUR", "Euro"),
    ("USD", "US Dollar"),
    ("JPY", "Japanese Yen"),
    ("BGN", "Bulgarian Lev"),
    ("CZK", "Czech Koruna"),
    ("DKK", "Danish Krone"),
    ("GBP", "Pound Sterling"),
    ("HUF", "Hungarian Forint"),
    ("PLN", "Polish Zloty"),
    ("RON", "Romanian Leu"),
    ("SEK", "Swedish Krona"),
    ("CHF", "Swiss Franc"),
    ("ISK", "Icelandic Krona"),
    ("NOK", "Norwegian Krone"),
    ("HRK", "Croatian Kuna"),
    ("RUB", "Russian Rouble"),
    ("TRY", "Turkish Lira"),
    ("AUD", "Australian Dollar"),
    ("BRL", "Brazilian Real"),
    ("CAD", "Canadian Dollar"),
    ("CNY", "Chinese Yuan Renminbi"),
    ("HKD", "Hong Kong Dollar"),
    ("IDR", "Indonesian Rupiah"),
    ("ILS", "Israeli Shekel"),
    ("INR", "Indian Rupee"),
    ("KRW", "South Korean Won"),
    ("MXN", "Mexican Peso"),
    ("MYR", "Malaysian Ringgit"),
    ("NZD", "New Zealand Dollar"),
    ("PHP", "Philippine Peso"),
    ("SGD", "Singapore Dollar"),
    ("THB", "Thai Baht"),
    ("ZAR", "South African Rand"),
)

CURRENCY_NAMES: Dict[str, str] = dict(SUPPORTED_CURRENCIES)

FETCH_ERROR_MESSAGE = "An error occured :(\nCheck your connection and retry"
SHARE_TITLE = "Share currency conversion"
LATEST_SUFFIX = " (latest)"
