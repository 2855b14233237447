from datetime import date

import pytest

from currency_converter.services.money import format_amount, parse_amount
from currency_converter.services.rates.cache import RateCache
from currency_converter.services.rates.conversion import ConversionEngine

DAY = date(2024, 3, 1)


@pytest.fixture
def engine():
    cache = RateCache()
    cache.put(DAY, {"USD": 1.10, "GBP": 0.86, "ZER": 0.0, "NEG": -1.0})
    return ConversionEngine(cache, "EUR")


def test_base_to_quote(engine):
    assert engine.convert(DAY, "EUR", "USD", 100) == pytest.approx(110.0)
    assert engine.convert(DAY, "EUR", "USD", "100") == pytest.approx(110.0)


def test_cross_rate(engine):
    assert engine.convert(DAY, "USD", "GBP", "110") == pytest.approx(86.0)


def test_same_currency_is_identity(engine):
    for symbol in ("EUR", "USD", "GBP"):
        assert engine.convert(DAY, symbol, symbol, "42.5") == pytest.approx(42.5)


def test_round_trip(engine):
    there = engine.convert(DAY, "GBP", "USD", 73.25)
    back = engine.convert(DAY, "USD", "GBP", there)
    assert back == pytest.approx(73.25)


def test_pure(engine):
    assert engine.convert(DAY, "EUR", "GBP", "10") == engine.convert(DAY, "EUR", "GBP", "10")


@pytest.mark.parametrize("symbol", ["ZER", "NEG", "JPY"])
def test_unusable_rates_are_unavailable(engine, symbol):
    assert engine.convert(DAY, "EUR", symbol, "1") is None
    assert engine.convert(DAY, symbol, "EUR", "1") is None


def test_missing_table(engine):
    assert engine.convert(date(2020, 1, 1), "EUR", "USD", "1") is None
    assert engine.convert(None, "EUR", "USD", "1") is None
    # base needs no table
    assert engine.convert(None, "EUR", "EUR", "5") == pytest.approx(5.0)


@pytest.mark.parametrize("amount", ["", "   ", "abc", "1.2.3", "-5", "nan", "inf", "sNaN", "1_000", None, True])
def test_bad_amounts(engine, amount):
    assert engine.convert(DAY, "EUR", "USD", amount) is None


def test_locale_invariant_amounts():
    assert parse_amount("1,234.5") == 1234.5
    assert parse_amount(" +7 ") == 7.0
    assert parse_amount("0") == 0.0
    assert parse_amount("1e3") == 1000.0
    assert parse_amount("12,5") == 125.0


@pytest.mark.parametrize(
    "value,text",
    [
        (110.0, "110"),
        (1234.5, "1,234.5"),
        (0.004, "0"),
        (0.005, "0.01"),
        (2.675, "2.68"),
        (1000000.129, "1,000,000.13"),
        (0.0, "0"),
    ],
)
def test_format_amount(value, text):
    assert format_amount(value) == text
