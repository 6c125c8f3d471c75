"""Tests for currency conversion, formatting and locale detection."""

from __future__ import annotations

import pytest

from futureedge_shared.currency import (
    EXCHANGE_RATES,
    convert_price,
    detect_user_currency,
    format_price,
    get_all_currencies,
    get_converted_price,
    get_popular_currencies,
    is_supported_currency,
)


class TestConvertPrice:
    def test_identity(self):
        assert convert_price(123.45, "GBP", "GBP") == 123.45

    def test_from_usd(self):
        assert convert_price(100, "USD", "EUR") == pytest.approx(86.04)

    def test_to_usd(self):
        assert convert_price(154.035, "JPY", "USD") == pytest.approx(1)

    def test_transitive_via_usd(self):
        direct = convert_price(250, "GBP", "JPY")
        via_usd = convert_price(convert_price(250, "GBP", "USD"), "USD", "JPY")
        assert direct == pytest.approx(via_usd)

    def test_unknown_currency_uses_rate_of_one(self):
        assert convert_price(10, "XYZ", "USD") == 10


class TestFormatPrice:
    @pytest.mark.parametrize(
        "amount,currency,expected",
        [
            (1234.5, "USD", "$1,234.50"),
            (0.125, "USD", "$0.13"),
            (1234.5, "JPY", "¥1,235"),
            (98765.4, "KRW", "₩98,765"),
            (1234.5, "SEK", "1,234.50 kr"),
            (10, "XYZ", "XYZ10.00"),
        ],
    )
    def test_formats(self, amount, currency, expected):
        assert format_price(amount, currency) == expected

    def test_without_decimals(self):
        assert format_price(1234.5, "EUR", show_decimals=False) == "€1,235"

    def test_without_symbol(self):
        assert format_price(5, "GBP", show_currency=False) == "5.00"


def test_converted_price_same_currency():
    price = get_converted_price(750, "USD", "USD")
    assert price.is_converted is False
    assert price.amount == 750
    assert price.formatted == "$750.00"


def test_converted_price_records_original():
    price = get_converted_price(100, "USD", "SEK")
    assert price.original_amount == 100
    assert price.original_currency == "USD"
    assert price.symbol == "kr"
    assert price.formatted == "932.00 kr"


@pytest.mark.parametrize(
    "locale,expected",
    [
        ("en-GB", "GBP"),
        ("fr-CA", "CAD"),
        ("fr-BE", "EUR"),
        ("ja", "JPY"),
        ("tlh-KX", "USD"),
        (None, "USD"),
        ("", "USD"),
    ],
)
def test_detect_user_currency(locale, expected):
    assert detect_user_currency(locale) == expected


def test_currency_lists():
    assert get_popular_currencies()[0] == "USD"
    assert set(get_popular_currencies()) <= set(EXCHANGE_RATES)
    assert get_all_currencies() == sorted(EXCHANGE_RATES)
    assert is_supported_currency("EUR")
    assert not is_supported_currency("eur")
