"""
currency.py — Static exchange rates, price conversion and display formatting.

Rates are a fixed USD-based snapshot (1 USD = X currency); nothing is fetched
live. Conversion goes through USD: amount / rate[from] * rate[to].

Usage:
    from futureedge_shared.currency import convert_price, format_price

    gbp = convert_price(1200, "USD", "GBP")       # 905.76
    format_price(gbp, "GBP")                      # "£905.76"
    format_price(150000, "JPY")                   # "¥150,000"
    detect_user_currency("en-GB")                 # "GBP"
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from pydantic import BaseModel

# Snapshot date of EXCHANGE_RATES
RATES_UPDATED: Final[str] = "2025-11-17"

CURRENCY_SYMBOLS: Final[dict[str, str]] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF",
    "CNY": "¥",
    "INR": "₹",
    "SGD": "S$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "MXN": "MX$",
    "BRL": "R$",
    "ZAR": "R",
    "KRW": "₩",
    "THB": "฿",
    "MYR": "RM",
    "PHP": "₱",
    "IDR": "Rp",
    "VND": "₫",
    "TWD": "NT$",
    "AED": "د.إ",
    "SAR": "﷼",
    "ILS": "₪",
    "PLN": "zł",
    "CZK": "Kč",
    "TRY": "₺",
}

CURRENCY_NAMES: Final[dict[str, str]] = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "AUD": "Australian Dollar",
    "CAD": "Canadian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "INR": "Indian Rupee",
    "SGD": "Singapore Dollar",
    "NZD": "New Zealand Dollar",
    "HKD": "Hong Kong Dollar",
    "SEK": "Swedish Krona",
    "NOK": "Norwegian Krone",
    "DKK": "Danish Krone",
    "MXN": "Mexican Peso",
    "BRL": "Brazilian Real",
    "ZAR": "South African Rand",
    "KRW": "South Korean Won",
    "THB": "Thai Baht",
    "MYR": "Malaysian Ringgit",
    "PHP": "Philippine Peso",
    "IDR": "Indonesian Rupiah",
    "VND": "Vietnamese Dong",
    "TWD": "Taiwan Dollar",
    "AED": "UAE Dirham",
    "SAR": "Saudi Riyal",
    "ILS": "Israeli Shekel",
    "PLN": "Polish Zloty",
    "CZK": "Czech Koruna",
    "TRY": "Turkish Lira",
}

EXCHANGE_RATES: Final[dict[str, float]] = {
    "USD": 1,
    "EUR": 0.8604,
    "GBP": 0.7548,
    "JPY": 154.035,
    "AUD": 1.563,
    "CAD": 1.403,
    "CHF": 0.7953,
    "CNY": 7.10,
    "INR": 88.689,
    "SGD": 1.2975,
    "NZD": 1.754,
    "HKD": 7.7722,
    "SEK": 9.32,
    "NOK": 9.91,
    "DKK": 6.4245,
    "MXN": 18.32,
    "BRL": 5.30,
    "ZAR": 17.121,
    "KRW": 1457,
    "THB": 32.214,
    "MYR": 4.1325,
    "PHP": 59.106,
    "IDR": 16694,
    "VND": 26350,
    "TWD": 30.654,
    "AED": 3.673,
    "SAR": 3.75,
    "ILS": 3.23,
    "PLN": 3.6374,
    "CZK": 20.825,
    "TRY": 42.3282,
}

NO_DECIMAL_CURRENCIES: Final[frozenset[str]] = frozenset({"JPY", "KRW"})
SYMBOL_AFTER_CURRENCIES: Final[frozenset[str]] = frozenset({"SEK", "NOK", "DKK"})

POPULAR_CURRENCIES: Final[tuple[str, ...]] = (
    "USD", "EUR", "GBP", "AUD", "CAD", "SGD", "JPY", "CNY", "MYR", "THB", "AED", "INR",
)

LOCALE_TO_CURRENCY: Final[dict[str, str]] = {
    "en-US": "USD",
    "en-GB": "GBP",
    "en-AU": "AUD",
    "en-CA": "CAD",
    "en-NZ": "NZD",
    "en-SG": "SGD",
    "en-IN": "INR",
    "en-HK": "HKD",
    "en-ZA": "ZAR",
    "en-MY": "MYR",
    "en-PH": "PHP",
    "en-AE": "AED",
    "en-IL": "ILS",
    "de": "EUR",
    "de-DE": "EUR",
    "de-CH": "CHF",
    "fr": "EUR",
    "fr-FR": "EUR",
    "fr-CH": "CHF",
    "fr-CA": "CAD",
    "es": "EUR",
    "es-ES": "EUR",
    "es-MX": "MXN",
    "it": "EUR",
    "pt-BR": "BRL",
    "ja": "JPY",
    "ko": "KRW",
    "zh-CN": "CNY",
    "zh-HK": "HKD",
    "zh-SG": "SGD",
    "zh-TW": "TWD",
    "th": "THB",
    "sv": "SEK",
    "no": "NOK",
    "da": "DKK",
    "ms": "MYR",
    "ms-MY": "MYR",
    "id": "IDR",
    "id-ID": "IDR",
    "vi": "VND",
    "vi-VN": "VND",
    "fil": "PHP",
    "tl": "PHP",
    "ar": "SAR",
    "ar-SA": "SAR",
    "ar-AE": "AED",
    "he": "ILS",
    "he-IL": "ILS",
    "pl": "PLN",
    "pl-PL": "PLN",
    "cs": "CZK",
    "cs-CZ": "CZK",
    "tr": "TRY",
    "tr-TR": "TRY",
}

DEFAULT_CURRENCY: Final[str] = "USD"


class ConvertedPrice(BaseModel):
    amount: float
    currency: str
    symbol: str
    formatted: str
    original_amount: float
    original_currency: str
    is_converted: bool


def is_supported_currency(currency: str) -> bool:
    return currency in EXCHANGE_RATES


def convert_price(amount: float, from_currency: str, to_currency: str) -> float:
    """Convert an amount between currencies via USD.

    Unknown currency codes fall back to a rate of 1.
    """
    if from_currency == to_currency:
        return amount

    from_rate = EXCHANGE_RATES.get(from_currency) or 1
    to_rate = EXCHANGE_RATES.get(to_currency) or 1

    usd_amount = amount / from_rate
    return usd_amount * to_rate


def _round_half_up(amount: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_price(
    amount: float,
    currency: str,
    *,
    show_decimals: bool = True,
    show_currency: bool = True,
) -> str:
    """
    Format an amount for display.

    JPY and KRW never show decimals. SEK, NOK and DKK put the symbol after
    the amount; all other currencies put it before.

    Args:
        amount:        Amount in `currency`.
        currency:      ISO currency code.
        show_decimals: Two decimal places (ignored for no-decimal currencies).
        show_currency: Prefix/suffix the currency symbol.

    Returns:
        Formatted string, e.g. "$1,234.50" or "1,234.50 kr".
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    decimals = show_decimals and currency not in NO_DECIMAL_CURRENCIES

    rounded = _round_half_up(amount, 2 if decimals else 0)
    final_amount = f"{rounded:,.2f}" if decimals else f"{rounded:,.0f}"

    if not show_currency:
        return final_amount

    if currency in SYMBOL_AFTER_CURRENCIES:
        return f"{final_amount} {symbol}"

    return f"{symbol}{final_amount}"


def get_converted_price(
    amount: float,
    original_currency: str,
    target_currency: str,
) -> ConvertedPrice:
    is_converted = original_currency != target_currency
    converted = (
        convert_price(amount, original_currency, target_currency)
        if is_converted
        else amount
    )
    return ConvertedPrice(
        amount=converted,
        currency=target_currency,
        symbol=CURRENCY_SYMBOLS.get(target_currency, target_currency),
        formatted=format_price(converted, target_currency),
        original_amount=amount,
        original_currency=original_currency,
        is_converted=is_converted,
    )


def detect_user_currency(locale: str | None) -> str:
    """
    Map a locale tag to a currency code.

    Tries the exact locale ("fr-CA"), then the language code ("fr"), and
    defaults to USD.
    """
    if not locale:
        return DEFAULT_CURRENCY

    locale = locale.strip()
    if locale in LOCALE_TO_CURRENCY:
        return LOCALE_TO_CURRENCY[locale]

    language = locale.split("-")[0]
    return LOCALE_TO_CURRENCY.get(language, DEFAULT_CURRENCY)


def get_popular_currencies() -> list[str]:
    return list(POPULAR_CURRENCIES)


def get_all_currencies() -> list[str]:
    return sorted(EXCHANGE_RATES)
