"""
Price formatting helpers.

All functions take already computed amounts; no pricing rules live here.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..types import PriceDisplay

DEFAULT_CURRENCY_SYMBOL = "$"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF",
    "CNY": "¥",
    "SEK": "kr",
    "NOK": "kr",
    "MXN": "$",
    "INR": "₹",
    "KRW": "₩",
    "SGD": "S$",
    "HKD": "HK$",
    "BRL": "R$",
    "ZAR": "R",
    "RUB": "₽",
    "PLN": "zł",
    "CZK": "Kč",
    "HUF": "Ft",
    "RON": "lei",
    "BGN": "лв",
    "HRK": "kn",
    "DKK": "kr",
    "TRY": "₺",
    "NZD": "NZ$",
    "THB": "฿",
    "MYR": "RM",
    "IDR": "Rp",
    "PHP": "₱",
    "VND": "₫",
    "AED": "د.إ",
    "SAR": "﷼",
    "ILS": "₪",
    "AOA": "Kz",
    "NGN": "₦",
    "KES": "KSh",
    "EGP": "E£",
    "MAD": "د.م.",
    "GHS": "GH₵",
}


def get_currency_symbol(currency_code: Optional[str]) -> str:
    """Symbol for an ISO 4217 code; unknown codes fall back to '$'."""
    if not isinstance(currency_code, str):
        return DEFAULT_CURRENCY_SYMBOL
    return CURRENCY_SYMBOLS.get(currency_code.strip().upper(), DEFAULT_CURRENCY_SYMBOL)


def to_number(value: Any) -> Optional[float]:
    """
    Loose numeric coercion used across formatters.

    Accepts ints, floats and numeric strings. Booleans, NaN and anything
    unparseable give None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def format_price_number(value: Any) -> str:
    """Amount with two decimals and no currency symbol; '' when not a number."""
    number = to_number(value)
    if number is None or math.isinf(number):
        return ""
    return f"{number:.2f}"


def format_price(value: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Currency string for an amount: ``$1049.00``, ``-$5.00``.

    Args:
        value: Amount (number or numeric string)
        symbol: Currency symbol to prefix

    Returns:
        Formatted price, or '' when the value is not a number
    """
    number = to_number(value)
    if number is None or math.isinf(number):
        return ""
    if number < 0:
        return f"-{symbol}{-number:.2f}"
    return f"{symbol}{number:.2f}"


def get_price_display(product: Mapping[str, Any]) -> PriceDisplay:
    """
    Decide which price is shown and which one is crossed out.

    A positive ``compare_price`` different from ``price`` puts the product on
    sale: the lower amount is displayed and the higher one becomes the
    original price.
    """
    price = to_number(product.get("price")) or 0.0
    compare = to_number(product.get("compare_price"))

    if compare is not None and compare > 0 and compare != price:
        return PriceDisplay(
            display_price=min(price, compare),
            original_price=max(price, compare),
            has_compare_price=True,
            is_sale=True,
        )

    return PriceDisplay(display_price=price, original_price=None, has_compare_price=False, is_sale=False)


def calculate_item_total(item: Mapping[str, Any], product: Optional[Mapping[str, Any]] = None) -> float:
    """
    Line total of a cart item: (unit price + selected option prices) × quantity.

    The unit price is the item's own price when positive, otherwise the
    product's sale price, otherwise its regular price.
    """
    product = product or {}

    unit = to_number(item.get("price"))
    if unit is None or unit <= 0:
        unit = to_number(product.get("sale_price")) or to_number(product.get("price")) or 0.0

    options_total = 0.0
    for option in item.get("selected_options") or []:
        if isinstance(option, Mapping):
            options_total += to_number(option.get("price")) or 0.0

    quantity = to_number(item.get("quantity"))
    if quantity is None:
        quantity = 1.0

    return (unit + options_total) * quantity


__all__ = [
    "DEFAULT_CURRENCY_SYMBOL",
    "CURRENCY_SYMBOLS",
    "get_currency_symbol",
    "to_number",
    "format_price",
    "format_price_number",
    "get_price_display",
    "calculate_item_total",
]
