"""
Turning resolved values into output text.

format_value picks a formatter from the variable path:
- path mentions "price" and the value is a number (filter bounds under
  ``filters.price`` excluded) -> currency string
- path mentions "stock_status" -> stock label text of the current product
- path mentions "labels" and the value is a list -> comma separated
- path mentions "date" -> M/D/YYYY
- anything else -> plain string; mappings never reach the output
"""

from __future__ import annotations

import html
import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from .resolver import resolve_path
from ..formatting.price import DEFAULT_CURRENCY_SYMBOL, format_price, get_currency_symbol, to_number
from ..formatting.stock import get_stock_label

logger = logging.getLogger(__name__)

# Placeholder hydrated on the client by the stock status controller.
STOCK_STATUS_PLACEHOLDER = (
    '<span class="stock-badge w-fit inline-flex items-center px-2 py-1 rounded-full text-xs '
    'bg-gray-100 text-gray-600" data-bind="stock-status">Loading...</span>'
)

# Value editors leave in price fields that were never filled in.
TEXT_PLACEHOLDER = "[Text placeholder]"


def currency_symbol_for(scope: Mapping[str, Any]) -> str:
    """Currency symbol from settings, else from the store currency code."""
    settings = scope.get("settings")
    if isinstance(settings, Mapping) and settings.get("currency_symbol"):
        return str(settings["currency_symbol"])
    store = scope.get("store")
    if isinstance(store, Mapping) and store.get("currency"):
        return get_currency_symbol(store.get("currency"))
    return DEFAULT_CURRENCY_SYMBOL


def stringify(value: Any, path: str = "") -> str:
    """String form of a value as templates expect it ("true", "5", "a,b")."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v, path) for v in value)
    if isinstance(value, Mapping):
        logger.warning(f"Mapping value at '{path}' cannot be rendered, keys: {list(value.keys())[:10]}")
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def format_date(value: Any) -> Optional[str]:
    """M/D/YYYY for dates, datetimes, ISO strings and epoch milliseconds; None if unparseable."""
    parsed: Optional[date] = None
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            parsed = None
    elif isinstance(value, str):
        text = value.strip().replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(text).date()
        except ValueError:
            try:
                parsed = date.fromisoformat(text[:10])
            except ValueError:
                parsed = None
    if parsed is None:
        return None
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def _label_text(label: Any) -> str:
    if isinstance(label, Mapping):
        return stringify(label.get("text"))
    return stringify(label)


def _formatted_product_price(scope: Mapping[str, Any], raw_key: str, formatted_key: str) -> str:
    """
    Prefer the pre-formatted string, else format the raw amount.

    Empty when the product has no truthy raw amount at all.
    """
    product = scope.get("product")
    if not isinstance(product, Mapping) or not product.get(raw_key):
        return ""

    existing = product.get(formatted_key)
    if isinstance(existing, str) and existing and existing != TEXT_PLACEHOLDER:
        return existing

    amount = to_number(product.get(raw_key))
    if amount is not None and amount > 0:
        return format_price(amount, currency_symbol_for(scope))
    return ""


def format_value(value: Any, path: str, scope: Mapping[str, Any]) -> str:
    """
    Output text of a resolved value.

    Args:
        value: Value found at path
        path: The variable path, drives the choice of formatter
        scope: Variable context (settings, store, translations, product)
    """
    path = path.strip()

    if path == "product.compare_price_formatted":
        return _formatted_product_price(scope, "compare_price", "compare_price_formatted")
    if path == "product.price_formatted":
        return _formatted_product_price(scope, "price", "price_formatted")

    if value is None:
        return ""

    if (
        "price" in path
        and isinstance(value, (int, float))
        and not isinstance(value, bool)
        and "filters.price" not in path
    ):
        return format_price(value, currency_symbol_for(scope))

    if "stock_status" in path:
        label = get_stock_label(
            scope.get("product"),
            scope.get("settings"),
            scope.get("translations"),
            lang=scope.get("currentLanguage"),
        )
        return label.text if label else ""

    if "labels" in path and isinstance(value, (list, tuple)):
        return ", ".join(_label_text(v) for v in value)

    if "date" in path:
        formatted = format_date(value)
        if formatted is not None:
            return formatted

    return stringify(value, path)


def render_variable(path: str, scope: Mapping[str, Any], raw: bool = False) -> str:
    """
    Text for a ``{{path}}`` / ``{{{path}}}`` directive.

    The escaped form knows a few product fields that need more than a lookup:
    formatted prices, the short description falling back to the description
    and the stock status placeholder (emitted as markup).
    """
    path = path.strip()

    if raw:
        return format_value(resolve_path(path, scope), path, scope)

    if path == "product.stock_status":
        return STOCK_STATUS_PLACEHOLDER

    if path == "product.short_description":
        product = scope.get("product")
        if not isinstance(product, Mapping):
            return ""
        for key in ("short_description", "description"):
            text = product.get(key)
            if isinstance(text, str) and text.strip():
                return html.escape(format_value(text, path, scope))
        return ""

    return html.escape(format_value(resolve_path(path, scope), path, scope))


__all__ = [
    "STOCK_STATUS_PLACEHOLDER",
    "currency_symbol_for",
    "stringify",
    "format_date",
    "format_value",
    "render_variable",
]
