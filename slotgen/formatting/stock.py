"""
Stock state of a product as a label with theme colors.

Decision order of get_stock_label:
- labels disabled in settings -> None
- configurable (parent) product -> None, nothing is sold until a variant is chosen
- infinite stock -> "in stock" text, quantity blocks removed
- quantity <= 0 -> "out of stock" text
- quantity <= low stock threshold -> "low stock" text with the quantity
- otherwise -> "in stock" text with the quantity unless quantities are hidden
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from .price import to_number
from .quantity import process_label
from ..types import StockLabel

IN_STOCK = "in_stock"
OUT_OF_STOCK = "out_of_stock"
LOW_STOCK = "low_stock"

DEFAULT_LABELS = {
    "in_stock_label": "In Stock",
    "out_of_stock_label": "Out of Stock",
    "low_stock_label": "Only {quantity} left!",
}

DEFAULT_COLORS = {
    "in_stock_text_color": "#166534",
    "in_stock_bg_color": "#dcfce7",
    "out_of_stock_text_color": "#991b1b",
    "out_of_stock_bg_color": "#fee2e2",
    "low_stock_text_color": "#92400e",
    "low_stock_bg_color": "#fef3c7",
}

UNPURCHASABLE_TYPES = {"configurable"}


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def stock_labels_enabled(settings: Optional[Mapping[str, Any]]) -> bool:
    """Top-level ``show_stock_label`` wins; the nested stock_settings flag defaults to on."""
    settings = _mapping(settings)
    if settings.get("show_stock_label") is not None:
        return bool(settings["show_stock_label"])
    return _mapping(settings.get("stock_settings")).get("show_stock_label") is not False


def _label_text(field: str, settings: Mapping[str, Any], translations: Optional[Mapping[str, Any]]) -> str:
    stock_translations = _mapping(_mapping(translations).get("stock"))
    if stock_translations.get(field):
        return str(stock_translations[field])
    configured = _mapping(settings.get("stock_settings")).get(field)
    if configured:
        return str(configured)
    return DEFAULT_LABELS[field]


def _make_label(state: str, text: str, settings: Mapping[str, Any]) -> StockLabel:
    stock_settings = _mapping(settings.get("stock_settings"))
    text_key, bg_key = f"{state}_text_color", f"{state}_bg_color"
    return StockLabel(
        text=text,
        text_color=stock_settings.get(text_key) or DEFAULT_COLORS[text_key],
        bg_color=stock_settings.get(bg_key) or DEFAULT_COLORS[bg_key],
    )


def select_language_table(translations: Optional[Mapping[str, Any]], lang: Optional[str]) -> Optional[Mapping[str, Any]]:
    """The table of ``lang`` when translations are keyed by language, else translations as given."""
    if lang and isinstance(translations, Mapping) and isinstance(translations.get(lang), Mapping):
        return translations[lang]
    return translations


def get_stock_label(
    product: Optional[Mapping[str, Any]],
    settings: Optional[Mapping[str, Any]] = None,
    translations: Optional[Mapping[str, Any]] = None,
    *,
    lang: Optional[str] = None,
) -> Optional[StockLabel]:
    """
    Stock label text and colors for a product.

    Args:
        product: Product data (stock_quantity, infinite_stock, low_stock_threshold, type)
        settings: Store settings (stock_settings, hide_stock_quantity, display_low_stock_threshold)
        translations: Global translation table of the active language
            (``stock`` group for label texts, ``common`` for plural words),
            or such tables keyed by language code
        lang: Selects the table when translations are keyed by language

    Returns:
        StockLabel, or None when no label should be shown
    """
    settings = _mapping(settings)
    translations = select_language_table(translations, lang)
    if not stock_labels_enabled(settings) or not isinstance(product, Mapping):
        return None

    if product.get("type") in UNPURCHASABLE_TYPES:
        return None

    if product.get("infinite_stock"):
        text = process_label(_label_text("in_stock_label", settings, translations), None, translations)
        return _make_label(IN_STOCK, text, settings)

    quantity = to_number(product.get("stock_quantity"))
    if quantity is not None and quantity <= 0:
        return _make_label(OUT_OF_STOCK, _label_text("out_of_stock_label", settings, translations), settings)

    shown_quantity = None if settings.get("hide_stock_quantity") is True else _as_count(quantity)

    threshold = (
        to_number(product.get("low_stock_threshold"))
        or to_number(settings.get("display_low_stock_threshold"))
        or 0
    )
    if quantity is not None and threshold > 0 and quantity <= threshold:
        text = process_label(_label_text("low_stock_label", settings, translations), shown_quantity, translations)
        return _make_label(LOW_STOCK, text, settings)

    text = process_label(_label_text("in_stock_label", settings, translations), shown_quantity, translations)
    return _make_label(IN_STOCK, text, settings)


def _as_count(quantity: Optional[float]) -> Optional[Any]:
    if quantity is None:
        return None
    return int(quantity) if quantity.is_integer() else quantity


def get_stock_label_style(
    product: Optional[Mapping[str, Any]],
    settings: Optional[Mapping[str, Any]] = None,
    translations: Optional[Mapping[str, Any]] = None,
    *,
    lang: Optional[str] = None,
) -> Dict[str, str]:
    """Inline style ({backgroundColor, color}) for the stock badge, {} when hidden."""
    label = get_stock_label(product, settings, translations, lang=lang)
    return label.style() if label else {}


def is_product_out_of_stock(product: Optional[Mapping[str, Any]]) -> bool:
    """True when the product cannot be purchased right now."""
    if not isinstance(product, Mapping):
        return True
    if product.get("infinite_stock"):
        return False
    if not product.get("manage_stock"):
        return False
    quantity = to_number(product.get("stock_quantity"))
    if quantity is not None and quantity <= 0:
        return not product.get("allow_backorders")
    return False


def get_available_quantity(product: Optional[Mapping[str, Any]]) -> float:
    """Maximum purchasable quantity; math.inf when stock does not limit purchases."""
    if not isinstance(product, Mapping):
        return 0
    if product.get("infinite_stock") or not product.get("manage_stock") or product.get("allow_backorders"):
        return math.inf
    quantity = to_number(product.get("stock_quantity")) or 0
    return max(0, int(quantity) if float(quantity).is_integer() else quantity)


__all__ = [
    "DEFAULT_LABELS",
    "DEFAULT_COLORS",
    "stock_labels_enabled",
    "select_language_table",
    "get_stock_label",
    "get_stock_label_style",
    "is_product_out_of_stock",
    "get_available_quantity",
]
