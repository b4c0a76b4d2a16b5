"""
Cart page data: display cart items and formatted totals.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .translation import get_product_name
from ..formatting.price import DEFAULT_CURRENCY_SYMBOL, calculate_item_total, format_price, to_number

CART_IMAGE_PLACEHOLDER = "https://placehold.co/100x100?text=No+Image"
DEFAULT_PRODUCT_NAME = "Product"

TOTAL_FIELDS = ("subtotal", "discount", "tax", "total")


def cart_item_image_url(product: Optional[Mapping[str, Any]]) -> str:
    """URL of the first image object, else the placeholder."""
    images = product.get("images") if isinstance(product, Mapping) else None
    if isinstance(images, list) and images:
        first = images[0]
        if isinstance(first, Mapping) and first.get("url"):
            return str(first["url"])
    return CART_IMAGE_PLACEHOLDER


def format_cart_item(
    item: Mapping[str, Any],
    language: Optional[str],
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Mapping[str, Any]:
    product = item.get("product")
    if not isinstance(product, Mapping):
        return item

    name = get_product_name(product, language) or product.get("name") or DEFAULT_PRODUCT_NAME
    image_url = cart_item_image_url(product)

    unit = to_number(item.get("price"))
    if unit is None or unit <= 0:
        unit = to_number(product.get("sale_price")) or to_number(product.get("price"))

    item_total = calculate_item_total(item, product)

    return {
        **item,
        "product": {**product, "name": name, "image_url": image_url},
        "translated_name": name,
        "image_url": image_url,
        "base_price_formatted": format_price(unit, symbol),
        "item_total": item_total,
        "item_total_formatted": format_price(item_total, symbol),
    }


def format_cart_items(
    items: Optional[Iterable[Mapping[str, Any]]],
    language: Optional[str],
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> List[Mapping[str, Any]]:
    return [format_cart_item(item, language, symbol) for item in (items or []) if isinstance(item, Mapping)]


def format_cart_totals(raw: Mapping[str, Any], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Dict[str, Any]:
    """Raw totals plus ``<field>_formatted`` strings; missing totals format as zero."""
    out: Dict[str, Any] = {}
    for name in TOTAL_FIELDS:
        value = raw.get(name)
        out[name] = value
        out[f"{name}_formatted"] = format_price(value or 0, symbol)
    return out


def build_cart_data(raw: Mapping[str, Any], language: Optional[str], symbol: str) -> Dict[str, Any]:
    return {
        "cartItems": format_cart_items(raw.get("cartItems"), language, symbol),
        "appliedCoupon": raw.get("appliedCoupon"),
        "couponCode": raw.get("couponCode"),
        **format_cart_totals(raw, symbol),
        "taxDetails": raw.get("taxDetails"),
        "currencySymbol": raw.get("currencySymbol"),
    }


__all__ = [
    "CART_IMAGE_PLACEHOLDER",
    "cart_item_image_url",
    "format_cart_item",
    "format_cart_items",
    "format_cart_totals",
    "build_cart_data",
]
