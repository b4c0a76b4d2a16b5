"""
Display products: raw catalog products decorated for templates.

Every call builds new dictionaries; the raw products are never modified.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .translation import get_product_name
from ..formatting.price import DEFAULT_CURRENCY_SYMBOL, format_price, format_price_number, get_price_display
from ..formatting.stock import get_stock_label, is_product_out_of_stock
from ..formatting.urls import create_product_url, store_identifier

ImageUrlGetter = Callable[[Mapping[str, Any]], str]

# Label catalog entry type -> product flag that enables it.
LABEL_RULES: Dict[str, Callable[[Mapping[str, Any]], bool]] = {
    "new": lambda p: bool(p.get("is_new")),
    "sale": lambda p: bool(p.get("compare_price")),
    "featured": lambda p: bool(p.get("is_featured")),
}

DEFAULT_LABEL_CLASS = "bg-red-600 text-white"
PRODUCT_IMAGE_PLACEHOLDER = "https://placehold.co/600x600?text=No+Image"


@dataclass
class ProductFormatContext:
    """Everything format_products needs besides the products."""
    store: Optional[Mapping[str, Any]] = None
    settings: Mapping[str, Any] = field(default_factory=dict)
    language: Optional[str] = None
    translations: Optional[Mapping[str, Any]] = None
    product_labels: List[Mapping[str, Any]] = field(default_factory=list)
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    image_url_getter: Optional[ImageUrlGetter] = None


def product_image_url(product: Mapping[str, Any]) -> str:
    """First image URL, else image_url, else image, else the placeholder."""
    images = product.get("images")
    if isinstance(images, list) and images:
        first = images[0]
        if isinstance(first, Mapping) and first.get("url"):
            return str(first["url"])
        if isinstance(first, str) and first:
            return first
    return str(product.get("image_url") or product.get("image") or PRODUCT_IMAGE_PLACEHOLDER)


def format_product_labels(product: Mapping[str, Any], labels: Iterable[Mapping[str, Any]]) -> List[Dict[str, str]]:
    """Catalog labels that apply to the product, as {text, className}."""
    out: List[Dict[str, str]] = []
    for label in labels or []:
        rule = LABEL_RULES.get(label.get("type"))
        if rule is None or not rule(product):
            continue
        color = label.get("background_color")
        out.append({
            "text": label.get("text", ""),
            "className": f"bg-[{color}] text-white" if color else DEFAULT_LABEL_CLASS,
        })
    return out


def format_product(product: Mapping[str, Any], ctx: ProductFormatContext) -> Dict[str, Any]:
    """Display product for one raw product."""
    price = get_price_display(product)
    symbol = ctx.currency_symbol

    display_formatted = format_price(price.display_price, symbol)
    original_formatted = format_price(price.original_price, symbol) if price.has_compare_price else ""

    stock_label = get_stock_label(product, ctx.settings, ctx.translations, lang=ctx.language)

    image_url = ctx.image_url_getter(product) if ctx.image_url_getter else product_image_url(product)
    url = product.get("url") or create_product_url(
        store_identifier(ctx.store),
        product.get("slug") or product.get("id"),
    )

    return {
        **product,
        "name": get_product_name(product, ctx.language) or product.get("name"),
        "price_formatted": display_formatted,
        "compare_price_formatted": original_formatted,
        "price_number": format_price_number(price.display_price),
        "compare_price_number": format_price_number(price.original_price) if price.has_compare_price else "",
        "lowest_price_formatted": display_formatted,
        "highest_price_formatted": original_formatted or display_formatted,
        "formatted_price": display_formatted,
        "formatted_compare_price": original_formatted or None,
        "image_url": image_url,
        "url": url,
        "in_stock": not is_product_out_of_stock(product),
        "stock_label": stock_label.text if stock_label else "",
        "stock_label_style": stock_label.style() if stock_label else {},
        "labels": format_product_labels(product, ctx.product_labels),
        "is_sale": price.is_sale,
    }


def format_products(products: Optional[Iterable[Mapping[str, Any]]], ctx: ProductFormatContext) -> List[Dict[str, Any]]:
    """Display products, in input order; non-mapping entries are skipped."""
    return [format_product(p, ctx) for p in (products or []) if isinstance(p, Mapping)]


__all__ = [
    "ProductFormatContext",
    "LABEL_RULES",
    "PRODUCT_IMAGE_PLACEHOLDER",
    "product_image_url",
    "format_product_labels",
    "format_product",
    "format_products",
]
