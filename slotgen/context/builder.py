"""
Variable context builder.

build_context() turns collaborator data for one page into the mapping that
slot templates are rendered against. The result always starts with the base
context (store, enriched settings, language, translations); page-specific
keys are layered on top. Raw input is never modified.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .cart import build_cart_data
from .filters import format_filters_data
from .header import build_header_data
from .pagination import build_pagination
from .products import ProductFormatContext, format_product, format_products
from .translation import get_category_name
from ..config.defaults import enrich_settings
from ..formatting.price import DEFAULT_CURRENCY_SYMBOL
from ..types import DEFAULT_LANG, PageType, VariableContext

logger = logging.getLogger(__name__)


def _base_context(
    store: Optional[Mapping[str, Any]],
    settings: Dict[str, Any],
    language: str,
    translations: Optional[Mapping[str, Any]],
) -> VariableContext:
    return {
        "store": store,
        "settings": settings,
        "currentLanguage": language,
        "translations": translations or {},
    }


def _category_context(raw: Mapping[str, Any], base: VariableContext, labels: List[Mapping[str, Any]]) -> VariableContext:
    fmt = ProductFormatContext(
        store=base["store"],
        settings=base["settings"],
        language=base["currentLanguage"],
        translations=base["translations"],
        product_labels=labels,
        currency_symbol=base["settings"].get("currency_symbol") or DEFAULT_CURRENCY_SYMBOL,
        image_url_getter=raw.get("getProductImageUrl") if callable(raw.get("getProductImageUrl")) else None,
    )

    products = format_products(raw.get("products"), fmt)
    all_raw = raw.get("allProducts") or []
    all_products = format_products(all_raw, fmt) if all_raw else products

    category = raw.get("category")
    if isinstance(category, Mapping):
        category = {**category, "name": get_category_name(category, fmt.language) or category.get("name")}
    else:
        category = None

    total = raw.get("filteredProductsCount") or len(products)
    pagination = build_pagination(raw.get("currentPage"), raw.get("totalPages"), raw.get("itemsPerPage"), total)

    return {
        **base,
        **raw,
        "category": category,
        "products": products,
        "allProducts": all_products,
        "filters": format_filters_data(
            raw.get("filters"),
            raw.get("filterableAttributes"),
            fmt.language,
            all_products,
            raw.get("selectedFilters"),
        ),
        "filterableAttributes": raw.get("filterableAttributes") or [],
        "breadcrumbs": raw.get("breadcrumbs") or [],
        "selectedFilters": raw.get("selectedFilters") or {},
        "priceRange": raw.get("priceRange") or {},
        "categories": raw.get("categories") or [],
        "pagination": pagination,
    }


def _product_context(raw: Mapping[str, Any], base: VariableContext) -> VariableContext:
    fmt = ProductFormatContext(
        store=base["store"],
        settings=base["settings"],
        language=base["currentLanguage"],
        translations=base["translations"],
        currency_symbol=base["settings"].get("currency_symbol") or DEFAULT_CURRENCY_SYMBOL,
    )
    product = raw.get("product")
    return {
        **base,
        **raw,
        "product": format_product(product, fmt) if isinstance(product, Mapping) else None,
        "relatedProducts": format_products(raw.get("relatedProducts"), fmt),
        "breadcrumbs": raw.get("breadcrumbs") or [],
    }


def _cart_context(raw: Mapping[str, Any], base: VariableContext) -> VariableContext:
    symbol = base["settings"].get("currency_symbol") or raw.get("currencySymbol") or DEFAULT_CURRENCY_SYMBOL
    return {**base, **raw, **build_cart_data(raw, base["currentLanguage"], symbol)}


def build_context(
    page_type: Union[PageType, str],
    raw_data: Optional[Mapping[str, Any]],
    store: Optional[Mapping[str, Any]],
    settings: Optional[Mapping[str, Any]],
    *,
    translations: Optional[Mapping[str, Any]] = None,
    product_labels: Optional[List[Mapping[str, Any]]] = None,
    taxes: Optional[List[Mapping[str, Any]]] = None,
    selected_country: Optional[str] = None,
    language: str = DEFAULT_LANG,
) -> VariableContext:
    """
    Build the variable context of one page.

    Args:
        page_type: category, product, cart, header, or a generic page
            (checkout, success, account, login)
        raw_data: Collaborator data for the page
        store: Store record
        settings: Store settings (defaults are filled in)
        translations: Global translation table of the active language
            (``stock`` label texts, ``common`` plural words); UI strings for
            {{t}} come from ``settings.ui_translations``
        product_labels: Label catalog for category listings
        taxes: Tax rules (kept in the context for templates that show them)
        selected_country: Shopper country
        language: Active locale

    Returns:
        New mapping; unknown page types get the base context merged with
        the raw data.
    """
    raw: Mapping[str, Any] = raw_data or {}
    enriched = enrich_settings(settings, store)
    base = _base_context(store, enriched, language, translations)

    kind = page_type if isinstance(page_type, PageType) else PageType.parse(str(page_type))
    if kind is None:
        logger.warning(f"Unknown page type: {page_type}, returning base context")
        return {**base, **raw}

    logger.debug(f"Building {kind.value} context ({len(raw)} raw keys, language={language})")

    if kind == PageType.CATEGORY:
        ctx = _category_context(raw, base, list(product_labels or []))
    elif kind == PageType.PRODUCT:
        ctx = _product_context(raw, base)
    elif kind == PageType.CART:
        ctx = _cart_context(raw, base)
    elif kind == PageType.HEADER:
        ctx = {**base, **build_header_data(raw, store)}
    else:
        ctx = {**base, **raw}

    if taxes is not None:
        ctx.setdefault("taxes", list(taxes))
    if selected_country is not None:
        ctx.setdefault("selectedCountry", selected_country)
    return ctx


__all__ = ["build_context"]
