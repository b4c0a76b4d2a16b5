from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from ..errors import UnknownPageError

PUBLIC_PREFIX = "/public"

# Single source of truth for storefront routes (page name -> path segment).
PAGES = {
    "STOREFRONT": "",
    "SHOP": "shop",
    "PRODUCT_DETAIL": "product",
    "PRODUCT_SHORT": "p",
    "CATEGORY": "category",
    "CATEGORY_SHORT": "c",
    "BRAND": "brand",
    "COLLECTION": "collection",
    "SEARCH": "search",
    "CART": "cart",
    "CHECKOUT": "checkout",
    "ORDER_SUCCESS": "order-success",
    "THANK_YOU": "thank-you",
    "CUSTOMER_AUTH": "login",
    "CUSTOMER_REGISTER": "register",
    "CUSTOMER_DASHBOARD": "dashboard",
    "ACCOUNT": "account",
    "CUSTOMER_ORDERS": "orders",
    "CUSTOMER_PROFILE": "profile",
    "CMS_PAGE": "cms-page",
    "SITEMAP": "sitemap",
}


def add_url_params(base_url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append query parameters, skipping None and empty values."""
    if not params:
        return base_url
    kept = [(k, _param_text(v)) for k, v in params.items() if v is not None and v != ""]
    if not kept:
        return base_url
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}{urlencode(kept)}"


def _param_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def create_public_url(store_slug: Any, page_name: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Storefront URL of a named page: ``/public/<store>`` or ``/public/<store>/<page>``.

    Raises:
        UnknownPageError: page_name is not a known route
    """
    key = page_name.upper()
    if key not in PAGES:
        raise UnknownPageError(page_name, hint=f"expected one of {', '.join(sorted(PAGES))}")
    segment = PAGES[key]
    base = f"{PUBLIC_PREFIX}/{store_slug}/{segment}" if segment else f"{PUBLIC_PREFIX}/{store_slug}"
    return add_url_params(base, params)


def create_product_url(
    store_slug: Any,
    product_slug: Any,
    params: Optional[Mapping[str, Any]] = None,
    short: bool = False,
) -> str:
    page = PAGES["PRODUCT_SHORT"] if short else PAGES["PRODUCT_DETAIL"]
    return add_url_params(f"{PUBLIC_PREFIX}/{store_slug}/{page}/{product_slug}", params)


def create_category_url(
    store_slug: Any,
    category_slug: Any,
    params: Optional[Mapping[str, Any]] = None,
    short: bool = False,
) -> str:
    page = PAGES["CATEGORY_SHORT"] if short else PAGES["CATEGORY"]
    return add_url_params(f"{PUBLIC_PREFIX}/{store_slug}/{page}/{category_slug}", params)


def store_identifier(store: Optional[Mapping[str, Any]]) -> Optional[Any]:
    """Identifier used in public URLs: public store code, else slug, else code."""
    if not isinstance(store, Mapping):
        return None
    return store.get("public_storecode") or store.get("slug") or store.get("code")


__all__ = [
    "PUBLIC_PREFIX",
    "PAGES",
    "add_url_params",
    "create_public_url",
    "create_product_url",
    "create_category_url",
    "store_identifier",
]
