from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..formatting.urls import create_public_url

PASS_THROUGH_KEYS = (
    "userLoading",
    "currentLanguage",
    "selectedCountry",
    "mobileMenuOpen",
    "mobileSearchOpen",
)


def build_header_data(raw: Mapping[str, Any], store: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """User, navigation and store identity fields of the header slot."""
    user = raw.get("user")
    user = user if isinstance(user, Mapping) else None
    store = store if isinstance(store, Mapping) else {}

    data: Dict[str, Any] = {
        "user": user,
        "user_name": (user.get("name") or user.get("email") or "") if user else "",
        "user_email": (user.get("email") or "") if user else "",
        "is_logged_in": user is not None,
        "categories": raw.get("categories") or [],
        "languages": raw.get("languages") or [],
        "store_url": create_public_url(store["slug"], "STOREFRONT") if store.get("slug") else "",
        "store_name": store.get("name") or "",
        "store_logo_url": store.get("logo_url") or "",
    }
    for key in PASS_THROUGH_KEYS:
        if key in raw:
            data[key] = raw[key]
    return data


__all__ = ["build_header_data"]
