"""
Defaults applied to store settings before rendering.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..formatting.price import get_currency_symbol

DEFAULT_MAX_VISIBLE_ATTRIBUTES = 5

STOCK_DEFAULTS: Dict[str, Any] = {
    "hide_stock_quantity": False,
    "display_low_stock_threshold": 0,
}


def enrich_settings(settings: Optional[Mapping[str, Any]], store: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Copy of the settings with rendering defaults filled in.

    - collapse_filters: False when absent
    - max_visible_attributes: 5 when absent or zero
    - hide_stock_quantity / display_low_stock_threshold: stock defaults
    - currency_symbol: derived from currency_code or the store currency
      when not configured
    """
    result: Dict[str, Any] = dict(settings or {})

    if result.get("collapse_filters") is None:
        result["collapse_filters"] = False
    if not result.get("max_visible_attributes"):
        result["max_visible_attributes"] = DEFAULT_MAX_VISIBLE_ATTRIBUTES

    for key, default in STOCK_DEFAULTS.items():
        if result.get(key) is None:
            result[key] = default

    if not result.get("currency_symbol"):
        code = result.get("currency_code")
        if not code and isinstance(store, Mapping):
            code = store.get("currency")
        if code:
            result["currency_symbol"] = get_currency_symbol(code)

    return result


__all__ = ["enrich_settings", "STOCK_DEFAULTS", "DEFAULT_MAX_VISIBLE_ATTRIBUTES"]
