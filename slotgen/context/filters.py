"""
Layered navigation data: price filter and attribute filters.

Price filter payloads are a tagged union keyed by ``kind``:

    {"kind": "slider", "min": 0, "max": 500}
    {"kind": "rangeList", "ranges": [{"value": "0-50", "label": "$0 - $50"}, "50-100"]}
    {"kind": "map", "values": {"0-50": "$0 - $50"}}

Producers that predate the tag still send a bare list, a bare mapping or a
``{"type": "slider"}`` object; infer_price_filter_kind tags those once at
the boundary and the rest of the code only looks at the tag.

Attribute options are counted over the full (unfiltered) product list,
options without products are dropped and the rest ordered by ``sort_order``
(999 when missing). Ties keep the producer's option order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..types import DEFAULT_LANG, PriceFilter, PriceFilterKind, PriceRange

logger = logging.getLogger(__name__)

DEFAULT_SORT_ORDER = 999
DEFAULT_FILTER_TYPE = "multiselect"


def infer_price_filter_kind(payload: Any) -> Optional[Tuple[PriceFilterKind, Any]]:
    """
    Tag an untagged price filter payload.

    Returns:
        (kind, payload in tagged form) or None when the payload is unusable
    """
    if isinstance(payload, list):
        return PriceFilterKind.RANGE_LIST, {"kind": PriceFilterKind.RANGE_LIST.value, "ranges": payload}
    if isinstance(payload, Mapping):
        if payload.get("type") == "slider" and payload.get("min") is not None:
            return PriceFilterKind.SLIDER, {**payload, "kind": PriceFilterKind.SLIDER.value}
        return PriceFilterKind.MAP, {"kind": PriceFilterKind.MAP.value, "values": dict(payload)}
    return None


def _range_from_item(item: Any) -> PriceRange:
    if isinstance(item, Mapping):
        return PriceRange(value=item.get("value") or item.get("label"), label=item.get("label") or item.get("value"))
    return PriceRange(value=item, label=item)


def normalize_price_filter(payload: Any) -> Optional[PriceFilter]:
    """
    One PriceFilter for any supported payload; None when there is no price filter.
    """
    if not payload:
        return None

    kind: Optional[PriceFilterKind] = None
    if isinstance(payload, Mapping) and payload.get("kind"):
        try:
            kind = PriceFilterKind(payload["kind"])
        except ValueError:
            logger.warning(f"Unknown price filter kind '{payload['kind']}', ignoring price filter")
            return None
    else:
        inferred = infer_price_filter_kind(payload)
        if inferred is None:
            return None
        kind, payload = inferred

    if kind == PriceFilterKind.SLIDER:
        return PriceFilter(kind=kind, min=payload.get("min"), max=payload.get("max"))

    if kind == PriceFilterKind.RANGE_LIST:
        return PriceFilter(kind=kind, ranges=[_range_from_item(item) for item in payload.get("ranges") or []])

    values = payload.get("values") or {}
    return PriceFilter(
        kind=kind,
        ranges=[PriceRange(value=value, label=label if isinstance(label, str) else value) for value, label in values.items()],
    )


def attribute_label(attr: Mapping[str, Any], language: Optional[str]) -> str:
    """Backend label, else translated label (language, then English), else name/code."""
    if attr.get("label"):
        return str(attr["label"])
    translations = attr.get("translations")
    if isinstance(translations, Mapping):
        for lang in (language, DEFAULT_LANG):
            entry = translations.get(lang) if lang else None
            if isinstance(entry, Mapping) and entry.get("label"):
                return str(entry["label"])
    return str(attr.get("name") or attr.get("code") or "")


def _product_attribute_value(product: Mapping[str, Any], code: str) -> Optional[str]:
    attributes = product.get("attributes")
    if not isinstance(attributes, list):
        return None
    for entry in attributes:
        if isinstance(entry, Mapping) and entry.get("code") == code:
            return str(entry.get("rawValue") or entry.get("value") or "")
    return None


def count_products_with_value(products: Iterable[Mapping[str, Any]], code: str, value: str) -> int:
    """Products whose attribute ``code`` has the value (raw code preferred over label)."""
    return sum(1 for p in products if _product_attribute_value(p, code) == value)


def format_attribute_filter(
    attr: Mapping[str, Any],
    filters: Mapping[str, Any],
    language: Optional[str],
    all_products: List[Mapping[str, Any]],
    selected_filters: Mapping[str, Any],
) -> Dict[str, Any]:
    code = attr.get("code") or attr.get("name")
    filter_type = attr.get("filter_type") or DEFAULT_FILTER_TYPE

    filter_data = filters.get(code)
    value_codes = filter_data.get("options") if isinstance(filter_data, Mapping) else None
    known_values = {
        str(v.get("code")): v for v in (attr.get("values") or []) if isinstance(v, Mapping)
    }
    selected = selected_filters.get(code) or []

    options: List[Dict[str, Any]] = []
    for raw_code in value_codes or []:
        value_code = str(raw_code)
        known = known_values.get(value_code, {})
        sort_order = known.get("sort_order")
        count = count_products_with_value(all_products, code, value_code)
        if count <= 0:
            continue
        options.append({
            "value": value_code,
            "label": known.get("value") or value_code,
            "count": count,
            "active": value_code in selected,
            "attributeCode": code,
            "sort_order": sort_order if sort_order is not None else DEFAULT_SORT_ORDER,
            "filter_type": filter_type,
        })

    # list.sort is stable: equal sort_order keeps option order
    options.sort(key=lambda o: o["sort_order"])

    return {
        "code": code,
        "label": attribute_label(attr, language),
        "filter_type": filter_type,
        "options": options,
    }


def format_filters_data(
    filters: Optional[Mapping[str, Any]],
    filterable_attributes: Optional[Iterable[Mapping[str, Any]]],
    language: Optional[str],
    all_products: Optional[Iterable[Mapping[str, Any]]] = None,
    selected_filters: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Normalized filter data for the layered navigation slot.

    Returns:
        {"price": {...} | None, "attributes": [...], "raw": filters}
    """
    filters = filters or {}
    products = [p for p in (all_products or []) if isinstance(p, Mapping)]
    selected_filters = selected_filters or {}

    price_filter = normalize_price_filter(filters.get("price"))

    attributes = [
        format_attribute_filter(attr, filters, language, products, selected_filters)
        for attr in (filterable_attributes or [])
        if isinstance(attr, Mapping)
    ]

    return {
        "price": price_filter.to_dict() if price_filter else None,
        "attributes": [a for a in attributes if a["options"]],
        "raw": filters,
    }


__all__ = [
    "infer_price_filter_kind",
    "normalize_price_filter",
    "attribute_label",
    "count_products_with_value",
    "format_attribute_filter",
    "format_filters_data",
]
