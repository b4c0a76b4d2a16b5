"""
Localized names of catalog entities.

Entities carry their own translations: ``{"translations": {"nl": {"name": ...}}}``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..types import DEFAULT_LANG


def get_translated_field(entity: Optional[Mapping[str, Any]], field: str, language: Optional[str]) -> Optional[str]:
    """Field of the entity in the language, else in English, else None."""
    if not isinstance(entity, Mapping):
        return None
    translations = entity.get("translations")
    if not isinstance(translations, Mapping):
        return None
    for lang in (language, DEFAULT_LANG):
        entry = translations.get(lang) if lang else None
        if isinstance(entry, Mapping) and entry.get(field):
            return str(entry[field])
    return None


def get_product_name(product: Optional[Mapping[str, Any]], language: Optional[str]) -> Optional[str]:
    return get_translated_field(product, "name", language)


def get_category_name(category: Optional[Mapping[str, Any]], language: Optional[str]) -> Optional[str]:
    return get_translated_field(category, "name", language)


__all__ = ["get_translated_field", "get_product_name", "get_category_name"]
