from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from .resolver import traverse
from ..types import DEFAULT_LANG

_WORD_START_RE = re.compile(r"\b\w")


def humanize_key(key: str) -> str:
    """'add_to_cart' -> 'Add To Cart'; last resort for untranslated keys."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), key.replace("_", " "))


def lookup_translation(table: Any, key: str) -> Optional[str]:
    """Dotted key lookup in one language table; None when missing or empty."""
    if not isinstance(table, Mapping):
        return None
    found = traverse(table, key.split("."))
    if found is None or found == "" or isinstance(found, (Mapping, list)):
        return None
    return str(found)


def ui_translations_of(scope: Mapping[str, Any]) -> Mapping[str, Any]:
    """``settings.ui_translations`` of a scope ({lang: {key: text}})."""
    settings = scope.get("settings")
    if isinstance(settings, Mapping) and isinstance(settings.get("ui_translations"), Mapping):
        return settings["ui_translations"]
    return {}


def translate(key: str, ui_translations: Mapping[str, Any], language: Optional[str]) -> str:
    """
    UI string for a key.

    Order: active language, then English, then the humanized key.
    """
    language = language or DEFAULT_LANG
    text = lookup_translation(ui_translations.get(language), key)
    if text is None and language != DEFAULT_LANG:
        text = lookup_translation(ui_translations.get(DEFAULT_LANG), key)
    if text is None:
        text = humanize_key(key)
    return text


__all__ = ["humanize_key", "lookup_translation", "ui_translations_of", "translate"]
