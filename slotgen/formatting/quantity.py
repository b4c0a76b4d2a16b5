"""
Quantity placeholders in stock label templates.

Label templates are plain text with ``{...}`` blocks that may nest:

    "In Stock, {only {quantity} {item} left}"

Known placeholders are ``{quantity}`` and the plural-aware words
``{item}``, ``{unit}``, ``{piece}`` (plus their plural spellings).

With a known quantity the placeholders are substituted and wrapper braces
are unwrapped. With an unknown or hidden quantity every top-level block that
mentions a placeholder is dropped together with its text. Both directions
work on outermost blocks found by depth counting and repeat until the label
stops changing (at most MAX_PASSES times) so arbitrarily deep wrappers are
resolved.
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Mapping, Optional, Tuple

MAX_PASSES = 10

PLURAL_WORDS = {
    "item": "items",
    "unit": "units",
    "piece": "pieces",
}

KNOWN_PLACEHOLDERS = {"quantity", *PLURAL_WORDS.keys(), *PLURAL_WORDS.values()}

_PLACEHOLDER_RE = re.compile(r"\{(quantity|items?|units?|pieces?)\}", re.IGNORECASE)
_WORD_TO_SINGULAR = {**{s: s for s in PLURAL_WORDS}, **{p: s for s, p in PLURAL_WORDS.items()}}


def _outer_blocks(label: str) -> List[Tuple[int, int]]:
    """
    Start/end indexes of the outermost ``{...}`` blocks.

    A closing brace without an opening one is ordinary text.
    """
    blocks: List[Tuple[int, int]] = []
    depth = 0
    start = -1
    for i, ch in enumerate(label):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                blocks.append((start, i))
                start = -1
    return blocks


def _rewrite_blocks(label: str, rewrite: Callable[[str], str]) -> str:
    """Replace each outermost block (braces included) with rewrite(inner content)."""
    out: List[str] = []
    last = 0
    for start, end in _outer_blocks(label):
        out.append(label[last:start])
        out.append(rewrite(label[start + 1:end]))
        last = end + 1
    out.append(label[last:])
    return "".join(out)


def plural_word(singular: str, quantity: Any, translations: Optional[Mapping[str, Any]] = None) -> str:
    """
    Singular or plural form of a counting word.

    Uses ``translations['common'][singular|plural]`` when both forms are
    translated, otherwise English.
    """
    plural = PLURAL_WORDS.get(singular, singular)
    common = (translations or {}).get("common") if isinstance(translations, Mapping) else None
    if isinstance(common, Mapping):
        one, many = common.get(singular), common.get(plural)
        if one and many:
            return str(one) if quantity == 1 else str(many)
    return singular if quantity == 1 else plural


def _substitute(text: str, quantity: Any, translations: Optional[Mapping[str, Any]]) -> str:
    def repl(match: "re.Match[str]") -> str:
        name = match.group(1).lower()
        if name == "quantity":
            return _quantity_text(quantity)
        return plural_word(_WORD_TO_SINGULAR[name], quantity, translations)

    return _PLACEHOLDER_RE.sub(repl, text)


def _quantity_text(quantity: Any) -> str:
    if isinstance(quantity, float) and quantity.is_integer():
        return str(int(quantity))
    return str(quantity)


def _strip_quantity_blocks(label: str) -> str:
    cleaned = label
    for _ in range(MAX_PASSES):
        previous = cleaned
        cleaned = _rewrite_blocks(
            cleaned,
            lambda content: "" if _PLACEHOLDER_RE.search(content) else "{" + content + "}",
        )
        cleaned = _PLACEHOLDER_RE.sub("", cleaned)
        if cleaned == previous:
            break

    cleaned = re.sub(r"\s+", " ", cleaned)
    cleaned = re.sub(r",\s*$", "", cleaned)
    return cleaned.strip()


def _inject_quantity(label: str, quantity: Any, translations: Optional[Mapping[str, Any]]) -> str:
    def unwrap(content: str) -> str:
        if content.lower() in KNOWN_PLACEHOLDERS:
            # bare placeholder, substituted below
            return "{" + content + "}"
        if "{" in content:
            return _substitute(content, quantity, translations)
        return content

    processed = label
    for _ in range(MAX_PASSES):
        previous = processed
        processed = _rewrite_blocks(processed, unwrap)
        processed = _substitute(processed, quantity, translations)
        if processed == previous:
            break
    return processed


def process_label(
    label: Optional[str],
    quantity: Optional[Any],
    translations: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Resolve quantity placeholders in a stock label template.

    Args:
        label: Label template, e.g. "{only {quantity} {item} left}"
        quantity: Stock quantity, or None when unknown/hidden
        translations: Global translation table (``common`` group is used for plurals)

    Returns:
        Final label text

    Examples:
        process_label("In Stock, {only {quantity} {item} left}", 3) -> "In Stock, only 3 items left"
        process_label("In Stock, {only {quantity} {item} left}", None) -> "In Stock"
    """
    if not label:
        return ""
    if quantity is None:
        return _strip_quantity_blocks(label)
    return _inject_quantity(label, quantity, translations)


__all__ = ["process_label", "plural_word", "MAX_PASSES"]
