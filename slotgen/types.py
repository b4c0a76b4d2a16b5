from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, NewType, Optional


# ---- Aliases for clarity ----
LangCode = NewType("LangCode", str)  # "en", "nl", "fr" ...
DEFAULT_LANG: LangCode = LangCode("en")
RawData = Mapping[str, Any]  # collaborator payload (products, cart, user, ...)
VariableContext = Dict[str, Any]  # what templates are evaluated against

# Context keys an item in {{#each}} may shadow (see RenderOptions).
RESERVED_CONTEXT_KEYS = ("store", "settings", "translations", "currentLanguage", "this")


class PageType(str, enum.Enum):
    """Page types the context builder knows how to prepare."""
    CATEGORY = "category"
    PRODUCT = "product"
    CART = "cart"
    HEADER = "header"
    CHECKOUT = "checkout"
    SUCCESS = "success"
    ACCOUNT = "account"
    LOGIN = "login"

    @classmethod
    def parse(cls, value: str) -> Optional["PageType"]:
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_generic(self) -> bool:
        return self in (PageType.CHECKOUT, PageType.SUCCESS, PageType.ACCOUNT, PageType.LOGIN)


class PriceFilterKind(str, enum.Enum):
    """Shapes a price filter payload can take."""
    SLIDER = "slider"
    RANGE_LIST = "rangeList"
    MAP = "map"


@dataclass(frozen=True)
class RenderOptions:
    """
    Knobs of the template interpreter.

    language: explicit active locale; when None the context's
        ``currentLanguage`` is used, then "en".
    item_keys_shadow_context: keep the historic merge order in loops where
        an item's own keys override reserved context keys (an item with a
        ``settings`` key hides the store settings inside the loop body).
    max_loop_depth: nested {{#each}} expansion limit.
    """
    language: Optional[str] = None
    item_keys_shadow_context: bool = True
    max_loop_depth: int = 10


@dataclass(frozen=True)
class StockLabel:
    text: str
    text_color: str
    bg_color: str

    def style(self) -> Dict[str, str]:
        """Inline style mapping for a badge element."""
        return {"backgroundColor": self.bg_color, "color": self.text_color}

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "textColor": self.text_color, "bgColor": self.bg_color}


@dataclass(frozen=True)
class PriceDisplay:
    """
    Which of a product's prices to show.

    display_price: the price the customer pays.
    original_price: the crossed-out price when the product is on sale.
    """
    display_price: float
    original_price: Optional[float]
    has_compare_price: bool
    is_sale: bool


@dataclass(frozen=True)
class PriceRange:
    value: Any
    label: Any
    count: int = 0
    active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "label": self.label, "count": self.count, "active": self.active}


@dataclass(frozen=True)
class PriceFilter:
    """Normalized price filter; slider bounds or a list of ranges depending on kind."""
    kind: PriceFilterKind
    min: Optional[float] = None
    max: Optional[float] = None
    ranges: Optional[List[PriceRange]] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == PriceFilterKind.SLIDER:
            return {
                "min": self.min,
                "max": self.max,
                "currentMin": self.min,
                "currentMax": self.max,
                "type": "slider",
            }
        return {"ranges": [r.to_dict() for r in (self.ranges or [])]}
