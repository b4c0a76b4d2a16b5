from .builder import build_context
from .cart import format_cart_items, format_cart_totals
from .filters import format_filters_data, infer_price_filter_kind, normalize_price_filter
from .pagination import build_pagination, pagination_count_text
from .products import ProductFormatContext, format_product, format_products
from .translation import get_category_name, get_product_name

__all__ = [
    "build_context",
    "format_cart_items",
    "format_cart_totals",
    "format_filters_data",
    "infer_price_filter_kind",
    "normalize_price_filter",
    "build_pagination",
    "pagination_count_text",
    "ProductFormatContext",
    "format_product",
    "format_products",
    "get_category_name",
    "get_product_name",
]
