from __future__ import annotations

import math
from typing import Any, Dict, Optional


def page_range(current_page: int, items_per_page: int, total: int) -> tuple[int, int]:
    """1-based first and last index shown on the page; (0, 0) for an empty list."""
    if total <= 0:
        return 0, 0
    start = (current_page - 1) * items_per_page + 1
    end = min(current_page * items_per_page, total)
    return start, end


def pagination_count_text(current_page: int, items_per_page: int, total: int) -> str:
    """
    "No products found", "8 products", or "11-20 of 24 products".
    """
    if total <= 0:
        return "No products found"

    word = "product" if total == 1 else "products"
    start, end = page_range(current_page, items_per_page, total)
    if start == 1 and end == total:
        return f"{total} {word}"
    return f"{start}-{end} of {total} {word}"


def build_pagination(
    current_page: Optional[int],
    total_pages: Optional[int],
    items_per_page: Optional[int],
    total_products: int,
) -> Dict[str, Any]:
    """
    Pagination block of the category context.

    A missing page defaults to 1 and a missing page size to "everything on
    one page".
    """
    page = current_page or 1
    per_page = items_per_page or max(total_products, 1)
    start, end = page_range(page, per_page, total_products)

    return {
        "currentPage": page,
        "totalPages": total_pages if total_pages is not None else max(1, math.ceil(total_products / per_page)),
        "itemsPerPage": per_page,
        "totalProducts": total_products,
        "startIndex": start,
        "endIndex": end,
        "countText": pagination_count_text(page, per_page, total_products),
    }


__all__ = ["page_range", "pagination_count_text", "build_pagination"]
