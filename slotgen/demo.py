"""
Sample data for previewing slot templates without a live store.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional

_UNSPLASH = "https://images.unsplash.com"

_DEMO_PRODUCT: Dict[str, Any] = {
    "name": "Sample Product Name",
    "price": 1349.00,
    "price_formatted": "$1349.00",
    "compare_price": 1049.00,
    "compare_price_formatted": "$1049.00",
    "on_sale": True,
    "stock_quantity": 15,
    "stock_status": "In Stock",
    "sku": "PROD-123",
    "short_description": "This is a sample product description showing how the content will appear.",
    "labels": ["Sale", "New Arrival", "Popular"],
    "images": [
        f"{_UNSPLASH}/photo-1505740420928-5e560c06d30e?w=600&h=600&fit=crop",
        f"{_UNSPLASH}/photo-1484704849700-f032a568e944?w=150&h=150&fit=crop",
        f"{_UNSPLASH}/photo-1487215078519-e21cc028cb29?w=150&h=150&fit=crop",
        f"{_UNSPLASH}/photo-1545127398-14699f92334b?w=150&h=150&fit=crop",
    ],
    "tabs": [
        {"name": "Description", "tab_type": "text", "content": "This is a detailed product description..."},
        {"name": "Specifications", "tab_type": "attributes", "content": ""},
        {"name": "Reviews", "tab_type": "text", "content": "Customer reviews will appear here..."},
    ],
    "related_products": [
        {"name": "Smart Watch", "price": 199.99, "image": f"{_UNSPLASH}/photo-1523275335684-37898b6baf30?w=300&h=300&fit=crop"},
        {"name": "Camera Lens", "price": 349.99, "image": f"{_UNSPLASH}/photo-1606318801954-d46d46d3360a?w=300&h=300&fit=crop"},
        {"name": "Laptop", "price": 1299.99, "image": f"{_UNSPLASH}/photo-1496181133206-80ce9b88a853?w=300&h=300&fit=crop"},
    ],
    "attributes": {
        "brand": "Sample Brand",
        "material": "Premium Material",
        "color": "Blue",
        "size": "Medium",
    },
}

_CATEGORY_ITEMS = [
    ("Wireless Headphones", 89.99, "photo-1505740420928-5e560c06d30e"),
    ("Smart Watch", 199.99, "photo-1523275335684-37898b6baf30"),
    ("Camera Lens", 349.99, "photo-1606318801954-d46d46d3360a"),
    ("Laptop", 1299.99, "photo-1496181133206-80ce9b88a853"),
    ("Smartphone", 799.99, "photo-1511707171634-5f897ff02aa9"),
    ("Sunglasses", 149.99, "photo-1572635196237-14b3f281503f"),
    ("Sneakers", 119.99, "photo-1542291026-7eec264c27ff"),
    ("Backpack", 79.99, "photo-1553062407-98eeb64c6a62"),
]

_DEMO_CATEGORY: Dict[str, Any] = {
    "name": "Electronics",
    "description": "This is a sample category description.",
    "product_count": 24,
    "products": [
        {"name": name, "price": price, "image_url": f"{_UNSPLASH}/{photo}?w=400&h=400&fit=crop", "in_stock": True}
        for name, price, photo in _CATEGORY_ITEMS
    ],
}

_DEMO_CART: Dict[str, Any] = {
    "item_count": 3,
    "subtotal": 249.97,
    "tax": 20.00,
    "shipping": 9.99,
    "total": 279.96,
    "items": [
        {"name": "Cart Item 1", "price": 99.99, "quantity": 1},
        {"name": "Cart Item 2", "price": 149.98, "quantity": 2},
    ],
}

_DEMO_LABELS = [
    {"id": 1, "text": "SALE", "position": "top-right", "background_color": "#ef4444",
     "text_color": "#ffffff", "is_active": True, "priority": 1},
    {"id": 2, "text": "NEW", "position": "top-left", "background_color": "#22c55e",
     "text_color": "#ffffff", "is_active": True, "priority": 2},
    {"id": 3, "text": "POPULAR", "position": "bottom-right", "background_color": "#3b82f6",
     "text_color": "#ffffff", "is_active": True, "priority": 3},
]

_DEMO_SETTINGS: Dict[str, Any] = {
    "currency_symbol": "$",
    "display_low_stock_threshold": 10,
    "product_gallery_layout": "horizontal",
    "vertical_gallery_position": "left",
    "mobile_gallery_layout": "below",
    "stock_settings": {
        "show_stock_label": True,
        "in_stock_label": "In Stock",
        "out_of_stock_label": "Out of Stock",
        "low_stock_label": "Only {quantity} left!",
    },
    "theme": {
        "add_to_cart_button_color": "#3B82F6",
        "primary_color": "#3B82F6",
        "secondary_color": "#10B981",
    },
}


def generate_demo_data(page_type: Optional[str] = None, settings: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Preview data: a product, a category listing, a cart, a label catalog and settings.

    The same data is returned for every page type; ``settings`` entries
    override the demo settings. Each call returns fresh copies.
    """
    return {
        "product": copy.deepcopy(_DEMO_PRODUCT),
        "category": copy.deepcopy(_DEMO_CATEGORY),
        "cart": copy.deepcopy(_DEMO_CART),
        "productLabels": copy.deepcopy(_DEMO_LABELS),
        "settings": {**copy.deepcopy(_DEMO_SETTINGS), **(settings or {})},
    }


__all__ = ["generate_demo_data"]
