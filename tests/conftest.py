from __future__ import annotations

from pathlib import Path

import pytest

from slotgen.template import TemplateProcessor

from tests.infrastructure.file_utils import write_yaml_config


@pytest.fixture
def store():
    return {
        "id": "st-1",
        "slug": "acme",
        "name": "Acme Outfitters",
        "logo_url": "https://cdn.example.com/acme.png",
        "currency": "EUR",
    }


@pytest.fixture
def settings():
    return {
        "currency_symbol": "$",
        "stock_settings": {
            "show_stock_label": True,
            "in_stock_label": "In Stock",
            "out_of_stock_label": "Out of Stock",
            "low_stock_label": "Only {quantity} left!",
        },
        "display_low_stock_threshold": 5,
        "ui_translations": {
            "en": {"add_to_cart": "Add to cart", "cart": {"empty": "Your cart is empty"}},
            "nl": {"add_to_cart": "In winkelwagen"},
        },
    }


@pytest.fixture
def products():
    return [
        {
            "id": "p1",
            "slug": "trail-shoe",
            "name": "Trail Shoe",
            "price": 120,
            "compare_price": 99,
            "stock_quantity": 12,
            "manage_stock": True,
            "is_new": True,
            "images": [{"url": "https://cdn.example.com/shoe.jpg"}],
            "translations": {"nl": {"name": "Trailschoen"}},
            "attributes": [{"code": "color", "value": "Red", "rawValue": "red"}],
        },
        {
            "id": "p2",
            "slug": "rain-jacket",
            "name": "Rain Jacket",
            "price": 80,
            "stock_quantity": 0,
            "manage_stock": True,
            "attributes": [{"code": "color", "value": "Blue", "rawValue": "blue"}],
        },
        {
            "id": "p3",
            "slug": "beanie",
            "name": "Beanie",
            "price": 15.5,
            "stock_quantity": 3,
            "manage_stock": True,
            "is_featured": True,
            "attributes": [{"code": "color", "value": "Red", "rawValue": "red"}],
        },
    ]


@pytest.fixture
def processor():
    return TemplateProcessor()


@pytest.fixture
def cfgproj(tmp_path: Path, store):
    """Project root with a slot-cfg/ directory."""
    write_yaml_config(tmp_path / "slot-cfg", {
        "store.yaml": """
            slug: acme
            name: Acme Outfitters
            currency: EUR
        """,
        "settings.yaml": """
            currency_symbol: "€"
            ui_translations:
              en:
                add_to_cart: Add to cart
              nl:
                add_to_cart: In winkelwagen
        """,
        "translations.yaml": """
            stock:
              in_stock_label: Available
            common:
              item: item
              items: items
        """,
        "labels.yaml": """
            - type: new
              text: NEW
              background_color: "#22c55e"
            - type: sale
              text: SALE
        """,
    })
    return tmp_path
