"""
Tests for stock labels and availability.
"""

import math

import pytest

from slotgen.formatting.stock import (
    DEFAULT_COLORS,
    get_available_quantity,
    get_stock_label,
    get_stock_label_style,
    is_product_out_of_stock,
)


@pytest.fixture
def stock_settings():
    return {
        "stock_settings": {
            "in_stock_label": "In Stock, {only {quantity} {item} left}",
            "out_of_stock_label": "Sold out",
            "low_stock_label": "Only {quantity} {item} left",
        },
        "display_low_stock_threshold": 0,
    }


class TestStockLabel:

    def test_out_of_stock(self, stock_settings):
        label = get_stock_label({"stock_quantity": 0}, stock_settings)
        assert label.text == "Sold out"
        assert label.text_color == DEFAULT_COLORS["out_of_stock_text_color"]
        assert label.bg_color == DEFAULT_COLORS["out_of_stock_bg_color"]

    def test_infinite_stock_strips_quantity(self, stock_settings):
        label = get_stock_label({"infinite_stock": True, "stock_quantity": 0}, stock_settings)
        assert label.text == "In Stock"
        assert "{" not in label.text

    def test_low_stock_product_threshold(self, stock_settings):
        label = get_stock_label({"stock_quantity": 3, "low_stock_threshold": 5}, stock_settings)
        assert label.text == "Only 3 items left"
        assert label.bg_color == DEFAULT_COLORS["low_stock_bg_color"]

    def test_low_stock_singular(self, stock_settings):
        label = get_stock_label({"stock_quantity": 1, "low_stock_threshold": 5}, stock_settings)
        assert label.text == "Only 1 item left"

    def test_low_stock_store_threshold(self, stock_settings):
        stock_settings["display_low_stock_threshold"] = 10
        label = get_stock_label({"stock_quantity": 10}, stock_settings)
        assert label.text == "Only 10 items left"

    def test_in_stock_with_quantity(self, stock_settings):
        label = get_stock_label({"stock_quantity": 40}, stock_settings)
        assert label.text == "In Stock, only 40 items left"
        assert label.text_color == DEFAULT_COLORS["in_stock_text_color"]

    def test_hidden_quantity(self, stock_settings):
        stock_settings["hide_stock_quantity"] = True
        label = get_stock_label({"stock_quantity": 40}, stock_settings)
        assert label.text == "In Stock"

    def test_unknown_quantity_is_in_stock(self, stock_settings):
        label = get_stock_label({}, stock_settings)
        assert label.text == "In Stock"

    def test_disabled_labels(self, stock_settings):
        stock_settings["stock_settings"]["show_stock_label"] = False
        assert get_stock_label({"stock_quantity": 3}, stock_settings) is None
        assert get_stock_label({"stock_quantity": 3}, {"show_stock_label": False}) is None

    def test_configurable_product_has_no_label(self, stock_settings):
        assert get_stock_label({"type": "configurable", "stock_quantity": 0}, stock_settings) is None

    def test_defaults_without_settings(self):
        assert get_stock_label({"stock_quantity": 0}).text == "Out of Stock"
        assert get_stock_label({"stock_quantity": 9}).text == "In Stock"

    def test_translations_override_settings(self, stock_settings):
        translations = {"stock": {"out_of_stock_label": "Uitverkocht"}}
        label = get_stock_label({"stock_quantity": 0}, stock_settings, translations)
        assert label.text == "Uitverkocht"

    def test_translated_plural_words(self, stock_settings):
        translations = {"common": {"item": "stuk", "items": "stuks"}}
        label = get_stock_label({"stock_quantity": 2, "low_stock_threshold": 5}, stock_settings, translations)
        assert label.text == "Only 2 stuks left"

    def test_lang_selects_table_keyed_by_language(self, stock_settings):
        translations = {
            "en": {"stock": {"out_of_stock_label": "Gone"}},
            "nl": {"stock": {"out_of_stock_label": "Uitverkocht"}},
        }
        assert get_stock_label({"stock_quantity": 0}, stock_settings, translations, lang="nl").text == "Uitverkocht"
        assert get_stock_label({"stock_quantity": 0}, stock_settings, translations, lang="en").text == "Gone"

    def test_lang_ignored_for_single_language_table(self, stock_settings):
        translations = {"stock": {"out_of_stock_label": "Uitverkocht"}}
        label = get_stock_label({"stock_quantity": 0}, stock_settings, translations, lang="nl")
        assert label.text == "Uitverkocht"

    def test_theme_colors(self, stock_settings):
        stock_settings["stock_settings"]["out_of_stock_text_color"] = "#000000"
        label = get_stock_label({"stock_quantity": 0}, stock_settings)
        assert label.text_color == "#000000"
        assert get_stock_label_style({"stock_quantity": 0}, stock_settings) == {
            "backgroundColor": DEFAULT_COLORS["out_of_stock_bg_color"],
            "color": "#000000",
        }

    def test_style_empty_when_hidden(self):
        assert get_stock_label_style({"type": "configurable"}) == {}


class TestAvailability:

    def test_out_of_stock_rules(self):
        assert is_product_out_of_stock({"manage_stock": True, "stock_quantity": 0})
        assert not is_product_out_of_stock({"manage_stock": True, "stock_quantity": 0, "allow_backorders": True})
        assert not is_product_out_of_stock({"manage_stock": False, "stock_quantity": 0})
        assert not is_product_out_of_stock({"infinite_stock": True, "manage_stock": True, "stock_quantity": 0})
        assert not is_product_out_of_stock({"manage_stock": True, "stock_quantity": 4})

    def test_available_quantity(self):
        assert get_available_quantity({"manage_stock": True, "stock_quantity": 4}) == 4
        assert get_available_quantity({"manage_stock": True, "stock_quantity": -2}) == 0
        assert get_available_quantity({"manage_stock": False}) == math.inf
        assert get_available_quantity({"manage_stock": True, "allow_backorders": True}) == math.inf
        assert get_available_quantity({"infinite_stock": True}) == math.inf
