"""
Tests for quantity placeholders in stock label templates.
"""

import pytest

from slotgen.formatting.quantity import plural_word, process_label


class TestInjectQuantity:

    @pytest.mark.parametrize("label, quantity, expected", [
        ("Only {quantity} left!", 3, "Only 3 left!"),
        ("Only {quantity} {item} left", 3, "Only 3 items left"),
        ("Only {quantity} {item} left", 1, "Only 1 item left"),
        ("In Stock, {only {quantity} {unit} left}", 5, "In Stock, only 5 units left"),
        ("{Hurry, {{quantity} {piece}} remaining}", 2, "Hurry, 2 pieces remaining"),
        ("Stock: {quantity} {items}", 1, "Stock: 1 item"),
        ("{QUANTITY} {Item}", 4, "4 items"),
        ("In Stock", 7, "In Stock"),
    ])
    def test_substitution(self, label, quantity, expected):
        assert process_label(label, quantity) == expected

    def test_float_quantity(self):
        assert process_label("{quantity} left", 2.0) == "2 left"

    def test_stray_closing_brace_is_text(self):
        assert process_label("Only {quantity} left }", 3) == "Only 3 left }"


class TestStripQuantity:

    @pytest.mark.parametrize("label, expected", [
        ("In Stock, {only {quantity} {item} left}", "In Stock"),
        ("In Stock ({quantity} available)", "In Stock ( available)"),
        ("{Only {quantity} left!}", ""),
        ("Available {quantity}", "Available"),
        ("In   Stock", "In Stock"),
        ("In Stock {ships today}", "In Stock {ships today}"),
    ])
    def test_unknown_quantity(self, label, expected):
        assert process_label(label, None) == expected

    def test_deep_nesting(self):
        label = "Ready" + "{a" * 5 + "{quantity}" + "}" * 5
        assert process_label(label, None) == "Ready"


def test_empty_label():
    assert process_label("", 3) == ""
    assert process_label(None, None) == ""


def test_plural_word_translations():
    translations = {"common": {"unit": "Einheit", "units": "Einheiten"}}
    assert plural_word("unit", 1, translations) == "Einheit"
    assert plural_word("unit", 3, translations) == "Einheiten"
    # only one form translated: English
    assert plural_word("item", 3, {"common": {"item": "Stück"}}) == "items"
