"""
Rendering tests for the slot template interpreter.
"""

import logging

import pytest

from slotgen.template import TemplateProcessor, process_variables
from slotgen.template.processor import CACHE_SIZE
from slotgen.template.values import STOCK_STATUS_PLACEHOLDER
from slotgen.types import RenderOptions


def render(template, context, **kwargs):
    return process_variables(template, context, **kwargs)


class TestBasics:

    def test_template_without_directives_is_unchanged(self):
        text = "Free shipping on orders over $50 {not a directive} { {x} }"
        assert render(text, {"x": 1}) == text

    def test_non_string_content_passes_through(self):
        assert render(None, {}) is None
        assert render(42, {}) == 42
        payload = {"a": 1}
        assert render(payload, {}) is payload

    def test_escaped_and_raw_variables(self):
        ctx = {"html": "<b>Bold</b>"}
        assert render("{{html}}", ctx) == "&lt;b&gt;Bold&lt;/b&gt;"
        assert render("{{{html}}}", ctx) == "<b>Bold</b>"

    def test_missing_variable_is_empty(self):
        assert render("[{{product.nope}}]", {"product": {}}) == "[]"

    def test_page_data_overrides_context(self):
        assert render("{{x}}", {"x": "base"}, page_data={"x": "page"}) == "page"

    def test_substituted_values_are_not_reinterpreted(self):
        ctx = {"name": "{{secret}}", "secret": "leak"}
        assert render("{{{name}}}", ctx) == "{{secret}}"
        assert render("{{name}}", ctx) == "{{secret}}"

    def test_bracket_index_paths(self):
        ctx = {"product": {"images": [{"url": "a.jpg"}, {"url": "b.jpg"}]}}
        assert render("{{product.images[1].url}}", ctx) == "b.jpg"
        assert render("{{product.images.[0].url}}", ctx) == "a.jpg"
        assert render("{{product.images.0.url}}", ctx) == "a.jpg"

    def test_scalars(self):
        ctx = {"flag": True, "off": False, "whole": 2.0, "part": 2.5, "n": 7}
        assert render("{{flag}} {{off}} {{whole}} {{part}} {{n}}", ctx) == "true false 2 2.5 7"


class TestConditionals:

    @pytest.mark.parametrize("in_stock, expected", [(True, "A"), (False, "B")])
    def test_if_else(self, in_stock, expected):
        ctx = {"product": {"in_stock": in_stock}}
        assert render("{{#if product.in_stock}}A{{else}}B{{/if}}", ctx) == expected

    @pytest.mark.parametrize("a, b, expected", [
        (True, True, "X"),
        (True, False, ""),
        (False, True, ""),
        (False, False, ""),
    ])
    def test_nested_if(self, a, b, expected):
        assert render("{{#if a}}{{#if b}}X{{/if}}{{/if}}", {"a": a, "b": b}) == expected

    def test_unless(self):
        template = "{{#unless cart.items}}empty{{else}}full{{/unless}}"
        assert render(template, {"cart": {"items": None}}) == "empty"
        assert render(template, {"cart": {"items": [1]}}) == "full"

    def test_helpers_and_comparisons(self):
        ctx = {"product": {"type": "simple", "stock_quantity": 3}}
        template = (
            '{{#if (eq product.type "simple")}}S{{/if}}'
            "{{#if (gt product.stock_quantity 2)}}G{{/if}}"
            "{{#if product.stock_quantity <= 5}}L{{/if}}"
            "{{#if product.stock_quantity != 3}}N{{/if}}"
        )
        assert render(template, ctx) == "SGL"

    def test_malformed_condition_is_false(self, caplog):
        with caplog.at_level(logging.WARNING, logger="slotgen"):
            out = render("{{#if a = 1}}X{{else}}Y{{/if}}", {"a": 1})
        assert out == "Y"
        assert "Invalid condition" in caplog.text

    def test_unbalanced_markup_is_literal(self):
        assert render("{{#if a}}open", {"a": True}) == "{{#if a}}open"
        assert render("x{{/if}}", {}) == "x{{/if}}"

    def test_stray_else_renders_empty(self):
        assert render("A{{else}}B", {}) == "AB"


class TestLoops:

    def test_each_this(self):
        assert render("{{#each arr}}{{this}}{{/each}}", {"arr": [1, 2, 3]}) == "123"

    def test_each_index(self):
        assert render("{{#each xs}}{{@index}}:{{this}} {{/each}}", {"xs": ["a", "b"]}) == "0:a 1:b "

    def test_each_item_keys(self):
        ctx = {"products": [{"name": "Shoe"}, {"name": "Hat"}]}
        assert render("{{#each products}}<{{name}}|{{this.name}}>{{/each}}", ctx) == "<Shoe|Shoe><Hat|Hat>"

    @pytest.mark.parametrize("value", [None, [], {}, "text", 5])
    def test_non_list_collapses(self, value):
        assert render("[{{#each xs}}x{{/each}}]", {"xs": value}) == "[]"

    def test_empty_product_labels_collapse(self):
        ctx = {"product": {"labels": []}}
        assert render("{{#each product.labels}}<span>{{this.text}}</span>{{/each}}", ctx) == ""

    def test_conditionals_use_iteration_scope(self):
        ctx = {
            "in_stock": True,
            "products": [{"name": "A", "in_stock": True}, {"name": "B", "in_stock": False}],
        }
        template = "{{#each products}}{{#if in_stock}}{{name}}{{else}}-{{/if}}{{/each}}"
        assert render(template, ctx) == "A-"

    def test_nested_loops(self):
        ctx = {"rows": [{"cells": [1, 2]}, {"cells": [3]}]}
        template = "{{#each rows}}{{#each this.cells}}{{this}}{{/each}};{{/each}}"
        assert render(template, ctx) == "12;3;"

    def test_nested_loop_conditionals_decided_by_outer_item(self):
        ctx = {"rows": [{"cells": [0, 1]}]}
        template = "{{#each rows}}{{#each this.cells}}{{#if this}}Y{{else}}N{{/if}}{{/each}}{{/each}}"
        assert render(template, ctx) == "YY"

    def test_inner_index_is_scoped(self):
        ctx = {"rows": [["a", "b"], ["c"]]}
        template = "{{#each rows}}{{@index}}[{{#each this}}{{@index}}{{/each}}]{{/each}}"
        assert render(template, ctx) == "0[01]1[0]"

    def test_outer_context_visible_in_loop(self):
        ctx = {"store": {"name": "Acme"}, "xs": [1, 2]}
        assert render("{{#each xs}}{{store.name}}{{/each}}", ctx) == "AcmeAcme"

    def test_depth_limit_leaves_block_unexpanded(self, caplog):
        processor = TemplateProcessor(RenderOptions(max_loop_depth=2))
        template = "{{#each a}}" * 4 + "x" + "{{/each}}" * 4
        with caplog.at_level(logging.WARNING, logger="slotgen"):
            out = processor.process(template, {"a": [1]})
        assert out == "{{#each a}}x{{/each}}"
        assert "Max loop nesting depth" in caplog.text

    def test_default_depth_allows_ten_levels(self):
        template = "{{#each a}}" * 10 + "x" + "{{/each}}" * 10
        assert render(template, {"a": [1]}) == "x"


class TestScopeShadowing:

    CTX = {
        "settings": {"currency_symbol": "$"},
        "items": [{"settings": "mine", "name": "A"}],
    }
    TEMPLATE = "{{#each items}}[{{settings.currency_symbol}}]{{/each}}"

    def test_item_keys_shadow_by_default(self):
        assert render(self.TEMPLATE, self.CTX) == "[]"

    def test_strict_scope_keeps_reserved_keys(self):
        out = render(self.TEMPLATE, self.CTX, options=RenderOptions(item_keys_shadow_context=False))
        assert out == "[$]"

    def test_strict_scope_still_exposes_other_item_keys(self):
        out = render("{{#each items}}{{name}}{{/each}}", self.CTX, options=RenderOptions(item_keys_shadow_context=False))
        assert out == "A"


class TestTranslations:

    def test_active_language(self, settings):
        ctx = {"settings": settings, "currentLanguage": "nl"}
        assert render("{{t 'add_to_cart'}}", ctx) == "In winkelwagen"

    def test_fallback_to_english(self, settings):
        ctx = {"settings": settings, "currentLanguage": "nl"}
        assert render('{{t "cart.empty"}}', ctx) == "Your cart is empty"

    def test_humanized_fallback(self, settings):
        ctx = {"settings": settings}
        assert render("{{t 'missing'}}", ctx) == "Missing"
        assert render("{{t 'gift_card_code'}}", ctx) == "Gift Card Code"

    def test_explicit_language_wins(self, settings):
        ctx = {"settings": settings, "currentLanguage": "en"}
        assert render("{{t 'add_to_cart'}}", ctx, language="nl") == "In winkelwagen"

    def test_translation_inside_loop(self, settings):
        ctx = {"settings": settings, "xs": [1, 2]}
        assert render("{{#each xs}}{{t 'add_to_cart'}};{{/each}}", ctx) == "Add to cart;Add to cart;"


class TestProductFields:

    def test_preformatted_price_is_kept(self):
        ctx = {"product": {"price": 10, "price_formatted": "€10,00"}}
        assert render("{{product.price_formatted}}", ctx) == "€10,00"

    def test_preformatted_price_in_loop_is_kept(self):
        ctx = {"products": [{"price": 10, "price_formatted": "€10,00"}]}
        assert render("{{#each products}}{{price_formatted}}{{/each}}", ctx) == "€10,00"

    def test_compare_price_requires_truthy_amount(self):
        ctx = {"product": {"compare_price": 0, "compare_price_formatted": "$5.00"}}
        assert render("[{{product.compare_price_formatted}}]", ctx) == "[]"

    def test_compare_price_formatted_from_number(self):
        ctx = {"settings": {"currency_symbol": "€"}, "product": {"compare_price": 99}}
        assert render("{{product.compare_price_formatted}}", ctx) == "€99.00"

    def test_placeholder_text_is_reformatted(self):
        ctx = {"product": {"price": 12.5, "price_formatted": "[Text placeholder]"}}
        assert render("{{product.price_formatted}}", ctx) == "$12.50"

    def test_raw_price_number(self):
        ctx = {"store": {"currency": "GBP"}, "product": {"price": 1349}}
        assert render("{{product.price}}", ctx) == "£1349.00"

    def test_filter_price_bounds_not_formatted(self):
        ctx = {"filters": {"price": {"min": 10, "max": 250}}}
        assert render("{{filters.price.min}}-{{filters.price.max}}", ctx) == "10-250"

    def test_short_description_falls_back(self):
        ctx = {"product": {"short_description": "  ", "description": "Full <desc>"}}
        assert render("{{product.short_description}}", ctx) == "Full &lt;desc&gt;"

    def test_stock_status_placeholder(self):
        ctx = {"product": {"stock_quantity": 3}}
        assert render("{{product.stock_status}}", ctx) == STOCK_STATUS_PLACEHOLDER

    def test_raw_stock_status_is_label_text(self, settings):
        ctx = {"settings": settings, "product": {"stock_quantity": 0, "stock_status": "x"}}
        assert render("{{{product.stock_status}}}", ctx) == "Out of Stock"

    def test_labels_join(self):
        ctx = {"product": {"labels": [{"text": "NEW"}, {"text": "SALE"}], "tag_labels": ["a", "b"]}}
        assert render("{{product.labels}}|{{product.tag_labels}}", ctx) == "NEW, SALE|a, b"

    def test_mapping_never_reaches_output(self, caplog):
        with caplog.at_level(logging.WARNING, logger="slotgen"):
            out = render("[{{product}}]", {"product": {"name": "x"}})
        assert out == "[]"
        assert "cannot be rendered" in caplog.text

    def test_dates(self):
        ctx = {"order": {"created_date": "2024-03-05T10:00:00Z"}}
        assert render("{{order.created_date}}", ctx) == "3/5/2024"


class TestProcessor:

    def test_parse_cache(self):
        processor = TemplateProcessor()
        first = processor.parse("{{a}}")
        assert processor.parse("{{a}}") is first

    def test_caches_are_bounded(self):
        processor = TemplateProcessor()
        for i in range(CACHE_SIZE + 10):
            processor.process(f"{{{{#if a == {i}}}}}{i}{{{{/if}}}}", {"a": i})

        assert len(processor._template_cache) == CACHE_SIZE
        assert len(processor._condition_cache) == CACHE_SIZE
        assert "{{#if a == 0}}0{{/if}}" not in processor._template_cache
        assert f"{{{{#if a == {CACHE_SIZE + 9}}}}}{CACHE_SIZE + 9}{{{{/if}}}}" in processor._template_cache

    def test_process_variables_keeps_no_state(self):
        assert process_variables("{{#if a}}x{{/if}}", {"a": 1}) == "x"
        assert process_variables("{{#if a}}x{{/if}}", {"a": 0}) == ""

    def test_processor_is_reusable_across_contexts(self):
        processor = TemplateProcessor()
        template = "{{#if a}}{{a}}{{/if}}"
        assert processor.process(template, {"a": "one"}) == "one"
        assert processor.process(template, {"a": ""}) == ""
        assert processor.process(template, {"a": "two"}) == "two"

    def test_evaluate_condition_direct(self):
        processor = TemplateProcessor()
        assert processor.evaluate_condition("cart.total > 100", {"cart": {"total": 120}})
        assert not processor.evaluate_condition("(gt", {})
