"""
Tests for block matching and else binding in the template parser.
"""

from slotgen.template.nodes import EachNode, IfNode, TextNode, TranslationNode, VariableNode
from slotgen.template.parser import TemplateParser, parse_template


class TestTemplateParser:

    def setup_method(self):
        self.parser = TemplateParser()

    def test_text_only(self):
        assert self.parser.parse("just text") == [TextNode("just text")]

    def test_variable_nodes(self):
        ast = self.parser.parse("{{a}}{{{b}}}{{t 'c'}}")
        assert ast == [VariableNode("a"), VariableNode("b", raw=True), TranslationNode("c")]

    def test_if_else(self):
        ast = self.parser.parse("{{#if a}}X{{else}}Y{{/if}}")
        assert len(ast) == 1
        node = ast[0]
        assert isinstance(node, IfNode)
        assert node.condition == "a"
        assert node.then_body == [TextNode("X")]
        assert node.else_body == [TextNode("Y")]
        assert not node.inverted
        assert node.source == "{{#if a}}X{{else}}Y{{/if}}"

    def test_unless_is_inverted(self):
        node = self.parser.parse("{{#unless a}}X{{/unless}}")[0]
        assert isinstance(node, IfNode)
        assert node.inverted
        assert node.else_body == []

    def test_each(self):
        node = self.parser.parse("{{#each items}}<li>{{this}}</li>{{/each}}")[0]
        assert isinstance(node, EachNode)
        assert node.path == "items"
        assert node.body == [TextNode("<li>"), VariableNode("this"), TextNode("</li>")]

    def test_nested_if_else_binds_to_inner_block(self):
        """Else at depth 2 belongs to the nested if"""
        outer = self.parser.parse("{{#if a}}{{#if b}}1{{else}}2{{/if}}{{else}}3{{/if}}")[0]
        assert outer.else_body == [TextNode("3")]
        inner = outer.then_body[0]
        assert isinstance(inner, IfNode)
        assert inner.then_body == [TextNode("1")]
        assert inner.else_body == [TextNode("2")]

    def test_first_else_wins(self):
        node = self.parser.parse("{{#if a}}1{{else}}2{{else}}3{{/if}}")[0]
        assert node.then_body == [TextNode("1")]
        # the second else is stray inside the else branch and renders nothing
        assert node.else_body == [TextNode("23")]

    def test_if_scan_takes_else_of_nested_unless(self):
        """An if does not count unless blocks, so it binds their else"""
        node = self.parser.parse("{{#if a}}{{#unless b}}1{{else}}2{{/unless}}{{/if}}")[0]
        assert isinstance(node, IfNode)
        assert node.then_body == [TextNode("{{#unless b}}1")]
        assert node.else_body == [TextNode("2{{/unless}}")]

    def test_unless_scan_skips_else_of_nested_if(self):
        node = self.parser.parse("{{#unless a}}{{#if b}}1{{else}}2{{/if}}{{else}}3{{/unless}}")[0]
        assert node.inverted
        assert node.else_body == [TextNode("3")]
        assert isinstance(node.then_body[0], IfNode)

    def test_else_inside_each_body_stays_local(self):
        node = self.parser.parse("{{#if a}}{{#each xs}}{{#if this}}1{{else}}2{{/if}}{{/each}}{{else}}3{{/if}}")[0]
        assert node.else_body == [TextNode("3")]
        each = node.then_body[0]
        assert isinstance(each, EachNode)
        assert each.body[0].else_body == [TextNode("2")]

    def test_nested_same_kind_depth(self):
        node = self.parser.parse("{{#each a}}{{#each b}}x{{/each}}y{{/each}}z")
        assert isinstance(node[0], EachNode)
        assert isinstance(node[0].body[0], EachNode)
        assert node[0].body[1] == TextNode("y")
        assert node[1] == TextNode("z")

    def test_unclosed_block_is_text(self):
        ast = self.parser.parse("before {{#if a}}open {{name}}")
        assert ast == [TextNode("before {{#if a}}open "), VariableNode("name")]

    def test_stray_close_is_text(self):
        assert self.parser.parse("a{{/if}}b") == [TextNode("a{{/if}}b")]

    def test_stray_else_is_dropped(self):
        assert self.parser.parse("a{{else}}b") == [TextNode("ab")]

    def test_mismatched_close_kind(self):
        """{{/each}} does not close an if"""
        ast = parse_template("{{#if a}}x{{/each}}")
        assert ast == [TextNode("{{#if a}}x{{/each}}")]
