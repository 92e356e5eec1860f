"""
Тесты для парсера шаблонов.
"""

from slotvars.templating.nodes import (
    ConditionalBlockNode, LoopBlockNode, TextNode, VariableNode, format_ast_tree,
)
from slotvars.templating.parser import TemplateParser, parse_template


class TestTemplateParser:

    def test_plain_text(self):
        assert parse_template("Hello") == [TextNode(text="Hello")]
        assert parse_template("") == []

    def test_text_and_variables(self):
        ast = parse_template("a{{x}}b{{ y.z }}")
        assert ast == [
            TextNode(text="a"),
            VariableNode(path="x", source="{{x}}"),
            TextNode(text="b"),
            VariableNode(path="y.z", source="{{ y.z }}"),
        ]

    def test_conditional_with_else(self):
        """Тест условного блока с ветвью else"""
        ast = parse_template("{{#if a}}yes {{x}}{{else}}no{{/if}}!")
        assert len(ast) == 2
        node = ast[0]
        assert isinstance(node, ConditionalBlockNode)
        assert node.condition_text == "a"
        assert node.body == [TextNode(text="yes "), VariableNode(path="x", source="{{x}}")]
        assert node.else_body == [TextNode(text="no")]
        assert ast[1] == TextNode(text="!")

    def test_conditional_without_else(self):
        node = parse_template("{{#if a}}yes{{/if}}")[0]
        assert node.else_body is None

    def test_loop_keeps_source(self):
        template = "<ul>{{#each product.images}}<li>{{this}}</li>{{/each}}</ul>"
        ast = parse_template(template)
        loop = ast[1]
        assert isinstance(loop, LoopBlockNode)
        assert loop.array_path == "product.images"
        assert loop.source == "{{#each product.images}}<li>{{this}}</li>{{/each}}"
        assert loop.body == [
            TextNode(text="<li>"),
            VariableNode(path="this", source="{{this}}"),
            TextNode(text="</li>"),
        ]

    def test_nested_blocks(self):
        ast = parse_template("{{#each xs}}{{#if this}}[{{#each ys}}{{this}}{{/each}}]{{/if}}{{/each}}")
        loop = ast[0]
        cond = loop.body[0]
        assert isinstance(cond, ConditionalBlockNode)
        inner = cond.body[1]
        assert isinstance(inner, LoopBlockNode)
        assert inner.array_path == "ys"

    def test_unclosed_opener_becomes_text(self):
        """Незакрытый блок остаётся текстом, разбор продолжается за ним"""
        parser = TemplateParser("{{#if a}}hello {{name}}")
        ast = parser.parse()
        assert ast == [
            TextNode(text="{{#if a}}"),
            TextNode(text="hello "),
            VariableNode(path="name", source="{{name}}"),
        ]
        assert [t.full_match for t in parser.malformed] == ["{{#if a}}"]

    def test_stray_closers_and_else(self):
        parser = TemplateParser("a{{/if}}b{{else}}c{{/each}}")
        ast = parser.parse()
        assert "".join(n.text for n in ast) == "a{{/if}}b{{else}}c{{/each}}"
        assert len(parser.malformed) == 3

    def test_surplus_else_is_text_in_else_branch(self):
        parser = TemplateParser("{{#if a}}A{{else}}B{{else}}C{{/if}}")
        node = parser.parse()[0]
        assert node.body == [TextNode(text="A")]
        assert node.else_body == [TextNode(text="B"), TextNode(text="{{else}}"), TextNode(text="C")]
        assert len(parser.malformed) == 1

    def test_crossing_blocks_resolve_by_outer_family(self):
        ast = parse_template("{{#if a}}{{#each xs}}{{/if}}{{/each}}")
        cond = ast[0]
        assert isinstance(cond, ConditionalBlockNode)
        assert cond.body == [TextNode(text="{{#each xs}}")]
        assert ast[1] == TextNode(text="{{/each}}")


class TestFormatAstTree:

    def test_tree_output(self):
        tree = format_ast_tree(parse_template("{{#each xs}}{{#if this}}{{name}}{{else}}-{{/if}}{{/each}}"))
        assert tree.splitlines() == [
            "LoopBlockNode(array='xs')",
            "  body:",
            "    ConditionalBlockNode(condition='this')",
            "      body:",
            "        VariableNode(path='name')",
            "      else:",
            "        TextNode('-')",
        ]
