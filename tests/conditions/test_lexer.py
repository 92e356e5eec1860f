"""
Tests for the condition lexer.
"""

import pytest

from slotvars.conditions.lexer import ConditionLexer


class TestConditionLexer:

    def setup_method(self):
        self.lexer = ConditionLexer()

    def test_empty_string(self):
        """Test tokenization of empty string"""
        tokens = self.lexer.tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == 'EOF'

    def test_whitespace_ignored(self):
        tokens = self.lexer.tokenize("   \t  ")
        assert [t.type for t in tokens] == ['EOF']

    def test_paths(self):
        """Test recognition of variable paths"""
        for path in ["product.name", "this", "this.color", "@index", "settings.stock_settings.show_stock_label"]:
            tokens = self.lexer.tokenize(path)
            assert len(tokens) == 2
            assert tokens[0].type == 'PATH'
            assert tokens[0].value == path

    def test_operators_prefer_two_characters(self):
        tokens = self.lexer.tokenize("a >= 1")
        assert [t.type for t in tokens] == ['PATH', 'OPERATOR', 'NUMBER', 'EOF']
        assert tokens[1].value == ">="

        tokens = self.lexer.tokenize("a!=b")
        assert [t.value for t in tokens[:-1]] == ["a", "!=", "b"]

    def test_numbers(self):
        for number in ["0", "42", "-3", "4.5"]:
            tokens = self.lexer.tokenize(number)
            assert tokens[0].type == 'NUMBER'
            assert tokens[0].value == number

    def test_number_prefix_of_path_is_path(self):
        tokens = self.lexer.tokenize("3d.model")
        assert tokens[0].type == 'PATH'
        assert tokens[0].value == "3d.model"

    def test_string_literal_unquoted(self):
        tokens = self.lexer.tokenize('(eq settings.layout "vertical")')
        assert [t.type for t in tokens] == ['SYMBOL', 'PATH', 'PATH', 'STRING', 'SYMBOL', 'EOF']
        assert tokens[3].value == "vertical"

    def test_positions(self):
        tokens = self.lexer.tokenize("a > 5")
        assert [t.position for t in tokens] == [0, 2, 4, 5]

    def test_single_quotes_rejected(self):
        with pytest.raises(ValueError, match="Unexpected character"):
            self.lexer.tokenize("(eq a 'b')")
