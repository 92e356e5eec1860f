"""
Парсер условий {{#if ...}}.

Формы условия пробуются в фиксированном порядке:

condition → "(" "eq" PATH STRING ")"
          | "(" "gt" PATH INTEGER ")"
          | operand OPERATOR operand
          | PATH

operand   → NUMBER | PATH

Условие должно целиком совпадать с одной из форм; всё остальное даёт ParseError.
"""

from __future__ import annotations

import re
from typing import List

from .lexer import ConditionLexer, Token
from .model import (
    Condition,
    CompareOp,
    CompareCondition,
    EqCondition,
    GtCondition,
    NumberOperand,
    Operand,
    PathOperand,
    TruthyCondition,
)

_INTEGER = re.compile(r"-?\d+")


class ConditionParseError(Exception):
    """Ошибка парсинга условного выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class ConditionParser:
    """
    Парсер условий с рекурсивным спуском.

    Преобразует список токенов в модель условия.
    """

    HELPERS = ("eq", "gt")

    def __init__(self):
        self.lexer = ConditionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, condition_str: str) -> Condition:
        """
        Парсит строку условия.

        Args:
            condition_str: Текст между "{{#if" и "}}"

        Returns:
            Модель условия

        Raises:
            ConditionParseError: При синтаксической ошибке
            ValueError: При ошибке токенизации
        """
        self._tokens = self.lexer.tokenize(condition_str)
        self._position = 0

        if self._is_at_end():
            raise ConditionParseError("Empty condition", 0)

        if self._check("SYMBOL", "("):
            result = self._parse_helper()
        elif self._peek(1).type == 'OPERATOR':
            result = self._parse_comparison()
        else:
            result = TruthyCondition(path=self._consume('PATH', "Expected variable path").value)

        if not self._is_at_end():
            current = self._current_token()
            raise ConditionParseError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_helper(self) -> Condition:
        """Парсит (eq path "literal") или (gt path N)."""
        self._advance()  # (
        helper = self._consume('PATH', "Expected helper name after '('")
        if helper.value not in self.HELPERS:
            raise ConditionParseError(f"Unknown helper '{helper.value}'", helper.position)

        path = self._consume('PATH', f"Expected variable path after '{helper.value}'").value

        if helper.value == "eq":
            literal = self._consume('STRING', "Expected double-quoted literal").value
            condition: Condition = EqCondition(path=path, literal=literal)
        else:
            number = self._consume('NUMBER', "Expected integer literal")
            if not _INTEGER.fullmatch(number.value):
                raise ConditionParseError(f"Expected integer literal, got '{number.value}'", number.position)
            condition = GtCondition(path=path, threshold=int(number.value))

        if not self._match_symbol(")"):
            raise ConditionParseError("Expected ')' after helper arguments", self._current_position())
        return condition

    def _parse_comparison(self) -> CompareCondition:
        """Парсит инфиксное сравнение."""
        left = self._parse_operand()
        operator = CompareOp(self._advance().value)
        right = self._parse_operand()
        return CompareCondition(left=left, operator=operator, right=right)

    def _parse_operand(self) -> Operand:
        current = self._current_token()
        if current.type == 'NUMBER':
            self._advance()
            return NumberOperand(value=float(current.value))
        if current.type == 'PATH':
            self._advance()
            return PathOperand(path=current.value)
        if current.type == 'EOF':
            raise ConditionParseError("Unexpected end of expression", current.position)
        raise ConditionParseError(f"Expected operand, got '{current.value}'", current.position)

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        return self._peek(0)

    def _peek(self, offset: int) -> Token:
        index = self._position + offset
        if index >= len(self._tokens):
            return self._tokens[-1]
        return self._tokens[index]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _check(self, token_type: str, value: str) -> bool:
        current = self._current_token()
        return current.type == token_type and current.value == value

    def _match_symbol(self, symbol: str) -> bool:
        if self._check('SYMBOL', symbol):
            self._advance()
            return True
        return False

    def _consume(self, token_type: str, error_message: str) -> Token:
        current = self._current_token()
        if current.type == token_type:
            return self._advance()
        raise ConditionParseError(error_message, current.position)
