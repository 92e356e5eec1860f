"""
Лексер для разбора условий {{#if ...}}.

Разбивает строку условия на значимые элементы:
- Символы (скобки)
- Операторы сравнения (>=, <=, ==, !=, >, <)
- Строковые литералы в двойных кавычках
- Числа
- Пути (product.labels, this.name, @index)
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


@dataclass
class Token:
    """
    Токен для парсинга условий.

    Attributes:
        type: Тип токена (SYMBOL, OPERATOR, STRING, NUMBER, PATH, EOF)
        value: Значение токена
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ConditionLexer:
    """
    Лексер для разбиения строки условия на токены.
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),
        (r'[()]', 'SYMBOL', False),
        # Двухсимвольные операторы раньше односимвольных
        (r'>=|<=|==|!=|>|<', 'OPERATOR', False),
        (r'"[^"]*"', 'STRING', False),
        # Число не должно быть началом пути (3d.name)
        (r'-?\d+(?:\.\d+)?(?![\w@.])', 'NUMBER', False),
        (r'[\w@][\w@.\-]*', 'PATH', False),
        (r'.', 'UNKNOWN', False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Args:
            text: Строка условия для разбора

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            ValueError: При обнаружении неизвестного символа
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        raise ValueError(f"Unexpected character '{value}' at position {position}")
                    if token_type == 'STRING':
                        value = value[1:-1]
                    tokens.append(Token(type=token_type, value=value, position=position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens
