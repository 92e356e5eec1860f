"""
Лексический анализатор маркеров шаблона.

Находит в тексте маркеры {{...}} и классифицирует их:
- {{#if condition}}   → 'if'
- {{else}}            → 'else'
- {{/if}}             → 'endif'
- {{#each path}}      → 'each'
- {{/each}}           → 'endeach'
- {{path.to.value}}   → 'var'

Всё, что не является маркером, остаётся текстом между токенами.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerToken:
    """
    Токен маркера шаблона.

    Представляет маркер с указанием его типа, аргумента и положения в тексте.
    """
    type: str  # 'if', 'else', 'endif', 'each', 'endeach', 'var'
    content: str  # Аргумент маркера: условие, путь массива или путь переменной
    start_pos: int  # Позиция начала в исходном тексте
    end_pos: int  # Позиция конца в исходном тексте
    full_match: str  # Полный текст маркера


class TemplateLexer:
    """
    Лексер маркеров шаблона.

    Порядок альтернатив важен: {{else}} проверяется раньше переменных,
    иначе он был бы принят за путь "else".
    """

    MARKER_PATTERN = re.compile(
        r'(?P<if>\{\{#if(?P<if_arg>.*?)\}\})'
        r'|(?P<else>\{\{else\}\})'
        r'|(?P<endif>\{\{/if\}\})'
        r'|(?P<each>\{\{#each\s+(?P<each_arg>[^}]+)\}\})'
        r'|(?P<endeach>\{\{/each\}\})'
        r'|(?P<var>\{\{(?P<var_arg>[^#/}][^}]*)\}\})',
        re.DOTALL,
    )

    ARGUMENTS = {
        'if': 'if_arg',
        'each': 'each_arg',
        'var': 'var_arg',
    }

    TYPES = ('if', 'else', 'endif', 'each', 'endeach', 'var')

    def __init__(self, text: str):
        """
        Args:
            text: Исходный шаблон
        """
        self.text = text

    def tokenize(self) -> List[MarkerToken]:
        """
        Извлекает все маркеры из текста.

        Returns:
            Список токенов, отсортированный по позиции в тексте
        """
        tokens = []

        for match in self.MARKER_PATTERN.finditer(self.text):
            token_type = next(name for name in self.TYPES if match.group(name) is not None)
            arg_group = self.ARGUMENTS.get(token_type)
            content = (match.group(arg_group) or "").strip() if arg_group else ""

            tokens.append(MarkerToken(
                type=token_type,
                content=content,
                start_pos=match.start(),
                end_pos=match.end(),
                full_match=match.group(0),
            ))

        logger.debug("Tokenized template of length %d into %d markers", len(self.text), len(tokens))
        return tokens


def tokenize_template(text: str) -> List[MarkerToken]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный шаблон

    Returns:
        Список токенов маркеров
    """
    return TemplateLexer(text).tokenize()


__all__ = [
    "MarkerToken",
    "TemplateLexer",
    "tokenize_template",
]
