"""
Парсер шаблона слота.

Преобразует токены маркеров в AST. Разбор никогда не падает: открывающий
маркер без пары становится текстом, и разбор продолжается сразу за ним;
закрывающие маркеры и {{else}} вне своего блока также остаются текстом.
"""

from __future__ import annotations

import logging
from typing import List

from .lexer import MarkerToken, TemplateLexer
from .matcher import find_block_end
from .nodes import (
    TemplateAST, TemplateNode, TextNode, VariableNode,
    ConditionalBlockNode, LoopBlockNode,
)

logger = logging.getLogger(__name__)


class TemplateParser:
    """
    Парсер шаблона с рекурсивным спуском по диапазонам токенов.

    Тело каждого блока разбирается тем же методом в границах
    [открывающий+1, закрывающий), поэтому вложенность не ограничена.
    """

    def __init__(self, text: str):
        """
        Args:
            text: Исходный шаблон
        """
        self.text = text
        self.tokens: List[MarkerToken] = []
        self.malformed: List[MarkerToken] = []

    def parse(self) -> TemplateAST:
        """
        Парсит шаблон в AST.

        Returns:
            Список узлов верхнего уровня
        """
        self.tokens = TemplateLexer(self.text).tokenize()
        self.malformed = []

        if not self.tokens:
            return [TextNode(text=self.text)] if self.text else []

        ast = self._parse_range(0, len(self.tokens), 0, len(self.text))

        if self.malformed:
            logger.debug(
                "Left %d unmatched marker(s) as text: %s",
                len(self.malformed), ", ".join(t.full_match for t in self.malformed),
            )
        return ast

    def _parse_range(self, lo: int, hi: int, start_pos: int, end_pos: int) -> List[TemplateNode]:
        """
        Разбирает токены [lo, hi), занимающие текст [start_pos, end_pos).
        """
        nodes: List[TemplateNode] = []
        current_pos = start_pos
        index = lo

        while index < hi:
            token = self.tokens[index]

            # Текст перед токеном
            if current_pos < token.start_pos:
                nodes.append(TextNode(text=self.text[current_pos:token.start_pos]))

            if token.type == 'var':
                nodes.append(VariableNode(path=token.content, source=token.full_match))
                current_pos = token.end_pos
                index += 1
                continue

            if token.type in ('if', 'each'):
                match = find_block_end(self.tokens, index, hi)
                if match is not None:
                    close = self.tokens[match.close_index]
                    if token.type == 'if':
                        nodes.append(self._build_conditional(index, match.close_index, match.divider_index))
                    else:
                        nodes.append(self._build_loop(index, match.close_index))
                    current_pos = close.end_pos
                    index = match.close_index + 1
                    continue

            # Незакрытый блок, лишний {{else}} или закрывающий маркер без пары
            self.malformed.append(token)
            nodes.append(TextNode(text=token.full_match))
            current_pos = token.end_pos
            index += 1

        # Оставшийся текст
        if current_pos < end_pos:
            nodes.append(TextNode(text=self.text[current_pos:end_pos]))

        return nodes

    def _build_conditional(self, open_index: int, close_index: int, divider_index) -> ConditionalBlockNode:
        opener = self.tokens[open_index]
        closer = self.tokens[close_index]

        if divider_index is None:
            body = self._parse_range(open_index + 1, close_index, opener.end_pos, closer.start_pos)
            return ConditionalBlockNode(condition_text=opener.content, body=body)

        divider = self.tokens[divider_index]
        body = self._parse_range(open_index + 1, divider_index, opener.end_pos, divider.start_pos)
        else_body = self._parse_range(divider_index + 1, close_index, divider.end_pos, closer.start_pos)
        return ConditionalBlockNode(condition_text=opener.content, body=body, else_body=else_body)

    def _build_loop(self, open_index: int, close_index: int) -> LoopBlockNode:
        opener = self.tokens[open_index]
        closer = self.tokens[close_index]
        body = self._parse_range(open_index + 1, close_index, opener.end_pos, closer.start_pos)
        return LoopBlockNode(
            array_path=opener.content,
            body=body,
            source=self.text[opener.start_pos:closer.end_pos],
        )


def parse_template(text: str) -> TemplateAST:
    """
    Удобная функция для парсинга шаблона.

    Args:
        text: Исходный шаблон

    Returns:
        AST шаблона
    """
    return TemplateParser(text).parse()


__all__ = [
    "TemplateParser",
    "parse_template",
]
