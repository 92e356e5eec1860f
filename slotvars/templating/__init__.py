"""
Движок шаблонов слотов: {{variables}}, {{#if}} и {{#each}}.

Предоставляет AST-based обработку шаблонов: лексер маркеров, поиск парных
маркеров, парсер и процессор.
"""

from .processor import process_variables, process_template, TemplateProcessor
from .parser import parse_template, TemplateParser
from .lexer import tokenize_template, MarkerToken
from .nodes import format_ast_tree

__all__ = [
    # Основная функция для использования
    "process_variables",
    "process_template",
    "TemplateProcessor",

    # Низкоуровневые функции (для тестирования и отладки)
    "parse_template",
    "TemplateParser",
    "tokenize_template",
    "MarkerToken",
    "format_ast_tree",
]
