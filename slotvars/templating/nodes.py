"""
AST-узлы шаблона слота.

Шаблон разбирается в список узлов четырёх видов: текст, переменная,
условный блок и цикл. Узлы неизменяемы и не зависят от данных.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Статический текст, в том числе маркеры, оставленные как есть
    (незакрытые блоки, лишние {{else}} и закрывающие маркеры).
    """
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """
    Подстановка {{path.to.value}}.
    """
    path: str
    source: str  # Исходный текст маркера


@dataclass(frozen=True)
class ConditionalBlockNode(TemplateNode):
    """
    Условный блок {{#if condition}}...{{else}}...{{/if}}.

    else_body равен None, если разделителя {{else}} в блоке нет.
    """
    condition_text: str  # Исходный текст условия
    body: List[TemplateNode] = field(default_factory=list)
    else_body: Optional[List[TemplateNode]] = None


@dataclass(frozen=True)
class LoopBlockNode(TemplateNode):
    """
    Цикл {{#each path}}...{{/each}}.

    source хранит исходный текст блока целиком: он выводится как есть,
    если цикл оказался глубже допустимой вложенности.
    """
    array_path: str
    body: List[TemplateNode]
    source: str


# Тип для коллекции узлов шаблона
TemplateAST = List[TemplateNode]


def iter_nodes(ast: TemplateAST):
    """Обходит все узлы AST в глубину, включая тела блоков."""
    for node in ast:
        yield node
        if isinstance(node, ConditionalBlockNode):
            yield from iter_nodes(node.body)
            if node.else_body is not None:
                yield from iter_nodes(node.else_body)
        elif isinstance(node, LoopBlockNode):
            yield from iter_nodes(node.body)


def format_ast_tree(ast: TemplateAST, indent: int = 0) -> str:
    """Форматирует AST как дерево для отладки."""
    lines = []
    prefix = "  " * indent

    for node in ast:
        if isinstance(node, TextNode):
            # Показываем только начало текста для читабельности
            text_preview = repr(node.text[:50] + "..." if len(node.text) > 50 else node.text)
            lines.append(f"{prefix}TextNode({text_preview})")
        elif isinstance(node, VariableNode):
            lines.append(f"{prefix}VariableNode(path='{node.path}')")
        elif isinstance(node, ConditionalBlockNode):
            lines.append(f"{prefix}ConditionalBlockNode(condition='{node.condition_text}')")
            if node.body:
                lines.append(f"{prefix}  body:")
                lines.append(format_ast_tree(node.body, indent + 2))
            if node.else_body:
                lines.append(f"{prefix}  else:")
                lines.append(format_ast_tree(node.else_body, indent + 2))
        elif isinstance(node, LoopBlockNode):
            lines.append(f"{prefix}LoopBlockNode(array='{node.array_path}')")
            if node.body:
                lines.append(f"{prefix}  body:")
                lines.append(format_ast_tree(node.body, indent + 2))
        else:
            lines.append(f"{prefix}{type(node).__name__}")

    return "\n".join(lines)


__all__ = [
    "TemplateNode",
    "TemplateAST",
    "TextNode",
    "VariableNode",
    "ConditionalBlockNode",
    "LoopBlockNode",
    "iter_nodes",
    "format_ast_tree",
]
