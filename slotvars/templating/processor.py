"""
Процессор шаблонов слотов.

Объединяет лексер, парсер, вычислитель условий и форматтер значений:
шаблон разбирается в AST и интерпретируется за один проход.

Порядок разрешения совпадает с исторической схемой «циклы → условия →
переменные»: тело цикла (включая вложенные условия и переменные)
вычисляется в области видимости элемента, всё остальное во внешней.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..conditions import safe_evaluate
from ..config import EngineConfig, DEFAULT_CONFIG
from ..formatting import ValueFormatter
from ..scope import ScopeStack
from .nodes import (
    TemplateAST, TemplateNode, TextNode, VariableNode,
    ConditionalBlockNode, LoopBlockNode, iter_nodes,
)
from .parser import TemplateParser

logger = logging.getLogger(__name__)


@dataclass
class RenderStats:
    """Счётчики одного вызова процессора."""
    conditions_evaluated: int = 0
    conditions_true: int = 0
    loop_items: int = 0
    depth_limit_hits: int = 0


class TemplateProcessor:
    """
    Процессор шаблонов слотов.

    Экземпляр не хранит состояния между вызовами process(): всё, что
    относится к одному рендеру, живёт в локальных объектах вызова.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Args:
            config: Настройки движка (по умолчанию DEFAULT_CONFIG)
        """
        self.config = config or DEFAULT_CONFIG

    def process(
            self,
            template: str,
            context: Optional[Mapping[str, Any]] = None,
            page_data: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[str, dict]:
        """
        Обрабатывает шаблон.

        Args:
            template: Исходный шаблон
            context: Данные магазина/настроек
            page_data: Данные сущности страницы (перекрывают context)

        Returns:
            Кортеж (обработанный_текст, метаданные)
        """
        parser = TemplateParser(template)
        ast = parser.parse()

        stats = RenderStats()
        scopes = ScopeStack.root(context, page_data)
        text = self._render_nodes(ast, scopes, 0, stats)

        meta = self._collect_metadata(ast, stats)
        meta["slotvars.malformed_markers"] = len(parser.malformed)
        return text, meta

    def _render_nodes(self, nodes: List[TemplateNode], scopes: ScopeStack, depth: int, stats: RenderStats) -> str:
        return "".join(self._render_node(node, scopes, depth, stats) for node in nodes)

    def _render_node(self, node: TemplateNode, scopes: ScopeStack, depth: int, stats: RenderStats) -> str:
        if isinstance(node, TextNode):
            return node.text
        elif isinstance(node, VariableNode):
            return self._render_variable(node, scopes)
        elif isinstance(node, ConditionalBlockNode):
            return self._render_conditional(node, scopes, depth, stats)
        elif isinstance(node, LoopBlockNode):
            return self._render_loop(node, scopes, depth, stats)
        else:
            raise TypeError(f"Unknown template node: {type(node).__name__}")

    def _render_variable(self, node: VariableNode, scopes: ScopeStack) -> str:
        value = scopes.resolve(node.path)
        return ValueFormatter(scopes, self.config).format(value, node.path)

    def _render_conditional(self, node: ConditionalBlockNode, scopes: ScopeStack, depth: int, stats: RenderStats) -> str:
        stats.conditions_evaluated += 1
        if safe_evaluate(node.condition_text, scopes):
            stats.conditions_true += 1
            return self._render_nodes(node.body, scopes, depth, stats)
        if node.else_body is not None:
            return self._render_nodes(node.else_body, scopes, depth, stats)
        return ""

    def _render_loop(self, node: LoopBlockNode, scopes: ScopeStack, depth: int, stats: RenderStats) -> str:
        if depth >= self.config.max_loop_depth:
            stats.depth_limit_hits += 1
            logger.warning(
                "Loop nesting limit (%d) reached at {{#each %s}}; leaving it unexpanded",
                self.config.max_loop_depth, node.array_path,
            )
            return node.source

        items = scopes.resolve(node.array_path)
        if not isinstance(items, (list, tuple)) or not items:
            return ""

        parts = []
        for index, item in enumerate(items):
            stats.loop_items += 1
            item_scopes = scopes.push_item(item, index)
            parts.append(self._render_nodes(node.body, item_scopes, depth + 1, stats))
        return "".join(parts)

    def _collect_metadata(self, ast: TemplateAST, stats: RenderStats) -> Dict[str, Any]:
        """
        Собирает метаданные обработки.

        Структурные счётчики берутся из AST и не зависят от данных, поэтому
        рендер на демо-данных и на живых данных с теми же полями даёт
        одинаковые значения.
        """
        meta: Dict[str, Any] = {
            "slotvars.conditional_blocks": 0,
            "slotvars.loop_blocks": 0,
            "slotvars.variables": 0,
            "slotvars.paths": [],
            "slotvars.conditions_evaluated": stats.conditions_evaluated,
            "slotvars.conditions_true": stats.conditions_true,
            "slotvars.loop_items": stats.loop_items,
            "slotvars.depth_limit_hits": stats.depth_limit_hits,
        }
        paths = set()

        for node in iter_nodes(ast):
            if isinstance(node, ConditionalBlockNode):
                meta["slotvars.conditional_blocks"] += 1
            elif isinstance(node, LoopBlockNode):
                meta["slotvars.loop_blocks"] += 1
                paths.add(node.array_path)
            elif isinstance(node, VariableNode):
                meta["slotvars.variables"] += 1
                paths.add(node.path)

        meta["slotvars.paths"] = sorted(paths)
        return meta


def process_template(
        template: str,
        context: Optional[Mapping[str, Any]] = None,
        page_data: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[EngineConfig] = None,
) -> Tuple[str, dict]:
    """
    Обрабатывает шаблон и возвращает текст вместе с метаданными.

    В отличие от process_variables, исключения не перехватываются.
    """
    return TemplateProcessor(config).process(template, context, page_data)


def process_variables(
        template: Any,
        context: Optional[Mapping[str, Any]] = None,
        page_data: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[EngineConfig] = None,
) -> Any:
    """
    Подставляет переменные, условия и циклы в шаблон слота.

    Никогда не бросает исключений для строкового шаблона: при непредвиденной
    ошибке она логируется, и возвращается исходный шаблон. Нестроковые
    значения возвращаются без изменений.

    Args:
        template: Шаблон с маркерами {{...}}
        context: Данные магазина/настроек
        page_data: Данные сущности страницы (перекрывают context)
        config: Настройки движка

    Returns:
        Обработанный текст
    """
    if not isinstance(template, str):
        return template

    try:
        text, _ = process_template(template, context, page_data, config=config)
        return text
    except Exception:
        logger.exception("Template processing failed; returning template unchanged")
        return template


__all__ = [
    "TemplateProcessor",
    "RenderStats",
    "process_template",
    "process_variables",
]
