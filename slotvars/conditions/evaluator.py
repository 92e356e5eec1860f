"""
Вычислитель условий {{#if ...}}.

Вычисляет модель условия против стека областей видимости. Нерезолвленный
операнд (None) делает условие ложным.
"""

from __future__ import annotations

import logging
import operator
from typing import Any, Callable, Dict, Optional, cast

from ..formatting.formatter import to_number
from ..scope import ScopeStack, is_truthy
from .model import (
    CompareCondition,
    CompareOp,
    Condition,
    ConditionType,
    EqCondition,
    GtCondition,
    NumberOperand,
    Operand,
    TruthyCondition,
)
from .parser import ConditionParseError, ConditionParser

logger = logging.getLogger(__name__)

_RELATIONAL: Dict[CompareOp, Callable[[Any, Any], bool]] = {
    CompareOp.GT: operator.gt,
    CompareOp.LT: operator.lt,
    CompareOp.GE: operator.ge,
    CompareOp.LE: operator.le,
}


class EvaluationError(Exception):
    """Ошибка при вычислении условного выражения."""
    pass


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return float(value)
    return to_number(value)


def loose_equals(left: Any, right: Any) -> bool:
    """Нестрогое равенство: "5" == 5, но строки сравниваются как строки."""
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    a, b = _numeric(left), _numeric(right)
    if a is not None and b is not None:
        return a == b
    return left == right


def relational(op: CompareOp, left: Any, right: Any) -> bool:
    """Сравнение <, >, <=, >=: две строки лексикографически, иначе численно."""
    compare = _RELATIONAL[op]
    if isinstance(left, str) and isinstance(right, str):
        return compare(left, right)
    a, b = _numeric(left), _numeric(right)
    if a is None or b is None:
        return False
    return compare(a, b)


class ConditionEvaluator:
    """
    Вычислитель условий.

    Принимает модель условия и стек областей видимости, возвращает bool.
    """

    def __init__(self, scopes: ScopeStack):
        self.scopes = scopes

    def evaluate(self, condition: Condition) -> bool:
        """
        Вычисляет значение условия.

        Raises:
            EvaluationError: При неизвестном типе условия
        """
        condition_type = condition.get_type()

        if condition_type == ConditionType.EQ:
            return self._evaluate_eq(cast(EqCondition, condition))
        elif condition_type == ConditionType.GT:
            return self._evaluate_gt(cast(GtCondition, condition))
        elif condition_type == ConditionType.COMPARE:
            return self._evaluate_compare(cast(CompareCondition, condition))
        elif condition_type == ConditionType.TRUTHY:
            return is_truthy(self.scopes.resolve(cast(TruthyCondition, condition).path))
        else:
            raise EvaluationError(f"Unknown condition type: {condition_type}")

    def _evaluate_eq(self, condition: EqCondition) -> bool:
        actual = self.scopes.resolve(condition.path)
        return isinstance(actual, str) and actual == condition.literal

    def _evaluate_gt(self, condition: GtCondition) -> bool:
        actual = self.scopes.resolve(condition.path)
        if actual is None:
            return False
        return relational(CompareOp.GT, actual, condition.threshold)

    def _evaluate_compare(self, condition: CompareCondition) -> bool:
        left = self._operand(condition.left)
        right = self._operand(condition.right)
        if left is None or right is None:
            return False
        if condition.operator == CompareOp.EQ:
            return loose_equals(left, right)
        if condition.operator == CompareOp.NE:
            return not loose_equals(left, right)
        return relational(condition.operator, left, right)

    def _operand(self, operand: Operand) -> Any:
        if isinstance(operand, NumberOperand):
            return operand.value
        return self.scopes.resolve(operand.path)


def evaluate_condition_string(condition_str: str, scopes: ScopeStack) -> bool:
    """
    Вычисляет условие из строки.

    Raises:
        ConditionParseError / ValueError: При ошибке парсинга
        EvaluationError: При ошибке вычисления
    """
    ast = ConditionParser().parse(condition_str)
    return ConditionEvaluator(scopes).evaluate(ast)


def safe_evaluate(condition_str: str, scopes: ScopeStack) -> bool:
    """
    Вычисляет условие, не выпуская исключений наружу.

    Любая ошибка разбора или вычисления означает ложное условие.
    """
    try:
        return evaluate_condition_string(condition_str, scopes)
    except (ConditionParseError, ValueError, EvaluationError) as e:
        logger.warning("Condition '%s' evaluated as false: %s", condition_str, e)
        return False
    except Exception:
        logger.exception("Unexpected error evaluating condition '%s'", condition_str)
        return False
