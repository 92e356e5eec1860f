"""
Модели данных для условий {{#if ...}}.

Грамматика условий фиксирована и проверяется в таком порядке:
(eq path "literal"), (gt path N), инфиксное сравнение, «голый» путь.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ConditionType(Enum):
    """Типы условий в системе."""
    EQ = "eq"
    GT = "gt"
    COMPARE = "compare"
    TRUTHY = "truthy"


class CompareOp(Enum):
    """Инфиксные операторы сравнения."""
    GE = ">="
    LE = "<="
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"


@dataclass(frozen=True)
class PathOperand:
    """Операнд-путь: вычисляется по стеку областей видимости."""
    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class NumberOperand:
    """Числовой литерал."""
    value: float

    def __str__(self) -> str:
        return f"{self.value:g}"


Operand = Union[PathOperand, NumberOperand]


@dataclass
class Condition(ABC):
    """Базовый абстрактный класс для всех условий."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        """Возвращает тип условия."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass
class EqCondition(Condition):
    """
    Строковое равенство: (eq path "literal")

    Истинно, только если значение по пути является строкой, совпадающая с литералом.
    """
    path: str
    literal: str

    def get_type(self) -> ConditionType:
        return ConditionType.EQ

    def _to_string(self) -> str:
        return f'(eq {self.path} "{self.literal}")'


@dataclass
class GtCondition(Condition):
    """
    Числовое «больше»: (gt path N), где N целый литерал.
    """
    path: str
    threshold: int

    def get_type(self) -> ConditionType:
        return ConditionType.GT

    def _to_string(self) -> str:
        return f"(gt {self.path} {self.threshold})"


@dataclass
class CompareCondition(Condition):
    """
    Инфиксное сравнение: left op right

    Каждый операнд является числом, если разбирается как число, иначе путь.
    """
    left: Operand
    operator: CompareOp
    right: Operand

    def get_type(self) -> ConditionType:
        return ConditionType.COMPARE

    def _to_string(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


@dataclass
class TruthyCondition(Condition):
    """
    Проверка истинности значения по пути: path
    """
    path: str

    def get_type(self) -> ConditionType:
        return ConditionType.TRUTHY

    def _to_string(self) -> str:
        return self.path


AnyCondition = Union[EqCondition, GtCondition, CompareCondition, TruthyCondition]

__all__ = [
    "Condition",
    "ConditionType",
    "CompareOp",
    "PathOperand",
    "NumberOperand",
    "Operand",
    "EqCondition",
    "GtCondition",
    "CompareCondition",
    "TruthyCondition",
    "AnyCondition",
]
