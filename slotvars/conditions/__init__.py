"""
Условия для блоков {{#if ...}}: лексер, парсер, модель и вычислитель.
"""

from .evaluator import ConditionEvaluator, EvaluationError, evaluate_condition_string, safe_evaluate
from .parser import ConditionParser, ConditionParseError

__all__ = [
    "ConditionEvaluator",
    "ConditionParser",
    "ConditionParseError",
    "EvaluationError",
    "evaluate_condition_string",
    "safe_evaluate",
]
