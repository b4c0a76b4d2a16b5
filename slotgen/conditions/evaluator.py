"""
Evaluator of template conditions.

Walks a parsed condition and computes its value against a variable lookup
function supplied by the template interpreter. Comparison semantics follow
the loose rules templates were written against:

- ``==`` / ``!=`` compare numbers numerically when one side is a number and
  the other a numeric string; None only equals None.
- ordering operators compare numerically; two strings compare
  lexicographically; a missing or non-numeric operand makes them false.
- truthiness: None, False, 0, NaN and "" are false; every container is true,
  even an empty one.
"""

from __future__ import annotations

import math
from typing import Any, Callable, cast

from .model import (
    ComparisonCondition,
    Condition,
    ConditionType,
    EqualsCondition,
    GreaterThanCondition,
    LiteralOperand,
    Operand,
    TruthCondition,
)
from ..formatting.price import to_number

Resolver = Callable[[str], Any]


class EvaluationError(Exception):
    """Condition could not be evaluated."""
    pass


def is_truthy(value: Any) -> bool:
    """Template truthiness (containers are truthy even when empty)."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def loose_equals(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, bool) or isinstance(right, bool):
        if isinstance(left, bool) and isinstance(right, bool):
            return left == right
        return to_number(_bool_num(left)) == to_number(_bool_num(right))
    if isinstance(left, (int, float)) or isinstance(right, (int, float)):
        a, b = to_number(left), to_number(right)
        return a is not None and b is not None and a == b
    return left == right


def _bool_num(value: Any) -> Any:
    return int(value) if isinstance(value, bool) else value


def _compare_order(left: Any, right: Any, operator: str) -> bool:
    if isinstance(left, str) and isinstance(right, str):
        a: Any = left
        b: Any = right
    else:
        a, b = to_number(_bool_num(left)), to_number(_bool_num(right))
        if a is None or b is None:
            return False
    if operator == ">":
        return a > b
    if operator == "<":
        return a < b
    if operator == ">=":
        return a >= b
    if operator == "<=":
        return a <= b
    raise EvaluationError(f"Unknown ordering operator: {operator}")


class ConditionEvaluator:
    """
    Computes conditions against a variable context.

    The context is represented by a resolver: a function from a variable
    path to its value (None when missing).
    """

    def __init__(self, resolve: Resolver):
        self.resolve = resolve

    def evaluate(self, condition: Condition) -> bool:
        """
        Compute the boolean value of a condition.

        Raises:
            EvaluationError: unknown condition kind or operator
        """
        condition_type = condition.get_type()

        if condition_type == ConditionType.EQ:
            return self._evaluate_eq(cast(EqualsCondition, condition))
        elif condition_type == ConditionType.GT:
            return self._evaluate_gt(cast(GreaterThanCondition, condition))
        elif condition_type == ConditionType.COMPARE:
            return self._evaluate_compare(cast(ComparisonCondition, condition))
        elif condition_type == ConditionType.TRUTH:
            return is_truthy(self.resolve(cast(TruthCondition, condition).path))
        else:
            raise EvaluationError(f"Unknown condition type: {condition_type}")

    def _evaluate_eq(self, condition: EqualsCondition) -> bool:
        """Strict: only the identical string matches."""
        actual = self.resolve(condition.path)
        return isinstance(actual, str) and actual == condition.expected

    def _evaluate_gt(self, condition: GreaterThanCondition) -> bool:
        actual = to_number(self.resolve(condition.path))
        return actual is not None and actual > condition.threshold

    def _evaluate_compare(self, condition: ComparisonCondition) -> bool:
        left = self._operand_value(condition.left)
        right = self._operand_value(condition.right)

        if condition.operator == "==":
            return loose_equals(left, right)
        if condition.operator == "!=":
            return not loose_equals(left, right)
        return _compare_order(left, right, condition.operator)

    def _operand_value(self, operand: Operand) -> Any:
        if isinstance(operand, LiteralOperand):
            return operand.value
        return self.resolve(operand.path)


def evaluate_condition_string(condition_str: str, resolve: Resolver) -> bool:
    """
    Parse and evaluate a condition in one call.

    Raises:
        ConditionParseError, ConditionLexError: on syntax errors
        EvaluationError: on evaluation errors
    """
    from .parser import ConditionParser

    parser = ConditionParser()
    ast = parser.parse(condition_str)

    evaluator = ConditionEvaluator(resolve)
    return evaluator.evaluate(ast)


__all__ = [
    "ConditionEvaluator",
    "EvaluationError",
    "evaluate_condition_string",
    "is_truthy",
    "loose_equals",
]
