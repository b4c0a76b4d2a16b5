"""
Data model of template conditions.

A condition is the text after ``{{#if`` / ``{{#unless``. Four forms exist:

    (eq path "literal")      EqualsCondition
    (gt path 10)             GreaterThanCondition
    left OP right            ComparisonCondition, OP in >= <= > < == !=
    path                     TruthCondition
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ConditionType(Enum):
    """Condition kinds."""
    EQ = "eq"
    GT = "gt"
    COMPARE = "compare"
    TRUTH = "truth"


# Tested in this order; the first operator found in the text wins.
COMPARISON_OPERATORS = (">=", "<=", ">", "<", "==", "!=")


@dataclass(frozen=True)
class PathOperand:
    """Operand resolved from the variable context."""
    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class LiteralOperand:
    """Operand given literally: a number or a quoted string."""
    value: Union[float, str]

    def __str__(self) -> str:
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return str(self.value)


Operand = Union[PathOperand, LiteralOperand]


@dataclass(frozen=True)
class Condition(ABC):
    """Base class of all conditions."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        """Condition kind."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class EqualsCondition(Condition):
    """
    Helper form: (eq path "literal")

    True only when the resolved value is exactly the string literal.
    """
    path: str
    expected: str

    def get_type(self) -> ConditionType:
        return ConditionType.EQ

    def _to_string(self) -> str:
        return f'(eq {self.path} "{self.expected}")'


@dataclass(frozen=True)
class GreaterThanCondition(Condition):
    """
    Helper form: (gt path number)

    The resolved value is coerced to a number; non-numeric values are never greater.
    """
    path: str
    threshold: float

    def get_type(self) -> ConditionType:
        return ConditionType.GT

    def _to_string(self) -> str:
        return f"(gt {self.path} {self.threshold:g})"


@dataclass(frozen=True)
class ComparisonCondition(Condition):
    """Infix form: left OP right."""
    left: Operand
    operator: str
    right: Operand

    def get_type(self) -> ConditionType:
        return ConditionType.COMPARE

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class TruthCondition(Condition):
    """Bare path; true when the resolved value is truthy."""
    path: str

    def get_type(self) -> ConditionType:
        return ConditionType.TRUTH

    def _to_string(self) -> str:
        return self.path


__all__ = [
    "ConditionType",
    "COMPARISON_OPERATORS",
    "PathOperand",
    "LiteralOperand",
    "Operand",
    "Condition",
    "EqualsCondition",
    "GreaterThanCondition",
    "ComparisonCondition",
    "TruthCondition",
]
