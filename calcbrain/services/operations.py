from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Union

UnaryFunction = Callable[[float], float]
BinaryFunction = Callable[[float, float], float]


class Placement(str, Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class DescriptionPosition:
    """Where a unary operation's label goes relative to its operand's text."""

    placement: Placement = Placement.BEFORE
    label: Optional[str] = None

    def wrap(self, text: str, symbol: str) -> str:
        label = self.label if self.label is not None else symbol
        if self.placement is Placement.AFTER:
            return f"({text}){label}"
        return f"{label}({text})"


@dataclass(frozen=True)
class Constant:
    value: float


@dataclass(frozen=True)
class UnaryOperation:
    function: UnaryFunction
    position: DescriptionPosition = DescriptionPosition()


@dataclass(frozen=True)
class BinaryOperation:
    function: BinaryFunction


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Equals:
    pass


Operation = Union[Constant, UnaryOperation, BinaryOperation, Clear, Equals]


def _undefined_as_nan(function: UnaryFunction) -> UnaryFunction:
    # math raises where IEEE-754 arithmetic yields nan (cos(inf), sqrt(-1), ...).
    def _wrapped(value: float) -> float:
        try:
            return function(value)
        except ValueError:
            return math.nan

    _wrapped.__name__ = getattr(function, "__name__", "unary")
    return _wrapped


def divide(dividend: float, divisor: float) -> float:
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


def square(value: float) -> float:
    return value * value


def cube(value: float) -> float:
    return value * value * value


def before(label: Optional[str] = None) -> DescriptionPosition:
    return DescriptionPosition(Placement.BEFORE, label)


def after(label: Optional[str] = None) -> DescriptionPosition:
    return DescriptionPosition(Placement.AFTER, label)


DEFAULT_OPERATIONS: Mapping[str, Operation] = {
    "π": Constant(math.pi),
    "e": Constant(math.e),
    "cos": UnaryOperation(_undefined_as_nan(math.cos), before()),
    "sin": UnaryOperation(_undefined_as_nan(math.sin), before()),
    "tan": UnaryOperation(_undefined_as_nan(math.tan), before()),
    "√": UnaryOperation(_undefined_as_nan(math.sqrt), before()),
    "±": UnaryOperation(operator.neg, before("-")),
    "x²": UnaryOperation(square, after("²")),
    "x³": UnaryOperation(cube, after("³")),
    "×": BinaryOperation(operator.mul),
    "÷": BinaryOperation(divide),
    "+": BinaryOperation(operator.add),
    "-": BinaryOperation(operator.sub),
    "c": Clear(),
    "=": Equals(),
}


def build_operation_table(extra: Optional[Mapping[str, Operation]] = None) -> Dict[str, Operation]:
    table: Dict[str, Operation] = dict(DEFAULT_OPERATIONS)
    if extra:
        table.update(extra)
    return table
