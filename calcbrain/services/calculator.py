from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Mapping, Optional

from langchain_core.tools import tool

from calcbrain.core.config import AppSettings, get_settings
from calcbrain.core.exceptions import AppError
from calcbrain.models.calculator import CalculatorResult, OperationOutcome
from calcbrain.services.operations import (
    BinaryFunction,
    BinaryOperation,
    Clear,
    Constant,
    Equals,
    Operation,
    UnaryOperation,
    build_operation_table,
)

logger = logging.getLogger("calcbrain.calculator")

# Beyond this magnitude floats stop being exact integers.
_MAX_EXACT_INTEGER = 2.0**53


class CalculatorError(AppError):
    error_type = "CALCULATOR_ERROR"


def as_number(value: float) -> int | float:
    if math.isfinite(value) and value.is_integer() and abs(value) <= _MAX_EXACT_INTEGER:
        return int(value)
    return value


def format_number(value: float, precision: Optional[int] = None) -> str:
    number = as_number(value)
    if isinstance(number, int):
        return str(number)
    if precision is None:
        return repr(number)
    return f"{number:.{precision}g}"


@dataclass(frozen=True)
class PendingBinaryOperation:
    first_operand: float
    function: BinaryFunction
    description: str

    def perform(self, second_operand: float) -> float:
        return self.function(self.first_operand, second_operand)


class CalculatorBrain:
    """
    Accumulator-based calculator model.

    Operands are supplied as numbers and everything else as symbols looked up in the
    operation table. Binary operations are folded strictly left to right; unknown symbols
    and operations that lack an operand are ignored rather than raised.
    """

    def __init__(
        self,
        operations: Optional[Mapping[str, Operation]] = None,
        *,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._extra_operations = dict(operations or {})
        self._operations = build_operation_table(self._extra_operations)
        self._accumulator: Optional[float] = None
        # Description text of whatever currently sits in the accumulator.
        self._operand_text: Optional[str] = None
        self._pending: Optional[PendingBinaryOperation] = None

    @property
    def symbols(self) -> list[str]:
        return list(self._operations)

    def operation_for(self, symbol: str) -> Optional[Operation]:
        return self._operations.get(symbol)

    @property
    def has_value(self) -> bool:
        return self._accumulator is not None

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    @property
    def description(self) -> str:
        if self._pending is None:
            return self._operand_text or ""
        if self._operand_text is None:
            return self._pending.description
        return f"{self._pending.description} {self._operand_text}"

    @property
    def result(self) -> CalculatorResult:
        value = self._accumulator if self._accumulator is not None else self._settings.default_result
        return CalculatorResult(
            value=as_number(float(value)),
            description=self.description,
            is_pending=self.is_pending,
        )

    def set_operand(self, value: float) -> None:
        self._accumulator = float(value)
        self._operand_text = format_number(self._accumulator, self._settings.description_precision)

    def perform_operation(self, symbol: str) -> OperationOutcome:
        operation = self.operation_for(symbol)
        if operation is None:
            logger.debug("calculator.ignored", extra={"symbol": symbol, "reason": "unknown_symbol"})
            return OperationOutcome.IGNORED

        if isinstance(operation, Constant):
            self._accumulator = operation.value
            self._operand_text = symbol
            return OperationOutcome.APPLIED

        if isinstance(operation, Clear):
            self.clear()
            return OperationOutcome.APPLIED

        if self._accumulator is None:
            logger.debug("calculator.ignored", extra={"symbol": symbol, "reason": "missing_operand"})
            return OperationOutcome.IGNORED

        if isinstance(operation, UnaryOperation):
            self._accumulator = operation.function(self._accumulator)
            self._operand_text = operation.position.wrap(self._operand_text or "", symbol)
            return OperationOutcome.APPLIED

        if isinstance(operation, BinaryOperation):
            self._resolve_pending()
            self._pending = PendingBinaryOperation(
                first_operand=self._accumulator,
                function=operation.function,
                description=f"{self._operand_text} {symbol}",
            )
            self._accumulator = None
            self._operand_text = None
            return OperationOutcome.APPLIED

        if isinstance(operation, Equals):
            if self._pending is None:
                logger.debug("calculator.ignored", extra={"symbol": symbol, "reason": "nothing_pending"})
                return OperationOutcome.IGNORED
            self._resolve_pending()
            return OperationOutcome.APPLIED

        raise CalculatorError(f"Unsupported operation for symbol {symbol!r}.")

    def clear(self) -> None:
        self._accumulator = None
        self._operand_text = None
        self._pending = None

    def press(self, keys: Iterable[str]) -> CalculatorResult:
        """
        Feed a sequence of keys: numeric tokens become operands, anything else is
        performed as an operation symbol.
        """
        for key in keys:
            try:
                operand = float(key)
            except ValueError:
                self.perform_operation(key)
            else:
                self.set_operand(operand)
        return self.result

    def evaluate_keys(self, sequence: str) -> CalculatorResult:
        keys = sequence.split()
        if not keys:
            raise CalculatorError("Key sequence cannot be empty.")
        brain = type(self)(self._extra_operations, settings=self._settings)
        return brain.press(keys)

    @cached_property
    def langchain_tool(self):
        brain = self

        @tool("calculator", return_direct=True)
        def _calculator(keys: str) -> int | float:
            """Press a space separated sequence of calculator keys such as "5 + 3 =" or "4 √" and return the result."""
            return brain.evaluate_keys(keys).value

        return _calculator

    def _resolve_pending(self) -> None:
        if self._pending is None or self._accumulator is None:
            return
        self._accumulator = self._pending.perform(self._accumulator)
        self._operand_text = f"{self._pending.description} {self._operand_text}"
        self._pending = None
