from __future__ import annotations

import logging
from typing import Optional

from calcbrain.models.calculator import KeypadDisplay, OperationOutcome
from calcbrain.services.calculator import CalculatorBrain, CalculatorError, format_number
from calcbrain.services.operations import Clear

logger = logging.getLogger("calcbrain.keypad")

DIGITS = frozenset("0123456789")
DECIMAL_POINT = "."


class KeypadSession:
    """
    Keystroke front end for a CalculatorBrain.

    Digits are collected into an integer and a fractional part until an operation key is
    pressed; the typed value is then handed to the brain as the operand.
    """

    def __init__(self, brain: Optional[CalculatorBrain] = None) -> None:
        self.brain = brain or CalculatorBrain()
        self._display_value = "0"
        self._reset_typing()

    @property
    def user_is_typing(self) -> bool:
        return self._user_is_typing

    @property
    def display_value(self) -> float:
        return float(self._display_value)

    @property
    def display(self) -> KeypadDisplay:
        description = self.brain.description
        if self.brain.is_pending:
            description = f"{description} ..."
        elif description:
            description = f"{description} ="
        return KeypadDisplay(value=self._display_value, description=description)

    def press_digit(self, key: str) -> KeypadDisplay:
        if key == DECIMAL_POINT:
            self._is_decimal = True
        elif key in DIGITS:
            if self._is_decimal:
                self._fraction_digits += key
            else:
                self._integer_digits += key
        else:
            raise CalculatorError(f"Unsupported keypad key {key!r}.", details={"key": key})

        self._user_is_typing = True
        self._display_value = self._typed_text()
        return self.display

    def press_operation(self, symbol: str) -> KeypadDisplay:
        is_clear = isinstance(self.brain.operation_for(symbol), Clear)
        if self._user_is_typing and not is_clear:
            self.brain.set_operand(self.display_value)
        self._reset_typing()

        outcome = self.brain.perform_operation(symbol)
        if outcome is OperationOutcome.IGNORED:
            logger.debug("keypad.operation_ignored", extra={"symbol": symbol})

        if is_clear:
            self._display_value = "0"
        elif self.brain.has_value:
            self._display_value = format_number(float(self.brain.result.value))
        return self.display

    def _typed_text(self) -> str:
        integer = self._integer_digits.lstrip("0") or "0"
        if not self._is_decimal:
            return integer
        return f"{integer}.{self._fraction_digits or '0'}"

    def _reset_typing(self) -> None:
        self._user_is_typing = False
        self._is_decimal = False
        self._integer_digits = ""
        self._fraction_digits = ""
