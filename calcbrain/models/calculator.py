from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class OperationOutcome(str, Enum):
    APPLIED = "applied"
    IGNORED = "ignored"


class CalculatorResult(BaseModel):
    value: float | int = Field(..., description="The accumulator, or the default value while it is absent.")
    description: str = Field(default="", description="Readable trace of the computation in progress.")
    is_pending: bool = Field(default=False, description="Whether a binary operation awaits its second operand.")

    def as_pair(self) -> tuple[float | int, str]:
        return self.value, self.description


class KeypadDisplay(BaseModel):
    value: str = Field(..., description="Text shown on the main display.")
    description: str = Field(default="", description="Text shown on the description line.")
