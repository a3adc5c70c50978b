"""Pydantic models for conversion requests and results."""
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class ConversionRequest(BaseModel):
    """Represents a single infix expression to convert."""

    expression: str = Field(..., description="Infix arithmetic expression as a string")


class ConversionResult(BaseModel):
    """Represents the outcome of converting one expression, either a postfix sequence or an error."""

    expression: str = Field(..., description="Original infix expression")
    postfix: Optional[List[str]] = Field(default=None, description="Postfix lexemes, None on failure")
    error: Optional[str] = Field(default=None, description="Failure message, None on success")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "ConversionResult":
        """Ensure a result carries either a postfix sequence or an error, never both."""
        if (self.postfix is None) == (self.error is None):
            raise ValueError("A result must have exactly one of postfix or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Format the result as one output line."""
        if self.ok:
            return f"{self.expression} -> {' '.join(self.postfix)}"
        return f"{self.expression} -> ERROR: {self.error}"
