"""Error taxonomy raised by the tokenizer, the parser and the token lists."""
from enum import Enum
from typing import Optional


class ErrorReason(str, Enum):
    """Classification of which failure occurred."""

    UNRECOGNIZED_CHARACTER = "unrecognized_character"
    EMPTY_EXPRESSION = "empty_expression"
    UNMATCHED_RIGHT_PAREN = "unmatched_right_paren"
    UNMATCHED_LEFT_PAREN = "unmatched_left_paren"
    CAPACITY_EXCEEDED = "capacity_exceeded"


class ShuntingYardError(ValueError):
    """
    Base class of every conversion failure.

    :param str message: Human readable description
    :param ErrorReason reason: Machine readable failure class
    :param int position: Offset in the source text or token index, if known
    """

    def __init__(self, message: str, reason: ErrorReason, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.position = position


class LexicalError(ShuntingYardError):
    """An unrecognized character was found while tokenizing."""


class StructuralError(ShuntingYardError):
    """The token stream is empty or its grouping is mismatched."""


class ResourceError(ShuntingYardError):
    """A token list could not grow past its configured capacity."""
