"""Scan raw expression text into an infix token stream."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shunting_yard.common.errors import ErrorReason, LexicalError, ShuntingYardError
from shunting_yard.common.logger import logger
from shunting_yard.lexer.token import (
    create_group,
    create_literal,
    create_operator,
    is_digit_char,
    is_group_char,
    is_operator_char,
    is_space_char,
)
from shunting_yard.lexer.token_list import TokenList, check_capacity_bounds


class Tokenizer(BaseModel):
    """
    Character level lexer for arithmetic expressions.

    Recognized input:
        - Numbers: digits with at most one decimal point (``12``, ``3.5``, ``7.``)
        - Operators: ``+ - * / %``
        - Grouping: ``(`` and ``)``
        - ASCII whitespace, skipped

    Tokenizing is all-or-nothing: on the first unrecognized character the
    partial list is released and a LexicalError is raised.
    """

    model_config = ConfigDict(frozen=True)

    initial_capacity: int = Field(default=1, ge=1, description="Initial slots of the produced list")
    max_capacity: Optional[int] = Field(default=None, ge=1, description="Slot limit of the produced list")

    @model_validator(mode="after")
    def capacity_within_bounds(self) -> "Tokenizer":
        """Ensure the lists built from this configuration start within their limit."""
        check_capacity_bounds(self.initial_capacity, self.max_capacity)
        return self

    def tokenize(self, text: str) -> TokenList:
        """
        Split an expression into classified tokens in source order.

        :param str text: Expression text, available in full

        :return: Infix token list owned by the caller
        :rtype: TokenList
        :raises LexicalError: If an unrecognized character is found
        :raises ResourceError: If the list would grow past ``max_capacity``
        """
        tokens = TokenList(initial_capacity=self.initial_capacity, max_capacity=self.max_capacity)
        position = 0

        try:
            while position < len(text):
                c = text[position]

                if is_digit_char(c):
                    token = create_literal(text, position)
                elif is_operator_char(c):
                    token = create_operator(text, position)
                elif is_group_char(c):
                    token = create_group(text, position)
                elif is_space_char(c):
                    position += 1
                    continue
                else:
                    raise LexicalError(
                        f"Unrecognized character {c!r} at position {position}",
                        ErrorReason.UNRECOGNIZED_CHARACTER,
                        position,
                    )

                tokens.push(token)
                # Multi-character literals are consumed in one step
                position += token.length

        except ShuntingYardError as exc:
            logger.debug(f"🔤❌ Tokenizing failed: {exc}")
            tokens.free()
            raise

        return tokens


def tokenize(text: str) -> TokenList:
    """
    Tokenize ``text`` with the default configuration.

    :param str text: Expression text

    :return: Infix token list
    :rtype: TokenList
    :raises LexicalError: If an unrecognized character is found
    """
    return Tokenizer().tokenize(text)
