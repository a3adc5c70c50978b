"""Convert infix token streams to postfix with the Shunting-yard algorithm."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shunting_yard.common.errors import ErrorReason, ShuntingYardError, StructuralError
from shunting_yard.common.logger import logger
from shunting_yard.lexer.token import Token, token_precedence
from shunting_yard.lexer.token_list import TokenList, check_capacity_bounds
from shunting_yard.lexer.tokenizer import Tokenizer


class ShuntingYardParser(BaseModel):
    """
    Reorder infix tokens into Reverse Polish Notation (RPN).

    The Shunting-yard algorithm converts an infix expression into RPN, which can
    be evaluated with a single stack and needs no parentheses.
    Operands go straight to an output queue; operators wait on an operator stack
    until an operator that binds less tightly arrives, or a closing parenthesis
    or the end of input flushes them.

    Examples:
        - Infix expression (standard notation): 3 + 4 * 2
        - Corresponding Reverse Polish Notation (RPN): 3 4 2 * +
        - Infix with grouping and a unary sign: (2 + 3) * -4
        - Corresponding RPN: 2 3 + 4 - *

    An operator is unary when it opens the expression or follows another
    operator or a left parenthesis. Unary operators are right-associative and
    rank above ``* / %``, so a sign binds to the operand right after it:

        - Infix: -7 % 3
        - RPN: 7 - 3 %, i.e. (-7) % 3 and not -(7 % 3), which is 7 3 % -

    Giving signs the rank of ``+ -`` instead would produce ``7 3 % -`` here, but
    would also pop ``*`` before its right operand in ``2 * -3``.
    """

    # Make the Pydantic instance immutable (read-only), a parser carries no state between calls
    model_config = ConfigDict(frozen=True)

    strict_grouping: bool = Field(
        default=True,
        description="Reject a left parenthesis still open at the end of input",
    )
    initial_capacity: int = Field(default=1, ge=1, description="Initial slots of every working list")
    max_capacity: Optional[int] = Field(default=None, ge=1, description="Slot limit of every working list")

    @model_validator(mode="after")
    def capacity_within_bounds(self) -> "ShuntingYardParser":
        """Ensure the lists built from this configuration start within their limit."""
        check_capacity_bounds(self.initial_capacity, self.max_capacity)
        return self

    def _new_list(self) -> TokenList:
        return TokenList(initial_capacity=self.initial_capacity, max_capacity=self.max_capacity)

    @staticmethod
    def _in_unary_position(infix: TokenList, index: int) -> bool:
        """
        Tell whether the operator at ``index`` has no left operand.

        :param TokenList infix: Infix token stream
        :param int index: Position of the operator

        :return: True if the operator is first or follows an operator or "("
        :rtype: bool
        """
        if index == 0:
            return True
        prev = infix.peek_index(index - 1)
        return prev.is_operator or prev.is_left_paren

    @staticmethod
    def _should_pop(top: Optional[Token], current: Token) -> bool:
        """
        Decide whether the stack top must move to the output before ``current`` is pushed.

        :param Token top: Operator stack top, may be None
        :param Token current: Incoming operator

        :return: True if ``top`` binds at least as tightly as ``current``
        :rtype: bool
        """
        if top is None or not top.is_operator:
            return False
        o1 = token_precedence(current)
        o2 = token_precedence(top)
        return o2 > o1 or (o2 == o1 and current.is_left_associative)

    def _close_group(self, operator_stack: TokenList, output_queue: TokenList, index: int) -> None:
        """
        Flush operators up to the matching left parenthesis and discard it.

        :raises StructuralError: If no left parenthesis is open
        """
        while not operator_stack.is_empty() and not operator_stack.peek().is_left_paren:
            output_queue.push(operator_stack.pop())

        if operator_stack.is_empty():
            raise StructuralError(
                f"Mismatched parentheses: no '(' for ')' at token {index}",
                ErrorReason.UNMATCHED_RIGHT_PAREN,
                index,
            )
        operator_stack.pop()

    def _drain(self, operator_stack: TokenList, output_queue: TokenList) -> None:
        """
        Move the remaining operators to the output, top first.

        :raises StructuralError: If a left parenthesis is still open and grouping is strict
        """
        while not operator_stack.is_empty():
            token = operator_stack.pop()
            if token.is_left_paren:
                if self.strict_grouping:
                    raise StructuralError(
                        "Mismatched parentheses: '(' is never closed",
                        ErrorReason.UNMATCHED_LEFT_PAREN,
                    )
                logger.warning("⚠️ Dropping unclosed '(' at end of input")
                continue
            output_queue.push(token)

    def shunt(self, infix: TokenList) -> TokenList:
        """
        Convert an infix token list into a postfix token list.

        The infix list is only read; reclassified unary operators are new tokens
        that go to the working lists.

        :param TokenList infix: Infix token stream, borrowed

        :return: Postfix token list owned by the caller
        :rtype: TokenList
        :raises StructuralError: If the input is empty or parentheses are mismatched
        :raises ResourceError: If a working list would grow past ``max_capacity``
        """
        if infix.is_empty():
            raise StructuralError("Empty expression", ErrorReason.EMPTY_EXPRESSION)

        output_queue: TokenList = self._new_list()
        operator_stack: TokenList = self._new_list()

        try:
            for i, symbol in enumerate(infix):
                if symbol.is_operator and self._in_unary_position(infix, i):
                    symbol = symbol.as_unary()

                if symbol.is_literal:
                    output_queue.push(symbol)
                elif symbol.is_operator:
                    while self._should_pop(operator_stack.peek(), symbol):
                        output_queue.push(operator_stack.pop())
                    operator_stack.push(symbol)
                elif symbol.is_left_paren:
                    operator_stack.push(symbol)
                elif symbol.is_right_paren:
                    self._close_group(operator_stack, output_queue, i)

            self._drain(operator_stack, output_queue)

        except ShuntingYardError as exc:
            logger.debug(f"🚂❌ Shunting failed: {exc}")
            output_queue.free()
            raise

        finally:
            # The stack never outlives the call
            operator_stack.free()

        return output_queue

    def to_postfix(self, expr: str) -> TokenList:
        """
        Tokenize ``expr`` and convert it to postfix.

        :param str expr: Arithmetic expression string

        :return: Postfix token list
        :rtype: TokenList
        :raises ShuntingYardError: If the expression cannot be tokenized or converted
        """
        tokenizer = Tokenizer(initial_capacity=self.initial_capacity, max_capacity=self.max_capacity)
        with tokenizer.tokenize(expr) as infix:
            return self.shunt(infix)


def shunt(infix: TokenList) -> TokenList:
    """
    Convert ``infix`` to postfix with the default, strict parser.

    :param TokenList infix: Infix token stream

    :return: Postfix token list
    :rtype: TokenList
    :raises ShuntingYardError: If the conversion fails
    """
    return ShuntingYardParser().shunt(infix)
