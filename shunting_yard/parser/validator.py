"""Structural checks on infix and postfix token streams."""
from typing import Optional

from shunting_yard.common.logger import logger
from shunting_yard.lexer.token import Token
from shunting_yard.lexer.token_list import TokenList


def _starts_operand(token: Token) -> bool:
    return token.is_literal or token.is_left_paren


def _ends_operand(token: Token) -> bool:
    return token.is_literal or token.is_right_paren


def _pair_is_valid(prev: Optional[Token], current: Token) -> bool:
    """
    Check one adjacency in an infix stream.

    :param Token prev: Previous token, None at the start of the stream
    :param Token current: Current token

    :return: False if ``current`` cannot follow ``prev``
    :rtype: bool
    """
    if current.is_operator:
        # Only a sign may stand where an operand is expected
        if prev is None or prev.is_operator or prev.is_left_paren:
            return current.is_sign
        return True
    if current.is_right_paren:
        return prev is not None and _ends_operand(prev)
    # Literal or left parenthesis: an operand cannot directly follow another
    return prev is None or not _ends_operand(prev)


def validate_infix(tokens: TokenList) -> bool:
    """
    Check that an infix stream is a single well-formed expression.

    Rejected:
        - an empty stream
        - two operators in a row, unless the second is a ``+``/``-`` sign
        - a leading operator, or one right after ``(``, other than a sign
        - an operator as the last token or before ``)``
        - an operand directly followed by another operand or ``(``
        - empty or unbalanced parentheses

    :param TokenList tokens: Infix token stream, only read

    :return: True if the stream is well formed
    :rtype: bool
    """
    if tokens.is_empty():
        logger.debug("🔎 Infix rejected: empty stream")
        return False

    depth = 0
    prev: Optional[Token] = None
    for i, token in enumerate(tokens):
        if not _pair_is_valid(prev, token):
            logger.debug(f"🔎 Infix rejected: {token.lexeme!r} cannot follow {prev and prev.lexeme!r} at token {i}")
            return False
        if token.is_left_paren:
            depth += 1
        elif token.is_right_paren:
            depth -= 1
            if depth < 0:
                logger.debug(f"🔎 Infix rejected: unmatched ')' at token {i}")
                return False
        prev = token

    if prev.is_operator:
        logger.debug(f"🔎 Infix rejected: trailing operator {prev.lexeme!r}")
        return False
    if depth != 0:
        logger.debug(f"🔎 Infix rejected: {depth} unclosed '('")
        return False
    return True


def validate_postfix(tokens: TokenList) -> bool:
    """
    Check that a postfix stream evaluates to exactly one value.

    Walks the stream counting operands on an imaginary evaluation stack:
    literals push one, unary operators need one and leave it, binary operators
    need two and leave one. Any other token is invalid.

    :param TokenList tokens: Postfix token stream, only read

    :return: True if every step has enough operands and one value remains
    :rtype: bool
    """
    depth = 0
    for i, token in enumerate(tokens):
        if token.is_literal:
            depth += 1
        elif token.is_operator and token.is_unary:
            if depth < 1:
                logger.debug(f"🔎 Postfix rejected: unary {token.lexeme!r} without operand at token {i}")
                return False
        elif token.is_operator and token.is_binary:
            if depth < 2:
                logger.debug(f"🔎 Postfix rejected: binary {token.lexeme!r} needs two operands at token {i}")
                return False
            depth -= 1
        else:
            logger.debug(f"🔎 Postfix rejected: unexpected {token.kind.value} {token.lexeme!r} at token {i}")
            return False

    if depth != 1:
        logger.debug(f"🔎 Postfix rejected: {depth} values left on the stack")
        return False
    return True
