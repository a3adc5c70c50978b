"""Test functions validate_infix and validate_postfix."""
import pytest

from shunting_yard.lexer.token import create_group, create_literal, create_operator
from shunting_yard.lexer.token_list import TokenList
from shunting_yard.lexer.tokenizer import tokenize
from shunting_yard.parser.parser import shunt
from shunting_yard.parser.validator import validate_infix, validate_postfix


def build(*tokens) -> TokenList:
    result = TokenList()
    for token in tokens:
        result.push(token)
    return result


@pytest.mark.parametrize("expr", [
    "1",
    "1 + 2",
    "-1",
    "2 * -3",
    "2 - -3",
    "(1 + 2) * 3",
    "-(1)",
    "+ - 4",
])
def test_validate_infix_accepts(expr) -> None:
    """Well-formed infix expressions, including sign lead-ins, are accepted."""
    assert validate_infix(tokenize(expr))


@pytest.mark.parametrize("expr", [
    "",        # Empty expression
    "3 +",     # Trailing operator
    "3 * / 4",  # Two binary operators in a row
    "* 3",     # Leading operator that cannot be a sign
    "(* 3)",   # Same after a left parenthesis
    "(3 +)",   # Operator before a right parenthesis
    "3 4",     # Two operands in a row
    "2 (3)",   # Operand before a group
    "(2) 3",   # Group before an operand
    "()",      # Empty group
    "(1 + 2",  # Unclosed parenthesis
    "1 + 2)",  # Unmatched right parenthesis
    ")1(",     # Closed before opened
])
def test_validate_infix_rejects(expr) -> None:
    """Malformed infix expressions are rejected."""
    assert not validate_infix(tokenize(expr))


def test_validate_infix_is_read_only() -> None:
    """Validation does not change the stream."""
    infix = tokenize("-1 + 2")
    before = [token.model_dump() for token in infix]
    validate_infix(infix)
    assert [token.model_dump() for token in infix] == before


@pytest.mark.parametrize("expr", ["1", "1 + 2", "2 + 3 * 4", "-5 * 4", "-(-(2))", "(2+3)*4 % 6"])
def test_validate_postfix_accepts_shunt_output(expr) -> None:
    """The output of shunt on a well-formed expression reduces to exactly one value."""
    assert validate_postfix(shunt(tokenize(expr)))


def test_validate_postfix_empty() -> None:
    """An empty stream leaves no value."""
    assert not validate_postfix(TokenList())


def test_validate_postfix_binary_needs_two_operands() -> None:
    """A binary operator with a single operand is invalid."""
    assert not validate_postfix(build(create_literal("1"), create_operator("+")))


def test_validate_postfix_unary_needs_one_operand() -> None:
    """A unary operator at depth zero is invalid."""
    assert not validate_postfix(build(create_operator("-").as_unary(), create_literal("1")))


def test_validate_postfix_unary_keeps_depth() -> None:
    """A unary operator consumes one operand and produces one."""
    assert validate_postfix(build(create_literal("1"), create_operator("-").as_unary()))


def test_validate_postfix_too_many_operands() -> None:
    """Two values left on the stack is invalid."""
    assert not validate_postfix(build(create_literal("1"), create_literal("2")))


def test_validate_postfix_rejects_groups() -> None:
    """Parentheses have no place in a postfix stream."""
    assert not validate_postfix(build(create_literal("1"), create_group(")")))
