"""Test class TokenList."""
from pydantic import ValidationError
import pytest

from shunting_yard.common.errors import ErrorReason, ResourceError
from shunting_yard.lexer.token import create_literal, create_operator
from shunting_yard.lexer.token_list import TokenList


def make_list(*lexemes: str) -> TokenList:
    tokens = TokenList()
    for lexeme in lexemes:
        tokens.push(create_literal(lexeme))
    return tokens


def test_new_list_is_empty() -> None:
    """A new list has no tokens and one slot."""
    tokens = TokenList()
    assert tokens.is_empty()
    assert tokens.is_full()
    assert tokens.count == 0
    assert tokens.capacity == 1
    assert tokens.peek() is None
    assert tokens.pop() is None


def test_invalid_initial_capacity() -> None:
    """Capacities below one raise a ValidationError."""
    with pytest.raises(ValidationError):
        TokenList(initial_capacity=0)


@pytest.mark.parametrize("initial_capacity,max_capacity", [(4, 2), (2, 1)])
def test_max_capacity_below_initial_capacity(initial_capacity, max_capacity) -> None:
    """A limit smaller than the initial slots raises a ValidationError."""
    with pytest.raises(ValidationError):
        TokenList(initial_capacity=initial_capacity, max_capacity=max_capacity)


def test_max_capacity_equal_to_initial_capacity() -> None:
    """A limit equal to the initial slots is accepted and never grows."""
    tokens = TokenList(initial_capacity=2, max_capacity=2)
    assert tokens.count <= tokens.capacity <= tokens.max_capacity
    tokens.push(create_literal("1"))
    tokens.push(create_literal("2"))
    with pytest.raises(ResourceError):
        tokens.push(create_literal("3"))


@pytest.mark.parametrize("n", [1, 2, 3, 17, 100])
def test_growth_keeps_order(n) -> None:
    """Pushing n tokens yields count n and every token in push order."""
    tokens = make_list(*(str(i) for i in range(n)))
    assert tokens.count == n
    assert tokens.capacity >= n
    assert [tokens.peek_index(i).lexeme for i in range(n)] == [str(i) for i in range(n)]


def test_capacity_doubles() -> None:
    """Capacity doubles each time a push finds the list full."""
    tokens = make_list("1")
    assert tokens.capacity == 1
    tokens.push(create_literal("2"))
    assert tokens.capacity == 2
    tokens.push(create_literal("3"))
    assert tokens.capacity == 4


def test_push_stores_a_clone() -> None:
    """The stored token is equal to, but not the same object as, the pushed one."""
    original = create_operator("+")
    tokens = TokenList()
    tokens.push(original)
    assert tokens.peek() == original
    assert tokens.peek() is not original


def test_pop_returns_clone_that_outlives_list() -> None:
    """A popped token stays valid after the list is freed."""
    tokens = make_list("1", "2")
    popped = tokens.pop()
    tokens.free()
    assert popped.lexeme == "2"
    assert tokens.is_empty()


def test_peek_is_borrowed() -> None:
    """peek returns the stored token without removing it."""
    tokens = make_list("1", "2")
    assert tokens.peek() is tokens.peek()
    assert tokens.count == 2


def test_pop_is_lifo() -> None:
    """pop removes tokens from the top."""
    tokens = make_list("1", "2", "3")
    assert [tokens.pop().lexeme for _ in range(3)] == ["3", "2", "1"]
    assert tokens.pop() is None


@pytest.mark.parametrize("index,removed,remaining", [
    (0, "10", ["11", "12", "13"]),
    (2, "12", ["10", "11", "13"]),
    (-1, "13", ["10", "11", "12"]),
    (-4, "10", ["11", "12", "13"]),
])
def test_pop_index(index, removed, remaining) -> None:
    """pop_index removes the token at a (possibly negative) index and shifts the rest."""
    tokens = make_list("10", "11", "12", "13")
    assert tokens.pop_index(index).lexeme == removed
    assert tokens.lexemes() == remaining
    assert tokens.capacity == 4


@pytest.mark.parametrize("index", [4, -5, 100])
def test_pop_index_out_of_range(index) -> None:
    """Out of range indexes return None and leave the list unchanged."""
    tokens = make_list("1", "2", "3", "4")
    assert tokens.pop_index(index) is None
    assert tokens.count == 4


def test_peek_index_out_of_range() -> None:
    """peek_index returns None outside [0, count)."""
    tokens = make_list("1")
    assert tokens.peek_index(1) is None
    assert tokens.peek_index(-1) is None


def test_max_capacity() -> None:
    """Growing past max_capacity raises a ResourceError and keeps the stored tokens."""
    tokens = TokenList(max_capacity=2)
    tokens.push(create_literal("1"))
    tokens.push(create_literal("2"))
    with pytest.raises(ResourceError) as exc_info:
        tokens.push(create_literal("3"))
    assert exc_info.value.reason is ErrorReason.CAPACITY_EXCEEDED
    assert tokens.lexemes() == ["1", "2"]


def test_context_manager_frees() -> None:
    """Leaving the with block releases every token."""
    with make_list("1", "2") as tokens:
        assert len(tokens) == 2
    assert tokens.is_empty()


def test_dump() -> None:
    """dump writes one line per token with its index."""
    tokens = make_list("1", "2.5")
    lines = tokens.dump().splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("[TokenList] index=1, lexeme='2.5'")
    assert "type=FLOAT" in lines[1]
