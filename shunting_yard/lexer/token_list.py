"""Owning, growable token sequence usable as a stack or a queue."""
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from shunting_yard.common.errors import ErrorReason, ResourceError
from shunting_yard.lexer.token import Token, token_dump


def check_capacity_bounds(initial_capacity: int, max_capacity: Optional[int]) -> None:
    """
    Ensure a list starting at ``initial_capacity`` slots fits under ``max_capacity``.

    :raises ValueError: If ``max_capacity`` is set and smaller than ``initial_capacity``
    """
    if max_capacity is not None and max_capacity < initial_capacity:
        raise ValueError(f"max_capacity ({max_capacity}) is smaller than initial_capacity ({initial_capacity})")


class TokenList(BaseModel):
    """
    Ordered sequence of tokens with explicit ownership rules.

    Ownership model:
        - push stores a clone, the caller keeps its own token.
        - pop removes the stored token and hands back a clone.
        - peek returns a borrowed view of the stored token. Tokens are frozen,
          so the view cannot alter what the list holds.

    Storage starts at ``initial_capacity`` slots and doubles whenever a push
    finds it full.
    """

    initial_capacity: int = Field(default=1, ge=1, description="Number of slots allocated up front")
    max_capacity: Optional[int] = Field(
        default=None, ge=1, description="Upper bound on slots, None for unbounded growth"
    )

    _slots: List[Optional[Token]] = PrivateAttr(default_factory=list)
    _count: int = PrivateAttr(default=0)

    @model_validator(mode="after")
    def capacity_within_bounds(self) -> "TokenList":
        """Ensure the initial slots do not already exceed the limit."""
        check_capacity_bounds(self.initial_capacity, self.max_capacity)
        return self

    def model_post_init(self, context: Any) -> None:
        self._slots = [None] * self.initial_capacity
        self._count = 0

    @property
    def count(self) -> int:
        """Number of stored tokens."""
        return self._count

    @property
    def capacity(self) -> int:
        """Number of allocated slots."""
        return len(self._slots)

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count >= len(self._slots)

    def _grow(self) -> None:
        """
        Double the number of slots, keeping every stored token in place.

        :raises ResourceError: If doubling would exceed ``max_capacity``
        """
        capacity = len(self._slots) * 2
        if self.max_capacity is not None and capacity > self.max_capacity:
            raise ResourceError(
                f"Token list cannot grow from {len(self._slots)} to {capacity} slots "
                f"(max_capacity={self.max_capacity})",
                ErrorReason.CAPACITY_EXCEEDED,
            )
        self._slots.extend([None] * (capacity - len(self._slots)))

    def push(self, token: Token) -> None:
        """
        Append a clone of ``token`` at the top of the list.

        :param Token token: Token to store, left untouched

        :return: None
        :raises ResourceError: If the list is full and may not grow
        """
        if self.is_full():
            self._grow()
        self._slots[self._count] = token.clone()
        self._count += 1

    def pop(self) -> Optional[Token]:
        """
        Remove the top token.

        :return: Clone of the removed token, or None if the list is empty
        :rtype: Optional[Token]
        """
        return self.pop_index(-1)

    def pop_index(self, index: int) -> Optional[Token]:
        """
        Remove the token at ``index`` and shift the following tokens left.

        Negative indexes count from the end, as for Python lists.

        :param int index: Position of the token to remove

        :return: Clone of the removed token, or None if the index is out of range
        :rtype: Optional[Token]
        """
        if index < 0:
            index += self._count
        if index < 0 or index >= self._count:
            return None

        token = self._slots[index]
        clone = token.clone()
        del self._slots[index]
        # Keep the allocated slot count unchanged
        self._slots.append(None)
        self._count -= 1
        return clone

    def peek(self) -> Optional[Token]:
        """
        Borrow the top token without removing it.

        The view is only meaningful while this list holds the token; do not keep
        it across a pop from the same list.

        :return: Stored token, or None if the list is empty
        :rtype: Optional[Token]
        """
        return self.peek_index(self._count - 1)

    def peek_index(self, index: int) -> Optional[Token]:
        """
        Borrow the token at ``index`` without removing it.

        :param int index: Position from the bottom of the list, must be non-negative

        :return: Stored token, or None if the index is out of range
        :rtype: Optional[Token]
        """
        if index < 0 or index >= self._count:
            return None
        return self._slots[index]

    def free(self) -> None:
        """Release every stored token, leaving an empty list with its slots allocated."""
        for i in range(self._count):
            self._slots[i] = None
        self._count = 0

    def lexemes(self) -> List[str]:
        """Return the lexemes of the stored tokens, bottom first."""
        return [token.lexeme for token in self]

    def dump(self) -> str:
        """Return one diagnostic line per stored token."""
        return "\n".join(
            f"[TokenList] index={i}, {token_dump(token)[len('[Token] '):]}"
            for i, token in enumerate(self)
        )

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Token]:
        # Borrowed views, in storage order
        for i in range(self._count):
            yield self._slots[i]

    def __enter__(self) -> "TokenList":
        return self

    def __exit__(self, *args) -> None:
        self.free()

    def __repr__(self) -> str:
        return f"TokenList(count={self._count}, capacity={self.capacity}, lexemes={self.lexemes()!r})"
