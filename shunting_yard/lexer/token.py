"""Classified lexical units of an arithmetic expression."""
from enum import Enum, IntEnum
import re
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shunting_yard.common.errors import ErrorReason, LexicalError

OPERATOR_CHARS = "+-*/%"
GROUP_CHARS = "()"
DIGIT_CHARS = "0123456789"
SPACE_CHARS = " \t\n\r\v\f"
DECIMAL_POINT = "."

# Digits with at most one decimal point, as scanned by create_literal
LITERAL_PATTERN = re.compile(r"[0-9]+(\.[0-9]*)?")


class TokenKind(Enum):
    """Lexical category."""

    LITERAL = "literal"
    OPERATOR = "operator"
    GROUP = "group"


class TokenType(Enum):
    """Concrete token type."""

    # Literals
    INTEGER = "integer"
    FLOAT = "float"

    # Operators
    PLUS = "plus"
    MINUS = "minus"
    STAR = "star"
    SLASH = "slash"
    MOD = "mod"

    # Grouping
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


class TokenRole(Enum):
    """Arity of an operator in its expression."""

    NONE = "none"
    UNARY = "unary"
    BINARY = "binary"


class Associate(Enum):
    """Tie-break rule between operators of equal precedence."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class Precedence(IntEnum):
    """Operator binding strength, higher binds tighter."""

    ERROR = -1
    NONE = 0
    ADDITIVE = 1
    MULTIPLICATIVE = 2
    UNARY = 3


KIND_TYPES: Dict[TokenKind, FrozenSet[TokenType]] = {
    TokenKind.LITERAL: frozenset({TokenType.INTEGER, TokenType.FLOAT}),
    TokenKind.OPERATOR: frozenset(
        {TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH, TokenType.MOD}
    ),
    TokenKind.GROUP: frozenset({TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN}),
}

OPERATOR_TYPES: Dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.MOD,
}

GROUP_TYPES: Dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

ROLE_ASSOCIATION: Dict[TokenRole, Associate] = {
    TokenRole.BINARY: Associate.LEFT,
    TokenRole.UNARY: Associate.RIGHT,
}


def is_operator_char(c: str) -> bool:
    """Return True if ``c`` is one of ``+ - * / %``."""
    return len(c) == 1 and c in OPERATOR_CHARS


def is_group_char(c: str) -> bool:
    """Return True if ``c`` is a parenthesis."""
    return len(c) == 1 and c in GROUP_CHARS


def is_digit_char(c: str) -> bool:
    """Return True if ``c`` is an ASCII digit."""
    return len(c) == 1 and c in DIGIT_CHARS


def is_space_char(c: str) -> bool:
    """Return True if ``c`` is ASCII whitespace."""
    return len(c) == 1 and c in SPACE_CHARS


class Token(BaseModel):
    """
    One classified lexical unit.

    Tokens are immutable values: reclassifying an operator as unary produces a
    new token (see :meth:`as_unary`) instead of changing a token that may be
    stored in a list.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Lexical category")
    type: TokenType = Field(..., description="Concrete subtype within the kind")
    role: TokenRole = Field(default=TokenRole.NONE, description="Operator arity")
    precedence: Precedence = Field(default=Precedence.NONE, description="Operator binding strength")
    association: Associate = Field(default=Associate.NONE, description="Operator associativity")
    lexeme: str = Field(..., min_length=1, description="Exact source substring")

    @model_validator(mode="after")
    def fields_must_agree(self) -> "Token":
        """Ensure kind, type, lexeme, role, association and precedence describe the same token."""
        if self.type not in KIND_TYPES[self.kind]:
            raise ValueError(f"Token type {self.type.value} is not a {self.kind.value}")

        if self.kind is TokenKind.LITERAL:
            if not LITERAL_PATTERN.fullmatch(self.lexeme):
                raise ValueError(f"Literal lexeme {self.lexeme!r} is not a number")
            if (DECIMAL_POINT in self.lexeme) != (self.type is TokenType.FLOAT):
                raise ValueError(f"Literal {self.lexeme!r} cannot be {self.type.value}")
        elif self.kind is TokenKind.OPERATOR:
            if OPERATOR_TYPES.get(self.lexeme) is not self.type:
                raise ValueError(f"Operator lexeme {self.lexeme!r} is not {self.type.value}")
        elif GROUP_TYPES.get(self.lexeme) is not self.type:
            raise ValueError(f"Group lexeme {self.lexeme!r} is not {self.type.value}")

        if self.kind is TokenKind.OPERATOR:
            if ROLE_ASSOCIATION.get(self.role) is not self.association:
                raise ValueError(
                    f"Operator with role {self.role.value} cannot have association {self.association.value}"
                )
        elif (self.role, self.association) != (TokenRole.NONE, Associate.NONE):
            raise ValueError(f"A {self.kind.value} token has no role or association")

        expected = _rank(self.kind, self.type, self.role)
        if self.precedence is not expected:
            raise ValueError(f"Token {self.lexeme!r} must have precedence {expected.name}, got {self.precedence.name}")
        return self

    @property
    def length(self) -> int:
        """Number of source characters covered by the token."""
        return len(self.lexeme)

    @property
    def is_literal(self) -> bool:
        return self.kind is TokenKind.LITERAL

    @property
    def is_operator(self) -> bool:
        return self.kind is TokenKind.OPERATOR

    @property
    def is_group(self) -> bool:
        return self.kind is TokenKind.GROUP

    @property
    def is_left_paren(self) -> bool:
        return self.type is TokenType.LEFT_PAREN

    @property
    def is_right_paren(self) -> bool:
        return self.type is TokenType.RIGHT_PAREN

    @property
    def is_unary(self) -> bool:
        return self.role is TokenRole.UNARY

    @property
    def is_binary(self) -> bool:
        return self.role is TokenRole.BINARY

    @property
    def is_left_associative(self) -> bool:
        return self.association is Associate.LEFT

    @property
    def is_right_associative(self) -> bool:
        return self.association is Associate.RIGHT

    @property
    def is_sign(self) -> bool:
        """True for ``+`` and ``-``, the only operators that may lead an operand."""
        return self.type in (TokenType.PLUS, TokenType.MINUS)

    def clone(self) -> "Token":
        """
        Return an independent copy of the token.

        :return: Token equal to this one
        :rtype: Token
        """
        return self.model_copy(deep=True)

    def as_unary(self) -> "Token":
        """
        Return this operator reclassified as a right-associative unary operator.

        :return: New token with role, association and precedence updated
        :rtype: Token
        :raises ValueError: If the token is not an operator
        """
        if not self.is_operator:
            raise ValueError(f"Only operators can be unary, got {self.kind.value} {self.lexeme!r}")
        return Token(
            kind=self.kind,
            type=self.type,
            role=TokenRole.UNARY,
            association=Associate.RIGHT,
            precedence=_rank(self.kind, self.type, TokenRole.UNARY),
            lexeme=self.lexeme,
        )

    def __str__(self) -> str:
        return self.lexeme


def token_precedence(token: Optional[Token]) -> Precedence:
    """
    Look up the precedence of a token.

    This is the only precedence table of the package: token construction
    checks stored precedences against it and the parser calls it for both
    sides of every comparison.

    :param Token token: Token to rank, may be None

    :return: Precedence rank, ``Precedence.ERROR`` when there is no token
    :rtype: Precedence
    """
    if token is None:
        return Precedence.ERROR
    return _rank(token.kind, token.type, token.role)


def _rank(kind: TokenKind, token_type: TokenType, role: TokenRole) -> Precedence:
    if kind is not TokenKind.OPERATOR:
        return Precedence.NONE
    if role is TokenRole.UNARY:
        return Precedence.UNARY
    if token_type in (TokenType.PLUS, TokenType.MINUS):
        return Precedence.ADDITIVE
    return Precedence.MULTIPLICATIVE


def _char_at(source: str, start: int) -> str:
    return source[start] if 0 <= start < len(source) else ""


def create_literal(source: str, start: int = 0) -> Token:
    """
    Scan a numeric literal starting at ``source[start]``.

    Digits are consumed with at most one decimal point; a second point ends
    the scan and is left for the caller.

    :param str source: Expression text
    :param int start: Offset of the first digit

    :return: INTEGER or FLOAT literal token
    :rtype: Token
    :raises LexicalError: If ``source[start]`` is not a digit
    """
    if not is_digit_char(_char_at(source, start)):
        raise LexicalError(
            f"Expected a digit at position {start}, got {_char_at(source, start)!r}",
            ErrorReason.UNRECOGNIZED_CHARACTER,
            start,
        )

    end = start
    seen_dot = False
    while end < len(source):
        c = source[end]
        if is_digit_char(c):
            end += 1
        elif c == DECIMAL_POINT and not seen_dot:
            seen_dot = True
            end += 1
        else:
            break

    return Token(
        kind=TokenKind.LITERAL,
        type=TokenType.FLOAT if seen_dot else TokenType.INTEGER,
        lexeme=source[start:end],
    )


def create_operator(source: str, start: int = 0) -> Token:
    """
    Build a binary operator token from ``source[start]``.

    :param str source: Expression text
    :param int start: Offset of the operator character

    :return: Left-associative binary operator token
    :rtype: Token
    :raises LexicalError: If ``source[start]`` is not an operator character
    """
    c = _char_at(source, start)
    if not is_operator_char(c):
        raise LexicalError(
            f"Expected an operator at position {start}, got {c!r}",
            ErrorReason.UNRECOGNIZED_CHARACTER,
            start,
        )

    return Token(
        kind=TokenKind.OPERATOR,
        type=OPERATOR_TYPES[c],
        role=TokenRole.BINARY,
        association=Associate.LEFT,
        precedence=_rank(TokenKind.OPERATOR, OPERATOR_TYPES[c], TokenRole.BINARY),
        lexeme=c,
    )


def create_group(source: str, start: int = 0) -> Token:
    """
    Build a parenthesis token from ``source[start]``.

    :param str source: Expression text
    :param int start: Offset of the parenthesis

    :return: LEFT_PAREN or RIGHT_PAREN group token
    :rtype: Token
    :raises LexicalError: If ``source[start]`` is not a parenthesis
    """
    c = _char_at(source, start)
    if not is_group_char(c):
        raise LexicalError(
            f"Expected a parenthesis at position {start}, got {c!r}",
            ErrorReason.UNRECOGNIZED_CHARACTER,
            start,
        )
    return Token(kind=TokenKind.GROUP, type=GROUP_TYPES[c], lexeme=c)


def token_dump(token: Optional[Token]) -> str:
    """Return a one-line diagnostic description of a token."""
    if token is None:
        return "[Token] NULL"
    return (
        f"[Token] lexeme={token.lexeme!r}, length={token.length}, "
        f"type={token.type.name}, kind={token.kind.name}, role={token.role.name}, "
        f"assoc={token.association.name}, prec={token.precedence.name}"
    )
