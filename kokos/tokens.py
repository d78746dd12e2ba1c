"""Token kinds, source locations and tokens produced by the lexer."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Kinds of tokens the lexer can produce."""

    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACKET = enum.auto()
    RBRACKET = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()

    QUOTE = enum.auto()

    IDENT = enum.auto()
    INT_LIT = enum.auto()
    STR_LIT = enum.auto()
    FLOAT_LIT = enum.auto()
    STR_LIT_UNCLOSED = enum.auto()
    ILLEGAL = enum.auto()

    def __str__(self) -> str:
        return token_type_str(self)


@dataclass(frozen=True)
class Location:
    """A position in a named (or unnamed) source text; rows and columns start at 1."""

    filename: str | None = None
    row: int = 1
    col: int = 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.row}:{self.col}"


@dataclass(frozen=True)
class Token:
    """A lexed token: its kind, the text it covers and where it starts."""

    type: TokenType
    value: str
    location: Location


def token_type_str(token_type: TokenType) -> str:
    """Return the conventional display name of a token type, e.g. ``TT_LPAREN``."""
    return f"TT_{token_type.name}"