"""Turns source text into a stream of tokens."""

from __future__ import annotations

from collections.abc import Iterator

from kokos.tokens import Location, Token, TokenType

_SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "'": TokenType.QUOTE,
}

_DIGITS = frozenset("0123456789")
_SPACE = frozenset(" \t\n\v\f\r")


def _is_ident_char(c: str) -> bool:
    return c not in _SPACE and c not in "()"


class Lexer:
    """A lexer over a piece of source text, producing tokens one at a time."""

    def __init__(self, text: str, filename: str | None = None) -> None:
        self.text = text
        self.filename = filename
        self.pos = 0
        self.row = 1
        self.col = 1

    @property
    def location(self) -> Location:
        """The current position of the lexer."""
        return Location(self.filename, self.row, self.col)

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _current(self) -> str:
        return self.text[self.pos]

    def _advance(self) -> bool:
        if self._at_end():
            return False
        self.pos += 1
        self.col += 1
        return True

    def _skip_whitespace(self) -> None:
        while not self._at_end():
            c = self._current()
            if c == " ":
                self._advance()
            elif c == "\t":
                self._advance()
                self.col += 3
            elif c == "\n":
                self.row += 1
                self._advance()
                self.col = 1
            else:
                return

    def _skip_comment(self) -> None:
        while not self._at_end() and self._current() != "\n":
            self._advance()

    def _lex_string(self, location: Location) -> Token:
        self._advance()
        start = self.pos
        while not self._at_end() and self._current() != '"':
            self._advance()

        if self._at_end():
            return Token(TokenType.STR_LIT_UNCLOSED, self.text[start - 1 : self.pos], location)

        value = self.text[start : self.pos]
        self._advance()
        return Token(TokenType.STR_LIT, value, location)

    def _lex_number(self, location: Location) -> Token:
        start = self.pos
        token_type = TokenType.INT_LIT
        self._advance()
        while not self._at_end() and self._current() in _DIGITS:
            self._advance()

        if not self._at_end() and self._current() == ".":
            token_type = TokenType.FLOAT_LIT
            self._advance()
            while not self._at_end() and self._current() in _DIGITS:
                self._advance()

        return Token(token_type, self.text[start : self.pos], location)

    def _lex_ident(self, location: Location) -> Token:
        start = self.pos
        self._advance()
        while not self._at_end() and _is_ident_char(self._current()):
            self._advance()
        return Token(TokenType.IDENT, self.text[start : self.pos], location)

    def next_token(self) -> Token | None:
        """Return the next token, or None when the input is exhausted."""
        while True:
            self._skip_whitespace()
            if self._at_end():
                return None

            c = self._current()
            if c == ";":
                self._skip_comment()
                continue
            if c == "\0":
                return None

            location = self.location
            single = _SINGLE_CHAR_TOKENS.get(c)
            if single is not None:
                self._advance()
                return Token(single, c, location)
            if c == '"':
                return self._lex_string(location)
            if c in _DIGITS:
                return self._lex_number(location)
            return self._lex_ident(location)

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next_token()) is not None:
            yield token


def lex(text: str, filename: str | None = None) -> list[Token]:
    """Lex the whole of ``text`` and return its tokens."""
    return list(Lexer(text, filename))