"""Lexer: turns scene description source into a lazy stream of tokens."""

import re
from collections.abc import Iterator

from .tokens import SYMBOLS, Token, TokenKind, lookup_ident


class Lexer:
    """Produces tokens on demand from ``source``.

    The lexer never raises. Characters it cannot classify come back as
    ILLEGAL tokens and it is up to the parser to reject them. Once the
    input is exhausted every further call returns EOF.
    """

    WHITESPACE = re.compile(r"[ \t\r\n]+")
    TOKEN_PATTERNS = [
        # A dangling "1." still lexes as FLOAT so the parser can report it
        (re.compile(r"[0-9]+(?:\.[0-9]*)?"), TokenKind.FLOAT),
        (re.compile(r"[A-Za-z_][A-Za-z0-9_]*"), TokenKind.IDENT),
    ]

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind is TokenKind.EOF:
                return

    def next_token(self) -> Token:
        self._skip_whitespace()

        if self.pos >= len(self.source):
            return Token(TokenKind.EOF, "", self.line, self.col)

        for pattern, kind in self.TOKEN_PATTERNS:
            m = pattern.match(self.source, self.pos)
            if m:
                value = m.group(0)
                if kind is TokenKind.IDENT:
                    kind = lookup_ident(value)
                return self._emit(kind, value)

        ch = self.source[self.pos]
        return self._emit(SYMBOLS.get(ch, TokenKind.ILLEGAL), ch)

    def _emit(self, kind: TokenKind, value: str) -> Token:
        tok = Token(kind, value, self.line, self.col)
        self.pos += len(value)
        self.col += len(value)
        return tok

    def _skip_whitespace(self) -> None:
        m = self.WHITESPACE.match(self.source, self.pos)
        if not m:
            return
        for c in m.group(0):
            if c == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
        self.pos = m.end()


def tokenize(source: str) -> list[Token]:
    """Lex all of ``source``; the returned list ends with a single EOF token."""
    return list(Lexer(source))
