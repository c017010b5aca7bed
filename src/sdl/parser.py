"""Parser for scene description files.

Grammar:
    file        = statement*
    statement   = assign | modify | expr_stmt
    assign      = TYPE_KEYWORD IDENT "=" expr
    modify      = "MODIFY" (IDENT | BUILTIN) properties
    expr_stmt   = expr
    expr        = term (("+" | "-") term)*
    term        = unary (("*" | "/") unary)*
    unary       = "-" unary | primary
    primary     = FLOAT | IDENT | "(" expr ")" | array | properties
    array       = "[" (expr ",")* expr? "]"
    properties  = "{" (IDENT ":" expr ",")* (IDENT ":" expr)? "}"

Expressions are parsed by precedence climbing: every token kind that can
start an expression has a prefix function, every binary operator has an
infix function and a binding power in PRECEDENCES.
"""

import logging
import math
import re
from collections.abc import Callable
from enum import IntEnum
from pathlib import Path

from . import ast
from .config import DEFAULT_SETTINGS, Settings
from .lexer import Lexer
from .tokens import BUILTIN_KEYWORDS, TYPE_KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

FLOAT_LITERAL = re.compile(r"[0-9]+(\.[0-9]+)?")


class ParseError(Exception):
    """One or more syntax errors. ``errors`` keeps every message."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class Precedence(IntEnum):
    LOWEST = 1
    SUM = 2  # + -
    PRODUCT = 3  # * /
    PREFIX = 4  # -x


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.MULTIPLY: Precedence.PRODUCT,
    TokenKind.DIVIDE: Precedence.PRODUCT,
}

# Tokens at which the parser resumes after a syntax error
STATEMENT_START = TYPE_KEYWORDS | {TokenKind.MODIFY}


class Parser:
    """Recursive descent parser with one token of lookahead.

    Syntax errors do not stop the parse: each one is recorded, the parser
    skips ahead to the next statement and carries on. Check ``errors()``
    before trusting the returned file.
    """

    PrefixFn = Callable[[], ast.Expr]
    InfixFn = Callable[[ast.Expr], ast.Expr]

    def __init__(self, lexer: Lexer, settings: Settings | None = None):
        self.lexer = lexer
        self.settings = settings or DEFAULT_SETTINGS
        self._errors: list[str] = []
        self._depth = 0
        self._current: Token = lexer.next_token()

        self._prefix_fns: dict[TokenKind, Parser.PrefixFn] = {}
        self._infix_fns: dict[TokenKind, Parser.InfixFn] = {}

        self.register_prefix(TokenKind.IDENT, self.parse_identifier)
        self.register_prefix(TokenKind.FLOAT, self.parse_float_literal)
        self.register_prefix(TokenKind.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenKind.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenKind.LBRACKET, self.parse_array)
        self.register_prefix(TokenKind.LBRACE, self.parse_properties)

        for kind in PRECEDENCES:
            self.register_infix(kind, self.parse_infix_expression)

    def register_prefix(self, kind: TokenKind, fn: "Parser.PrefixFn") -> None:
        self._prefix_fns[kind] = fn

    def register_infix(self, kind: TokenKind, fn: "Parser.InfixFn") -> None:
        self._infix_fns[kind] = fn

    def errors(self) -> list[str]:
        return list(self._errors)

    # Token cursor

    def at(self, *kinds: TokenKind) -> bool:
        return self._current.kind in kinds

    def advance(self) -> Token:
        tok = self._current
        self._current = self.lexer.next_token()
        return tok

    def consume(self, kind: TokenKind) -> Token:
        tok = self._current
        if tok.kind is not kind:
            raise self._error(
                tok, f"expected next token to be {kind.value}, got {tok.kind.value} instead"
            )
        return self.advance()

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.at(*kinds):
            return self.advance()
        return None

    def _error(self, tok: Token, msg: str) -> ParseError:
        return ParseError([f"line {tok.line}, col {tok.col}: {msg}"])

    # Statements

    def parse_file(self, path: str = "") -> ast.File:
        """Parse every statement up to EOF."""
        statements: list[ast.Stmt] = []

        while not self.at(TokenKind.EOF):
            start = self._current
            try:
                statements.append(self.parse_statement())
            except ParseError as e:
                self._errors.extend(e.errors)
                self._synchronize(start)

        logger.debug(
            "parsed %d statements with %d errors", len(statements), len(self._errors)
        )
        return ast.File(path=path, statements=statements)

    def _synchronize(self, start: Token) -> None:
        """Skip to the next token that can begin a statement."""
        if self._current is start:
            self.advance()
        while not self.at(TokenKind.EOF, *STATEMENT_START):
            self.advance()

    def parse_statement(self) -> ast.Stmt:
        if self.at(*TYPE_KEYWORDS):
            return self.parse_assign_statement()
        if self.at(TokenKind.MODIFY):
            return self.parse_modify_statement()
        return self.parse_expression_statement()

    def parse_assign_statement(self) -> ast.AssignStatement:
        tok = self.advance()
        name = self.parse_identifier()
        self.consume(TokenKind.ASSIGN)
        value = self.parse_expression()
        return ast.AssignStatement(token=tok, name=name, value=value)

    def parse_modify_statement(self) -> ast.ModifyStatement:
        tok = self.consume(TokenKind.MODIFY)
        if self.at(*BUILTIN_KEYWORDS):
            name_tok = self.advance()
        else:
            name_tok = self.consume(TokenKind.IDENT)
        name = ast.Identifier(token=name_tok, value=name_tok.literal)
        value = self.parse_properties()
        return ast.ModifyStatement(token=tok, name=name, value=value)

    def parse_expression_statement(self) -> ast.ExpressionStatement:
        tok = self._current
        expression = self.parse_expression()
        return ast.ExpressionStatement(token=tok, expression=expression)

    # Expressions

    def parse_expression(self, precedence: Precedence = Precedence.LOWEST) -> ast.Expr:
        tok = self._current
        prefix = self._prefix_fns.get(tok.kind)
        if prefix is None:
            if tok.kind is TokenKind.ILLEGAL:
                raise self._error(tok, f"illegal character {tok.literal!r}")
            raise self._error(tok, f"no prefix parse function for {tok.kind.value} found")

        self._depth += 1
        try:
            if self._depth > self.settings.max_nesting_depth:
                raise self._error(
                    tok,
                    f"expression nested too deeply (limit {self.settings.max_nesting_depth})",
                )
            left = prefix()
            while precedence < PRECEDENCES.get(self._current.kind, Precedence.LOWEST):
                infix = self._infix_fns[self._current.kind]
                left = infix(left)
        finally:
            self._depth -= 1
        return left

    def parse_identifier(self) -> ast.Identifier:
        tok = self.consume(TokenKind.IDENT)
        return ast.Identifier(token=tok, value=tok.literal)

    def parse_float_literal(self) -> ast.FloatLiteral:
        tok = self.consume(TokenKind.FLOAT)
        if not FLOAT_LITERAL.fullmatch(tok.literal):
            raise self._error(tok, f"could not parse {tok.literal!r} as float")
        value = float(tok.literal)
        if math.isinf(value):
            raise self._error(tok, f"could not parse {tok.literal!r} as float")
        return ast.FloatLiteral(token=tok, value=value)

    def parse_prefix_expression(self) -> ast.PrefixExpression:
        tok = self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        return ast.PrefixExpression(token=tok, operator=tok.literal, right=right)

    def parse_infix_expression(self, left: ast.Expr) -> ast.InfixExpression:
        tok = self.advance()
        # Binding at the operator's own level keeps + - * / left-associative
        right = self.parse_expression(PRECEDENCES[tok.kind])
        return ast.InfixExpression(
            token=tok, left=left, operator=tok.literal, right=right
        )

    def parse_grouped_expression(self) -> ast.Expr:
        self.consume(TokenKind.LPAREN)
        expr = self.parse_expression()
        self.consume(TokenKind.RPAREN)
        return expr

    def parse_array(self) -> ast.ArrayExpression:
        tok = self.consume(TokenKind.LBRACKET)
        elements = []
        while not self.at(TokenKind.RBRACKET):
            elements.append(self.parse_expression())
            if not self.match(TokenKind.COMMA):
                break
        self.consume(TokenKind.RBRACKET)
        return ast.ArrayExpression(token=tok, elements=elements)

    def parse_properties(self) -> ast.PropertiesExpression:
        tok = self.consume(TokenKind.LBRACE)
        properties: dict[str, ast.Expr] = {}
        while not self.at(TokenKind.RBRACE):
            key = self.consume(TokenKind.IDENT)
            self.consume(TokenKind.COLON)
            # Last write wins for repeated keys
            properties[key.literal] = self.parse_expression()
            if not self.match(TokenKind.COMMA):
                break
        self.consume(TokenKind.RBRACE)
        return ast.PropertiesExpression(token=tok, properties=properties)


def parse(source: str, path: str = "", settings: Settings | None = None) -> ast.File:
    """Parse scene description source, raising ParseError on any syntax error."""
    parser = Parser(Lexer(source), settings)
    file = parser.parse_file(path)
    if parser.errors():
        raise ParseError(parser.errors())
    return file


def parse_file(filepath: str | Path, settings: Settings | None = None) -> ast.File:
    """Parse a scene description file."""
    filepath = Path(filepath)
    source = filepath.read_text()
    return parse(source, str(filepath), settings)
