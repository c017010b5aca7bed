"""SDL (scene description language): lex, parse and evaluate scene files.

Pipeline: source -> tokens -> AST -> entities grouped by class.

Example:
    from sdl import run

    values = run('''
        NUMBER r = 255
        COLOR red = [r, 0, 0]
        SPHERE ball = {color: red, radius: 1.5}
    ''')
    values.to_python()["SPHERE"]  # [{"color": [255.0, 0.0, 0.0], "radius": 1.5}]
"""

__version__ = "0.1.0"

from .ast import (
    ArrayExpression,
    AssignStatement,
    Expr,
    ExpressionStatement,
    File,
    FloatLiteral,
    Identifier,
    InfixExpression,
    ModifyStatement,
    PrefixExpression,
    PropertiesExpression,
    Stmt,
)
from .config import Settings
from .environment import Environment, EvaluatedValues
from .evaluator import EvaluationError, Evaluator, evaluate, run
from .lexer import Lexer, tokenize
from .objects import Array, Dictionary, Entity, Error, Number, Object, is_error, to_python
from .parser import ParseError, Parser, parse, parse_file
from .tokens import KEYWORDS, Token, TokenKind, lookup_ident

__all__ = [
    # Lex
    "Lexer",
    "tokenize",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "lookup_ident",
    # Parse
    "parse",
    "parse_file",
    "ParseError",
    "Parser",
    # AST
    "File",
    "Stmt",
    "AssignStatement",
    "ModifyStatement",
    "ExpressionStatement",
    "Expr",
    "Identifier",
    "FloatLiteral",
    "PrefixExpression",
    "InfixExpression",
    "ArrayExpression",
    "PropertiesExpression",
    # Evaluate
    "evaluate",
    "run",
    "Evaluator",
    "EvaluationError",
    "Environment",
    "EvaluatedValues",
    "Settings",
    # Objects
    "Object",
    "Number",
    "Array",
    "Dictionary",
    "Entity",
    "Error",
    "is_error",
    "to_python",
]
