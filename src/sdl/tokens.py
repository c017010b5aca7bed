"""Token kinds and keyword table for scene description sources."""

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"  # x, sphere1, light_blue
    FLOAT = "FLOAT"  # 1, 1.5

    # Operators
    ASSIGN = "="
    MINUS = "-"
    PLUS = "+"
    MULTIPLY = "*"
    DIVIDE = "/"

    # Delimiters
    COMMA = ","
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # Keywords
    MODIFY = "MODIFY"
    CAMERA = "CAMERA"
    PLACE = "PLACE"
    AT = "AT"

    # Object types
    NUMBER = "NUMBER"
    COLOR = "COLOR"
    MATERIAL = "MATERIAL"
    SPHERE = "SPHERE"
    LIGHT = "LIGHT"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, TokenKind] = {
    "MODIFY": TokenKind.MODIFY,
    "CAMERA": TokenKind.CAMERA,
    "PLACE": TokenKind.PLACE,
    "AT": TokenKind.AT,
    "NUMBER": TokenKind.NUMBER,
    "COLOR": TokenKind.COLOR,
    "MATERIAL": TokenKind.MATERIAL,
    "SPHERE": TokenKind.SPHERE,
    "LIGHT": TokenKind.LIGHT,
}

# Keywords that open an assignment and name the class of the bound entity
TYPE_KEYWORDS = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.COLOR,
        TokenKind.MATERIAL,
        TokenKind.SPHERE,
        TokenKind.LIGHT,
    }
)

# Built-in singletons that MODIFY may name without declaring them
BUILTIN_KEYWORDS = frozenset({TokenKind.CAMERA})

SYMBOLS: dict[str, TokenKind] = {
    kind.value: kind
    for kind in TokenKind
    if len(kind.value) == 1
}


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for ``ident``, or IDENT if it is not reserved."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str
    line: int = field(default=1, compare=False)
    col: int = field(default=1, compare=False)

    def __str__(self) -> str:
        return self.literal
