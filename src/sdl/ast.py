"""AST nodes for scene description files."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .tokens import Token


class Node(BaseModel):
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


# Expressions - using discriminated union for type safety
class Identifier(Node):
    type: Literal["identifier"] = "identifier"
    value: str

    def __str__(self) -> str:
        return self.value


class FloatLiteral(Node):
    """Numeric literal; the token keeps the source text verbatim."""

    type: Literal["float"] = "float"
    value: float

    def __str__(self) -> str:
        return self.token.literal


class PrefixExpression(Node):
    type: Literal["prefix"] = "prefix"
    operator: str  # -
    right: "Expr"

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


class InfixExpression(Node):
    type: Literal["infix"] = "infix"
    left: "Expr"
    operator: str  # +, -, *, /
    right: "Expr"

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class ArrayExpression(Node):
    """Array literal (e.g., [1.0, 0.0, 0.0])."""

    type: Literal["array"] = "array"
    elements: list["Expr"] = []

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


class PropertiesExpression(Node):
    """Property dictionary (e.g., {radius: 1.5, material: shiny}).

    Keys keep the order they were first written in. A repeated key
    replaces the earlier value.
    """

    type: Literal["properties"] = "properties"
    properties: dict[str, "Expr"] = {}

    def __str__(self) -> str:
        lines = ["{\n"]
        for key, value in self.properties.items():
            lines.append(f"{key}: {value},\n")
        lines.append("}")
        return "".join(lines)


# Expression union type
Expr = Annotated[
    Identifier
    | FloatLiteral
    | PrefixExpression
    | InfixExpression
    | ArrayExpression
    | PropertiesExpression,
    Field(discriminator="type"),
]


# Statements
class AssignStatement(Node):
    """Typed binding, e.g. ``SPHERE ball = {radius: 1}``.

    ``token`` is the type keyword; its literal becomes the entity class.
    """

    type: Literal["assign"] = "assign"
    name: Identifier
    value: Expr

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value}"


class ModifyStatement(Node):
    """Re-configuration of a built-in, e.g. ``MODIFY CAMERA {fov: 35}``."""

    type: Literal["modify"] = "modify"
    name: Identifier
    value: Expr

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} {self.value}"


class ExpressionStatement(Node):
    type: Literal["expression"] = "expression"
    expression: Expr

    def __str__(self) -> str:
        return str(self.expression)


Stmt = Annotated[
    AssignStatement | ModifyStatement | ExpressionStatement,
    Field(discriminator="type"),
]


class File(BaseModel):
    """A parsed scene description source. Statement order is evaluation order."""

    path: str = ""
    statements: list[Stmt] = []

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(f"{s}\n" for s in self.statements)


# Rebuild models for forward references
PrefixExpression.model_rebuild()
InfixExpression.model_rebuild()
ArrayExpression.model_rebuild()
PropertiesExpression.model_rebuild()
AssignStatement.model_rebuild()
ModifyStatement.model_rebuild()
ExpressionStatement.model_rebuild()
File.model_rebuild()
