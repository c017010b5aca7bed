"""Evaluator: walks a parsed file and binds every declared entity.

Errors are values. Each step returns an ``Error`` object instead of
raising, and every caller checks for one and hands it straight back, so
the first failure ends the walk. Exceptions are raised only at the
public boundary (``evaluate``, ``run``, ``Evaluator.evaluate_source``).
"""

import logging
from pathlib import Path

from . import ast
from .config import DEFAULT_SETTINGS, Settings
from .environment import Environment, EvaluatedValues
from .lexer import Lexer
from .objects import Array, Dictionary, Entity, Error, Number, Object, is_error
from .parser import ParseError, Parser

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Evaluation stopped at ``error``."""

    def __init__(self, error: Error):
        self.error = error
        super().__init__(f"failed to evaluate file: {error.message}")


class Evaluator:
    """Evaluates one file into a fresh environment.

    An evaluator is single use: evaluate once, then export. A second call
    to ``evaluate_source`` or ``evaluate_file`` raises RuntimeError.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.env = Environment()
        self._used = False

    def export_values(self) -> EvaluatedValues:
        return self.env.export()

    def eval(self, node: ast.File | ast.Stmt | ast.Expr) -> Object | None:
        match node:
            case ast.File():
                return self._eval_file(node)
            case ast.AssignStatement():
                return self._eval_assign_statement(node)
            case ast.ModifyStatement():
                return self._eval_modify_statement(node)
            case ast.ExpressionStatement(expression=expression):
                return self.eval(expression)
            case ast.FloatLiteral(value=value):
                return Number(value=value)
            case ast.Identifier():
                return self._eval_identifier(node)
            case ast.PrefixExpression(operator=operator, right=right):
                right_val = self.eval(right)
                if is_error(right_val):
                    return right_val
                return self._eval_prefix_expression(operator, right_val)
            case ast.InfixExpression(left=left, operator=operator, right=right):
                left_val = self.eval(left)
                if is_error(left_val):
                    return left_val
                right_val = self.eval(right)
                if is_error(right_val):
                    return right_val
                return self._eval_infix_expression(operator, left_val, right_val)
            case ast.ArrayExpression():
                return self._eval_array_expression(node)
            case ast.PropertiesExpression():
                return self._eval_properties_expression(node)
            case _:
                return Error(message=f"unknown node type: {type(node).__name__}")

    def _eval_file(self, file: ast.File) -> Object | None:
        result = None
        for statement in file.statements:
            result = self.eval(statement)
            if is_error(result):
                logger.warning("evaluation stopped: %s", result.message)
                return result
        return result

    def _eval_assign_statement(self, stmt: ast.AssignStatement) -> Object:
        name = stmt.name.value
        if name in self.env:
            return Error(message=f"redefining objects is not allowed: {name}")

        value = self.eval(stmt.value)
        if is_error(value):
            return value

        class_name = stmt.token_literal()
        self.env.set(name, Entity(class_name=class_name, value=value))
        logger.debug("bound %s %s", class_name, name)
        return value

    def _eval_modify_statement(self, stmt: ast.ModifyStatement) -> Object:
        """Merge properties into a built-in, creating it on first use."""
        name = stmt.name.value
        class_name = self.settings.builtins.get(name)
        if class_name is None:
            return Error(message=f"cannot modify unknown built-in: {name}")

        value = self.eval(stmt.value)
        if is_error(value):
            return value
        if not isinstance(value, Dictionary):
            return Error(message=f"MODIFY {name} requires properties, got: {value.type}")

        existing = self.env.get(name)
        if existing is not None:
            # Only a built-in created by an earlier MODIFY may be updated
            if existing.class_name != class_name or not isinstance(existing.value, Dictionary):
                return Error(message=f"redefining objects is not allowed: {name}")
            value = Dictionary(properties={**existing.value.properties, **value.properties})

        self.env.set(name, Entity(class_name=class_name, value=value))
        logger.debug("modified built-in %s", name)
        return value

    def _eval_identifier(self, node: ast.Identifier) -> Object:
        entity = self.env.get(node.value)
        if entity is None:
            return Error(message=f"undefined identifier: {node.value}")
        return entity.value

    def _eval_prefix_expression(self, operator: str, right: Object) -> Object:
        match operator:
            case "-":
                if not isinstance(right, Number):
                    return Error(message=f"unknown operator: -{right.type}")
                return Number(value=-right.value)
            case _:
                return Error(message=f"unknown operator: {operator}")

    def _eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        for operand in (left, right):
            if not isinstance(operand, Number):
                return Error(
                    message=f"infix operator only supports numbers, got: {operand.type}"
                )

        match operator:
            case "+":
                return Number(value=left.value + right.value)
            case "-":
                return Number(value=left.value - right.value)
            case "*":
                return Number(value=left.value * right.value)
            case "/":
                if right.value == 0:
                    return Error(message="division by zero")
                return Number(value=left.value / right.value)
            case _:
                return Error(message=f"unknown operator: {operator}")

    def _eval_array_expression(self, node: ast.ArrayExpression) -> Object:
        elements = []
        for element in node.elements:
            result = self.eval(element)
            if is_error(result):
                return result
            elements.append(result)
        return Array(elements=elements)

    def _eval_properties_expression(self, node: ast.PropertiesExpression) -> Object:
        properties = {}
        for key, element in node.properties.items():
            result = self.eval(element)
            if is_error(result):
                return result
            properties[key] = result
        return Dictionary(properties=properties)

    def evaluate_source(self, source: str, path: str = "") -> EvaluatedValues:
        """Lex, parse and evaluate ``source`` into this evaluator's environment."""
        if self._used:
            raise RuntimeError("evaluator already used; create a new Evaluator")
        self._used = True

        parser = Parser(Lexer(source), self.settings)
        file = parser.parse_file(path)
        if parser.errors():
            raise ParseError(parser.errors())

        result = self.eval(file)
        if is_error(result):
            raise EvaluationError(result)
        return self.export_values()

    def evaluate_file(self, filepath: str | Path) -> EvaluatedValues:
        filepath = Path(filepath)
        return self.evaluate_source(filepath.read_text(), str(filepath))


def evaluate(file: ast.File, settings: Settings | None = None) -> EvaluatedValues:
    """Evaluate a parsed file and export its entities."""
    evaluator = Evaluator(settings)
    result = evaluator.eval(file)
    if is_error(result):
        raise EvaluationError(result)
    return evaluator.export_values()


def run(source: str, settings: Settings | None = None) -> EvaluatedValues:
    """Parse and evaluate scene description source."""
    return Evaluator(settings).evaluate_source(source)
