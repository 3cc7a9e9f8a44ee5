"""Tree-walking interpreter for Lox programs.

The `Interpreter` implements both `ExprVisitor` and `StmtVisitor` and walks
the statement list produced by the parser, writing the output of `print`
statements to `out` (standard output unless another stream was supplied).
Value rules (truthiness, equality, text form) live in `runtime_values`.

Type errors and undefined variables raise `LoxRuntimeError`. The error
unwinds to `interpret()`, which reports it once through the `ErrorReporter`
and abandons the rest of that batch; bindings made before the error remain.
A statement nested too deeply for the Python stack is reported the same way
as `Stack overflow.`. Each block runs in a fresh child `Environment` that is
discarded when the block finishes, whether it completes or raises.
"""

from __future__ import annotations
import logging
import sys
from dataclasses import fields
from typing import Any, List, Optional, TextIO

from ast_nodes import *
from diagnostics import ErrorReporter, LoxRuntimeError
from environment import Environment
from runtime_values import is_equal, is_number, is_truthy, stringify
from tokens import Token, TokenType

logger = logging.getLogger(__name__)

__all__ = ["Interpreter", "LoxRuntimeError", "is_truthy", "is_equal", "stringify"]


class Interpreter(ExprVisitor, StmtVisitor):
    def __init__(
        self,
        environment: Optional[Environment] = None,
        reporter: Optional[ErrorReporter] = None,
        out: Optional[TextIO] = None,
    ):
        self.globals = environment if environment is not None else Environment()
        self.environment = self.globals
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out

    def interpret(self, statements: List[Optional[Stmt]]) -> None:
        """Execute a batch of statements, reporting the first runtime error."""
        try:
            for statement in statements:
                try:
                    self.execute(statement)
                except RecursionError:
                    raise LoxRuntimeError(
                        _first_token(statement), "Stack overflow."
                    ) from None
        except LoxRuntimeError as error:
            logger.debug("runtime error at line %d: %s", error.token.line, error)
            self.reporter.runtime_error(error)

    def evaluate(self, expr: Expr) -> Any:
        return expr.accept(self)

    def execute(self, stmt: Optional[Stmt]) -> None:
        # `None` marks a declaration the parser recovered from
        if stmt is not None:
            stmt.accept(self)

    def execute_block(
        self, statements: List[Optional[Stmt]], environment: Environment
    ) -> None:
        """Run `statements` with `environment` as the current scope."""
        previous = self.environment
        self.environment = environment
        try:
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    # Statements

    def visit_expression_stmt(self, stmt: ExpressionStatementNode) -> None:
        self.evaluate(stmt.expression)

    def visit_print_stmt(self, stmt: PrintStatementNode) -> None:
        value = self.evaluate(stmt.expression)
        out = self.out if self.out is not None else sys.stdout
        print(stringify(value), file=out)

    def visit_var_stmt(self, stmt: VariableDeclarationNode) -> None:
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_block_stmt(self, stmt: BlockNode) -> None:
        self.execute_block(stmt.statements, Environment(enclosing=self.environment))

    def visit_if_stmt(self, stmt: IfStatementNode) -> None:
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    def visit_while_stmt(self, stmt: WhileStatementNode) -> None:
        while is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.body)

    def visit_function_stmt(self, stmt: FunctionDeclarationNode) -> None:
        raise NotImplementedError("function declarations are not supported")

    def visit_class_stmt(self, stmt: ClassDeclarationNode) -> None:
        raise NotImplementedError("class declarations are not supported")

    def visit_return_stmt(self, stmt: ReturnStatementNode) -> None:
        raise NotImplementedError("return statements are not supported")

    # Expressions

    def visit_literal_expr(self, expr: LiteralNode) -> Any:
        return expr.value

    def visit_grouping_expr(self, expr: GroupingNode) -> Any:
        return self.evaluate(expr.expression)

    def visit_unary_expr(self, expr: UnaryOpNode) -> Any:
        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TokenType.MINUS:
                _check_number_operands(expr.operator, right)
                return -right
            case TokenType.BANG:
                return not is_truthy(right)
            case _:
                raise LoxRuntimeError(expr.operator, "Unknown unary operator.")

    def visit_binary_expr(self, expr: BinaryOpNode) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        match operator.type:
            case TokenType.PLUS:
                return _add(operator, left, right)
            case TokenType.MINUS:
                _check_number_operands(operator, left, right)
                return left - right
            case TokenType.STAR:
                _check_number_operands(operator, left, right)
                return left * right
            case TokenType.SLASH:
                _check_number_operands(operator, left, right)
                if right == 0:
                    raise LoxRuntimeError(operator, "Cannot divide by 0")
                return left / right
            case TokenType.GREATER:
                _check_number_operands(operator, left, right)
                return left > right
            case TokenType.GREATER_EQUAL:
                _check_number_operands(operator, left, right)
                return left >= right
            case TokenType.LESS:
                _check_number_operands(operator, left, right)
                return left < right
            case TokenType.LESS_EQUAL:
                _check_number_operands(operator, left, right)
                return left <= right
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)
            case _:
                raise LoxRuntimeError(operator, "Unknown binary operator.")

    def visit_logical_expr(self, expr: LogicalOpNode) -> Any:
        left = self.evaluate(expr.left)

        if expr.operator.type == TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def visit_ternary_expr(self, expr: TernaryNode) -> Any:
        if is_truthy(self.evaluate(expr.condition)):
            return self.evaluate(expr.left)
        return self.evaluate(expr.right)

    def visit_variable_expr(self, expr: VariableNode) -> Any:
        return self.environment.get(expr.name)

    def visit_assign_expr(self, expr: AssignmentNode) -> Any:
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_call_expr(self, expr: CallNode) -> Any:
        raise NotImplementedError("calls are not supported")

    def visit_get_expr(self, expr: GetNode) -> Any:
        raise NotImplementedError("property access is not supported")

    def visit_set_expr(self, expr: SetNode) -> Any:
        raise NotImplementedError("property assignment is not supported")

    def visit_super_expr(self, expr: SuperNode) -> Any:
        raise NotImplementedError("'super' is not supported")

    def visit_this_expr(self, expr: ThisNode) -> Any:
        raise NotImplementedError("'this' is not supported")


def _check_number_operands(operator: Token, *operands: Any) -> None:
    for operand in operands:
        if not is_number(operand):
            raise LoxRuntimeError(operator, "Operand must be a number.")


def _add(operator: Token, left: Any, right: Any) -> Any:
    if is_number(left) and is_number(right):
        return left + right
    if isinstance(left, str) or isinstance(right, str):
        return stringify(left) + stringify(right)
    raise LoxRuntimeError(
        operator, f"Could not add {stringify(left)} to {stringify(right)}."
    )


def _first_token(stmt: Stmt) -> Token:
    """Return the leftmost token under `stmt`, walking without recursion."""
    pending: List[Any] = [stmt]
    while pending:
        item = pending.pop()
        if isinstance(item, Token):
            return item
        if isinstance(item, list):
            pending.extend(reversed(item))
        elif isinstance(item, ASTNode):
            children = [getattr(item, f.name) for f in fields(item) if f.name != "type"]
            pending.extend(reversed(children))
    return Token(TokenType.EOF, "", None, 1)
