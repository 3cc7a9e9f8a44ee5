"""AST node definitions for the Lox scripting language.

This module defines the concrete AST node dataclasses built by the parser and
consumed by the interpreter, the pretty-printer, the JSON dumper and the
Graphviz renderer. The `NodeType` enum identifies node kinds.

Conventions:
- All nodes inherit from `ASTNode`, which records the node kind. The `type`
    field is fixed per class and is not an `__init__` argument, so nodes can be
    built positionally: `BinaryOpNode(left, operator, right)`.
- Expression nodes derive from `Expr` and statement nodes from `Stmt`.
- Every node implements `accept(visitor)`, which calls the visitor method for
    its own kind (`visit_binary_expr`, `visit_print_stmt`, ...). Consumers that
    prefer structural pattern matching can `match` on the dataclasses instead.
- `CallNode`, `GetNode`, `SetNode`, `SuperNode`, `ThisNode`,
    `FunctionDeclarationNode`, `ClassDeclarationNode` and
    `ReturnStatementNode` are reserved shapes: the parser never produces them
    and the interpreter does not evaluate them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional

from tokens import Token


class NodeType(Enum):
    # expressions
    LITERAL = auto()
    GROUPING = auto()
    UNARY = auto()
    BINARY = auto()
    LOGICAL = auto()
    TERNARY = auto()
    VARIABLE = auto()
    ASSIGN = auto()
    CALL = auto()
    GET = auto()
    SET = auto()
    SUPER = auto()
    THIS = auto()
    # statements
    EXPR_STMT = auto()
    PRINT_STMT = auto()
    VAR_DECL = auto()
    BLOCK = auto()
    IF_STMT = auto()
    WHILE_STMT = auto()
    FUNC_DECL = auto()
    CLASS_DECL = auto()
    RETURN_STMT = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass
class ASTNode:
    type: NodeType = field(init=False)

    def accept(self, visitor: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not accept visitors")


@dataclass
class Expr(ASTNode):
    pass


@dataclass
class Stmt(ASTNode):
    pass


# Expression Nodes
@dataclass(eq=False)
class LiteralNode(Expr):
    type: NodeType = field(default=NodeType.LITERAL, init=False)
    value: Any = None

    def __eq__(self, other: object) -> bool:
        # `true` and `1` are different literals even though True == 1 in Python
        if not isinstance(other, LiteralNode):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def accept(self, visitor):
        return visitor.visit_literal_expr(self)


@dataclass
class GroupingNode(Expr):
    type: NodeType = field(default=NodeType.GROUPING, init=False)
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping_expr(self)


@dataclass
class UnaryOpNode(Expr):
    type: NodeType = field(default=NodeType.UNARY, init=False)
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary_expr(self)


@dataclass
class BinaryOpNode(Expr):
    type: NodeType = field(default=NodeType.BINARY, init=False)
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary_expr(self)


@dataclass
class LogicalOpNode(Expr):
    type: NodeType = field(default=NodeType.LOGICAL, init=False)
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_logical_expr(self)


@dataclass
class TernaryNode(Expr):
    type: NodeType = field(default=NodeType.TERNARY, init=False)
    condition: Expr
    left: Expr
    right: Expr

    def accept(self, visitor):
        return visitor.visit_ternary_expr(self)


@dataclass
class VariableNode(Expr):
    type: NodeType = field(default=NodeType.VARIABLE, init=False)
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable_expr(self)


@dataclass
class AssignmentNode(Expr):
    type: NodeType = field(default=NodeType.ASSIGN, init=False)
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign_expr(self)


@dataclass
class CallNode(Expr):
    type: NodeType = field(default=NodeType.CALL, init=False)
    callee: Expr
    paren: Token
    arguments: List[Expr] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_call_expr(self)


@dataclass
class GetNode(Expr):
    type: NodeType = field(default=NodeType.GET, init=False)
    object: Expr
    name: Token

    def accept(self, visitor):
        return visitor.visit_get_expr(self)


@dataclass
class SetNode(Expr):
    type: NodeType = field(default=NodeType.SET, init=False)
    object: Expr
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_set_expr(self)


@dataclass
class SuperNode(Expr):
    type: NodeType = field(default=NodeType.SUPER, init=False)
    keyword: Token
    method: Token

    def accept(self, visitor):
        return visitor.visit_super_expr(self)


@dataclass
class ThisNode(Expr):
    type: NodeType = field(default=NodeType.THIS, init=False)
    keyword: Token

    def accept(self, visitor):
        return visitor.visit_this_expr(self)


# Statement Nodes
@dataclass
class ExpressionStatementNode(Stmt):
    type: NodeType = field(default=NodeType.EXPR_STMT, init=False)
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression_stmt(self)


@dataclass
class PrintStatementNode(Stmt):
    type: NodeType = field(default=NodeType.PRINT_STMT, init=False)
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print_stmt(self)


@dataclass
class VariableDeclarationNode(Stmt):
    type: NodeType = field(default=NodeType.VAR_DECL, init=False)
    name: Token
    initializer: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_var_stmt(self)


@dataclass
class BlockNode(Stmt):
    type: NodeType = field(default=NodeType.BLOCK, init=False)
    # entries may be None where the parser recovered from an error
    statements: List[Optional[Stmt]] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_block_stmt(self)


@dataclass
class IfStatementNode(Stmt):
    type: NodeType = field(default=NodeType.IF_STMT, init=False)
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None

    def accept(self, visitor):
        return visitor.visit_if_stmt(self)


@dataclass
class WhileStatementNode(Stmt):
    type: NodeType = field(default=NodeType.WHILE_STMT, init=False)
    condition: Expr
    body: Stmt

    def accept(self, visitor):
        return visitor.visit_while_stmt(self)


@dataclass
class FunctionDeclarationNode(Stmt):
    type: NodeType = field(default=NodeType.FUNC_DECL, init=False)
    name: Token
    params: List[Token] = field(default_factory=list)
    body: List[Stmt] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_function_stmt(self)


@dataclass
class ClassDeclarationNode(Stmt):
    type: NodeType = field(default=NodeType.CLASS_DECL, init=False)
    name: Token
    superclass: Optional[VariableNode] = None
    methods: List[FunctionDeclarationNode] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_class_stmt(self)


@dataclass
class ReturnStatementNode(Stmt):
    type: NodeType = field(default=NodeType.RETURN_STMT, init=False)
    keyword: Token
    value: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_return_stmt(self)


class ExprVisitor:
    """Double-dispatch contract for consumers of expression nodes."""

    def visit_literal_expr(self, expr: LiteralNode):
        raise NotImplementedError

    def visit_grouping_expr(self, expr: GroupingNode):
        raise NotImplementedError

    def visit_unary_expr(self, expr: UnaryOpNode):
        raise NotImplementedError

    def visit_binary_expr(self, expr: BinaryOpNode):
        raise NotImplementedError

    def visit_logical_expr(self, expr: LogicalOpNode):
        raise NotImplementedError

    def visit_ternary_expr(self, expr: TernaryNode):
        raise NotImplementedError

    def visit_variable_expr(self, expr: VariableNode):
        raise NotImplementedError

    def visit_assign_expr(self, expr: AssignmentNode):
        raise NotImplementedError

    def visit_call_expr(self, expr: CallNode):
        raise NotImplementedError

    def visit_get_expr(self, expr: GetNode):
        raise NotImplementedError

    def visit_set_expr(self, expr: SetNode):
        raise NotImplementedError

    def visit_super_expr(self, expr: SuperNode):
        raise NotImplementedError

    def visit_this_expr(self, expr: ThisNode):
        raise NotImplementedError


class StmtVisitor:
    """Double-dispatch contract for consumers of statement nodes."""

    def visit_expression_stmt(self, stmt: ExpressionStatementNode):
        raise NotImplementedError

    def visit_print_stmt(self, stmt: PrintStatementNode):
        raise NotImplementedError

    def visit_var_stmt(self, stmt: VariableDeclarationNode):
        raise NotImplementedError

    def visit_block_stmt(self, stmt: BlockNode):
        raise NotImplementedError

    def visit_if_stmt(self, stmt: IfStatementNode):
        raise NotImplementedError

    def visit_while_stmt(self, stmt: WhileStatementNode):
        raise NotImplementedError

    def visit_function_stmt(self, stmt: FunctionDeclarationNode):
        raise NotImplementedError

    def visit_class_stmt(self, stmt: ClassDeclarationNode):
        raise NotImplementedError

    def visit_return_stmt(self, stmt: ReturnStatementNode):
        raise NotImplementedError
