"""Pretty-printer for the AST.

Provides `AstPrinter.print_ast(node)`, which renders expressions and
statements in a fully parenthesized prefix form, and
`AstPrinter.print_program(statements)`, which renders one statement per line.
The output is meant for debugging and tests, not for producing source code.

Examples:
    AstPrinter.print_ast(parse_expr("-1 + 2 * 3"))
    => (+ (- 1.0) (* 2.0 3.0))
"""

from __future__ import annotations
from typing import List, Optional

from ast_nodes import *


class AstPrinter:
    @staticmethod
    def print_program(statements: List[Optional[Stmt]]) -> str:
        """Render each top-level statement on its own line."""
        return "\n".join(AstPrinter.print_ast(s) for s in statements)

    @staticmethod
    def print_ast(node: Optional[ASTNode]) -> str:
        """Pretty print an expression or statement and return it as a string."""
        p = AstPrinter.print_ast
        paren = AstPrinter._parenthesize

        match node:
            case None:
                # a declaration the parser recovered from
                return "<error>"

            # expressions
            case LiteralNode(value=v):
                return AstPrinter._literal(v)
            case GroupingNode(expression=e):
                return paren("group", e)
            case UnaryOpNode(operator=op, right=r):
                return paren(op.lexeme, r)
            case BinaryOpNode(left=l, operator=op, right=r):
                return paren(op.lexeme, l, r)
            case LogicalOpNode(left=l, operator=op, right=r):
                return paren(op.lexeme, l, r)
            case TernaryNode(condition=c, left=l, right=r):
                return paren("?:", c, l, r)
            case VariableNode(name=name):
                return name.lexeme
            case AssignmentNode(name=name, value=v):
                return f"(= {name.lexeme} {p(v)})"
            case CallNode(callee=callee, arguments=args):
                return paren("call", callee, *args)
            case GetNode(object=obj, name=name):
                return f"(. {p(obj)} {name.lexeme})"
            case SetNode(object=obj, name=name, value=v):
                return f"(.= {p(obj)} {name.lexeme} {p(v)})"
            case SuperNode(method=method):
                return f"(super {method.lexeme})"
            case ThisNode():
                return "this"

            # statements
            case ExpressionStatementNode(expression=e):
                return paren(";", e)
            case PrintStatementNode(expression=e):
                return paren("print", e)
            case VariableDeclarationNode(name=name, initializer=None):
                return f"(var {name.lexeme})"
            case VariableDeclarationNode(name=name, initializer=init):
                return f"(var {name.lexeme} {p(init)})"
            case BlockNode(statements=stmts):
                return AstPrinter._join("block", [p(s) for s in stmts])
            case IfStatementNode(condition=c, then_branch=t, else_branch=None):
                return paren("if", c, t)
            case IfStatementNode(condition=c, then_branch=t, else_branch=e):
                return paren("if", c, t, e)
            case WhileStatementNode(condition=c, body=body):
                return paren("while", c, body)
            case FunctionDeclarationNode(name=name, params=params, body=body):
                params_str = "(" + " ".join(t.lexeme for t in params) + ")"
                return AstPrinter._join(
                    "fun", [name.lexeme, params_str] + [p(s) for s in body]
                )
            case ClassDeclarationNode(name=name, superclass=sup, methods=methods):
                head = [name.lexeme]
                if sup is not None:
                    head += ["<", sup.name.lexeme]
                return AstPrinter._join("class", head + [p(m) for m in methods])
            case ReturnStatementNode(value=None):
                return "(return)"
            case ReturnStatementNode(value=v):
                return paren("return", v)

            case _:
                return str(node)

    @staticmethod
    def _literal(value) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    @staticmethod
    def _parenthesize(name: str, *nodes: Optional[ASTNode]) -> str:
        return AstPrinter._join(name, [AstPrinter.print_ast(n) for n in nodes])

    @staticmethod
    def _join(name: str, parts: List[str]) -> str:
        return "(" + " ".join([name] + parts) + ")"
