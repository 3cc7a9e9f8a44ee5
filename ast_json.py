"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure
of dicts/lists/primitives describing the AST node, and
`program_to_json(statements)` for a whole parse result. Each node becomes a
dict with a `node_type` key plus one key per field; tokens are encoded by
their lexeme and `None` slots (recovered parse errors) stay `None`.
"""

from typing import Any, Dict, List, Optional
from dataclasses import fields

from ast_nodes import *
from tokens import Token

# Names used for `node_type`, matching the Lox grammar terminology.
_NODE_NAMES = {
    NodeType.LITERAL: "Literal",
    NodeType.GROUPING: "Grouping",
    NodeType.UNARY: "Unary",
    NodeType.BINARY: "Binary",
    NodeType.LOGICAL: "Logical",
    NodeType.TERNARY: "Ternary",
    NodeType.VARIABLE: "Variable",
    NodeType.ASSIGN: "Assign",
    NodeType.CALL: "Call",
    NodeType.GET: "Get",
    NodeType.SET: "Set",
    NodeType.SUPER: "Super",
    NodeType.THIS: "This",
    NodeType.EXPR_STMT: "ExprStmt",
    NodeType.PRINT_STMT: "Print",
    NodeType.VAR_DECL: "Var",
    NodeType.BLOCK: "Block",
    NodeType.IF_STMT: "If",
    NodeType.WHILE_STMT: "While",
    NodeType.FUNC_DECL: "Function",
    NodeType.CLASS_DECL: "Class",
    NodeType.RETURN_STMT: "Return",
}


def _value_to_json(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return ast_to_json(value)
    if isinstance(value, Token):
        return value.lexeme
    if isinstance(value, list):
        return [_value_to_json(v) for v in value]
    # literal values are already JSON primitives (float, str, bool, None)
    return value


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    data: Dict[str, Any] = {"node_type": _NODE_NAMES.get(node.type, node.type.name)}
    for f in fields(node):
        if f.name == "type":
            continue
        data[f.name] = _value_to_json(getattr(node, f.name))
    return data


def program_to_json(statements: List[Optional[Stmt]]) -> Dict[str, Any]:
    return {
        "node_type": "Program",
        "statements": [ast_to_json(s) for s in statements],
    }
