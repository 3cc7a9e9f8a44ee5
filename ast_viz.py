"""Graphviz visualization helpers for ASTs.

Provides `render_ast_dot(statements)` which returns a `graphviz.Digraph`
object (not rendered) with one node per AST node and one edge per child
link, labelled with the field the child hangs off (`left`, `condition`,
`body`, ...). `write_and_render` writes the rendered image to disk.

Node layout: statements are drawn as boxes, expressions as ellipses. Node
labels show the node kind followed by its operator, name or literal value.
Recovered parse errors (`None` statement slots) are drawn as red boxes.
"""

from typing import List, Optional
from dataclasses import fields

from graphviz import Digraph

from ast_nodes import *
from runtime_values import stringify
from tokens import Token


def _node_label(node: ASTNode) -> str:
    kind = type(node).__name__.removesuffix("Node")
    match node:
        case LiteralNode(value=v):
            detail = repr(v) if isinstance(v, str) else stringify(v)
        case UnaryOpNode(operator=op) | BinaryOpNode(operator=op) | LogicalOpNode(operator=op):
            detail = op.lexeme
        case VariableNode(name=name) | AssignmentNode(name=name) | VariableDeclarationNode(name=name):
            detail = name.lexeme
        case GetNode(name=name) | SetNode(name=name):
            detail = name.lexeme
        case FunctionDeclarationNode(name=name) | ClassDeclarationNode(name=name):
            detail = name.lexeme
        case _:
            detail = ""
    return f"{kind}\\n{detail}" if detail else kind


class _DotBuilder:
    def __init__(self, dot: Digraph):
        self.dot = dot
        self.counter = 0

    def new_id(self) -> str:
        self.counter += 1
        return f"n{self.counter}"

    def add(self, node: Optional[ASTNode]) -> str:
        node_id = self.new_id()

        if node is None:
            self.dot.node(node_id, label="parse error", shape="box", color="red")
            return node_id

        shape = "box" if isinstance(node, Stmt) else "ellipse"
        self.dot.node(node_id, label=_node_label(node), shape=shape)

        for f in fields(node):
            if f.name == "type":
                continue
            value = getattr(node, f.name)
            if isinstance(value, list):
                for i, item in enumerate(value):
                    if isinstance(item, Token):
                        continue
                    self.dot.edge(node_id, self.add(item), label=f"{f.name}[{i}]")
            elif isinstance(value, ASTNode):
                self.dot.edge(node_id, self.add(value), label=f.name)
        return node_id


def render_ast_dot(statements: List[Optional[Stmt]]) -> Digraph:
    """Return a graphviz.Digraph for a parsed program.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", fontsize="10")
    dot.attr("edge", fontsize="8")

    builder = _DotBuilder(dot)
    root = builder.new_id()
    dot.node(root, label="Program", shape="doubleoctagon")
    for i, stmt in enumerate(statements):
        dot.edge(root, builder.add(stmt), label=str(i))
    return dot


def write_and_render(
    statements: List[Optional[Stmt]], out_path: str, fmt: str = "svg"
) -> str:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(stmts, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz). Returns the path of the rendered file."""
    dot = render_ast_dot(statements)
    dot.format = fmt
    # Note: render will append extension automatically
    return dot.render(out_path, cleanup=True)
