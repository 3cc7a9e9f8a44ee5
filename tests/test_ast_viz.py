"""Tests for ast_viz: ensure a Digraph is produced with labelled nodes and edges."""

from ast_viz import render_ast_dot
from tests.utils import parse_text, quiet_reporter


def test_ast_viz_dot_source():
    statements = parse_text('var x = 1 + 2; print "hi";')
    dot = render_ast_dot(statements)
    src = dot.source

    assert "Program" in src
    assert "VariableDeclaration\\nx" in src
    assert "BinaryOp\\n+" in src
    assert "Literal\\n'hi'" in src
    assert "initializer" in src
    assert "doubleoctagon" in src


def test_ast_viz_lists_and_error_slots():
    statements = parse_text("{ print 1; print 2; } print ;", quiet_reporter())
    src = render_ast_dot(statements).source

    assert "statements[0]" in src
    assert "statements[1]" in src
    assert "parse error" in src
    assert "red" in src


def test_ast_viz_shapes_statements_and_expressions():
    src = render_ast_dot(parse_text("a or b;")).source
    assert "shape=box" in src
    assert "shape=ellipse" in src
    assert "LogicalOp\\nor" in src


def test_ast_viz_labels_literals_with_their_display_text():
    src = render_ast_dot(parse_text("print 10000000000000000; print nil;")).source
    assert "Literal\\n10000000000000000" in src
    assert "Literal\\nnil" in src
