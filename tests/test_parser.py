"""Tests for expression parsing: literals, precedence and associativity."""

import pytest

from ast_nodes import *
from tests.utils import parse_expr, parse_text, quiet_reporter
from tokens import Token, TokenType


def _tok(token_type, lexeme, line=1):
    return Token(token_type, lexeme, None, line)


@pytest.mark.parametrize(
    "source, value",
    [("1", 1.0), ("2.5", 2.5), ('"toast"', "toast"), ("true", True), ("false", False), ("nil", None)],
)
def test_parser_parses_literals(source, value):
    assert parse_expr(source) == LiteralNode(value)


def test_literal_equality_distinguishes_booleans_from_numbers():
    assert LiteralNode(True) != LiteralNode(1.0)
    assert LiteralNode(0.0) != LiteralNode(False)
    assert LiteralNode("a") == LiteralNode("a")


def test_parser_gives_multiplication_higher_precedence_than_addition():
    expr = parse_expr("1 + 2 * 3")
    assert expr == BinaryOpNode(
        LiteralNode(1.0),
        _tok(TokenType.PLUS, "+"),
        BinaryOpNode(LiteralNode(2.0), _tok(TokenType.STAR, "*"), LiteralNode(3.0)),
    )


def test_parser_folds_binary_operators_to_the_left():
    expr = parse_expr("1 - 2 - 3")
    assert isinstance(expr, BinaryOpNode)
    assert isinstance(expr.left, BinaryOpNode)
    assert expr.right == LiteralNode(3.0)
    assert expr.left.left == LiteralNode(1.0)


def test_parser_orders_comparison_below_term_and_above_equality():
    expr = parse_expr("1 + 1 < 3 == true")
    assert expr.operator.type == TokenType.EQUAL_EQUAL
    assert expr.left.operator.type == TokenType.LESS
    assert expr.left.left.operator.type == TokenType.PLUS


def test_parser_grouping_overrides_precedence():
    expr = parse_expr("(1 + 2) * 3")
    assert expr.operator.type == TokenType.STAR
    assert isinstance(expr.left, GroupingNode)
    assert isinstance(expr.left.expression, BinaryOpNode)


def test_parser_nests_unary_operators():
    expr = parse_expr("!!true")
    assert expr == UnaryOpNode(
        _tok(TokenType.BANG, "!"),
        UnaryOpNode(_tok(TokenType.BANG, "!"), LiteralNode(True)),
    )

    expr = parse_expr("-1 * 2")
    assert expr.operator.type == TokenType.STAR
    assert expr.left == UnaryOpNode(_tok(TokenType.MINUS, "-"), LiteralNode(1.0))


def test_parser_binds_and_tighter_than_or():
    expr = parse_expr("a or b and c")
    assert isinstance(expr, LogicalOpNode)
    assert expr.operator.type == TokenType.OR
    assert expr.left == VariableNode(_tok(TokenType.IDENTIFIER, "a"))
    assert isinstance(expr.right, LogicalOpNode)
    assert expr.right.operator.type == TokenType.AND


def test_parser_nests_ternary_to_the_right():
    expr = parse_expr("true ? 1 : false ? 2 : 3")
    assert isinstance(expr, TernaryNode)
    assert expr.condition == LiteralNode(True)
    assert expr.left == LiteralNode(1.0)
    assert isinstance(expr.right, TernaryNode)
    assert expr.right.condition == LiteralNode(False)
    assert expr.right.right == LiteralNode(3.0)


def test_parser_ternary_binds_looser_than_or():
    expr = parse_expr("a or b ? 1 : 2")
    assert isinstance(expr, TernaryNode)
    assert isinstance(expr.condition, LogicalOpNode)


def test_parser_assignment_is_right_associative():
    expr = parse_expr("a = b = 1")
    assert expr == AssignmentNode(
        _tok(TokenType.IDENTIFIER, "a"),
        AssignmentNode(_tok(TokenType.IDENTIFIER, "b"), LiteralNode(1.0)),
    )


def test_parser_assignment_value_can_be_ternary():
    expr = parse_expr("a = true ? 1 : 2")
    assert isinstance(expr, AssignmentNode)
    assert isinstance(expr.value, TernaryNode)


def test_parser_reports_invalid_assignment_target_without_discarding_statement():
    reporter = quiet_reporter()
    statements = parse_text("1 = 2;", reporter)

    assert reporter.messages == ["[1]: Error  at '=': Invalid assignment target."]
    assert statements == [ExpressionStatementNode(LiteralNode(1.0))]


def test_parser_reports_missing_expression_at_end():
    reporter = quiet_reporter()
    statements = parse_text("1 +", reporter)

    assert statements == [None]
    assert reporter.messages == ["[1]: Error at end: Expect expression."]


def test_parser_reports_missing_closing_paren():
    reporter = quiet_reporter()
    parse_text("(1 + 2;", reporter)
    assert reporter.messages == ["[1]: Error  at ';': Expect ')' after expression."]


def test_parser_reports_missing_ternary_colon():
    reporter = quiet_reporter()
    parse_text("true ? 1 2;", reporter)
    assert reporter.messages == [
        "[1]: Error  at '2': Expect : after ternary expression."
    ]
