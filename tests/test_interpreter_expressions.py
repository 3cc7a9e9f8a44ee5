"""Tests for expression evaluation and the value helpers."""

import io

import pytest

from ast_nodes import *
from interpreter import Interpreter
from runtime_values import is_equal, is_truthy, stringify
from tests.utils import ident, op, parse_expr, quiet_reporter, run_source
from tokens import TokenType


def evaluate(text):
    interpreter = Interpreter(reporter=quiet_reporter(), out=io.StringIO())
    return interpreter.evaluate(parse_expr(text))


@pytest.mark.parametrize(
    "source, expected",
    [
        ("1 + 2", 3.0),
        ("5 - 7", -2.0),
        ("3 * 4", 12.0),
        ("7 / 2", 3.5),
        ("-(1 + 2)", -3.0),
        ("1 + 2 * 3", 7.0),
        ("(1 + 2) * 3", 9.0),
        ("10 - 4 - 3", 3.0),
        ("1 < 2", True),
        ("2 <= 2", True),
        ("3 > 4", False),
        ("4 >= 5", False),
        ("1 == 1", True),
        ("1 != 1", False),
        ('"a" == "a"', True),
        ('"a" != "b"', True),
        ("nil == nil", True),
        ("nil == false", False),
        ('1 == "1"', False),
        ("true == 1", False),
        ("!nil", True),
        ("!0", False),
        ('!""', False),
        ("!!true", True),
        ('"foo" + "bar"', "foobar"),
    ],
)
def test_evaluate_expression(source, expected):
    result = evaluate(source)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    "source, expected",
    [
        ('2 + "hello"', "2hello"),
        ('"n=" + 1.5', "n=1.5"),
        ('"is " + true', "is true"),
        ('"x" + nil', "xnil"),
    ],
)
def test_plus_concatenates_when_either_side_is_a_string(source, expected):
    assert evaluate(source) == expected


def test_logical_operators_return_operand_values():
    assert evaluate('nil or "yes"') == "yes"
    assert evaluate('"first" or "second"') == "first"
    assert evaluate("false and 1") is False
    assert evaluate("1 and 2") == 2.0


def test_logical_operators_short_circuit():
    # `undefined` is never evaluated, so no runtime error is raised
    assert evaluate("true or undefined") is True
    assert evaluate("nil and undefined") is None


def test_ternary_evaluates_only_the_taken_branch():
    assert evaluate("true ? 1 : undefined") == 1.0
    assert evaluate("nil ? undefined : 2") == 2.0
    assert evaluate("false ? 1 : true ? 2 : 3") == 2.0


def test_assignment_expression_yields_assigned_value():
    output, interpreter = run_source("var a; var b; print a = b = 3;")
    assert output == "3\n"
    assert interpreter.globals.values == {"a": 3.0, "b": 3.0}


def test_evaluate_hand_built_tree_with_integer_literals():
    expr = BinaryOpNode(LiteralNode(2), op(TokenType.STAR, "*"), LiteralNode(21))
    interpreter = Interpreter(reporter=quiet_reporter())
    assert interpreter.evaluate(expr) == 42


def test_evaluate_variable_reads_environment():
    interpreter = Interpreter(reporter=quiet_reporter())
    interpreter.globals.define("x", 4.0)
    assert interpreter.evaluate(VariableNode(ident("x"))) == 4.0


@pytest.mark.parametrize(
    "value, text",
    [
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (3.0, "3"),
        (2.5, "2.5"),
        (-0.5, "-0.5"),
        (7, "7"),
        (1e16, "10000000000000000"),
        (-2.5e20, "-250000000000000000000"),
        (1e-7, "0.0000001"),
        ("hi", "hi"),
    ],
)
def test_stringify(value, text):
    assert stringify(value) == text


def test_truthiness():
    assert not is_truthy(None)
    assert not is_truthy(False)
    for value in (True, 0.0, "", "false"):
        assert is_truthy(value)


def test_equality_never_crosses_types():
    assert is_equal(None, None)
    assert not is_equal(None, False)
    assert not is_equal(0.0, False)
    assert not is_equal(1.0, True)
    assert not is_equal("1", 1.0)
    assert is_equal(2, 2.0)
