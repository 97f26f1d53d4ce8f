"""
Tests for the calculator expression parser and evaluator.
"""

import pytest

from calcdesk.calculations.errors import InvalidInputError
from calcdesk.calculations.expression import (
    AngleMode,
    BinaryOp,
    Factorial,
    Number,
    UnaryOp,
    evaluate,
    parse,
    tokenize,
)


class TestParsing:
    """Test tokenizing and tree construction."""

    def test_simple_tree(self):
        assert parse("1+2") == BinaryOp("+", Number(1.0), Number(2.0))

    def test_unary_minus_binds_looser_than_power(self):
        assert parse("-2^2") == UnaryOp("-", BinaryOp("^", Number(2.0), Number(2.0)))

    def test_factorial_chain(self):
        assert parse("3!!") == Factorial(Factorial(Number(3.0)))

    def test_operator_aliases(self):
        tokens = tokenize("2 ** 3 × 4 ÷ 5")
        assert [t.text for t in tokens] == ["2", "^", "3", "*", "4", "/", "5"]

    def test_token_positions(self):
        tokens = tokenize("12 + 3")
        assert [t.position for t in tokens] == [0, 3, 5]

    def test_expression_length_limit(self):
        with pytest.raises(InvalidInputError):
            tokenize("1+" * 600 + "1")


class TestEvaluation:
    """Test precedence, functions and constants."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("2+3*4", 14),
            ("(2+3)*4", 20),
            ("10-4-3", 3),
            ("100/10/5", 2),
            ("2^3^2", 512),
            ("-2^2", -4),
            ("(-2)^2", 4),
            ("2^-1", 0.5),
            ("5!", 120),
            ("3!!", 720),
            ("0!", 1),
            ("2 ** 3", 8),
            ("6 × 7", 42),
            ("9 ÷ 3", 3),
            ("sqrt(16)", 4),
            ("√16", 4),
            ("√16 + 1", 5),
            ("log(1000)", 3),
            ("ln(e)", 1),
            ("abs(-7.5)", 7.5),
            ("2 * (3 + 4)^2", 98),
            (".5 + 1.", 1.5),
        ],
    )
    def test_values(self, expression, expected):
        assert evaluate(expression) == pytest.approx(expected)

    def test_radians_default(self):
        assert evaluate("sin(pi/2)") == pytest.approx(1.0)
        assert evaluate("cos(π)") == pytest.approx(-1.0)

    def test_degrees_mode(self):
        """Test trig inputs and inverse outputs are converted in degrees mode."""
        assert evaluate("sin(30)", AngleMode.degrees) == pytest.approx(0.5)
        assert evaluate("asin(1)", AngleMode.degrees) == pytest.approx(90.0)
        assert evaluate("atan(1)", "degrees") == pytest.approx(45.0)

    def test_function_names_case_insensitive(self):
        assert evaluate("SQRT(9)") == pytest.approx(3.0)


class TestEvaluationErrors:
    """Test every failure surfaces as InvalidInputError."""

    @pytest.mark.parametrize(
        "expression",
        [
            "",
            "   ",
            "2+",
            "(1+2",
            "1+2)",
            "1/0",
            "foo(1)",
            "sqrt",
            "__import__('os')",
            "2 & 3",
            "sqrt(-1)",
            "log(0)",
            "ln(-1)",
            "asin(2)",
            "(-8)^(1/3)",
            "10^400",
            "171!",
            "2.5!",
            "(-1)!",
        ],
    )
    def test_rejected(self, expression):
        with pytest.raises(InvalidInputError):
            evaluate(expression)

    @pytest.mark.parametrize(
        "expression",
        [
            "(" * 300 + "1" + ")" * 300,
            "-" * 999 + "1",
            "√" * 400 + "16",
            "3" + "!" * 500,
            "sqrt(" * 150 + "1" + ")" * 150,
        ],
    )
    def test_nesting_too_deep(self, expression):
        """Test deep nesting is rejected before exhausting the stack."""
        with pytest.raises(InvalidInputError, match="nested too deeply"):
            evaluate(expression)

    def test_moderate_nesting_allowed(self):
        assert evaluate("(" * 40 + "1" + ")" * 40) == 1
        assert evaluate("-" * 50 + "2") == 2
