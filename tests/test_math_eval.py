"""
Tests for src/utils/math_eval.py

The /math evaluator must follow normal precedence and never fall back
to eval().
"""

import pytest

from src.utils.math_eval import MAX_NESTING, MathError, evaluate, format_result, tokenize


class TestEvaluate:
    """Tests for evaluate()."""

    def test_precedence(self):
        assert evaluate("2+3*4") == 14
        assert evaluate("(2+3)*4") == 20
        assert evaluate("10-4-3") == 3

    def test_power_is_right_associative(self):
        assert evaluate("2^3^2") == 512
        assert evaluate("2^10") == 1024

    def test_power_binds_tighter_than_multiplication(self):
        assert evaluate("3*2^2") == 12

    def test_unary_minus(self):
        assert evaluate("-5+2") == -3
        assert evaluate("2*-3") == -6
        assert evaluate("2^-1") == 0.5

    def test_integral_results_are_int(self):
        result = evaluate("10/2")
        assert result == 5
        assert isinstance(result, int)

    def test_fractional_result(self):
        assert evaluate("7/2") == 3.5

    def test_modulo(self):
        assert evaluate("10%3") == 1

    def test_decimals_and_spaces(self):
        assert evaluate(" 1.5 * 4 ") == 6

    @pytest.mark.parametrize("expression", [
        "1/0",
        "5%0",
        "2+",
        "(1+2",
        "1+2)",
        "",
        "   ",
        "1..2",
        "import os",
        "2**3",
        "10^400",
    ])
    def test_rejected(self, expression):
        with pytest.raises(MathError):
            evaluate(expression)

    def test_deep_nesting_rejected(self):
        with pytest.raises(MathError, match="too deeply nested"):
            evaluate("(" * 2000 + "1" + ")" * 2000)
        with pytest.raises(MathError, match="too deeply nested"):
            evaluate("-" * 2000 + "1")

    def test_nesting_at_limit(self):
        assert evaluate("(" * MAX_NESTING + "7" + ")" * MAX_NESTING) == 7


class TestTokenize:
    """Tests for tokenize()."""

    def test_tokens(self):
        assert tokenize("1+(2)") == [
            ("number", 1.0),
            ("op", "+"),
            ("paren", "("),
            ("number", 2.0),
            ("paren", ")"),
        ]

    def test_letters_rejected(self):
        with pytest.raises(MathError):
            tokenize("abs(1)")


class TestFormatResult:
    """Tests for format_result()."""

    def test_int(self):
        assert format_result(42) == "42"

    def test_float_trimmed(self):
        assert format_result(1 / 3) == "0.3333333333"
