"""Tests for the full tokenize -> convert -> build -> evaluate pipeline."""

import pytest

from YardCalc import error as E
from YardCalc import MathEngine


@pytest.mark.parametrize("expr", [
    "1 + 2 * 3",
    "(1+2)*(1*2-3)*3^4",
    "-(2+3)",
    "5 & 3",
    "2 ^ 0.5",
    "~7 | 8",
])
def test_parentheses_around_whole_expression(expr):
    assert MathEngine.calculate(f"({expr})").value == MathEngine.calculate(expr).value


def test_calculation_result():
    calculation = MathEngine.calculate("1 + 2 * 3")
    assert calculation.value == 7.0
    assert calculation.postfix == "1 2 3 * +"
    assert calculation.problem == "1 + 2 * 3"
    assert calculation.dump().startswith("root: + = 7.0")


@pytest.mark.parametrize("line,error_type,code", [
    ("(1+2", E.SyntaxError, "3009"),
    ("1+2)", E.SyntaxError, "3009"),
    ("*2", E.SyntaxError, "3011"),
    ("1~2", E.SyntaxError, "3004"),
    ("1+", E.ExpressionError, "3012"),
    ("", E.ExpressionError, "3013"),
    ("()", E.ExpressionError, "3013"),
    ("1.2.3", E.CalculationError, "3008"),
])
def test_errors(line, error_type, code):
    with pytest.raises(error_type) as info:
        MathEngine.calculate(line)
    assert info.value.code == code
    assert info.value.equation == line


def test_error_carries_partial_dump():
    with pytest.raises(E.CalculationError) as info:
        MathEngine.calculate("2*(3+y)")
    assert info.value.dump.splitlines() == [
        "root: * = ?",
        "  L: 2 = 2.0",
        "  R: + = ?",
        "    L: 3 = 3.0",
        "    R: y = ?",
    ]


def test_too_deep_nesting():
    with pytest.raises(E.CalculationError) as info:
        MathEngine.calculate("-" * 5000 + "1")
    assert info.value.code == "3026"


def test_formatting():
    assert MathEngine.format_result(7.0) == "Result is 7.0"
    assert MathEngine.format_result(float("inf")) == "Result is inf"
    assert MathEngine.format_error(E.SyntaxError("Mismatched parenthesis", code="3009")) == \
        "Error: Mismatched parenthesis"
