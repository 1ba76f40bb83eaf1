"""Tests for the shunting-yard conversion to postfix."""

import pytest

from YardCalc import error as E
from YardCalc.Tokenizer import Precedence, tokenize
from YardCalc.ShuntingYard import Operand, to_postfix, format_postfix


def postfix(line):
    return format_postfix(to_postfix(tokenize(line)))


@pytest.mark.parametrize("line,expected", [
    ("1+2*3", "1 2 3 * +"),
    ("(1+2)*3", "1 2 + 3 *"),
    ("1+2*3+4", "1 2 3 * + 4 +"),
    ("1-2-3", "1 2 - 3 -"),
    ("2^3^2", "2 3 ^ 2 ^"),
    ("(1+2)*(1*2-3)*3^4", "1 2 + 1 2 * 3 - * 3 4 ^ *"),
    ("1|2+3", "1 2 3 + |"),
])
def test_binary_precedence(line, expected):
    assert postfix(line) == expected


@pytest.mark.parametrize("line,expected", [
    ("-3", "3 u-"),
    ("--3", "3 u- u-"),
    ("+~3", "3 u~ u+"),
    ("2*-3", "2 3 u- *"),
    ("-(2+3)", "2 3 + u-"),
    ("~(1+2)", "1 2 + u~"),
    ("-2^2", "2 u- 2 ^"),
    ("(-1)", "1 u-"),
])
def test_unary_operators(line, expected):
    assert postfix(line) == expected


def test_unary_operands_have_unary_precedence():
    operands = to_postfix(tokenize("-3"))
    assert operands[1].precedence == Precedence.UNARY
    assert operands[1].text == "-"


@pytest.mark.parametrize("line", ["*3", "1+/2", "(^2)", "1*|2"])
def test_invalid_unary_operator(line):
    with pytest.raises(E.SyntaxError) as info:
        to_postfix(tokenize(line))
    assert info.value.code == "3011"


def test_tilde_in_binary_position():
    with pytest.raises(E.SyntaxError) as info:
        to_postfix(tokenize("1~2"))
    assert info.value.code == "3004"


@pytest.mark.parametrize("line", ["(1+2", "1+2)", ")", "((1)", "(1))", "1)+(2"])
def test_mismatched_parenthesis(line):
    with pytest.raises(E.SyntaxError) as info:
        to_postfix(tokenize(line))
    assert info.value.message == "Mismatched parenthesis"
    assert info.value.code == "3009"


def test_empty_parentheses_give_empty_postfix():
    assert to_postfix(tokenize("()")) == []


def test_operand_compares_by_precedence_only():
    plus = Operand("+", Precedence.HIGH)
    minus = Operand("-", Precedence.HIGH)
    times = Operand("*", Precedence.HIGHER)
    assert plus == minus
    assert times > plus
    assert plus <= minus
    assert Operand("1", Precedence.NUMBER) < plus
