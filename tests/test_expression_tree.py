"""Tests for building the expression tree from postfix."""

import pytest

from YardCalc import error as E
from YardCalc.Tokenizer import tokenize
from YardCalc.ShuntingYard import to_postfix
from YardCalc.ExpressionTree import ExpressionTree, LeafNode, UnaryNode, BinaryNode


def build(line):
    return ExpressionTree().populate(to_postfix(tokenize(line)))


def test_binary_tree_shape():
    tree = build("1+2*3")
    root = tree.root
    assert isinstance(root, BinaryNode)
    assert root.operand.text == "+"
    assert isinstance(root.left, LeafNode) and root.left.operand.text == "1"
    assert isinstance(root.right, BinaryNode) and root.right.operand.text == "*"
    assert root.right.left.operand.text == "2"
    assert root.right.right.operand.text == "3"


def test_right_operand_is_built_first():
    """'8-2' must keep 8 on the left, 2 on the right."""
    root = build("8-2").root
    assert root.left.operand.text == "8"
    assert root.right.operand.text == "2"


def test_unary_node_has_one_child():
    root = build("-(2+3)").root
    assert isinstance(root, UnaryNode)
    assert isinstance(root.child, BinaryNode)
    assert [label for label, _ in root.children()] == ["L"]


def test_node_count_matches_postfix_length():
    operands = to_postfix(tokenize("(1+2)*(1*2-3)*3^4"))
    count = len(operands)
    tree = ExpressionTree().populate(operands)
    assert len(tree) == count == 13


def test_populate_consumes_the_postfix_list():
    operands = to_postfix(tokenize("1+2"))
    ExpressionTree().populate(operands)
    assert operands == []


@pytest.mark.parametrize("line", ["1+", "1*", "-", "1+-"])
def test_missing_operand(line):
    with pytest.raises(E.ExpressionError) as info:
        build(line)
    assert info.value.code == "3012"


def test_unused_operands_are_an_error():
    with pytest.raises(E.ExpressionError) as info:
        build("(1)(2)")
    assert info.value.code == "3012"
    assert "unused operands: 1" in info.value.message


def test_empty_expression():
    with pytest.raises(E.ExpressionError) as info:
        ExpressionTree().populate([])
    assert info.value.code == "3013"
    with pytest.raises(E.ExpressionError):
        ExpressionTree().evaluate()


def test_reevaluation_is_pure():
    tree = build("(1+2)*(1*2-3)*3^4")
    first = tree.evaluate()
    second = tree.evaluate()
    assert first == second == -243.0
