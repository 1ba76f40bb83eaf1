# ExpressionTree.py
"""""
Third stage of the pipeline: postfix operand list -> binary expression tree.

The postfix list is consumed from its end, so the last operand is the root.
For a binary operator the right operand sits closer to the end of the list
than the left one, which is why the right child is built first.
"""""

import logging

from . import error as E
from . import Evaluator
from .Tokenizer import Precedence

logger = logging.getLogger(__name__)

BROKEN_EXPRESSION = "Broken mathematical expression, only valid unary operators are -, + and ~"


# -----------------------------
# Node types
# -----------------------------

class LeafNode:
    """Number literal."""
    __slots__ = ("operand",)

    def __init__(self, operand):
        self.operand = operand

    def children(self):
        return ()

    def evaluate(self, trace=None, path=Evaluator.ROOT_PATH):
        value = Evaluator.parse_number(self.operand.text)
        if trace is not None:
            trace[path] = value
        return value

    def __repr__(self):
        return f"Leaf({self.operand.text!r})"


class UnaryNode:
    """Unary operator with exactly one child."""
    __slots__ = ("operand", "child")

    def __init__(self, operand, child):
        self.operand = operand
        self.child = child

    def children(self):
        return (("L", self.child),)

    def evaluate(self, trace=None, path=Evaluator.ROOT_PATH):
        value = self.child.evaluate(trace, path + ("L",))
        value = Evaluator.evaluate_unary_op(self.operand.symbol, value)
        if trace is not None:
            trace[path] = value
        return value

    def __repr__(self):
        return f"Unary({self.operand.text!r}, {self.child!r})"


class BinaryNode:
    """Binary operator: left <operator> right."""
    __slots__ = ("operand", "left", "right")

    def __init__(self, operand, left, right):
        self.operand = operand
        self.left = left
        self.right = right

    def children(self):
        return (("L", self.left), ("R", self.right))

    def evaluate(self, trace=None, path=Evaluator.ROOT_PATH):
        left_value = self.left.evaluate(trace, path + ("L",))
        right_value = self.right.evaluate(trace, path + ("R",))
        value = Evaluator.evaluate_binary_op(self.operand.symbol, left_value, right_value)
        if trace is not None:
            trace[path] = value
        return value

    def __repr__(self):
        return f"Binary({self.operand.text!r}, left={self.left!r}, right={self.right!r})"


# -----------------------------
# Builder
# -----------------------------

def build_node(operands):
    """Pop the last operand of ``operands`` and build its subtree (recursive).

    ``operands`` is consumed in place.
    """
    if not operands:
        raise E.ExpressionError(BROKEN_EXPRESSION, code="3012")
    operand = operands.pop()

    if operand.precedence == Precedence.NUMBER:
        return LeafNode(operand)

    if operand.precedence == Precedence.UNARY:
        return UnaryNode(operand, build_node(operands))

    if len(operands) >= 2:
        right = build_node(operands)
        left = build_node(operands)
        return BinaryNode(operand, left, right)

    raise E.ExpressionError(BROKEN_EXPRESSION, code="3012")


class ExpressionTree:
    """Owns the root node. Created empty, populated once from a postfix list."""

    def __init__(self):
        self.root = None

    def populate(self, operands):
        """Build the tree from a postfix list, consuming it from the end.

        Raises:
            E.ExpressionError: empty input, wrong arity or operands left over.
        """
        if not operands:
            raise E.ExpressionError("Empty expression", code="3013")
        self.root = build_node(operands)
        if operands:
            # e.g. "(1)(2)": a complete tree was built but '1' was never used
            raise E.ExpressionError(
                f"{BROKEN_EXPRESSION} (unused operands: {' '.join(str(op) for op in operands)})",
                code="3012")
        logger.debug("Tree: %r", self.root)
        return self

    def evaluate(self, trace=None):
        """Evaluate bottom-up. Pure: calling it again gives the same value."""
        if self.root is None:
            raise E.ExpressionError("Empty expression", code="3013")
        return self.root.evaluate(trace)

    def dump(self, trace=None):
        return Evaluator.dump_tree(self, trace)

    def __len__(self):
        count = 0
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(child for _, child in node.children())
        return count
