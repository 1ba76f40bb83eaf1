# Evaluator.py
"""""
Operator semantics and the diagnostic tree dump.

The tree nodes (ExpressionTree.py) call into the tables below. Values are
plain Python floats with IEEE behaviour: division by zero gives inf/nan
instead of raising.

Bitwise operators work on signed 64-bit integers. Operands are truncated
toward zero and saturate at the i64 range; nan becomes 0.

Instead of storing a value on every node, evaluation can fill a *trace*:
a dict mapping the path of a node (tuple of "L"/"R" steps from the root) to
its computed value. dump_tree() renders the tree with those values.
"""""

import math
import operator
from types import MappingProxyType

from . import error as E
from .Tokenizer import Symbol

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1
_U64_MASK = (1 << 64) - 1

ROOT_PATH = ()


# -----------------------------
# Numeric helpers
# -----------------------------

def to_i64(value):
    """Float -> signed 64-bit int, truncating toward zero and saturating."""
    if math.isnan(value):
        return 0
    if value >= 2.0 ** 63:
        return I64_MAX
    if value < -(2.0 ** 63):
        return I64_MIN
    return int(value)


def wrap_i64(value):
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= _U64_MASK
    return value - (1 << 64) if value > I64_MAX else value


def parse_number(text):
    """Parse leaf text as a float or raise CalculationError.

    Python-only literal forms ('1_000', non-ASCII digits) are rejected.
    """
    if "_" in text or not text.isascii():
        raise E.CalculationError(f"Invalid number: {text}", code="3008")
    try:
        return float(text)
    except ValueError:
        raise E.CalculationError(f"Invalid number: {text}", code="3008")


def divide(left, right):
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        # sign of the zero matters: 1/-0.0 is -inf
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def remainder(left, right):
    """C fmod: result takes the sign of the dividend."""
    if right == 0.0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return math.nan
    return math.fmod(left, right)


def power(left, right):
    try:
        return math.pow(left, right)
    except OverflowError:
        # odd integer exponents keep the sign of the base
        if left < 0 and right.is_integer() and right % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        if left == 0.0:
            # 0 ** negative
            return math.copysign(math.inf, left) if right.is_integer() and right % 2 == 1 else math.inf
        # negative base with a fractional exponent
        return math.nan


def _bitwise(int_op):
    def apply(left, right):
        return float(int_op(to_i64(left), to_i64(right)))
    return apply


def shift_left(left, right):
    return wrap_i64(left << (right & 63))


def shift_right(left, right):
    return left >> (right & 63)


# -----------------------------
# Operator tables
# -----------------------------

BINARY_OPERATIONS = MappingProxyType({
    Symbol.PLUS: operator.add,
    Symbol.MINUS: operator.sub,
    Symbol.TIMES: operator.mul,
    Symbol.DIVIDE: divide,
    Symbol.MODULO: remainder,
    Symbol.POWER: power,
    Symbol.OR: _bitwise(operator.or_),
    Symbol.AND: _bitwise(operator.and_),
    Symbol.SHIFT_LEFT: _bitwise(shift_left),
    Symbol.SHIFT_RIGHT: _bitwise(shift_right),
})

UNARY_OPERATIONS = MappingProxyType({
    Symbol.PLUS: lambda value: value,
    Symbol.MINUS: operator.neg,
    Symbol.NOT: lambda value: float(~to_i64(value)),
})


def evaluate_binary_op(symbol, left, right):
    return BINARY_OPERATIONS[symbol](left, right)


def evaluate_unary_op(symbol, value):
    return UNARY_OPERATIONS[symbol](value)


# -----------------------------
# Diagnostic dump
# -----------------------------

def format_value(value):
    return "?" if value is None else str(value)


def dump_tree(tree, trace=None, indent="  "):
    """Render the tree, one node per line, with the values found in ``trace``.

    Nodes that were never reached (e.g. because evaluation failed earlier) are
    shown with '?'.
    """
    if tree.root is None:
        return "<empty tree>"
    trace = trace or {}
    lines = []

    # Explicit stack: any tree that could be built can also be dumped
    stack = [(tree.root, "root", ROOT_PATH, 0)]
    while stack:
        node, label, path, depth = stack.pop()
        lines.append(f"{indent * depth}{label}: {node.operand} = {format_value(trace.get(path))}")
        # reversed so the left child is printed before the right one
        for child_label, child in reversed(node.children()):
            stack.append((child, child_label, path + (child_label,), depth + 1))

    return "\n".join(lines)
