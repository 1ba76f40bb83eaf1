# ShuntingYard.py
"""""
Second stage of the pipeline: token list -> postfix (reverse polish) operand list.

Standard shunting-yard with an explicit operator stack. A single flag,
can_be_unary, tracks whether the converter is in an operand position (start of
line, after an operator, after '(') or in an operator position (after a number
or ')'). In operand position '+', '-' and '~' are unary.

Unary operators are popped as soon as the next number arrives, so they bind
tighter than every binary operator: '-2^2' is (-2)^2 and '--3' is -(-(3)).
"""""

import functools
import logging

from . import error as E
from .Tokenizer import NumberToken, Precedence, BINARY_SYMBOLS, UNARY_SYMBOLS

logger = logging.getLogger(__name__)

MISMATCHED_PARENS = "Mismatched parenthesis"


@functools.total_ordering
class Operand:
    """One entry of the operator stack / postfix output.

    Ordering and equality compare the precedence class only; they are meant for
    stack-top checks. Use ``text`` or ``symbol`` to tell two operands apart.
    """
    __slots__ = ("text", "precedence", "symbol")

    def __init__(self, text, precedence, symbol=None):
        self.text = text
        self.precedence = precedence
        self.symbol = symbol

    @property
    def is_number(self):
        return self.precedence == Precedence.NUMBER

    @property
    def is_unary(self):
        return self.precedence == Precedence.UNARY

    def __eq__(self, other):
        if not isinstance(other, Operand):
            return NotImplemented
        return self.precedence == other.precedence

    def __lt__(self, other):
        if not isinstance(other, Operand):
            return NotImplemented
        return self.precedence < other.precedence

    def __hash__(self):
        return hash(self.precedence)

    def __str__(self):
        return f"u{self.text}" if self.is_unary else self.text

    def __repr__(self):
        return f"Operand({self.text!r}, {self.precedence.name})"


def _flush_unary(stack, output):
    while stack and stack[-1].is_unary:
        output.append(stack.pop())


def to_postfix(tokens):
    """Resolve precedence, associativity and unary signs into postfix order.

    Raises:
        E.SyntaxError: misplaced operator or unbalanced parentheses.
    """
    stack = []
    output = []
    can_be_unary = True

    for token in tokens:

        # --- Numbers ---
        if isinstance(token, NumberToken):
            output.append(Operand(token.text, Precedence.NUMBER))
            can_be_unary = False
            _flush_unary(stack, output)
            continue

        symbol = token.symbol
        precedence = token.precedence

        # --- Operators ---
        if Precedence.LOW <= precedence <= Precedence.MAX:
            if can_be_unary:
                if symbol not in UNARY_SYMBOLS:
                    raise E.SyntaxError(f"Invalid unary operator: {symbol.value}", code="3011")
                stack.append(Operand(symbol.value, Precedence.UNARY, symbol))
            else:
                if symbol not in BINARY_SYMBOLS:
                    raise E.SyntaxError(f"Invalid binary operator: {symbol.value}", code="3004")
                # Equal precedence pops too: same-level chains evaluate left to right
                while (stack and stack[-1].precedence >= precedence
                       and stack[-1].precedence != Precedence.LEFT_PAREN):
                    output.append(stack.pop())
                stack.append(Operand(symbol.value, precedence, symbol))
            can_be_unary = True

        # --- Parentheses ---
        elif precedence == Precedence.LEFT_PAREN:
            stack.append(Operand(symbol.value, precedence, symbol))
            can_be_unary = True

        elif precedence == Precedence.RIGHT_PAREN:
            if not stack:
                raise E.SyntaxError(MISMATCHED_PARENS, code="3009")
            while stack[-1].precedence != Precedence.LEFT_PAREN:
                output.append(stack.pop())
                if not stack:
                    raise E.SyntaxError(MISMATCHED_PARENS, code="3009")
            stack.pop()
            can_be_unary = False

        else:
            raise E.SyntaxError(f"Unexpected token: {token!r}", code="3012")

    while stack:
        last = stack.pop()
        if last.precedence in (Precedence.LEFT_PAREN, Precedence.RIGHT_PAREN):
            raise E.SyntaxError(MISMATCHED_PARENS, code="3009")
        output.append(last)

    logger.debug("Postfix: %s", format_postfix(output))
    return output


def format_postfix(operands):
    """Render a postfix list as space separated text, unary operators as 'u-' etc."""
    return " ".join(str(operand) for operand in operands)
