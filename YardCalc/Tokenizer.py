# Tokenizer.py
"""""
First stage of the pipeline: raw input line -> flat list of tokens.

All whitespace is removed first, then every single-character operator symbol
is located left to right. The text between two symbols becomes a NumberToken,
verbatim; it is only parsed to a float by the Evaluator.

Known limitation: '<<' and '>>' are part of the symbol tables (and the
Evaluator knows how to apply them), but the scan only matches single
characters, so they are never produced here.
"""""

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding strength, lowest to highest. NUMBER sits below every operator."""
    NUMBER = -1
    LOW = 0
    MEDIUM = 1  # reserved, nothing is tagged with it
    HIGH = 2
    HIGHER = 3
    MAX = 4
    UNARY = 5
    LEFT_PAREN = 6
    RIGHT_PAREN = 7


class Symbol(Enum):
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    MODULO = "%"
    POWER = "^"
    OR = "|"
    AND = "&"
    NOT = "~"
    SHIFT_LEFT = "<<"
    SHIFT_RIGHT = ">>"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"


SYMBOL_PRECEDENCE = MappingProxyType({
    Symbol.PLUS: Precedence.HIGH,
    Symbol.MINUS: Precedence.HIGH,
    Symbol.TIMES: Precedence.HIGHER,
    Symbol.DIVIDE: Precedence.HIGHER,
    Symbol.MODULO: Precedence.HIGHER,
    Symbol.POWER: Precedence.MAX,
    Symbol.NOT: Precedence.LOW,
    Symbol.OR: Precedence.LOW,
    Symbol.AND: Precedence.LOW,
    Symbol.SHIFT_LEFT: Precedence.LOW,
    Symbol.SHIFT_RIGHT: Precedence.LOW,
    Symbol.LEFT_PAREN: Precedence.LEFT_PAREN,
    Symbol.RIGHT_PAREN: Precedence.RIGHT_PAREN,
})

# Only these are matched by the scan
SCAN_SYMBOLS = frozenset(symbol.value for symbol in SYMBOL_PRECEDENCE if len(symbol.value) == 1)

BINARY_SYMBOLS = frozenset([
    Symbol.PLUS, Symbol.MINUS, Symbol.TIMES, Symbol.DIVIDE, Symbol.MODULO, Symbol.POWER,
    Symbol.OR, Symbol.AND, Symbol.SHIFT_LEFT, Symbol.SHIFT_RIGHT,
])
UNARY_SYMBOLS = frozenset([Symbol.PLUS, Symbol.MINUS, Symbol.NOT])


@dataclass(frozen=True)
class NumberToken:
    """Numeric lexeme, kept as text."""
    text: str

    def __repr__(self):
        return f"Number({self.text!r})"


@dataclass(frozen=True)
class SymbolToken:
    """Operator or parenthesis, tagged with its precedence class."""
    symbol: Symbol
    precedence: Precedence = None

    def __post_init__(self):
        if self.precedence is None:
            object.__setattr__(self, "precedence", SYMBOL_PRECEDENCE[self.symbol])

    @property
    def text(self):
        return self.symbol.value

    def __repr__(self):
        return f"Symbol({self.symbol.value!r}, {self.precedence.name})"


def strip_whitespace(line):
    """Remove every whitespace character, not only the leading/trailing ones."""
    return "".join(line.split())


def tokenize(line):
    """Convert a raw input line into a list of NumberToken / SymbolToken."""
    buf = strip_whitespace(line)
    tokens = []
    start = 0

    for index, char in enumerate(buf):
        if char not in SCAN_SYMBOLS:
            continue
        if index > start:
            tokens.append(NumberToken(buf[start:index]))
        tokens.append(SymbolToken(Symbol(char)))
        start = index + 1

    if start < len(buf):
        tokens.append(NumberToken(buf[start:]))

    logger.debug("Tokens for %r: %s", line, tokens)
    return tokens
