# MathEngine.py
"""""
Core calculation engine for YardCalc.

Pipeline
--------
1) Tokenizer: raw input line -> flat list of number / symbol tokens.
2) ShuntingYard: tokens -> postfix operand list (precedence, unary signs, parentheses).
3) ExpressionTree: postfix list -> binary expression tree.
4) Evaluator: tree -> float, with an optional trace of every node value for the tree dump.

Each stage consumes its whole input before the next one starts and raises a
MathError subclass on the first problem it finds.
"""""

import logging

from . import error as E
from . import Tokenizer
from . import ShuntingYard
from .ExpressionTree import ExpressionTree

logger = logging.getLogger(__name__)


class Calculation:
    """Outcome of one successful calculate() call."""

    def __init__(self, problem, value, postfix, tree, trace):
        self.problem = problem
        self.value = value
        self.postfix = postfix
        self.tree = tree
        self.trace = trace

    def dump(self):
        return self.tree.dump(self.trace)

    def __repr__(self):
        return f"Calculation({self.problem!r} -> {self.value!r})"


def calculate(problem):
    """Main API: tokenize -> convert -> build -> evaluate.

    Returns:
        Calculation with the value, the rendered postfix sequence and the
        evaluated tree.
    Raises:
        E.MathError (or a subclass), with ``equation`` set to the input line
        and ``dump`` set to the tree rendered with the values computed so far.
    """
    tree = ExpressionTree()
    trace = {}
    try:
        tokens = Tokenizer.tokenize(problem)
        postfix = ShuntingYard.to_postfix(tokens)
        postfix_text = ShuntingYard.format_postfix(postfix)
        tree.populate(postfix)
        value = tree.evaluate(trace)
        logger.debug("%r = %r", problem, value)
        return Calculation(problem, value, postfix_text, tree, trace)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        e.dump = tree.dump(trace)
        raise e
    except RecursionError:
        raise E.CalculationError("Expression nested too deeply", code="3026",
                                 equation=problem, dump=None)
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        logger.exception("Unexpected error while calculating %r", problem)
        raise E.MathError(message=f"Unexpected error: {e}", code="9999", equation=problem,
                          dump=tree.dump(trace))


def format_result(value):
    return f"Result is {value}"


def format_error(error):
    return f"Error: {error.message}"
