# Console.py
"""""
Line oriented front end: every input line is calculated on its own and
answered with exactly one 'Result is ...' or 'Error: ...' line, optionally
followed by the postfix sequence and the tree dump.

A failing line never stops the loop; only end of input does.
"""""

import logging

from . import error as E
from . import MathEngine

logger = logging.getLogger(__name__)


def process_line(line, settings):
    """Calculate one line and return the output lines for it."""
    problem = line.rstrip("\r\n")
    try:
        calculation = MathEngine.calculate(problem)
    except E.MathError as e:
        output = [MathEngine.format_error(e)]
        if settings.get("dump_tree") and e.dump:
            output.append(e.dump)
        return output

    output = [MathEngine.format_result(calculation.value)]
    if settings.get("show_postfix"):
        output.append(f"Postfix: {calculation.postfix}")
    if settings.get("dump_tree"):
        output.append(calculation.dump())
    return output


def run(source, sink, settings):
    """Read lines from ``source`` until it is exhausted, write answers to ``sink``.

    Returns the number of lines that failed.
    """
    failures = 0
    for line in source:
        output = process_line(line, settings)
        if output[0].startswith("Error: "):
            failures += 1
        for text in output:
            sink.write(text + "\n")
        sink.flush()
    logger.debug("Input exhausted, %d line(s) failed", failures)
    return failures
