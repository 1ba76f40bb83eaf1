"""Tests for the line oriented console loop."""

import io

from YardCalc import Console
from YardCalc.config_manager import DEFAULT_SETTINGS


def run_lines(text, **overrides):
    settings = dict(DEFAULT_SETTINGS, **overrides)
    sink = io.StringIO()
    failures = Console.run(io.StringIO(text), sink, settings)
    return failures, sink.getvalue().splitlines()


def test_one_answer_per_line():
    failures, output = run_lines("1+2\n(1+2\n\n5&3\n")
    assert failures == 2
    assert output == [
        "Result is 3.0",
        "Error: Mismatched parenthesis",
        "Error: Empty expression",
        "Result is 1.0",
    ]


def test_loop_continues_after_errors():
    failures, output = run_lines("1+\n*3\n2^10")
    assert failures == 2
    assert output[0].startswith("Error: Broken mathematical expression")
    assert output[1] == "Error: Invalid unary operator: *"
    assert output[2] == "Result is 1024.0"


def test_windows_line_endings():
    _, output = run_lines("1 + 1\r\n")
    assert output == ["Result is 2.0"]


def test_postfix_output():
    _, output = run_lines("1+2*3\n", show_postfix=True)
    assert output == ["Result is 7.0", "Postfix: 1 2 3 * +"]


def test_tree_dump_output():
    _, output = run_lines("-(2+3)\n", dump_tree=True)
    assert output == [
        "Result is -5.0",
        "root: u- = -5.0",
        "  L: + = 5.0",
        "    L: 2 = 2.0",
        "    R: 3 = 3.0",
    ]


def test_tree_dump_after_error():
    _, output = run_lines("4/z\n", dump_tree=True)
    assert output == [
        "Error: Invalid number: z",
        "root: / = ?",
        "  L: 4 = 4.0",
        "  R: z = ?",
    ]


def test_process_line_without_extras():
    assert Console.process_line("2*3\n", DEFAULT_SETTINGS) == ["Result is 6.0"]


def test_deeply_nested_lines_do_not_stop_the_loop():
    lines = "".join("-" * depth + "1\n" for depth in range(900, 1000, 2)) + "1+1\n"
    _, output = run_lines(lines, dump_tree=True)
    assert output[-1] == "Result is 2.0"
    answers = [text for text in output if text.startswith(("Result is ", "Error: "))]
    assert len(answers) == 51
