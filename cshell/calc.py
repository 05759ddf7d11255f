"""The ``calc`` built-in: a small calculator over two operands."""

import math
import re

from cshell.ansi import Color, paint

USAGE = (
    "Usage: calc <num1> <operator> <num2>\n"
    "Supported operators: +, -, *, /, %, ^, sqrt"
)

_NUMBER = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


class CalcError(ValueError):
    """Raised when a calculation cannot be carried out."""


def _to_number(text):
    """Read the leading number of ``text``; 0.0 when there is none."""
    found = _NUMBER.match(text)
    return float(found.group()) if found else 0.0


def _is_integral(value):
    return math.isfinite(value) and value == int(value)


def _power(base, exponent):
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        odd = _is_integral(exponent) and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf


def calculate(num1, operator, num2=None):
    """Apply ``operator`` to the textual operands and return the result."""
    if operator == "sqrt":
        value = _to_number(num1)
        if value < 0:
            raise CalcError(
                "Error: Cannot calculate square root of a negative number."
            )
        return math.sqrt(value)

    left = _to_number(num1)
    right = _to_number(num2) if num2 is not None else 0.0

    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if right == 0:
            raise CalcError("Error: Division by zero")
        return left / right
    if operator == "%":
        if num2 is None:
            raise CalcError("Error: Modulo requires two numbers.")
        if not (_is_integral(left) and _is_integral(right)):
            raise CalcError(
                "Error: Modulo operation is only supported for integers."
            )
        if right == 0:
            raise CalcError("Error: Division by zero")
        return float(math.fmod(int(left), int(right)))
    if operator == "^":
        return _power(left, right)
    raise CalcError(f"Unsupported operator: {operator}")


def calc_command(args):
    """Run ``calc`` with the words after the command name; return its output."""
    num1, operator, num2 = (list(args) + [None, None, None])[:3]
    if num1 is None or operator is None:
        return paint(USAGE, Color.RED)
    try:
        result = calculate(num1, operator, num2)
    except CalcError as error:
        return paint(str(error), Color.RED)
    return paint(f"Result: {result:.2f}", Color.GREEN)