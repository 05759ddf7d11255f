"""ANSI colour escapes used to decorate the shell's output."""

from enum import Enum


class Color(str, Enum):
    """Terminal colours written as ANSI escape sequences."""

    GREEN = "\x1b[92m"
    MAGENTA = "\x1b[95m"
    BLUE = "\x1b[94m"
    CYAN = "\x1b[96m"
    RED = "\x1b[91m"
    YELLOW = "\x1b[93m"
    RESET = "\x1b[0m"
    DEF = "\x1b[0m"


def paint(text, color):
    """Wrap ``text`` in the escape for ``color`` followed by a reset."""
    return f"{Color(color).value}{text}{Color.RESET.value}"