"""Small stream utilities: word counting, echo and cat."""

import shutil
import sys

from cshell.textfiles import WordCount

_SEPARATORS = frozenset(b" \r\t\n\v\0")
_CHUNK = 512


def count_words(data):
    """Count lines, words and bytes in ``data``.

    Words are separated by space, tab, carriage return, newline,
    vertical tab or NUL.
    """
    lines = words = 0
    in_word = False
    for byte in data:
        if byte == 0x0A:
            lines += 1
        if byte in _SEPARATORS:
            in_word = False
        elif not in_word:
            words += 1
            in_word = True
    return WordCount(lines, words, len(data))


def echo_line(args):
    """Return ``args`` joined by spaces and ended by a newline; empty for no args."""
    args = list(args)
    if not args:
        return ""
    return " ".join(args) + "\n"


def cat_streams(paths, out):
    """Copy each file in ``paths`` to the binary stream ``out``.

    With no paths, standard input is copied. Files are copied in order;
    the first one that cannot be opened raises OSError.
    """
    paths = list(paths)
    if not paths:
        shutil.copyfileobj(sys.stdin.buffer, out, _CHUNK)
        return
    for path in paths:
        with open(path, "rb") as handle:
            shutil.copyfileobj(handle, out, _CHUNK)