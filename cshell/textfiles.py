"""Built-ins that read text files: cat, head, tail, grep and wc."""

from itertools import islice
from typing import NamedTuple

DEFAULT_LINES = 10


class GrepLine(NamedTuple):
    """One line examined by :func:`grep`, numbered from 1."""

    number: int
    text: str
    matched: bool


class WordCount(NamedTuple):
    """Line, word and byte totals of a file."""

    lines: int
    words: int
    size: int


def _open_text(path):
    return open(path, encoding="utf-8", errors="surrogateescape", newline="")


def cat(path):
    """Return the whole text of the file at ``path``."""
    with _open_text(path) as handle:
        return handle.read()


def head(path, lines=DEFAULT_LINES):
    """Return the first ``lines`` lines of the file, line endings kept."""
    with _open_text(path) as handle:
        return list(islice(handle, max(lines, 0)))


def tail(path, lines=DEFAULT_LINES):
    """Return the last ``lines`` lines of the file, line endings kept."""
    with _open_text(path) as handle:
        content = handle.readlines()
    if lines <= 0:
        return []
    return content[-lines:]


def grep(pattern, path):
    """Examine every line of the file for the substring ``pattern``.

    Every line is reported, with ``matched`` telling whether it holds
    the pattern.
    """
    with _open_text(path) as handle:
        return [
            GrepLine(number, line, pattern in line)
            for number, line in enumerate(handle, start=1)
        ]


def word_count(path):
    """Count lines, words and bytes of the file at ``path``.

    A file with bytes but no newline counts as one line.
    """
    with open(path, "rb") as handle:
        data = handle.read()
    lines = data.count(b"\n")
    if lines == 0 and data:
        lines = 1
    return WordCount(lines, len(data.split()), len(data))