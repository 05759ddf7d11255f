"""A tiny regular-expression matcher supporting ``^``, ``.``, ``*`` and ``$``."""


def match(pattern, text):
    """Return True when ``pattern`` matches somewhere in ``text``."""
    if pattern.startswith("^"):
        return _match_here(pattern, 1, text, 0)
    return any(_match_here(pattern, 0, text, start) for start in range(len(text) + 1))


def _match_here(pattern, pi, text, ti):
    """Match ``pattern[pi:]`` at the very start of ``text[ti:]``."""
    while True:
        if pi == len(pattern):
            return True
        if pi + 1 < len(pattern) and pattern[pi + 1] == "*":
            return _match_star(pattern[pi], pattern, pi + 2, text, ti)
        if pattern[pi] == "$" and pi + 1 == len(pattern):
            return ti == len(text)
        if ti < len(text) and pattern[pi] in (".", text[ti]):
            pi += 1
            ti += 1
            continue
        return False


def _match_star(char, pattern, pi, text, ti):
    """Match ``char*`` followed by ``pattern[pi:]`` at the start of ``text[ti:]``."""
    while True:
        if _match_here(pattern, pi, text, ti):
            return True
        if ti < len(text) and (text[ti] == char or char == "."):
            ti += 1
        else:
            return False


def grep_lines(pattern, lines):
    """Yield each newline-terminated line whose body matches ``pattern``.

    A final line without a terminating newline is never reported.
    """
    for line in lines:
        if line.endswith("\n") and match(pattern, line[:-1]):
            yield line