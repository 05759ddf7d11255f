"""Line input with history navigation, and the coloured prompt."""

import os
from contextlib import contextmanager

from cshell.ansi import Color

try:
    import termios
except ImportError:  # pragma: no cover - platforms without termios
    termios = None

HISTORY_SIZE = 100
INPUT_LIMIT = 99

_CLEAR_LINE = "\r\x1b[K> "
_BACKSPACES = ("\x7f", "\b")


class History:
    """Commands entered so far, with a cursor for arrow-key navigation."""

    def __init__(self, capacity=HISTORY_SIZE):
        self.capacity = capacity
        self._commands = []
        self._index = 0

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(self._commands)

    def add(self, command):
        """Remember a non-empty command while there is room for it."""
        if command and len(self._commands) < self.capacity:
            self._commands.append(command)

    def previous(self):
        """Step back one command; None when already at the oldest."""
        if self._index <= 0:
            return None
        self._index -= 1
        return self._commands[self._index]

    def next(self):
        """Step forward one command; past the newest gives an empty line."""
        if self._index < len(self._commands) - 1:
            self._index += 1
            return self._commands[self._index]
        self._index = len(self._commands)
        return ""

    def reset(self):
        """Put the cursor just after the newest command."""
        self._index = len(self._commands)


def format_prompt(cwd):
    """Build the two-line prompt showing the last path components of ``cwd``."""
    grandparent = parent = ""
    last_slash = cwd.rfind("/")
    name = cwd[last_slash + 1:]
    if last_slash > 0:
        head = cwd[:last_slash]
        parent_slash = head.rfind("/")
        if parent_slash >= 0:
            grandparent = head[:parent_slash]
            parent = head[parent_slash + 1:]
    return (
        f"{Color.GREEN.value}{grandparent}/{parent}"
        f"{Color.BLUE.value}/{name}{Color.RESET.value}\n> "
    )


def _terminal_fd(stream):
    if termios is None:
        return None
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    return fd if os.isatty(fd) else None


@contextmanager
def raw_mode(stream):
    """Turn off canonical mode and echo on ``stream`` while the block runs."""
    fd = _terminal_fd(stream)
    if fd is None:
        yield
        return
    saved = termios.tcgetattr(fd)
    raw = termios.tcgetattr(fd)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(fd, termios.TCSAFLUSH, raw)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, saved)


def _redraw(out, buffer):
    out.write(_CLEAR_LINE + buffer)
    out.flush()


def read_line(history, stream, out):
    """Read one line from ``stream`` a character at a time, echoing to ``out``.

    Up and down arrows walk through ``history``; backspace edits. Raises
    EOFError when the stream ends before anything was typed.
    """
    buffer = ""
    while True:
        char = stream.read(1)
        if not char and not buffer:
            raise EOFError("end of input")
        if char in ("\n", ""):
            out.write("\n")
            out.flush()
            history.add(buffer)
            history.reset()
            return buffer
        if char in _BACKSPACES:
            if buffer:
                buffer = buffer[:-1]
                _redraw(out, buffer)
        elif char == "\x1b":
            sequence = stream.read(2)
            if len(sequence) == 2:
                if sequence[1] == "A":
                    entry = history.previous()
                    if entry is not None:
                        buffer = entry
                        _redraw(out, buffer)
                elif sequence[1] == "B":
                    buffer = history.next()
                    _redraw(out, buffer)
        elif char.isprintable():
            if len(buffer) < INPUT_LIMIT:
                buffer += char
                out.write(char)
                out.flush()