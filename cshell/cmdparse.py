"""Parse and run command lines with pipes, lists, redirection and background jobs."""

import os
import subprocess
import sys
import threading
from dataclasses import dataclass, field

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10

READ_MODE = os.O_RDONLY
WRITE_MODE = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
APPEND_MODE = os.O_WRONLY | os.O_CREAT

_FILE_PERMISSIONS = 0o666


class ParseError(ValueError):
    """Raised when a command line cannot be parsed."""

    def __init__(self, message, leftover=None):
        super().__init__(message)
        self.leftover = leftover


@dataclass
class ExecCmd:
    """A program and its arguments."""

    argv: list = field(default_factory=list)


@dataclass
class RedirCmd:
    """A command run with one descriptor taken from a file."""

    cmd: object
    file: str
    mode: int
    fd: int


@dataclass
class PipeCmd:
    """Two commands with the left one's output feeding the right one."""

    left: object
    right: object


@dataclass
class ListCmd:
    """Two commands run one after the other."""

    left: object
    right: object


@dataclass
class BackCmd:
    """A command started without waiting for it."""

    cmd: object


class _Parser:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def skip(self):
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def peek(self, tokens):
        self.skip()
        return self.pos < len(self.text) and self.text[self.pos] in tokens

    def token(self):
        """Return the next token's kind and text: a symbol, ``>>``, ``a`` for a word, or ``""``."""
        self.skip()
        start = self.pos
        end = len(self.text)
        if start >= end:
            kind = ""
        else:
            char = self.text[start]
            if char in "|();&<":
                kind = char
                self.pos += 1
            elif char == ">":
                kind = ">"
                self.pos += 1
                if self.pos < end and self.text[self.pos] == ">":
                    kind = ">>"
                    self.pos += 1
            else:
                kind = "a"
                while (
                    self.pos < end
                    and self.text[self.pos] not in WHITESPACE
                    and self.text[self.pos] not in SYMBOLS
                ):
                    self.pos += 1
        word = self.text[start:self.pos]
        self.skip()
        return kind, word

    def line(self):
        cmd = self.pipe()
        while self.peek("&"):
            self.token()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.token()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self):
        cmd = self.exec()
        if self.peek("|"):
            self.token()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd):
        while self.peek("<>"):
            kind, _ = self.token()
            target_kind, target = self.token()
            if target_kind != "a":
                raise ParseError("missing file for redirection")
            if kind == "<":
                cmd = RedirCmd(cmd, target, READ_MODE, 0)
            elif kind == ">":
                cmd = RedirCmd(cmd, target, WRITE_MODE, 1)
            else:
                cmd = RedirCmd(cmd, target, APPEND_MODE, 1)
        return cmd

    def block(self):
        if not self.peek("("):
            raise ParseError("parseblock")
        self.token()
        cmd = self.line()
        if not self.peek(")"):
            raise ParseError("syntax - missing )")
        self.token()
        return self.redirs(cmd)

    def exec(self):
        if self.peek("("):
            return self.block()
        command = ExecCmd()
        result = self.redirs(command)
        while not self.peek("|)&;"):
            kind, word = self.token()
            if kind == "":
                break
            if kind != "a":
                raise ParseError("syntax")
            command.argv.append(word)
            if len(command.argv) >= MAXARGS:
                raise ParseError("too many args")
            result = self.redirs(result)
        return result


def parse_command(line):
    """Parse ``line`` into a tree of command objects."""
    parser = _Parser(line)
    cmd = parser.line()
    parser.skip()
    if parser.pos != len(line):
        raise ParseError("syntax", leftover=line[parser.pos:])
    return cmd


def run_command(cmd):
    """Run a parsed command and return its exit status."""
    return _run(cmd, None, None)


def _run(cmd, stdin, stdout):
    match cmd:
        case ExecCmd():
            return _run_exec(cmd, stdin, stdout)
        case RedirCmd():
            return _run_redir(cmd, stdin, stdout)
        case ListCmd():
            _run(cmd.left, stdin, stdout)
            return _run(cmd.right, stdin, stdout)
        case PipeCmd():
            return _run_pipe(cmd, stdin, stdout)
        case BackCmd():
            return _run_background(cmd, stdin, stdout)
    raise TypeError(f"runcmd: not a command: {cmd!r}")


def _run_exec(cmd, stdin, stdout):
    if not cmd.argv:
        return 1
    try:
        process = subprocess.Popen(cmd.argv, stdin=stdin, stdout=stdout)
    except OSError:
        print(f"exec {cmd.argv[0]} failed", file=sys.stderr)
        return 0
    return process.wait()


def _run_redir(cmd, stdin, stdout):
    if cmd.fd not in (0, 1):
        raise ValueError(f"cannot redirect descriptor {cmd.fd}")
    try:
        descriptor = os.open(cmd.file, cmd.mode, _FILE_PERMISSIONS)
    except OSError:
        print(f"open {cmd.file} failed", file=sys.stderr)
        return 1
    try:
        if cmd.fd == 0:
            return _run(cmd.cmd, descriptor, stdout)
        return _run(cmd.cmd, stdin, descriptor)
    finally:
        os.close(descriptor)


def _run_pipe(cmd, stdin, stdout):
    read_end, write_end = os.pipe()

    def left():
        try:
            _run(cmd.left, stdin, write_end)
        finally:
            os.close(write_end)

    def right():
        try:
            _run(cmd.right, read_end, stdout)
        finally:
            os.close(read_end)

    workers = [threading.Thread(target=left), threading.Thread(target=right)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return 0


def _run_background(cmd, stdin, stdout):
    own = [os.dup(fd) if fd is not None else None for fd in (stdin, stdout)]

    def job():
        try:
            _run(cmd.cmd, *own)
        finally:
            for fd in own:
                if fd is not None:
                    os.close(fd)

    threading.Thread(target=job, daemon=True).start()
    return 0