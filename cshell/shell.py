"""The interactive shell: reads commands, runs built-ins and external programs."""

import dataclasses
import errno
import os
import re
import signal
import sys
from datetime import datetime

from cshell.ansi import Color, paint
from cshell.calc import calc_command
from cshell.clock import DatetimeOptionError, datetime_report
from cshell.fsops import (
    FileKind,
    copy_file,
    disk_usage,
    find,
    list_directory,
    long_listing,
    make_directory,
    mode_string,
    move_file,
    remove_directory,
    remove_file,
    touch,
    tree,
)
from cshell.lineedit import History, format_prompt, raw_mode, read_line
from cshell.pipeline import parse_pipeline, run_pipeline
from cshell.textfiles import DEFAULT_LINES, cat, grep, head, tail, word_count
from cshell.todo import TodoList

ARG_LIMIT = 9
CLEAR_SCREEN = "\x1b[1;1H\x1b[2J"

_BANNER = (
    "_______________________  __\n"
    "__  ____/__  ___/___  / / /\n"
    "_  /     _____ \\ __  /_/ / \n"
    "/ /___   ____/ / _  __  /  \n"
    "\\____/   /____/  /_/ /_/   \n"
    "                            \n"
    "welcome to C-shell\n"
)

_ABOUT = (
    "\n"
    "       _________         __    \n"
    "      /  _____/\\       /  |   \n"
    "     /  /\\__\\  |_____/   |   \n"
    "    /  /  __/  /    /  __|   \n"
    "   /  /_/ /   /    /  /   __ \n"
    "   \\____/   /_____/__/   /_/ \\_\n"
    "  ---------------------------\n"
    "       CShell v1.0           \n"
    "       A powerful shell     \n"
    "       with custom commands.\n"
    "  ---------------------------\n"
    "    Version: 1.0             \n"
    "    Year: 2024               \n"
)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def banner():
    """Return the greeting shown when the shell starts."""
    return _BANNER


def about_text():
    """Return the text of the ``about`` built-in."""
    return _ABOUT


def _atoi(text):
    found = _LEADING_INT.match(text or "")
    return int(found.group()) if found else 0


def _arg(args, index):
    return args[index] if index < len(args) else None


def _name_file(name, kind, follow):
    if kind is FileKind.REGULAR:
        return f"{Color.BLUE.value}{name}{follow}"
    if kind is FileKind.DIRECTORY:
        return f"{Color.GREEN.value}{name}/{follow}"
    return f"{Color.CYAN.value}{name}{follow}"


class Shell:
    """A shell session with its own history and to-do list."""

    def __init__(self, out=None, err=None):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.history = History()
        self.todo = TodoList()
        self.finished = False
        self._child = None
        self._builtins = {
            "exit": self._exit,
            "z": self._exit,
            "datetime": self._datetime,
            "calc": self._calc,
            "todo": self._todo,
            "screenfetch": lambda args: self._write(banner()),
            "about": lambda args: self._write(about_text()),
            "pwd": self._pwd,
            "cd": self._cd,
            "mkdir": self._mkdir,
            "rmdir": self._rmdir,
            "clear": lambda args: self._write(CLEAR_SCREEN),
            "ls": self._ls,
            "cat": self._cat,
            "grep": self._grep,
            "wc": self._wc,
            "cp": self._cp,
            "mv": self._mv,
            "rm": self._rm,
            "head": self._head,
            "tail": self._tail,
            "touch": self._touch,
            "find": self._find,
            "tree": self._tree,
            "df": self._df,
        }

    def _write(self, text):
        self.out.write(text)
        self.out.flush()

    def _say(self, text):
        self._write(text + "\n")

    def _complain(self, text):
        self.err.write(text + "\n")
        self.err.flush()

    def execute(self, line):
        """Run one command line."""
        args = line.split()[:ARG_LIMIT]
        if not args:
            return
        builtin = self._builtins.get(args[0])
        if builtin is not None:
            builtin(args)
        else:
            self._external(line)

    def run(self, stream):
        """Read and run commands from ``stream`` until ``exit`` or end of input."""
        previous = signal.signal(signal.SIGINT, self._interrupt)
        try:
            self._write(CLEAR_SCREEN)
            self._write(banner())
            while not self.finished:
                self._write(format_prompt(os.getcwd()))
                with raw_mode(stream):
                    try:
                        line = read_line(self.history, stream, self.out)
                    except EOFError:
                        break
                self.execute(line)
        finally:
            signal.signal(signal.SIGINT, previous)
        return 0

    def _interrupt(self, signum, frame):
        child, self._child = self._child, None
        if child is not None and child.poll() is None:
            child.send_signal(signal.SIGINT)

    def _exit(self, args):
        self.finished = True

    def _datetime(self, args):
        try:
            self._say(datetime_report(args[1:]))
        except DatetimeOptionError as error:
            self._write(str(error))

    def _calc(self, args):
        self._say(calc_command(args[1:]))

    def _todo(self, args):
        self._say(self.todo.run(args[1:]))

    def _pwd(self, args):
        try:
            self._say(paint(os.getcwd(), Color.CYAN))
        except OSError as error:
            self._complain(f"+--- Error in getcwd() : : {error.strerror}")

    def _cd(self, args):
        path = _arg(args, 1)
        try:
            if path is None:
                raise OSError(errno.EFAULT, os.strerror(errno.EFAULT))
            os.chdir(path)
        except OSError as error:
            self._complain(f"+--- Error in cd : {error.strerror}")

    def _mkdir(self, args):
        try:
            if _arg(args, 1) is None:
                raise OSError(errno.EFAULT, os.strerror(errno.EFAULT))
            make_directory(args[1])
        except OSError as error:
            self._complain(f"+--- Error in mkdir : {error.strerror}")

    def _rmdir(self, args):
        try:
            if _arg(args, 1) is None:
                raise OSError(errno.EFAULT, os.strerror(errno.EFAULT))
            remove_directory(args[1])
        except OSError as error:
            self._complain(f"+--- Error in rmdir : {error.strerror}")

    def _ls(self, args):
        if _arg(args, 1) == "-l":
            self._ls_long()
            return
        try:
            entries = list_directory(".")
        except OSError as error:
            self._complain(f"+--- Error in ls : {error.strerror}")
            return
        self._write(
            f"{Color.CYAN.value}+--- Total {len(entries)} objects in this directory\n"
        )
        for index, entry in enumerate(entries):
            self._write(_name_file(entry.name, entry.kind, "    "))
            if index % 8 == 0:
                self._write("\n")
        self._write("\n")

    def _ls_long(self):
        try:
            entries = long_listing(".")
        except OSError:
            self._say("+--- Empty directory")
            return
        self._write(
            f"{Color.CYAN.value}+--- Total {len(entries)} objects in this directory\n"
        )
        for entry in entries:
            stamp = datetime.fromtimestamp(entry.modified).strftime("%b %d %H:%M")
            self._write(
                f"{Color.DEF.value}{mode_string(entry.mode)} {entry.links:2d} "
                f"{entry.owner} {entry.group} {entry.size:5d} {stamp} "
                + _name_file(entry.name, entry.kind, "\n")
            )
        total = sum(entry.blocks for entry in entries) // 2
        self._write(f"{Color.CYAN.value}+--- Total {total} object contents\n")

    def _cat(self, args):
        path = _arg(args, 1)
        if path is None:
            self._say("Error: Missing filename for cat command.")
            return
        try:
            self._write(cat(path))
        except OSError:
            self._complain(f"cat: {path}: No such file or directory")

    def _grep(self, args):
        if len(args) < 2:
            self._say("grep: invalid file name: empty string")
            return
        if len(args) < 3:
            self._say("Error: Missing pattern or file name for grep command.")
            return
        pattern, path = args[1], args[2]
        try:
            lines = grep(pattern, path)
        except OSError as error:
            self._complain(f"Error opening file: {error.strerror}")
            return
        for line in lines:
            self._write(f"Checking line {line.number}: {line.text}")
            if line.matched:
                self._write(f"Match found at line {line.number}: {line.text}")
        if not any(line.matched for line in lines):
            self._say(f"No matches found for pattern: {pattern}")

    def _wc(self, args):
        path = _arg(args, 1)
        if path is None:
            self._say("Error: Missing filename for wc command.")
            return
        try:
            counts = word_count(path)
        except OSError:
            self._say(f"Error: Cannot open file {path}")
            return
        self._say(f"{counts.lines} {counts.words} {counts.size} {path}")

    def _cp(self, args):
        if len(args) < 3:
            self._say("+--- Error in cp : insufficient parameters")
            return
        source, destination = args[1], args[2]
        try:
            copy_file(source, destination)
        except FileExistsError as error:
            self._say(f"+--- Error in cp : {error.strerror}")
        except OSError as error:
            label = (
                "+--- Error in cp file1 "
                if error.filename == source
                else "Error in cp file2 "
            )
            self._complain(f"{label}: {error.strerror}")
        else:
            self._say(f"File copied from {source} to {destination}")

    def _mv(self, args):
        if len(args) < 3:
            self._say("+--- Error in mv: insufficient parameters")
            return
        source, destination = args[1], args[2]
        try:
            move_file(source, destination)
        except FileNotFoundError as error:
            if error.filename == source:
                self._say(paint("+--- Error in mv: Source file does not exist", Color.RED))
            else:
                self._complain(paint("+--- Error in mv: ", Color.RED) + f": {error.strerror}")
        except OSError as error:
            self._complain(paint("+--- Error in mv: ", Color.RED) + f": {error.strerror}")
        else:
            self._say(
                paint(f"+--- File moved successfully: {source} -> {destination}", Color.GREEN)
            )

    def _rm(self, args):
        path = _arg(args, 1)
        if path is None:
            self._say("+--- Error in rm: Missing filename")
            return
        try:
            remove_file(path)
        except FileNotFoundError:
            self._say(paint("+--- Error in rm: File does not exist", Color.RED))
        except OSError as error:
            self._complain(paint("+--- Error in rm: ", Color.RED) + f": {error.strerror}")
        else:
            self._say(paint(f"+--- File removed successfully: {path}", Color.GREEN))

    def _line_request(self, args):
        lines, path = DEFAULT_LINES, _arg(args, 1)
        if len(args) > 2 and args[1] == "-n":
            lines, path = _atoi(args[2]), _arg(args, 3)
        return lines, path

    def _show_lines(self, name, reader, color, args):
        lines, path = self._line_request(args)
        if path is None:
            self._say(f"Error: Missing filename for {name} command.")
            return
        try:
            content = reader(path, lines)
        except OSError:
            self._say(paint(f"Error: Cannot open file {path}", Color.RED))
            return
        for line in content:
            self._write(f"{color.value}{line}{Color.RESET.value}")

    def _head(self, args):
        self._show_lines("head", head, Color.CYAN, args)

    def _tail(self, args):
        self._show_lines("tail", tail, Color.BLUE, args)

    def _touch(self, args):
        path = _arg(args, 1)
        if path is None:
            self._say("Error: Missing filename for touch command.")
            return
        try:
            touch(path)
        except OSError:
            self._say(f"Error: Cannot touch file {path}")

    def _find(self, args):
        directory, pattern = ".", _arg(args, 1)
        if len(args) > 2:
            directory, pattern = args[1], args[2]
        if pattern is None:
            self._say(paint("Error: Missing pattern for find command.", Color.RED))
            return
        try:
            for path in find(directory, pattern):
                self._say(paint(path, Color.GREEN))
        except OSError:
            self._say(paint(f"Error: Cannot open directory {directory}", Color.RED))

    def _tree(self, args):
        path = _arg(args, 1) or "."
        try:
            for line in tree(path, 0):
                self._say(line)
        except OSError:
            self._say(f"Error: Cannot open directory {path}")

    def _df(self, args):
        try:
            usage = disk_usage(".")
        except OSError as error:
            self._complain(f"Error getting disk information: {error.strerror}")
            return
        header, row = str(usage).splitlines()
        self._say(paint(header, Color.CYAN))
        self._say(paint(row, Color.GREEN))

    def _external(self, line):
        try:
            pipeline = parse_pipeline(line)
        except ValueError as error:
            self._complain(f"+--- Error in executable : {error}")
            return
        try:
            process = run_pipeline(dataclasses.replace(pipeline, background=True))
        except OSError as error:
            self._complain(f"+--- Error in running executable : {error.strerror}")
            return
        if pipeline.background:
            self._say(f"+--- Process running in inBackground. PID:{process.pid}")
            return
        self._child = process
        try:
            process.wait()
        finally:
            self._child = None


def main(argv=None):
    """Start an interactive session on standard input."""
    return Shell().run(sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())