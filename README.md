# cshell

An interactive command shell with built-in commands for working with files,
text, dates, arithmetic and a to-do list. Anything that is not a built-in is
run as an external program, with pipes (`|`), input and output redirection
(`<`, `>`) and background jobs (`&`).

## Installation

```
pip install .
```

## Starting the shell

```
cshell
```

The shell clears the screen, prints a banner and shows a two-line prompt:
the current directory, with its last component in a different colour, and
then `> `. Input is read a character at a time; backspace edits the line and
the up and down arrow keys move through the history of this session (up to
100 commands). Lines are limited to 99 characters, and built-ins look at no
more than the first 9 words. Type `exit` (or `z`) to leave, or end the input.

Pressing Ctrl+C while an external program runs sends it an interrupt.

To open the shell in a new terminal window and wait for it to close:

```
cshell-terminal
```

This starts `/usr/bin/gnome-terminal` running the shell and, once the window
closes, prints `+--- Closed shell, exit status = N`.

## Built-in commands

| Command | What it does |
| --- | --- |
| `pwd` | print the current directory |
| `cd <dir>` | change directory |
| `ls`, `ls -l` | list the current directory, optionally in long form with permissions, owner, group, size and time |
| `mkdir <dir>`, `rmdir <dir>` | create or remove a directory |
| `touch <file>` | create a file or set its timestamps to now |
| `cp <src> <dst>` | copy a file, refusing when the destination was modified more recently |
| `mv <src> <dst>` | move or rename a file |
| `rm <path>` | remove a file or an empty directory |
| `cat <file>` | print a file |
| `head [-n N] <file>`, `tail [-n N] <file>` | first or last lines (10 by default) |
| `grep <pattern> <file>` | check every line for the text pattern, reporting each line checked and each match |
| `wc <file>` | count lines, words and bytes |
| `find [dir] <pattern>` | list paths below a directory whose names contain the pattern |
| `tree [dir]` | draw the directory tree |
| `df` | size, used and available space of the current file system in MiB |
| `datetime [-d] [-w] [-t]` | current date and time in several formats |
| `calc <a> <op> <b>` | arithmetic with `+ - * / % ^`, or `calc <a> sqrt` |
| `todo add <task>`, `todo list`, `todo delete <n>` | a to-do list of up to 100 tasks |
| `clear`, `screenfetch`, `about` | clear the screen, show the banner, show information about the shell |

## External programs

A line that is not a built-in is split on whitespace into commands joined by
`|`. `< file` feeds the first command from a file, `> file` sends the last
command's output to a file (opened for writing without truncating it), and
`&` runs the pipeline without waiting and prints its process id. Programs are
looked up on `PATH` and then in the current directory.

## Using it as a library

The pieces of the shell can be used on their own:

```python
from cshell.calc import calculate
from cshell.kpregex import match, grep_lines
from cshell.coreutils import count_words, echo_line
from cshell.cmdparse import parse_command, run_command
from cshell.fmt import format_xv6

calculate("7", "%", "3")               # 1.0
match("^h.*o$", "hello")               # True
count_words(b"one two\nthree\n")       # WordCount(lines=2, words=3, size=14)
echo_line(["hello", "world"])          # "hello world\n"
parse_command("ls | grep x > out")     # a tree of ExecCmd, PipeCmd, RedirCmd ...
format_xv6("%d %x %s", 42, 255, "ok")  # "42 FF ok"
```

- `cshell.kpregex` is a small matcher supporting `^`, `.`, `*` and `$`.
- `cshell.cmdparse` parses lines with `|`, `;`, `&`, `<`, `>`, `>>` and
  parentheses into `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd` and `BackCmd`
  objects (raising `ParseError` on bad syntax), and `run_command` runs them.
- `cshell.fmt.format_xv6` formats `%d`, `%u`, `%x`, `%p`, `%s` and `%%`,
  treating integers as 32-bit values.
- `cshell.textfiles`, `cshell.fsops`, `cshell.todo`, `cshell.clock` and
  `cshell.lineedit` hold the functions behind the built-ins.

## What it does not do

- The to-do list and the command history live only for one session; nothing
  is saved to disk.
- There is no tab completion, no quoting or escaping of arguments, no
  variables and no scripting; the interactive shell splits lines on whitespace.
- `cshell-terminal` only works where `/usr/bin/gnome-terminal` is installed.

## Running the tests

```
pip install .[test]
pytest
```