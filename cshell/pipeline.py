"""External commands joined by pipes, with optional redirection."""

import errno
import os
import shutil
import subprocess
from contextlib import ExitStack
from dataclasses import dataclass, field

_OUTPUT_MODE = 0o644


@dataclass
class Pipeline:
    """Commands to run with each one's output fed to the next."""

    commands: list = field(default_factory=list)
    input_file: "str | None" = None
    output_file: "str | None" = None
    background: bool = False


def parse_pipeline(line):
    """Split ``line`` into commands on ``|`` and pick out ``<``, ``>`` and ``&``."""
    commands = [[]]
    input_file = output_file = None
    background = False
    tokens = iter(line.split())
    for token in tokens:
        if token == "|":
            commands.append([])
        elif token in ("<", ">"):
            target = next(tokens, None)
            if target is None:
                raise ValueError(f"missing file name after '{token}'")
            if token == "<":
                input_file = target
            else:
                output_file = target
        elif token == "&":
            background = True
        else:
            commands[-1].append(token)
    if any(not command for command in commands):
        raise ValueError("empty command in pipeline")
    return Pipeline(commands, input_file, output_file, background)


def _resolve(name):
    if os.sep in name:
        return name
    search = os.environ.get("PATH", "") + os.pathsep + os.getcwd()
    found = shutil.which(name, path=search)
    if found is None:
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), name)
    return found


def run_pipeline(pipeline):
    """Start every command of ``pipeline`` and return the last process.

    Unless the pipeline runs in the background, all processes have
    finished when this returns. The output file is opened for writing
    without being truncated.
    """
    programs = [_resolve(command[0]) for command in pipeline.commands]
    processes = []
    with ExitStack() as stack:
        source = None
        if pipeline.input_file is not None:
            source = stack.enter_context(
                open(os.open(pipeline.input_file, os.O_RDONLY), "rb")
            )
        sink = None
        if pipeline.output_file is not None:
            descriptor = os.open(
                pipeline.output_file, os.O_CREAT | os.O_WRONLY, _OUTPUT_MODE
            )
            sink = stack.enter_context(open(descriptor, "wb"))
        last = len(pipeline.commands) - 1
        for index, (program, command) in enumerate(zip(programs, pipeline.commands)):
            process = subprocess.Popen(
                command,
                executable=program,
                stdin=source,
                stdout=sink if index == last else subprocess.PIPE,
            )
            if processes:
                processes[-1].stdout.close()
            processes.append(process)
            source = process.stdout
    if not pipeline.background:
        for process in processes:
            process.wait()
    return processes[-1]