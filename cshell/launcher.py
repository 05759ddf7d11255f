"""Open the shell in a new terminal window and report how it ended."""

import shlex
import subprocess
import sys

TERMINAL = "/usr/bin/gnome-terminal"


def _shell_command():
    return f"{shlex.quote(sys.executable)} -m cshell.shell"


def _wait_status(returncode):
    if returncode < 0:
        return -returncode
    return (returncode & 0xFF) << 8


def main(argv=None):
    """Run the shell in a terminal, wait for it, and print its wait status."""
    command = [TERMINAL, "--disable-factory", "-e", _shell_command()]
    try:
        completed = subprocess.run(command, check=False)
    except OSError as error:
        print(f"Execvp failed :/ \n: {error.strerror}", file=sys.stderr)
        status = _wait_status(255)
    else:
        status = _wait_status(completed.returncode)
    print(f"+--- Closed shell, exit status = {status}")
    return 0