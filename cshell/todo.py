"""The ``todo`` built-in: an in-memory list of tasks."""

import string

from cshell.ansi import Color, paint

MAX_TASKS = 100

USAGE = "Usage: todo <add/list/delete> [task]"
INVALID_COMMAND = "Invalid command. Use 'todo add', 'todo list', or 'todo delete'."


class TodoError(Exception):
    """Raised when a to-do operation cannot be carried out."""


class TodoList:
    """A bounded, ordered list of tasks numbered from 1."""

    def __init__(self, capacity=MAX_TASKS):
        self.capacity = capacity
        self._tasks = []

    def __len__(self):
        return len(self._tasks)

    def __iter__(self):
        return iter(self._tasks)

    @property
    def tasks(self):
        return tuple(self._tasks)

    def add(self, task):
        """Append ``task``; raise TodoError when the list is full."""
        if len(self._tasks) >= self.capacity:
            raise TodoError("Task list is full! Cannot add more tasks.")
        self._tasks.append(task)
        return task

    def delete(self, number):
        """Remove and return the task with the given 1-based number."""
        text = str(number)
        if not all(ch in string.digits for ch in text):
            raise TodoError("Error: Task number must be a positive integer.")
        index = int(text) if text else 0
        if not 1 <= index <= len(self._tasks):
            raise TodoError(f"Invalid task number: {text}")
        return self._tasks.pop(index - 1)

    def render(self):
        """Return the numbered listing of all tasks."""
        if not self._tasks:
            return paint("No tasks found.", Color.YELLOW)
        lines = [paint("To-Do List:", Color.CYAN)]
        lines.extend(
            paint(f"{number}. {task}", Color.BLUE)
            for number, task in enumerate(self._tasks, start=1)
        )
        return "\n".join(lines)

    def run(self, args):
        """Run ``todo`` with the words after the command name; return its output."""
        args = list(args)
        if not args:
            return paint(USAGE, Color.RED)
        action, rest = args[0], args[1:]
        try:
            if action == "add" and rest:
                task = self.add(" ".join(rest))
                return paint(f"Task added: {task}", Color.GREEN)
            if action == "list":
                return self.render()
            if action == "delete" and len(rest) == 1:
                self.delete(rest[0])
                return paint("Task deleted successfully.", Color.GREEN)
        except TodoError as error:
            return paint(str(error), Color.RED)
        return paint(INVALID_COMMAND, Color.RED)