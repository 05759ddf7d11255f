"""The ``datetime`` built-in: current date and time in several styles."""

from datetime import datetime

from cshell.ansi import Color, paint

_USAGE = (
    "Usage: datetime [options]\n"
    "Options:\n"
    "  -d        Show day of the week and time\n"
    "  -w        Show date in '1st July 2024' format with time\n"
    "  -t        Show time in AM/PM format along with date\n"
    "Combinations of these options are supported.\n"
)

_OPTIONS = ("-d", "-w", "-t")


class DatetimeOptionError(ValueError):
    """Raised for an option ``datetime`` does not know; carries the usage."""

    def __init__(self, option):
        self.option = option
        super().__init__(
            paint(f"Invalid option: {option}", Color.RED)
            + "\n"
            + paint(_USAGE, Color.YELLOW)
        )


def datetime_report(args, now=None):
    """Describe ``now`` according to the options in ``args``."""
    args = list(args)
    for option in args:
        if option not in _OPTIONS:
            raise DatetimeOptionError(option)

    moment = now if now is not None else datetime.now()

    if not args:
        stamp = moment.strftime("%Y-%m-%d %H:%M:%S")
        return paint(f"Current Date and Time: {stamp}", Color.CYAN)

    lines = []
    if "-d" in args:
        stamp = moment.strftime("%A, %H:%M:%S")
        lines.append(paint(f"Day and Time: {stamp}", Color.GREEN))
    if "-w" in args:
        stamp = f"{moment.day:2d} " + moment.strftime("%B %Y, %H:%M:%S")
        lines.append(paint(f"Date and Time: {stamp}", Color.YELLOW))
    if "-t" in args:
        stamp = moment.strftime("%I:%M:%S %p, %d %B %Y")
        lines.append(paint(f"Date and time: {stamp}", Color.MAGENTA))
    return "\n".join(lines)