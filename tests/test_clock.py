from datetime import datetime

import pytest

from cshell.ansi import Color, paint
from cshell.clock import DatetimeOptionError, datetime_report

NOW = datetime(2024, 7, 1, 14, 5, 9)


def test_default_report():
    assert datetime_report([], NOW) == paint(
        "Current Date and Time: 2024-07-01 14:05:09", Color.CYAN
    )


def test_day_option():
    assert datetime_report(["-d"], NOW) == paint(
        "Day and Time: Monday, 14:05:09", Color.GREEN
    )


def test_written_option_pads_day_with_space():
    assert datetime_report(["-w"], NOW) == paint(
        "Date and Time:  1 July 2024, 14:05:09", Color.YELLOW
    )


def test_am_pm_option():
    assert datetime_report(["-t"], NOW) == paint(
        "Date and time: 02:05:09 PM, 01 July 2024", Color.MAGENTA
    )


def test_sections_follow_fixed_order_regardless_of_argument_order():
    forward = datetime_report(["-d", "-w", "-t"], NOW)
    backward = datetime_report(["-t", "-w", "-d"], NOW)
    assert forward == backward
    parts = forward.split("\n")
    assert len(parts) == 3
    assert parts[0] == datetime_report(["-d"], NOW)
    assert parts[1] == datetime_report(["-w"], NOW)
    assert parts[2] == datetime_report(["-t"], NOW)


def test_repeated_option_reported_once():
    assert datetime_report(["-d", "-d"], NOW) == datetime_report(["-d"], NOW)


def test_invalid_option_raises_with_usage():
    with pytest.raises(DatetimeOptionError) as info:
        datetime_report(["-d", "-x"], NOW)
    assert info.value.option == "-x"
    assert "Invalid option: -x" in str(info.value)
    assert "Usage: datetime [options]" in str(info.value)


def test_default_uses_current_time_when_not_given():
    report = datetime_report([])
    assert report.startswith(Color.CYAN.value + "Current Date and Time: ")