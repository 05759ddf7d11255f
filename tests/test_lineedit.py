import io

import pytest

from cshell import lineedit
from cshell.ansi import Color
from cshell.lineedit import History, format_prompt, read_line


def _read(text, history=None):
    history = history if history is not None else History()
    out = io.StringIO()
    return read_line(history, io.StringIO(text), out), history, out


def test_history_previous_walks_back_to_oldest():
    history = History()
    history.add("ls")
    history.add("pwd")
    history.reset()
    assert history.previous() == "pwd"
    assert history.previous() == "ls"
    assert history.previous() is None


def test_history_next_past_newest_gives_empty():
    history = History()
    history.add("ls")
    history.add("pwd")
    history.reset()
    history.previous()
    history.previous()
    assert history.next() == "pwd"
    assert history.next() == ""


def test_history_ignores_empty_commands():
    history = History()
    history.add("")
    history.add("ls")
    assert list(history) == ["ls"]


def test_history_is_bounded():
    history = History()
    for number in range(lineedit.HISTORY_SIZE + 5):
        history.add(f"cmd{number}")
    assert len(history) == lineedit.HISTORY_SIZE
    assert list(history)[-1] == f"cmd{lineedit.HISTORY_SIZE - 1}"


def test_read_line_returns_typed_text_and_records_it():
    line, history, out = _read("ls -l\n")
    assert line == "ls -l"
    assert list(history) == ["ls -l"]
    assert out.getvalue() == "ls -l\n"


def test_read_line_backspace_removes_last_character():
    line, _, _ = _read("abc\x7fd\n")
    assert line == "abd"


def test_read_line_up_arrow_recalls_history():
    history = History()
    history.add("pwd")
    history.reset()
    line, _, out = _read("\x1b[A\n", history)
    assert line == "pwd"
    assert "\r\x1b[K> pwd" in out.getvalue()


def test_read_line_down_arrow_clears_line():
    history = History()
    history.add("pwd")
    history.reset()
    line, _, _ = _read("\x1b[A\x1b[B\n", history)
    assert line == ""


def test_read_line_skips_control_characters():
    line, _, _ = _read("a\x01b\tc\n")
    assert line == "abc"


def test_read_line_limits_length():
    line, _, _ = _read("x" * 150 + "\n")
    assert len(line) == lineedit.INPUT_LIMIT


def test_read_line_eof_without_input_raises():
    with pytest.raises(EOFError):
        _read("")


def test_read_line_eof_after_text_returns_text():
    line, history, _ = _read("echo")
    assert line == "echo"
    assert list(history) == ["echo"]


def test_format_prompt_deep_path():
    assert format_prompt("/home/user/docs") == (
        f"{Color.GREEN.value}/home/user{Color.BLUE.value}/docs{Color.RESET.value}\n> "
    )


def test_format_prompt_top_level_directory():
    assert format_prompt("/home") == (
        f"{Color.GREEN.value}/{Color.BLUE.value}/home{Color.RESET.value}\n> "
    )