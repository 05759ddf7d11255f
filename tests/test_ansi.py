import pytest

from cshell.ansi import Color, paint


def test_paint_wraps_text_with_color_and_reset():
    result = paint("hello", Color.GREEN)
    assert result == "\x1b[92mhello\x1b[0m"


@pytest.mark.parametrize("color", list(Color))
def test_paint_always_ends_with_reset(color):
    result = paint("text", color)
    assert result.startswith(color.value)
    assert result.endswith(Color.RESET.value)
    assert "text" in result


def test_paint_accepts_raw_escape_value():
    assert paint("x", "\x1b[91m") == paint("x", Color.RED)


def test_def_is_the_reset_sequence():
    assert paint("x", Color.DEF) == "\x1b[0mx\x1b[0m"
    assert paint("x", Color.DEF) == paint("x", Color.RESET)


def test_source_escape_values():
    assert paint("a", Color.RED) == "\x1b[91ma\x1b[0m"
    assert paint("a", Color.CYAN) == "\x1b[96ma\x1b[0m"
    assert paint("a", Color.MAGENTA) == "\x1b[95ma\x1b[0m"


def test_paint_rejects_unknown_color():
    with pytest.raises(ValueError):
        paint("x", "not-a-colour")