import sys
import time

import pytest

from cshell.cmdparse import (
    APPEND_MODE,
    MAXARGS,
    READ_MODE,
    WRITE_MODE,
    BackCmd,
    ExecCmd,
    ListCmd,
    ParseError,
    PipeCmd,
    RedirCmd,
    parse_command,
    run_command,
)

PY = sys.executable


@pytest.fixture
def scripts(tmp_path):
    say = tmp_path / "say.py"
    say.write_text("import sys\nprint(' '.join(sys.argv[1:]))\n")
    upper = tmp_path / "upper.py"
    upper.write_text("import sys\nsys.stdout.write(sys.stdin.read().upper())\n")
    fail = tmp_path / "fail.py"
    fail.write_text("import sys\nsys.exit(3)\n")
    return {"say": say, "upper": upper, "fail": fail}


def test_parse_simple_exec():
    assert parse_command("echo hello world\n") == ExecCmd(["echo", "hello", "world"])


def test_parse_pipe_is_right_nested():
    expected = PipeCmd(ExecCmd(["a"]), PipeCmd(ExecCmd(["b"]), ExecCmd(["c"])))
    assert parse_command("a | b | c") == expected


def test_parse_redirections_wrap_outward():
    expected = RedirCmd(
        RedirCmd(ExecCmd(["cat"]), "in", READ_MODE, 0), "out", WRITE_MODE, 1
    )
    assert parse_command("cat < in > out") == expected


def test_parse_append_redirection():
    assert parse_command("echo x >>log") == RedirCmd(
        ExecCmd(["echo", "x"]), "log", APPEND_MODE, 1
    )


def test_parse_words_stop_at_symbols():
    assert parse_command("a|b") == PipeCmd(ExecCmd(["a"]), ExecCmd(["b"]))


def test_parse_list_and_background():
    assert parse_command("a & ; b") == ListCmd(BackCmd(ExecCmd(["a"])), ExecCmd(["b"]))


def test_parse_block_with_redirection():
    expected = RedirCmd(ListCmd(ExecCmd(["a"]), ExecCmd(["b"])), "f", WRITE_MODE, 1)
    assert parse_command("(a ; b) > f") == expected


def test_parse_empty_line():
    assert parse_command("   \n") == ExecCmd([])


def test_missing_redirection_target():
    with pytest.raises(ParseError, match="missing file for redirection"):
        parse_command("cat <")


def test_missing_close_paren():
    with pytest.raises(ParseError, match="missing \\)"):
        parse_command("(echo hi")


def test_leftovers_are_reported():
    with pytest.raises(ParseError) as caught:
        parse_command("echo hi ) tail")
    assert caught.value.leftover == ") tail"


def test_too_many_args():
    parse_command(" ".join(["w"] * (MAXARGS - 1)))
    with pytest.raises(ParseError, match="too many args"):
        parse_command(" ".join(["w"] * MAXARGS))


def test_run_redirects_output(tmp_path, scripts):
    out = tmp_path / "out.txt"
    status = run_command(parse_command(f"{PY} {scripts['say']} hi > {out}"))
    assert status == 0
    assert out.read_text() == "hi\n"


def test_run_pipe_feeds_right_side(tmp_path, scripts):
    out = tmp_path / "out.txt"
    line = f"{PY} {scripts['say']} hi | {PY} {scripts['upper']} > {out}"
    assert run_command(parse_command(line)) == 0
    assert out.read_text() == "HI\n"


def test_run_input_redirection(tmp_path, scripts):
    source = tmp_path / "in.txt"
    source.write_text("abc\n")
    out = tmp_path / "out.txt"
    line = f"{PY} {scripts['upper']} < {source} > {out}"
    assert run_command(parse_command(line)) == 0
    assert out.read_text() == "ABC\n"


def test_run_append_mode_overwrites_from_start(tmp_path, scripts):
    out = tmp_path / "out.txt"
    original = b"abcdefgh"
    out.write_bytes(original)
    assert run_command(parse_command(f"{PY} {scripts['say']} xy >> {out}")) == 0
    written = b"xy\n"
    assert out.read_bytes() == written + original[len(written):]


def test_run_returns_exit_status(scripts):
    assert run_command(parse_command(f"{PY} {scripts['fail']}")) == 3


def test_run_list_runs_both(tmp_path, scripts):
    out = tmp_path / "out.txt"
    line = f"{PY} {scripts['fail']} ; {PY} {scripts['say']} after > {out}"
    assert run_command(parse_command(line)) == 0
    assert out.read_text() == "after\n"


def test_run_missing_program_reports(capsys):
    assert run_command(parse_command("no-such-program-for-cshell")) == 0
    assert "exec no-such-program-for-cshell failed" in capsys.readouterr().err


def test_run_missing_input_file(tmp_path, scripts, capsys):
    missing = tmp_path / "missing"
    assert run_command(parse_command(f"{PY} {scripts['upper']} < {missing}")) == 1
    assert f"open {missing} failed" in capsys.readouterr().err


def test_run_empty_command():
    assert run_command(ExecCmd()) == 1


def test_run_background(tmp_path, scripts):
    out = tmp_path / "bg.txt"
    assert run_command(parse_command(f"{PY} {scripts['say']} bg > {out} &")) == 0
    deadline = time.monotonic() + 10
    while time.monotonic() < deadline:
        if out.exists() and out.read_text() == "bg\n":
            break
        time.sleep(0.05)
    assert out.read_text() == "bg\n"