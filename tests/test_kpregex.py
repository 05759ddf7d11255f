import pytest

from cshell.kpregex import grep_lines, match


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("abc", "xxabcxx", True),
        ("abc", "xxabxcx", False),
        ("^abc", "xabc", False),
        ("^abc", "abcx", True),
        ("c$", "abc", True),
        ("c$", "abcd", False),
        ("a.c", "abc", True),
        ("a.c", "ac", False),
        ("a*", "", True),
        (".", "", False),
        ("^$", "", True),
        ("^$", "x", False),
        ("ab*c", "ac", True),
        ("ab*c", "abbbc", True),
        ("^ab*c$", "abbbd", False),
        ("a.*z", "a---z", True),
        ("", "anything", True),
    ],
)
def test_match(pattern, text, expected):
    assert match(pattern, text) is expected


def test_star_is_greedy_but_backtracks():
    assert match("^a*a$", "aaaa")
    assert not match("^a*b$", "aaaa")


def test_grep_lines_keeps_matching_terminated_lines():
    lines = ["foo\n", "bar\n", "food\n"]
    assert list(grep_lines("^fo", lines)) == ["foo\n", "food\n"]


def test_grep_lines_drops_unterminated_last_line():
    assert list(grep_lines("o", ["foo\n", "bar\n", "boo"])) == ["foo\n"]


def test_grep_lines_does_not_match_the_newline():
    assert list(grep_lines("o$", ["foo\n"])) == ["foo\n"]
    assert list(grep_lines("^$", ["\n", "x\n"])) == ["\n"]


def test_grep_lines_results_are_subset_that_matches():
    lines = ["alpha\n", "beta\n", "gamma\n", "delta\n"]
    found = list(grep_lines("a.a", lines))
    assert all(line in lines for line in found)
    assert all(match("a.a", line[:-1]) for line in found)
    assert len(found) < len(lines)