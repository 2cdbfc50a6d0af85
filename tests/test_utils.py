"""
Tests for the tokenizer and redirection parser.
"""

from __future__ import annotations

import pytest

from minishell.config import ANSI_COLORS, TAG_COLORS
from minishell.errors import RedirectionSyntaxError
from minishell.utils import ParsedLine, parse_line, tag, tokenize


def test_tokenize_splits_on_any_whitespace():
    assert tokenize("  ls   -la\t/tmp  ") == ["ls", "-la", "/tmp"]


def test_tokenize_does_not_interpret_quotes():
    assert tokenize('echo "a b"') == ["echo", '"a', 'b"']


def test_parse_output_redirection_truncate():
    parsed = parse_line("cmd > out.txt")

    assert parsed.argv == ["cmd"]
    assert parsed.output_file == "out.txt"
    assert parsed.append is False
    assert parsed.input_file is None


def test_parse_output_redirection_append():
    parsed = parse_line("cmd >> out.txt")

    assert parsed.output_file == "out.txt"
    assert parsed.append is True


def test_parse_input_and_output_redirection():
    parsed = parse_line("cmd < in.txt > out.txt")

    assert parsed.argv == ["cmd"]
    assert parsed.input_file == "in.txt"
    assert parsed.output_file == "out.txt"
    assert parsed.append is False


def test_parse_without_operators_leaves_targets_unset():
    parsed = parse_line("grep -n foo file.txt")

    assert parsed == ParsedLine(argv=["grep", "-n", "foo", "file.txt"])
    assert parsed.argc == 4
    assert parsed.command == "grep"


def test_redirection_filename_is_removed_from_argv():
    parsed = parse_line("sort -r < data.txt -u")

    assert parsed.argv == ["sort", "-r", "-u"]
    assert parsed.input_file == "data.txt"


def test_operators_must_be_standalone_tokens():
    parsed = parse_line("echo a>b")

    assert parsed.argv == ["echo", "a>b"]
    assert parsed.output_file is None


def test_last_output_operator_wins():
    parsed = parse_line("cmd >> first.txt > second.txt")

    assert parsed.output_file == "second.txt"
    assert parsed.append is False


def test_dangling_operator_raises():
    with pytest.raises(RedirectionSyntaxError) as exc:
        parse_line("cmd >")

    assert exc.value.operator == ">"
    assert isinstance(exc.value, ValueError)


def test_empty_line_parses_to_empty_argv():
    parsed = parse_line("   ")

    assert parsed.argv == []
    assert parsed.command is None


def test_tag_plain_and_colored():
    assert tag("ERR", color=False) == "[ERR]"
    colored = tag("ERR")
    assert "[ERR]" in colored
    assert colored.startswith("\033[")


def test_tag_uses_configured_color():
    assert tag("ERR") == f"{ANSI_COLORS['red']}[ERR]{ANSI_COLORS['reset']}"
    assert set(TAG_COLORS) == {"ERR"}
