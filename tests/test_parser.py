import os

import pytest

from minishell.environment import Environment
from minishell.errors import ErrorCode, ShellError
from minishell.parser import (
    Kind,
    Token,
    count_words,
    is_builtin,
    resolve_command,
    skip_operator,
    skip_word,
    split_line,
)


def _make_tool(directory, name="tool"):
    path = directory / name
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


def test_skip_word_stops_at_blank():
    assert skip_word("echo hi", 0) == len("echo")


def test_skip_word_passes_quoted_blanks():
    line = "'a b'c d"
    assert skip_word(line, 0) == line.index(" d")


def test_skip_word_stops_at_operator():
    line = "abc>out"
    assert skip_word(line, 0) == line.index(">")


@pytest.mark.parametrize("op", [">>", "<<", "<>", ">", "<", "|"])
def test_skip_operator_lengths(op):
    assert skip_operator(op + "x", 0) == len(op)


def test_skip_operator_on_word_is_unchanged():
    assert skip_operator("abc", 0) == 0


def test_skip_operator_pipe_is_single():
    assert skip_operator("||", 0) == len("|")


@pytest.mark.parametrize(
    "line", ["echo hi | cat > out", "a   b", "ls -l|wc", "echo 'a | b' >> f"]
)
def test_count_words_matches_tokens(line):
    env = Environment([("PATH", "")])
    assert count_words(line) == len(split_line(line, env))


@pytest.mark.parametrize("name", ["echo", "cd", "pwd", "export", "unset", "env", "exit"])
def test_is_builtin(name):
    assert is_builtin(name)


def test_is_builtin_rejects_other():
    assert not is_builtin("ls")


def test_resolve_command_in_path(tmp_path):
    tool = _make_tool(tmp_path)
    env = Environment([("PATH", str(tmp_path))])
    assert resolve_command("tool", env) == f"{tmp_path}/tool"
    assert os.path.samefile(resolve_command("tool", env), tool)


def test_resolve_command_absolute(tmp_path):
    tool = _make_tool(tmp_path)
    assert resolve_command(str(tool), Environment()) == str(tool)


def test_resolve_command_missing(tmp_path):
    env = Environment([("PATH", str(tmp_path))])
    assert resolve_command("nosuchtool_q", env) is None


def test_resolve_command_without_path():
    assert resolve_command("nosuchtool_q", Environment()) is None


def test_resolve_command_not_executable(tmp_path):
    (tmp_path / "plain").write_text("data")
    (tmp_path / "plain").chmod(0o644)
    env = Environment([("PATH", str(tmp_path))])
    assert resolve_command("plain", env) is None


def test_split_simple_builtin():
    tokens = split_line("echo hello world", Environment())
    assert tokens == [
        Token(Kind.BUILTIN, "echo"),
        Token(Kind.ARGUMENT, "hello"),
        Token(Kind.ARGUMENT, "world"),
    ]


def test_split_expands_variables():
    env = Environment([("HOME", "/home/user")])
    tokens = split_line("echo $HOME", env)
    assert tokens[1] == Token(Kind.ARGUMENT, "/home/user")


def test_split_last_status():
    tokens = split_line("echo $?", Environment(), 42)
    assert tokens[1].text == "42"


def test_split_unknown_command(tmp_path):
    env = Environment([("PATH", str(tmp_path))])
    tokens = split_line("nosuchtool_q a", env)
    assert tokens == [Token(Kind.NOT_FOUND, "nosuchtool_q"), Token(Kind.ARGUMENT, "a")]


def test_split_pipeline_kinds(tmp_path):
    _make_tool(tmp_path)
    env = Environment([("PATH", str(tmp_path))])
    tokens = split_line("echo a | tool > out", env)
    assert [t.kind for t in tokens] == [
        Kind.BUILTIN,
        Kind.ARGUMENT,
        Kind.OPERATOR,
        Kind.COMMAND,
        Kind.OPERATOR,
        Kind.ARGUMENT,
    ]
    assert tokens[3].text == f"{tmp_path}/tool"
    assert tokens[2].is_pipe()
    assert not tokens[4].is_pipe()


def test_split_redirection_before_command():
    tokens = split_line("> out echo hi", Environment())
    assert tokens == [
        Token(Kind.OPERATOR, ">"),
        Token(Kind.ARGUMENT, "out"),
        Token(Kind.BUILTIN, "echo"),
        Token(Kind.ARGUMENT, "hi"),
    ]


@pytest.mark.parametrize("op", ["<<", ">>", "<>", "<", ">"])
def test_split_operator_text(op):
    tokens = split_line(f"echo {op} f", Environment())
    assert tokens[1] == Token(Kind.OPERATOR, op)


def test_split_quotes_removed():
    tokens = split_line("echo 'a b'\"c\"", Environment())
    assert tokens[1].text == "a bc"


def test_split_empty_line():
    assert split_line("", Environment()) == []


def test_split_unclosed_quote_raises():
    with pytest.raises(ShellError) as info:
        split_line("echo 'abc", Environment())
    assert info.value.code is ErrorCode.SINGLE_QUOT


def test_split_trailing_redirection_raises():
    with pytest.raises(ShellError) as info:
        split_line("echo >", Environment())
    assert info.value.code is ErrorCode.SYNTAX