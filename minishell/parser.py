"""Splitting a checked command line into classified tokens."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .environment import Environment
from .expansion import expand_word, search_paths
from .syntax import check_syntax

_BLANKS = frozenset(" \t")
_OPERATORS = frozenset("><|")
_WORD_ENDS = frozenset(" \t><|")

BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})


class Kind(Enum):
    """What a token stands for in a command line."""

    BUILTIN = "builtin"
    COMMAND = "command"
    ARGUMENT = "argument"
    OPERATOR = "operator"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Token:
    """One element of a parsed command line."""

    kind: Kind
    text: str

    def is_pipe(self) -> bool:
        """Tell whether this token is the pipe operator."""
        return self.kind is Kind.OPERATOR and self.text == "|"


def _closing(line: str, quote_index: int) -> int:
    end = line.find(line[quote_index], quote_index + 1)
    return len(line) if end == -1 else end


def skip_word(line: str, index: int) -> int:
    """Index just past the word starting at ``index``, quotes included."""
    length = len(line)
    while index < length and line[index] not in _WORD_ENDS:
        if line[index] == "'":
            index = _closing(line, index)
        if index < length and line[index] == '"':
            index = _closing(line, index)
        index += 1
    return min(index, length)


def skip_operator(line: str, index: int) -> int:
    """Index just past the operator at ``index``; unchanged when there is none."""
    char = line[index] if index < len(line) else ""
    following = line[index + 1] if index + 1 < len(line) else ""
    if char == "<":
        index += 1
        if following in ("<", ">") and following:
            index += 1
    elif char == ">":
        index += 1
        if following == ">":
            index += 1
    elif char == "|":
        index += 1
    return index


def count_words(line: str) -> int:
    """Number of words and operators in ``line``."""
    index = 0
    count = 0
    length = len(line)
    while index < length:
        while index < length and line[index] in _BLANKS:
            index += 1
        start = index
        index = skip_word(line, index)
        if index != start:
            count += 1
        while index < length and line[index] in _BLANKS:
            index += 1
        start = index
        index = skip_operator(line, index)
        if index != start:
            count += 1
    return count


def is_builtin(name: str) -> bool:
    """Tell whether ``name`` is one of the shell's own commands."""
    return name in BUILTINS


def _executable(path: str) -> bool:
    return os.access(path, os.F_OK | os.X_OK)


def resolve_command(name: str, env: Environment) -> Optional[str]:
    """Path of the program ``name`` runs, searched in ``PATH``; None when not found."""
    if _executable(name):
        return name
    directories = search_paths(env)
    if directories is None:
        return None
    for directory in directories:
        candidate = f"{directory}/{name}"
        if _executable(candidate):
            return candidate
    return None


def _operator_text(line: str, index: int) -> str:
    char = line[index]
    following = line[index + 1] if index + 1 < len(line) else ""
    single = (
        char == "|"
        or (char == ">" and following != ">")
        or (char == "<" and following not in ("<", ">"))
        or (char == "<" and not following)
    )
    return char if single else line[index:index + 2]


def _next_is_command(tokens: list[Token]) -> bool:
    """Tell whether the next word takes the place of a command."""
    if not tokens:
        return True
    last = tokens[-1]
    if last.kind is Kind.OPERATOR:
        return last.is_pipe()
    for token in reversed(tokens):
        if token.kind in (Kind.COMMAND, Kind.NOT_FOUND, Kind.BUILTIN):
            return False
        if token.is_pipe():
            return True
    return True


def _command_token(name: str, env: Environment) -> Token:
    if is_builtin(name):
        return Token(Kind.BUILTIN, name)
    path = resolve_command(name, env)
    if path is not None:
        return Token(Kind.COMMAND, path)
    return Token(Kind.NOT_FOUND, name)


def split_line(line: str, env: Environment, last_status: int = 0) -> list[Token]:
    """Check ``line`` and split it into tokens.

    An empty line gives no tokens; a syntax error raises ``ShellError``.
    """
    if not line:
        return []
    check_syntax(line)
    tokens: list[Token] = []
    index = 0
    length = len(line)
    while index < length:
        while index < length and line[index] in _BLANKS:
            index += 1
        if index >= length:
            break
        if line[index] in _OPERATORS:
            tokens.append(Token(Kind.OPERATOR, _operator_text(line, index)))
            index = skip_operator(line, index)
        else:
            word = expand_word(line, index, env, last_status)
            if _next_is_command(tokens):
                tokens.append(_command_token(word, env))
            else:
                tokens.append(Token(Kind.ARGUMENT, word))
            index = skip_word(line, index)
    return tokens