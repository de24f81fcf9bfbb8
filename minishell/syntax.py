"""Syntax checks applied to a command line before it is split into tokens."""

from __future__ import annotations

from .errors import ErrorCode, ShellError

_OPERATORS = frozenset("><|")
_BLANKS = frozenset(" \t")
_FORBIDDEN = frozenset("\\()[{^")
_QUOTES = frozenset("'\"")


def _at(line: str, index: int) -> str:
    return line[index] if 0 <= index < len(line) else ""


def _skip_blanks(line: str, index: int) -> int:
    while _at(line, index) in _BLANKS and index < len(line):
        index += 1
    return index


def _closing_quote(line: str, index: int) -> int:
    """Index of the quote closing the one at ``index``, or ``len(line)``."""
    end = line.find(line[index], index + 1)
    return len(line) if end == -1 else end


def _skip_if_quoted(line: str, index: int) -> int:
    if _at(line, index) == "'":
        index = _closing_quote(line, index)
    if _at(line, index) == '"':
        index = _closing_quote(line, index)
    return index


def check_syntax(line: str) -> str:
    """Check quoting, a trailing redirection and everything after; return the line."""
    index = 0
    while index < len(line):
        if line[index] == "'":
            index = _closing_quote(line, index)
            if index >= len(line):
                raise ShellError(ErrorCode.SINGLE_QUOT)
        if line[index] == '"':
            index = _closing_quote(line, index)
            if index >= len(line):
                raise ShellError(ErrorCode.DOUBLE_QUOT)
        index += 1
    if line and line[-1] in "<>":
        raise ShellError(ErrorCode.SYNTAX)
    return check_meta_chars(line)


def check_meta_chars(line: str) -> str:
    """Reject unquoted characters the shell does not handle; return the line."""
    index = 0
    while index < len(line):
        index = _skip_if_quoted(line, index)
        char = _at(line, index)
        if char in _FORBIDDEN and char:
            raise ShellError(
                ErrorCode.ERR, f"{char} is a non-acceptable character\n"
            )
        index += 1
    return check_redirections(line)


def check_redirections(line: str) -> str:
    """Reject runs of operators and misplaced pipes or redirections; return the line."""
    index = 0
    while index < len(line):
        run = 0
        while _at(line, index) in _OPERATORS and index < len(line):
            index += 1
            run += 1
        if run > 3:
            raise ShellError(ErrorCode.REDIR_ALL)
        if index >= len(line):
            break
        index = _skip_if_quoted(line, index) + 1

    if _at(line, 0) == "|" or _at(line, _skip_blanks(line, 0)) == "|":
        raise ShellError(ErrorCode.REDIR_ALL)

    index = 0
    while index < len(line):
        if bad_operator_order(line, index):
            raise ShellError(ErrorCode.REDIR_ALL)
        index = _skip_if_quoted(line, index) + 1
    return line


def _followed_by_operator(line: str, after: int) -> bool:
    """True when blanks start at ``after`` and an operator follows them."""
    end = _skip_blanks(line, after)
    return end != after and _at(line, end) in _OPERATORS and end < len(line)


def bad_operator_order(line: str, index: int) -> bool:
    """Tell whether the operator at ``index`` is followed by one it cannot precede."""
    first = _at(line, index)
    if not first or first not in _OPERATORS:
        return False
    second = _at(line, index + 1)
    third = _at(line, index + 2)
    third_is_op = bool(third) and third in _OPERATORS

    if first == ">" and second == ">" and third_is_op:
        return True
    if first == ">" and second == "<":
        return True
    if first == "<" and second in ("<", ">") and second and third_is_op:
        return True
    if first == "|":
        end = _skip_blanks(line, index + 1)
        if second == "|" or (end != index + 1 and _at(line, end) == "|"):
            return True

    if first == ">" and second == ">" and _followed_by_operator(line, index + 2):
        return True
    if first == ">" and _followed_by_operator(line, index + 1):
        return True
    if first == "<" and second == "<" and _followed_by_operator(line, index + 2):
        return True
    if first == "<" and _followed_by_operator(line, index + 1):
        return True
    if first == "<" and second == ">" and _followed_by_operator(line, index + 2):
        return True
    return False