"""Error codes and messages reported by the shell."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TextIO


class ErrorCode(IntEnum):
    """Kinds of failure the shell reports."""

    ERR = 0
    MALLOC = 1
    READ = 2
    PIPE = 3
    PID = 4
    EXEC = 5
    PROC = 6
    FD = 7
    DUP2 = 8
    DUP = 9
    GETCWD = 10
    EXPORT_VALUE = 11
    CD_ARG = 12
    SINGLE_QUOT = 13
    DOUBLE_QUOT = 14
    SYNTAX = 15
    REDIR_ALL = 16


_PREFIX = "minishell: "

# Codes absent from this table (ERR, PROC) are reported silently.
_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MALLOC: "ERROR :\nMalloc failed to allocate memory.\n",
    ErrorCode.READ: "ERROR :\nFailed to allocate memory in readline function.\n",
    ErrorCode.PIPE: "ERROR :\nFailed to creating pipe\n",
    ErrorCode.PID: "ERROR :\nFailed to creating child process\n",
    ErrorCode.EXEC: "ERROR :\nFailed while executing the command\n",
    ErrorCode.FD: "ERROR :\nFailed while opening file\n",
    ErrorCode.DUP2: "ERROR :\nFailed while running dup2\n",
    ErrorCode.DUP: "ERROR :\nFailed while running dup\n",
    ErrorCode.GETCWD: "ERROR :\nFailed while running getcwd\n",
    ErrorCode.EXPORT_VALUE: "export: `=': not a valid identifier\n",
    ErrorCode.CD_ARG: "cd: too many arguments\n",
    ErrorCode.SINGLE_QUOT: "ERROR :\nSingle quot no close\n",
    ErrorCode.DOUBLE_QUOT: "ERROR :\nDouble quot no close\n",
    ErrorCode.SYNTAX: _PREFIX + "syntax error near unexpected symbol \"newline\"\n",
    ErrorCode.REDIR_ALL: _PREFIX + "syntax error near unexpected symbol > < or |\n",
}


def error_message(code: ErrorCode | int) -> str:
    """Return the text printed for ``code``; empty for codes printed silently."""
    return _MESSAGES.get(ErrorCode(code), "")


def report_error(code: ErrorCode | int, stream: TextIO | None = None) -> int:
    """Write the message for ``code`` to ``stream`` (stderr by default) and return 1."""
    target = sys.stderr if stream is None else stream
    message = error_message(code)
    if message:
        target.write(message)
        target.flush()
    return 1


class ShellError(Exception):
    """A failure carrying an error code and, optionally, its own message text."""

    def __init__(self, code: ErrorCode | int, detail: str | None = None) -> None:
        self.code = ErrorCode(code)
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """The text that reports this error."""
        return self.detail if self.detail is not None else error_message(self.code)

    def __str__(self) -> str:
        return self.message