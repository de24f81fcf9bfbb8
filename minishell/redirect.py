"""Redirections and the layout of pipeline segments in a token list."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import BinaryIO, Optional, Union

from .errors import ErrorCode, ShellError
from .parser import Kind, Token

_FILE_MODE = 0o644


class RedirectionError(ShellError):
    """A redirection or pipe connection could not be set up."""


@dataclass
class Streams:
    """Where one command reads from and writes to.

    ``stdin`` is None to inherit the shell's input, bytes to feed as input,
    or an open binary file. ``stdout`` is None to keep the default output,
    or an open binary file.
    """

    stdin: Union[bytes, BinaryIO, None] = None
    stdout: Optional[BinaryIO] = None
    _opened: list = field(default_factory=list, repr=False)

    def _own(self, handle: BinaryIO) -> BinaryIO:
        self._opened.append(handle)
        return handle

    def close(self) -> None:
        """Close every file opened for this command."""
        for handle in self._opened:
            handle.close()
        self._opened.clear()

    def __enter__(self) -> Streams:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def segment_start(tokens: Sequence[Token], index: int) -> int:
    """Index of the first token of the pipeline segment holding ``index``."""
    for position in range(index, 0, -1):
        if tokens[position].is_pipe():
            return position + 1
    return 0


def next_pipe(tokens: Sequence[Token], index: int) -> Optional[int]:
    """Index of the first pipe after ``index``, or None when there is none."""
    for position, token in enumerate(tokens[index + 1:], start=index + 1):
        if token.is_pipe():
            return position
    return None


def has_pipe(tokens: Sequence[Token]) -> bool:
    """Tell whether the token list holds a pipe."""
    return any(token.is_pipe() for token in tokens)


def command_args(tokens: Sequence[Token], index: int) -> list[str]:
    """Argument vector of the command at ``index``.

    It runs up to the next pipe and leaves out operators and the file
    names that follow redirections.
    """
    end = next_pipe(tokens, index)
    segment = tokens[index:end] if end is not None else tokens[index:]
    previous = tokens[index - 1] if index > 0 else None
    args: list[str] = []
    for token in segment:
        follows_redirection = (
            previous is not None
            and previous.kind is Kind.OPERATOR
            and not previous.is_pipe()
        )
        if token.kind is not Kind.OPERATOR and not follows_redirection:
            args.append(token.text)
        previous = token
    return args


def _is_delimiter(line: str, delimiter: str) -> bool:
    return (line[:-1] if line.endswith("\n") else line) == delimiter


def read_heredoc(delimiter: str, source: Iterable[str]) -> str:
    """Read lines from ``source`` up to the delimiter line and return them joined."""
    lines: list[str] = []
    for line in source:
        if _is_delimiter(line, delimiter):
            break
        lines.append(line)
    return "".join(lines)


def _open_output(path: str, append: bool) -> BinaryIO:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    try:
        descriptor = os.open(path, flags, _FILE_MODE)
    except OSError as exc:
        raise RedirectionError(ErrorCode.FD) from exc
    return os.fdopen(descriptor, "ab" if append else "wb")


def _apply(
    operator: str,
    target: str,
    streams: Streams,
    heredoc_source: Iterable[str],
) -> None:
    if operator == ">>":
        streams.stdout = streams._own(_open_output(target, append=True))
    elif operator == ">":
        streams.stdout = streams._own(_open_output(target, append=False))
    elif operator == "<<":
        streams.stdin = read_heredoc(target, heredoc_source).encode()
    elif operator == "<>":
        _open_output(target, append=False).close()
    elif operator == "<":
        try:
            handle = open(target, "rb")
        except OSError as exc:
            raise RedirectionError(
                ErrorCode.FD, f"no such file or directory: {target}\n"
            ) from exc
        streams.stdin = streams._own(handle)


def apply_redirections(
    tokens: Sequence[Token],
    index: int,
    streams: Streams,
    heredoc_source: Optional[Iterable[str]] = None,
) -> Streams:
    """Apply every redirection in the segment of ``index`` to ``streams``, in order."""
    source = sys.stdin if heredoc_source is None else heredoc_source
    start = segment_start(tokens, index)
    end = next_pipe(tokens, start - 1) if start > 0 else next_pipe(tokens, -1)
    stop = len(tokens) if end is None else end
    segment = tokens[start:stop]
    followers = tokens[start + 1:stop + 1]
    for token, following in zip_longest(segment, followers):
        if token.kind is not Kind.OPERATOR or token.is_pipe() or following is None:
            continue
        _apply(token.text, following.text, streams, source)
    return streams