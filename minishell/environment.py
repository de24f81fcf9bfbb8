"""The shell's own table of environment variables."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping

from .errors import ErrorCode, ShellError


def _split_assignment(entry: str) -> tuple[str, str]:
    """Split ``NAME=VALUE`` at the first ``=``; a missing ``=`` gives an empty value."""
    name, _, value = entry.partition("=")
    return name, value


class Environment:
    """Ordered variables, kept in the order they arrived.

    New names are placed before the first existing name that sorts after
    them, or at the end when there is none.
    """

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        self._entries: list[tuple[str, str]] = [
            (str(name), "" if value is None else str(value)) for name, value in entries
        ]

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | Iterable[str] | None = None
    ) -> Environment:
        """Build a table from a mapping or ``NAME=VALUE`` strings (the process environment by default)."""
        if environ is None:
            environ = os.environ
        if isinstance(environ, Mapping):
            return cls(environ.items())
        return cls(_split_assignment(entry) for entry in environ)

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None when it is not set."""
        for key, value in self._entries:
            if key == name:
                return value
        return None

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"

    def set(self, name: str, value: str) -> None:
        """Give ``name`` the value ``value``, replacing it in place or inserting it."""
        if not name:
            raise ShellError(ErrorCode.EXPORT_VALUE)
        value = "" if value is None else value
        for position, (key, _) in enumerate(self._entries):
            if key == name:
                self._entries[position] = (name, value)
                return
        for position, (key, _) in enumerate(self._entries):
            if key > name:
                self._entries.insert(position, (name, value))
                return
        self._entries.append((name, value))

    def unset(self, name: str) -> bool:
        """Remove every entry called ``name``; tell whether any was removed."""
        kept = [(key, value) for key, value in self._entries if key != name]
        removed = len(kept) != len(self._entries)
        self._entries = kept
        return removed

    def items(self) -> list[tuple[str, str]]:
        """The ``(name, value)`` pairs in table order."""
        return list(self._entries)

    def env_lines(self) -> list[str]:
        """Lines printed by ``env``: ``NAME=VALUE`` in table order."""
        return [f"{name}={value}" for name, value in self._entries]

    def export_lines(self) -> list[str]:
        """Lines printed by ``export`` with no arguments.

        Assignments are sorted; those ending in ``=`` (empty values) are left out.
        """
        assignments = sorted(f"{name}={value}" for name, value in self._entries)
        return [
            f"declare -x {assignment}"
            for assignment in assignments
            if not assignment.endswith("=")
        ]

    def to_environ(self) -> dict[str, str]:
        """A mapping suitable as the environment of a child process."""
        return dict(self._entries)