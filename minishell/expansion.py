"""Expansion of variables and quotes inside one word of a command line."""

from __future__ import annotations

from typing import Optional, Protocol

# Characters that end a plain run of text inside a word.
_WORD_BREAKS = frozenset(" \t><|'\"$")
# Characters that end a variable name after ``$``.
_NAME_BREAKS = frozenset(" \t><|'\"")
# Characters that end a whole word.
_WORD_ENDS = frozenset(" \t><|")
# Characters after ``$`` that leave the dollar sign as it is.
_LITERAL_DOLLAR_FOLLOWERS = frozenset(" \t'\"")


class _VariableSource(Protocol):
    def get(self, name: str) -> Optional[str]: ...


def is_word_break(char: str) -> bool:
    """Tell whether ``char`` ends a run of plain text inside a word."""
    return bool(char) and char in _WORD_BREAKS


def _is_name_break(char: str) -> bool:
    return bool(char) and char in _NAME_BREAKS


def _name_end(line: str, index: int) -> int:
    """Index of the first character at or after ``index`` that ends a variable name."""
    while index < len(line) and not _is_name_break(line[index]):
        index += 1
    return index


def _closing(line: str, quote_index: int) -> int:
    """Index of the quote closing the one at ``quote_index``, or ``len(line)``."""
    end = line.find(line[quote_index], quote_index + 1)
    return len(line) if end == -1 else end


def lookup_variable(env: _VariableSource, name: str) -> str:
    """Return the value of ``name`` in ``env``, or an empty string when it is not set."""
    value = env.get(name)
    return "" if value is None else value


def expand_dollar(line: str, index: int, env: _VariableSource) -> str:
    """Expand the ``$`` at ``index``.

    A dollar sign followed by a blank, a quote or the end of the line stays
    a literal ``$``; otherwise the name runs up to the next blank, quote or
    operator and is replaced by its value.
    """
    following = index + 1
    if following >= len(line) or line[following] in _LITERAL_DOLLAR_FOLLOWERS:
        return "$"
    name = line[following:_name_end(line, following)]
    return lookup_variable(env, name)


def single_quoted(line: str, start: int) -> str:
    """Text between the single quote at ``start`` and its closing quote, taken as is."""
    return line[start + 1:_closing(line, start)]


def expand_double_quoted(line: str, start: int, env: _VariableSource) -> str:
    """Text between the double quote at ``start`` and its closing quote, with variables expanded."""
    parts: list[str] = []
    index = start + 1
    while index < len(line) and line[index] != '"':
        if line[index] == "$":
            parts.append(expand_dollar(line, index, env))
            index = _name_end(line, index + 1)
            if index >= len(line) or line[index] == '"':
                break
        parts.append(line[index])
        index += 1
    return "".join(parts)


def expand_word(
    line: str, start: int, env: _VariableSource, last_status: int = 0
) -> str:
    """Expand the word beginning at ``start``.

    The word ends at a blank, an operator or the end of the line. Quotes are
    removed, variables expanded and ``$?`` replaced by ``last_status``.
    """
    parts: list[str] = []
    index = start
    length = len(line)
    while index < length and line[index] not in _WORD_ENDS:
        char = line[index]
        if char == "$":
            if index + 1 < length and line[index + 1] == "?":
                parts.append(str(last_status))
                index += 2
            else:
                parts.append(expand_dollar(line, index, env))
                index = _name_end(line, index + 1)
        elif char == "'":
            parts.append(single_quoted(line, index))
            index = _closing(line, index) + 1
        elif char == '"':
            parts.append(expand_double_quoted(line, index, env))
            index = _closing(line, index) + 1
        else:
            end = index
            while end < length and not is_word_break(line[end]):
                end += 1
            parts.append(line[index:end])
            index = end
    return "".join(parts)


def search_paths(env: _VariableSource) -> Optional[list[str]]:
    """Directories listed in ``PATH``, empty entries dropped; None when ``PATH`` is unset."""
    value = env.get("PATH")
    if value is None:
        return None
    return [directory for directory in value.split(":") if directory]