# minishell

The front end of a small command shell. It is a library. It checks a
command line's syntax, expands variables and quotes, and splits the line
into classified tokens. It also keeps the shell's table of environment
variables and sets up redirections for one pipeline segment.

## Installing

    pip install .

## Example

```python
from minishell.environment import Environment
from minishell.errors import ShellError
from minishell.parser import Kind, split_line

env = Environment.from_environ({"HOME": "/home/user", "PATH": "/usr/bin:/bin"})
tokens = split_line("echo $HOME | wc -l > out.txt", env)
for token in tokens:
    print(token.kind, token.text)

try:
    split_line("echo 'unclosed", env)
except ShellError as error:
    print(error.code, error.message)
```

## Modules

- `minishell.errors`: `ErrorCode`, the kinds of failure, and
  `ShellError`, which carries a code and the message that reports it.
  `error_message(code)` returns that text. `report_error(code, stream)`
  writes it to a stream (stderr by default) and returns 1.
- `minishell.syntax`: `check_syntax(line)` rejects the line in these cases:
  a quote left open; a line that ends in `<` or `>`; one of the characters
  `\ ( ) [ { ^` outside quotes; more than three operators in a row; a
  leading pipe; operators that cannot follow each other (`| |`, `>|`,
  `> <`, `>> >`, and the like). It raises `ShellError` for any of these.
  Otherwise it returns the line. `check_meta_chars`, `check_redirections`
  and `bad_operator_order` run the individual checks.
- `minishell.environment`: `Environment`, an ordered table of variables.
  Build it with `from_environ` (a mapping or `NAME=VALUE` strings; the
  process environment by default). It has `get`, `set`, `unset`, `items`
  and `to_environ`.
  - `env_lines()` gives the lines `env` would print.
  - `export_lines()` gives the sorted `declare -x` lines, leaving out
    empty values.
  - A new name goes in before the first existing name that sorts after it.
  - Setting an empty name raises `ShellError`.
- `minishell.expansion`: `expand_word(line, start, env, last_status)`
  expands one word. It removes quotes and expands `$NAME`, and `$?`
  becomes `last_status`. Single quotes keep their contents as written.
  Double quotes still expand variables. An unset variable expands to
  nothing. Helpers: `expand_dollar`, `expand_double_quoted`,
  `single_quoted`, `lookup_variable`, `search_paths` (the directories in
  `PATH`) and `is_word_break`.
- `minishell.parser`: `split_line(line, env, last_status)` checks a line
  and returns a list of `Token(kind, text)`. The first word of each
  pipeline segment is classified as follows:
  - `Kind.BUILTIN` for `echo`, `cd`, `pwd`, `export`, `unset`, `env` and
    `exit`.
  - `Kind.COMMAND`, with the executable's path, when the word is found on
    `PATH` or is itself an executable path. `resolve_command` does this
    lookup.
  - `Kind.NOT_FOUND` otherwise.

  Other words are `Kind.ARGUMENT`, and operators are `Kind.OPERATOR`.
  `skip_word`, `skip_operator`, `count_words` and `is_builtin` are also
  available.
- `minishell.redirect`: helpers for one pipeline segment.
  - `segment_start`, `next_pipe` and `has_pipe` find segment boundaries.
  - `command_args(tokens, index)` builds the argument vector. It leaves
    out operators and redirection targets.
  - `apply_redirections(tokens, index, streams, heredoc_source)` applies
    `>`, `>>`, `<`, `<>` (creates or truncates the file) and `<< DELIM`
    to a `Streams` object. Here-documents are read with `read_heredoc`
    from `heredoc_source`, or from stdin by default.
  - `Streams` is a context manager that closes the files it opened.
  - A failure raises `RedirectionError`.

## What it does not do

This package does not run commands. It has no prompt or interactive loop,
no command to start, and no process execution or pipe wiring between
commands. It does not implement the built-in commands either: `split_line`
only marks their names with `Kind.BUILTIN`. What it provides is the
parsing, expansion, environment table and redirection setup that such a
shell would be built on.

## Tests

    pip install .[test]
    pytest