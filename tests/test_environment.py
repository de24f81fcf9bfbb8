import pytest

from minishell.environment import Environment
from minishell.errors import ErrorCode, ShellError


def test_from_environ_strings_keep_order_and_split_at_first_equals():
    env = Environment.from_environ(["PATH=/bin:/usr/bin", "X=a=b", "HOME=/root"])
    assert env.items() == [
        ("PATH", "/bin:/usr/bin"),
        ("X", "a=b"),
        ("HOME", "/root"),
    ]


def test_from_environ_mapping():
    env = Environment.from_environ({"A": "1", "B": "2"})
    assert env.get("A") == "1"
    assert env.get("B") == "2"
    assert len(env) == 2


def test_from_environ_entry_without_equals_has_empty_value():
    env = Environment.from_environ(["LONELY"])
    assert env.get("LONELY") == ""


def test_get_missing_returns_none():
    env = Environment([("A", "1")])
    assert env.get("B") is None
    assert "B" not in env
    assert "A" in env


def test_set_existing_replaces_in_place():
    env = Environment([("B", "1"), ("A", "2"), ("D", "3")])
    env.set("A", "new")
    assert env.items() == [("B", "1"), ("A", "new"), ("D", "3")]
    assert len(env) == 3


def test_set_new_inserts_before_first_greater_name():
    env = Environment([("B", "1"), ("A", "2"), ("D", "3")])
    env.set("C", "x")
    assert [name for name, _ in env.items()] == ["B", "A", "C", "D"]
    assert env.get("C") == "x"


def test_set_new_inserts_at_front_when_first_is_greater():
    env = Environment([("B", "1"), ("C", "2")])
    env.set("AA", "y")
    assert [name for name, _ in env.items()] == ["AA", "B", "C"]


def test_set_new_appends_when_no_greater_name():
    env = Environment([("A", "1"), ("B", "2")])
    env.set("Z", "last")
    assert env.items()[-1] == ("Z", "last")


def test_set_empty_name_raises():
    env = Environment()
    with pytest.raises(ShellError) as info:
        env.set("", "v")
    assert info.value.code == ErrorCode.EXPORT_VALUE


def test_unset_removes_entry():
    env = Environment([("A", "1"), ("B", "2"), ("C", "3")])
    assert env.unset("B") is True
    assert env.items() == [("A", "1"), ("C", "3")]


def test_unset_missing_leaves_table_unchanged():
    env = Environment([("A", "1")])
    assert env.unset("Q") is False
    assert env.items() == [("A", "1")]


def test_set_then_unset_round_trip():
    env = Environment([("A", "1"), ("C", "3")])
    before = env.items()
    env.set("B", "2")
    env.unset("B")
    assert env.items() == before


def test_env_lines():
    env = Environment([("B", "2"), ("A", "")])
    assert env.env_lines() == ["B=2", "A="]


def test_export_lines_sorted_and_skip_empty_values():
    env = Environment([("B", "2"), ("A", "1"), ("E", "")])
    assert env.export_lines() == ["declare -x A=1", "declare -x B=2"]


def test_export_lines_skip_value_ending_with_equals():
    env = Environment([("K", "v="), ("M", "ok")])
    assert env.export_lines() == ["declare -x M=ok"]


def test_to_environ_matches_items():
    env = Environment([("A", "1"), ("B", "2")])
    assert env.to_environ() == dict(env.items())


def test_items_is_a_copy():
    env = Environment([("A", "1")])
    snapshot = env.items()
    snapshot.append(("B", "2"))
    assert len(env) == 1


def test_iteration_yields_names():
    env = Environment([("X", "1"), ("Y", "2")])
    assert list(env) == ["X", "Y"]