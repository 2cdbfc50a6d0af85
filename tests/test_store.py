"""
Tests for the bounded in-memory tables: history, environment, aliases.
"""

from __future__ import annotations

from minishell.errors import ShellError
from minishell.store import AliasTable, EnvTable, HistoryLog

# ----------------------------------------------------------------
# History
# ----------------------------------------------------------------


def test_history_records_lines_in_order_with_one_based_index():
    log = HistoryLog(capacity=5)

    assert log.append("ls") is ShellError.OK
    assert log.append("jobs") is ShellError.OK

    assert log.entries() == [(1, "ls"), (2, "jobs")]


def test_history_rejects_when_full_and_stays_unchanged():
    log = HistoryLog(capacity=3)
    for i in range(3):
        assert log.append(f"cmd{i}") is ShellError.OK

    assert log.append("overflow") is ShellError.HISTORY_FULL

    assert len(log) == 3
    assert [line for _, line in log.entries()] == ["cmd0", "cmd1", "cmd2"]


def test_history_rejects_missing_line():
    log = HistoryLog(capacity=3)

    assert log.append(None) is ShellError.NULL_POINTER
    assert len(log) == 0


def test_history_keeps_empty_lines_verbatim():
    log = HistoryLog(capacity=3)
    log.append("")

    assert log.entries() == [(1, "")]


def test_history_clear_releases_each_entry_once():
    log = HistoryLog(capacity=3)
    log.append("a")
    log.append("b")

    assert log.clear() == 2
    assert log.clear() == 0


# ----------------------------------------------------------------
# Environment variables
# ----------------------------------------------------------------


def test_env_set_and_get():
    env = EnvTable(capacity=2)

    assert env.set("HOME", "/home/me") is ShellError.OK
    assert env.get("HOME") == (ShellError.OK, "/home/me")


def test_env_get_missing():
    env = EnvTable(capacity=2)

    assert env.get("NOPE") == (ShellError.ENV_VAR_NOT_FOUND, None)


def test_env_overwrite_does_not_consume_capacity():
    env = EnvTable(capacity=1)
    env.set("A", "1")

    assert env.set("A", "2") is ShellError.OK
    assert env.items() == [("A", "2")]


def test_env_full():
    env = EnvTable(capacity=1)
    env.set("A", "1")

    assert env.set("B", "2") is ShellError.ENV_VAR_FULL
    assert env.items() == [("A", "1")]


def test_env_unset():
    env = EnvTable(capacity=2)
    env.set("A", "1")

    assert env.unset("A") is ShellError.OK
    assert env.unset("A") is ShellError.ENV_VAR_NOT_FOUND
    assert len(env) == 0


def test_env_requires_name():
    env = EnvTable(capacity=2)

    assert env.set("", "x") is ShellError.NULL_POINTER


# ----------------------------------------------------------------
# Aliases
# ----------------------------------------------------------------


def test_alias_add_and_find():
    aliases = AliasTable(capacity=2)

    assert aliases.add("ll", "ls -l") is ShellError.OK
    found = aliases.find("ll")
    assert found is not None
    assert found.value == "ls -l"


def test_alias_full_leaves_table_unchanged():
    aliases = AliasTable(capacity=1)
    aliases.add("ll", "ls -l")

    assert aliases.add("la", "ls -a") is ShellError.ALIAS_FULL
    assert [a.name for a in aliases.items()] == ["ll"]


def test_alias_redefinition_updates_value():
    aliases = AliasTable(capacity=1)
    aliases.add("ll", "ls -l")

    assert aliases.add("ll", "ls -lh") is ShellError.OK
    assert aliases.find("ll").value == "ls -lh"
