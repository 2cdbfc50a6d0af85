# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
In-memory bounded storage for a shell session.

Handles history lines, environment variables and aliases. Every table has
a fixed capacity; an insert that would exceed it is rejected and leaves
the table untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ShellError


class HistoryLog:
    """Append-only record of submitted lines (rejects when full)."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._lines: list[str] = []

    def __len__(self) -> int:
        return len(self._lines)

    def append(self, line: str | None) -> ShellError:
        if line is None:
            return ShellError.NULL_POINTER
        if len(self._lines) >= self.capacity:
            return ShellError.HISTORY_FULL
        self._lines.append(line)
        return ShellError.OK

    def entries(self) -> list[tuple[int, str]]:
        """Return (1-based index, line) pairs in insertion order."""
        return [(i + 1, line) for i, line in enumerate(self._lines)]

    def clear(self) -> int:
        released = len(self._lines)
        self._lines = []
        return released


class EnvTable:
    """Bounded NAME=value storage. Setting an existing name overwrites it."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._vars: list[tuple[str, str]] = []

    def __len__(self) -> int:
        return len(self._vars)

    def _index(self, name: str) -> int:
        for i, (key, _value) in enumerate(self._vars):
            if key == name:
                return i
        return -1

    def set(self, name: str, value: str) -> ShellError:
        if not name or value is None:
            return ShellError.NULL_POINTER
        idx = self._index(name)
        if idx >= 0:
            self._vars[idx] = (name, value)
            return ShellError.OK
        if len(self._vars) >= self.capacity:
            return ShellError.ENV_VAR_FULL
        self._vars.append((name, value))
        return ShellError.OK

    def get(self, name: str) -> tuple[ShellError, str | None]:
        idx = self._index(name)
        if idx < 0:
            return ShellError.ENV_VAR_NOT_FOUND, None
        return ShellError.OK, self._vars[idx][1]

    def unset(self, name: str) -> ShellError:
        idx = self._index(name)
        if idx < 0:
            return ShellError.ENV_VAR_NOT_FOUND
        del self._vars[idx]
        return ShellError.OK

    def items(self) -> list[tuple[str, str]]:
        return list(self._vars)

    def clear(self) -> int:
        released = len(self._vars)
        self._vars = []
        return released


@dataclass
class Alias:
    name: str
    value: str


class AliasTable:
    """Bounded alias storage. Not consulted when dispatching commands."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._aliases: list[Alias] = []

    def __len__(self) -> int:
        return len(self._aliases)

    def add(self, name: str, value: str) -> ShellError:
        if not name or value is None:
            return ShellError.NULL_POINTER
        existing = self.find(name)
        if existing is not None:
            existing.value = value
            return ShellError.OK
        if len(self._aliases) >= self.capacity:
            return ShellError.ALIAS_FULL
        self._aliases.append(Alias(name=name, value=value))
        return ShellError.OK

    def find(self, name: str) -> Alias | None:
        for alias in self._aliases:
            if alias.name == name:
                return alias
        return None

    def items(self) -> list[Alias]:
        return list(self._aliases)

    def clear(self) -> int:
        released = len(self._aliases)
        self._aliases = []
        return released
