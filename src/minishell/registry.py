# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Registry of user-supplied commands.

Lookup is a linear scan in registration order, so when two bindings share
a name the earlier one wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import ShellError
from .interfaces import CommandCallback

if TYPE_CHECKING:
    from .context import ShellContext  # pragma: no cover


def normalize_status(value: object) -> ShellError:
    """Map a callback's return value onto the taxonomy.

    None counts as OK; anything outside the taxonomy is EXECUTION_FAILED.
    """
    if value is None:
        return ShellError.OK
    try:
        return ShellError(value)
    except ValueError:
        return ShellError.EXECUTION_FAILED


@dataclass(frozen=True)
class CommandBinding:
    name: str
    callback: CommandCallback


class CommandRegistry:
    """Bounded table of name -> callback bindings."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._bindings: list[CommandBinding] = []

    def __len__(self) -> int:
        return len(self._bindings)

    def register(
        self, name: str | None, callback: CommandCallback | None
    ) -> ShellError:
        """Append a binding.

        Returns:
            NULL_POINTER if name or callback is missing,
            CUSTOM_COMMAND_FULL if the table is at capacity,
            OK otherwise
        """
        if not name or callback is None or not callable(callback):
            return ShellError.NULL_POINTER
        if len(self._bindings) >= self.capacity:
            return ShellError.CUSTOM_COMMAND_FULL
        self._bindings.append(CommandBinding(name=name, callback=callback))
        return ShellError.OK

    def lookup(self, name: str) -> CommandBinding | None:
        for binding in self._bindings:
            if binding.name == name:
                return binding
        return None

    def names(self) -> list[str]:
        return [b.name for b in self._bindings]

    def dispatch(self, ctx: ShellContext, argv: list[str]) -> ShellError:
        """Invoke the first binding named argv[0].

        The callback's status goes through normalize_status(), so a matched
        binding never reads as "no such command" unless the callback says
        so. Exceptions raised by the callback propagate; ShellContext
        catches them and writes the crash log.
        """
        if not argv:
            return ShellError.NULL_POINTER
        binding = self.lookup(argv[0])
        if binding is None:
            return ShellError.COMMAND_NOT_FOUND
        return self.invoke(binding, ctx, argv)

    @staticmethod
    def invoke(
        binding: CommandBinding, ctx: ShellContext, argv: list[str]
    ) -> ShellError:
        return normalize_status(binding.callback(ctx, len(argv), argv))

    def clear(self) -> int:
        released = len(self._bindings)
        self._bindings = []
        return released
