# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Protocol definitions for dependency injection.

These interfaces keep the session engine independent of how lines are
read, how processes are spawned, and where configuration comes from.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .context import ShellContext  # pragma: no cover
    from .errors import ShellError  # pragma: no cover
    from .executor import SpawnResult  # pragma: no cover


class CommandCallback(Protocol):
    """Signature of a custom command registered with the shell."""

    def __call__(
        self, ctx: ShellContext, argc: int, argv: list[str]
    ) -> ShellError:
        """Run the command and return its status."""
        ...


class Launcher(Protocol):
    """Protocol for spawning external programs."""

    def spawn(
        self,
        argv: list[str],
        input_file: str | None = None,
        output_file: str | None = None,
        append: bool = False,
        reset_signals: Iterable[int] = (),
    ) -> SpawnResult:
        """Start argv[0] without waiting for it to finish."""
        ...


class LineReader(Protocol):
    """Protocol for the source of input lines."""

    def read(self, prompt: str) -> str:
        """Return the next line (newline may be included).

        Raises:
            EOFError: when no further input is available
        """
        ...

    def write(self, text: str) -> None:
        """Write text exactly as given."""
        ...


class ConfigModel(Protocol):
    """Protocol for configuration access."""

    @property
    def shell(self) -> dict[str, Any]:
        """Session settings (prompt, blocked signals)."""
        ...

    @property
    def limits(self) -> dict[str, Any]:
        """Table capacities."""
        ...

    def get_path(self, path: str, default: Any = None) -> Any:
        """Nested lookup using a dot-separated path."""
        ...
