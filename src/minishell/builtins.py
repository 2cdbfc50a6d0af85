# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Commands implemented inside the shell process: exit, history, jobs.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

from .errors import ShellError

if TYPE_CHECKING:
    from .context import ShellContext  # pragma: no cover


class BuiltinDispatcher:
    """Fixed set of in-process commands, matched on argv[0] only."""

    names: tuple[str, ...] = ("exit", "history", "jobs")

    def __init__(self, exit_fn: Callable[[int], object] = sys.exit):
        # `exit` ends the process directly; cleanup() is not run.
        self.exit_fn = exit_fn

    def is_builtin(self, name: str) -> bool:
        return name in self.names

    def dispatch(self, ctx: ShellContext, argv: list[str]) -> ShellError:
        if not argv:
            return ShellError.NULL_POINTER

        cmd = argv[0]
        if cmd == "exit":
            self.exit_fn(0)
            return ShellError.OK
        if cmd == "history":
            return self._handle_history(ctx)
        if cmd == "jobs":
            return self._handle_jobs(ctx)

        return ShellError.COMMAND_NOT_FOUND

    def _handle_history(self, ctx: ShellContext) -> ShellError:
        for idx, line in ctx.history.entries():
            ctx.output_fn(f"{idx}: {line}\n")
        return ShellError.OK

    def _handle_jobs(self, ctx: ShellContext) -> ShellError:
        ctx.jobs.refresh(ctx.output_fn)
        for slot, job in ctx.jobs.entries():
            ctx.output_fn(f"[{slot}] {job.status}: {job.label}\n")
        return ShellError.OK
