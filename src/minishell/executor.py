# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Subprocess-backed launcher for external programs.

spawn() starts a program and returns as soon as the child exists; it never
waits for completion. Redirection targets are opened by the parent and
handed to the child as its stdin/stdout, and the signals the shell blocks
for itself are unblocked (with default dispositions) in the child.
"""

from __future__ import annotations

import os
import signal
import subprocess
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .errors import ShellError

OUTPUT_FILE_MODE = 0o644


@dataclass(frozen=True)
class SpawnResult:
    status: ShellError
    pid: int | None = None
    process: subprocess.Popen | None = None
    message: str = ""


def output_flags(append: bool) -> int:
    """open(2) flags for an output redirection target."""
    flags = os.O_WRONLY | os.O_CREAT
    return flags | (os.O_APPEND if append else os.O_TRUNC)


def child_signal_setup(signals: Iterable[int]) -> Callable[[], None] | None:
    """Build a preexec hook restoring default handling for signals."""
    sigs = frozenset(signals)
    if not sigs:
        return None

    def _setup() -> None:
        for sig in sigs:
            signal.signal(sig, signal.SIG_DFL)
        signal.pthread_sigmask(signal.SIG_UNBLOCK, sigs)

    return _setup


class ProcessLauncher:
    """Subprocess implementation of Launcher protocol."""

    def __init__(self, env: dict[str, str] | None = None):
        """Initialize launcher.

        Args:
            env: Extra environment variables layered over os.environ
        """
        self.env = env or {}

    def _build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self.env)
        return env

    def spawn(
        self,
        argv: list[str],
        input_file: str | None = None,
        output_file: str | None = None,
        append: bool = False,
        reset_signals: Iterable[int] = (),
    ) -> SpawnResult:
        """Start argv[0] (looked up on PATH) asynchronously.

        Args:
            argv: Program name followed by its arguments
            input_file: Path to open read-only as the child's stdin
            output_file: Path to open as the child's stdout
            append: Append to output_file instead of truncating it
            reset_signals: Signals to unblock and reset in the child

        Returns:
            SpawnResult with OK and the child's pid, REDIRECTION_FAILED if
            a target could not be opened, or EXECUTION_FAILED if the
            program could not be started
        """
        if not argv:
            return SpawnResult(ShellError.NULL_POINTER, message="empty argv")

        stdin_fd: int | None = None
        stdout_fd: int | None = None
        target = None
        try:
            try:
                if input_file is not None:
                    target = input_file
                    stdin_fd = os.open(input_file, os.O_RDONLY)
                if output_file is not None:
                    target = output_file
                    stdout_fd = os.open(
                        output_file, output_flags(append), OUTPUT_FILE_MODE
                    )
            except (OSError, ValueError) as e:
                # ValueError: the path holds a NUL byte.
                reason = getattr(e, "strerror", None) or str(e)
                return SpawnResult(
                    ShellError.REDIRECTION_FAILED,
                    message=f"{target!r}: {reason}",
                )

            try:
                proc = subprocess.Popen(
                    argv,
                    stdin=stdin_fd,
                    stdout=stdout_fd,
                    env=self._build_env(),
                    preexec_fn=child_signal_setup(reset_signals),
                )
            except (OSError, subprocess.SubprocessError, ValueError) as e:
                reason = getattr(e, "strerror", None) or str(e)
                return SpawnResult(
                    ShellError.EXECUTION_FAILED,
                    message=f"{argv[0]}: {reason}",
                )

            return SpawnResult(ShellError.OK, pid=proc.pid, process=proc)
        finally:
            # The child holds its own copies now.
            for fd in (stdin_fd, stdout_fd):
                if fd is not None:
                    os.close(fd)
