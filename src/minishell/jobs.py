# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Job table for spawned external programs.

The table is append-only: finished jobs keep their slot, so every spawn
consumes capacity for the lifetime of the session. Completion is only
noticed when refresh() is called.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from .errors import ShellError


@dataclass
class Job:
    pid: int
    label: str
    running: bool = True
    process: subprocess.Popen | None = None

    @property
    def status(self) -> str:
        return "Running" if self.running else "Done"

    def poll_exited(self) -> bool:
        """Non-blocking check whether the process has exited."""
        if self.process is not None:
            return self.process.poll() is not None
        try:
            pid, _status = os.waitpid(self.pid, os.WNOHANG)
        except ChildProcessError:
            # Already reaped elsewhere, or never our child.
            return True
        return pid != 0


class JobTable:
    """Bounded, append-only record of spawned processes."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._jobs: list[Job] = []

    def __len__(self) -> int:
        return len(self._jobs)

    def add(
        self, pid: int, label: str | None,
        process: subprocess.Popen | None = None
    ) -> ShellError:
        if not label:
            return ShellError.NULL_POINTER
        if len(self._jobs) >= self.capacity:
            return ShellError.JOB_CONTROL_FULL
        self._jobs.append(Job(pid=pid, label=label, process=process))
        return ShellError.OK

    def entries(self) -> list[tuple[int, Job]]:
        """Return (1-based slot, job) pairs in spawn order."""
        return [(i + 1, job) for i, job in enumerate(self._jobs)]

    def refresh(self, emit: Callable[[str], None]) -> ShellError:
        """Mark exited jobs as done, emitting one notice per transition."""
        for slot, job in self.entries():
            if not job.running:
                continue
            if job.poll_exited():
                job.running = False
                emit(f"[{slot}] Done: {job.label}\n")
        return ShellError.OK

    def clear(self) -> int:
        released = len(self._jobs)
        self._jobs = []
        return released
