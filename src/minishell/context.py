# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
minishell session context.

Core implementation of the shell:
- session lifecycle (init / run / cleanup)
- dispatch cascade: custom commands, then built-ins, then external programs
- job, history, environment and alias tables

Important boundary:
- The context does not load YAML; it consumes the injected ConfigModel.
- Lines come from an injected LineReader and processes are started by an
  injected Launcher, so tests can replace either.

Signal handling:
- The blocked-signal set belongs to the context. It is applied to the
  calling thread only while run() is looping and the previous mask is
  restored afterwards, so separate contexts do not interfere.
"""

from __future__ import annotations

import signal
import sys
import traceback
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from . import config as cfg_module
from .builtins import BuiltinDispatcher
from .config import DEFAULT_BLOCKED_SIGNALS, DEFAULT_PROMPT, limit
from .errors import RedirectionSyntaxError, ShellError
from .executor import ProcessLauncher
from .interfaces import CommandCallback, ConfigModel, Launcher, LineReader
from .jobs import JobTable
from .registry import CommandBinding, CommandRegistry
from .store import AliasTable, EnvTable, HistoryLog
from .ui import StreamLineReader
from .utils import ParsedLine, parse_line, tag


def write_crash_log(
    error: Exception,
    raw_command: str = "",
    command: str = "",
) -> None:
    """Write an entry to the crash log.

    Logs exceptions raised by custom command callbacks.
    Only creates the log directory when actually needed.
    Appends to crash.log (never overwrites).
    """
    try:
        crash_log = cfg_module.crash_log_path(cfg_module.get_data_root())
        crash_log.parent.mkdir(parents=True, exist_ok=True)

        lines = [f"{datetime.now().isoformat()}"]
        if raw_command:
            lines.append(f"raw={raw_command}")
        if command:
            lines.append(f"command={command}")
        lines.append(f"error={type(error).__name__}: {error}")
        lines.append("traceback:")
        lines.append(traceback.format_exc())
        lines.append("----")

        with crash_log.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    except OSError:
        # Already handling a failure; the session must keep running.
        pass


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _stderr_write(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


@dataclass
class ShellContext:
    """Single shell session: owns every table and runs the loop."""

    config: ConfigModel
    launcher: Launcher = field(default_factory=ProcessLauncher)
    reader: LineReader = field(default_factory=StreamLineReader)
    builtins: BuiltinDispatcher = field(default_factory=BuiltinDispatcher)

    output_fn: Callable[[str], None] = _stdout_write
    error_fn: Callable[[str], None] = _stderr_write
    color: bool = True

    prompt: str = DEFAULT_PROMPT
    interactive: bool = False
    blocked_signals: frozenset[int] = frozenset()
    last_error: ShellError = ShellError.OK
    initialized: bool = False

    # Buffered text of the line being processed and the last diagnostics.
    input: str | None = None
    output: str | None = None
    error: str | None = None

    history: HistoryLog = field(init=False)
    env: EnvTable = field(init=False)
    aliases: AliasTable = field(init=False)
    registry: CommandRegistry = field(init=False)
    jobs: JobTable = field(init=False)

    def __post_init__(self) -> None:
        self._allocate_tables()

    def _allocate_tables(self) -> None:
        self.history = HistoryLog(limit(self.config, "history"))
        self.env = EnvTable(limit(self.config, "env_vars"))
        self.aliases = AliasTable(limit(self.config, "aliases"))
        self.registry = CommandRegistry(limit(self.config, "custom_commands"))
        self.jobs = JobTable(limit(self.config, "jobs"))

    @property
    def max_input(self) -> int:
        return limit(self.config, "input_size")

    # -----------------------
    # Status helpers
    # -----------------------

    def _record(self, status: ShellError) -> ShellError:
        if status is not ShellError.OK:
            self.last_error = status
        return status

    def _report(self, message: str) -> None:
        self.error = message
        self.error_fn(f"{tag('ERR', self.color)} {message}\n")

    def _reject_overlong(self, line: str) -> bool:
        if len(line) < self.max_input:
            return False
        self._report(f"input exceeds {self.max_input - 1} characters")
        self._record(ShellError.INVALID_INPUT)
        return True

    # -----------------------
    # Session
    # -----------------------

    def init(
        self, prompt: str | None = None, interactive: bool = True
    ) -> ShellError:
        """Reset every table and establish the blocked-signal set."""
        self._allocate_tables()
        self.input = None
        self.output = None
        self.error = None
        self.last_error = ShellError.OK

        shell_cfg = getattr(self.config, "shell", {}) or {}
        default_prompt = shell_cfg.get("prompt", DEFAULT_PROMPT)
        self.prompt = prompt if prompt is not None else str(default_prompt)
        self.interactive = interactive

        if not hasattr(signal, "pthread_sigmask"):
            return self._record(ShellError.SIGNAL_HANDLING_FAILED)

        names = shell_cfg.get("blocked_signals", DEFAULT_BLOCKED_SIGNALS)
        valid = signal.valid_signals()
        sigs: set[int] = set()
        for name in names or []:
            sig = getattr(signal, str(name), None)
            if not isinstance(sig, signal.Signals) or sig not in valid:
                self.blocked_signals = frozenset()
                return self._record(ShellError.SIGNAL_HANDLING_FAILED)
            sigs.add(sig)
        self.blocked_signals = frozenset(sigs)

        self.initialized = True
        return ShellError.OK

    def run(self) -> ShellError:
        """Read, record and dispatch lines until input runs out.

        Returns:
            INVALID_INPUT when the line source is exhausted, or
            SIGNAL_HANDLING_FAILED if the signal mask cannot be applied.
            The `exit` built-in ends the process instead of returning.
        """
        if not self.initialized:
            status = self.init(self.prompt, self.interactive)
            if status is not ShellError.OK:
                return status

        try:
            previous = signal.pthread_sigmask(
                signal.SIG_BLOCK, self.blocked_signals
            )
        except (OSError, ValueError):
            return self._record(ShellError.SIGNAL_HANDLING_FAILED)

        try:
            return self._loop()
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, previous)

    def _loop(self) -> ShellError:
        while True:
            prompt = self.prompt if self.interactive else ""
            try:
                line = self.reader.read(prompt)
            except EOFError:
                return self._record(ShellError.INVALID_INPUT)
            except KeyboardInterrupt:
                self.output_fn("\n")
                continue

            if line is None:
                return self._record(ShellError.INVALID_INPUT)

            line = line.removesuffix("\n")
            self.input = line
            if self._reject_overlong(line):
                continue
            self.add_history(line)

            # A failing command never ends the session.
            try:
                self.execute_line(line)
            except Exception as e:
                write_crash_log(e, raw_command=line)
                self._report(f"unhandled exception: {type(e).__name__}: {e}")
                self._record(ShellError.EXECUTION_FAILED)

    def cleanup(self) -> ShellError:
        """Release every owned string and table entry.

        Safe to call more than once; later calls find nothing to release.
        """
        self.input = None
        self.output = None
        self.error = None
        self.prompt = ""

        self.history.clear()
        self.env.clear()
        self.registry.clear()
        self.jobs.clear()
        self.aliases.clear()

        self.initialized = False
        return ShellError.OK

    # -----------------------
    # Tables
    # -----------------------

    def register_command(
        self, name: str | None, callback: CommandCallback | None
    ) -> ShellError:
        return self._record(self.registry.register(name, callback))

    def add_history(self, line: str | None) -> ShellError:
        return self._record(self.history.append(line))

    def add_job(self, pid: int, label: str | None, process=None) -> ShellError:
        return self._record(self.jobs.add(pid, label, process=process))

    def update_jobs(self) -> ShellError:
        return self._record(self.jobs.refresh(self.output_fn))

    def set_env(self, name: str, value: str) -> ShellError:
        return self._record(self.env.set(name, value))

    def get_env(self, name: str) -> str | None:
        status, value = self.env.get(name)
        self._record(status)
        return value

    def add_alias(self, name: str, value: str) -> ShellError:
        return self._record(self.aliases.add(name, value))

    # -----------------------
    # Dispatch cascade
    # -----------------------

    def execute_line(self, line: str) -> ShellError:
        """Tokenize a line and run it through the dispatch cascade.

        Custom commands are tried first, then built-ins, then external
        programs. Only "no such command" falls through to the next class;
        whatever a matched custom command returns is final.
        """
        if self._reject_overlong(line):
            return ShellError.INVALID_INPUT

        try:
            parsed = parse_line(line)
        except RedirectionSyntaxError as e:
            self._report(str(e))
            return self._record(ShellError.REDIRECTION_FAILED)

        if not parsed.argv:
            return self._record(ShellError.INVALID_INPUT)

        binding = self.registry.lookup(parsed.argv[0])
        if binding is not None:
            return self._record(self._invoke_custom(binding, parsed.argv))

        status = self.builtins.dispatch(self, parsed.argv)
        if status is not ShellError.COMMAND_NOT_FOUND:
            return self._record(status)

        return self.execute_external(parsed)

    def _invoke_custom(
        self, binding: CommandBinding, argv: list[str]
    ) -> ShellError:
        try:
            return self.registry.invoke(binding, self, argv)
        except Exception as e:
            write_crash_log(e, raw_command=self.input or "", command=binding.name)
            self._report(
                f"{binding.name}: unhandled exception: "
                f"{type(e).__name__}: {e}"
            )
            return ShellError.EXECUTION_FAILED

    def execute_external(self, parsed: ParsedLine) -> ShellError:
        """Spawn argv[0] in the background and track it as a job."""
        if not parsed.argv:
            return self._record(ShellError.NULL_POINTER)

        result = self.launcher.spawn(
            parsed.argv,
            input_file=parsed.input_file,
            output_file=parsed.output_file,
            append=parsed.append,
            reset_signals=self.blocked_signals,
        )
        if result.status is not ShellError.OK:
            self._report(result.message or f"{parsed.argv[0]}: failed")
            return self._record(result.status)

        label = parsed.argv[0]
        status = self.add_job(result.pid, label, process=result.process)
        if status is not ShellError.OK:
            self._report(
                f"job table full: {label} (pid {result.pid}) is not tracked"
            )
        return status
