# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.shortcuts import print_formatted_text
from prompt_toolkit.styles import Style

from .config import limit
from .errors import ShellError

if TYPE_CHECKING:
    from .context import ShellContext  # pragma: no cover


# ----------------------------
# Plain stream reader
# ----------------------------


class StreamLineReader:
    """Reads lines from a text stream (stdin unless one is given)."""

    def __init__(
        self, stream: TextIO | None = None, out: TextIO | None = None
    ) -> None:
        self.stream = stream
        self.out = out

    def read(self, prompt: str) -> str:
        if prompt:
            self.write(prompt)
        stream = self.stream if self.stream is not None else sys.stdin
        try:
            line = stream.readline()
        except UnicodeDecodeError as e:
            # Undecodable input ends the session like end of input does.
            raise EOFError(str(e)) from e
        if line == "":
            raise EOFError
        return line

    def write(self, text: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        out.write(text)
        out.flush()


# ----------------------------
# Theme / Style
# ----------------------------


def _default_style_dict() -> dict[str, str]:
    return {
        "completion-menu": "bg:#111111 #d0d0d0",
        "completion-menu.completion": "bg:#111111 #d0d0d0",
        "completion-menu.completion.current": "bg:#303030 #ffffff bold",
        "completion-menu.meta.completion": "bg:#111111 #808080",
        "completion-menu.meta.completion.current": "bg:#303030 #a0a0a0",
    }


def _build_style(ctx: ShellContext | None) -> Style:
    base = _default_style_dict()
    overrides = {}
    if ctx is not None and hasattr(ctx.config, "get_path"):
        overrides = ctx.config.get_path("ui.theme.style", {}) or {}
    if isinstance(overrides, dict):
        # only keep string->string
        for k, v in overrides.items():
            if isinstance(k, str) and isinstance(v, str):
                base[k] = v
    return Style.from_dict(base)


# ----------------------------
# Completion
# ----------------------------


class ShellCompleter(Completer):
    """Completes command names on the first token and paths afterwards.

    Command candidates are registered names, built-ins and executables on
    PATH. At most ``limits.tab_completions`` candidates are yielded.
    """

    def __init__(self, ctx: ShellContext | None) -> None:
        self.ctx = ctx
        self._cache: set[str] | None = None
        self._cache_path: str | None = None

    def _max_completions(self) -> int:
        cfg = self.ctx.config if self.ctx is not None else None
        return limit(cfg, "tab_completions")

    def _fail(self) -> None:
        if self.ctx is not None:
            self.ctx.last_error = ShellError.TAB_COMPLETION_FAILED

    def _executables(self) -> set[str]:
        path_val = os.environ.get("PATH", "")
        if self._cache is not None and self._cache_path == path_val:
            return self._cache

        exes: set[str] = set()
        for p in path_val.split(os.pathsep):
            if not p:
                continue
            try:
                for name in os.listdir(p):
                    full = os.path.join(p, name)
                    if os.path.isfile(full) and os.access(full, os.X_OK):
                        exes.add(name)
            except OSError:
                continue

        self._cache = exes
        self._cache_path = path_val
        return exes

    def _command_names(self) -> list[str]:
        names: list[str] = []
        if self.ctx is not None:
            names.extend(self.ctx.registry.names())
            names.extend(self.ctx.builtins.names)
        names.extend(sorted(self._executables()))
        # Keep first occurrence; registered names rank first.
        return list(dict.fromkeys(names))

    def _command_meta(self, name: str) -> str:
        if self.ctx is not None:
            if self.ctx.registry.lookup(name) is not None:
                return "custom"
            if self.ctx.builtins.is_builtin(name):
                return "builtin"
        return "exe"

    def _path_candidates(self, token: str) -> Iterable[Completion]:
        expanded = os.path.expanduser(token)
        if token == "" or expanded.endswith(os.sep):
            base_dir = expanded or "."
            prefix = ""
            insert_prefix = token
        else:
            base_dir = os.path.dirname(expanded) or "."
            prefix = os.path.basename(expanded)
            insert_prefix = os.path.dirname(token)
            if insert_prefix and not insert_prefix.endswith("/"):
                insert_prefix += "/"

        try:
            entries = sorted(os.listdir(base_dir))
        except OSError:
            self._fail()
            return

        for name in entries:
            if not name.startswith(prefix):
                continue
            full = os.path.join(base_dir, name)
            is_dir = os.path.isdir(full)
            ins = f"{insert_prefix}{name}" + ("/" if is_dir else "")
            yield Completion(
                ins, start_position=-len(token),
                display_meta="dir" if is_dir else "file"
            )

    def _candidates(self, document) -> Iterable[Completion]:
        before = (document.text_before_cursor or "").lstrip()

        # First token: command names
        if " " not in before and "\t" not in before:
            if not before:
                return
            for name in self._command_names():
                if name.startswith(before):
                    yield Completion(
                        name, start_position=-len(before),
                        display_meta=self._command_meta(name)
                    )
            return

        # Arguments (including redirection targets): filesystem paths
        token = "" if before[-1].isspace() else before.split()[-1]
        yield from self._path_candidates(token)

    def get_completions(
        self, document, complete_event
    ) -> Iterable[Completion]:
        cap = self._max_completions()
        for i, completion in enumerate(self._candidates(document)):
            if i >= cap:
                return
            yield completion


# ----------------------------
# PromptSession UI
# ----------------------------


class PromptToolkitUI:
    """Terminal line reader backed by a prompt_toolkit PromptSession.

    Keeps normal terminal scrollback and offers command/path completion.
    """

    def __init__(self, ctx: ShellContext | None = None) -> None:
        self.ctx = ctx
        self.session: PromptSession[str] | None = None
        self._completer: ShellCompleter | None = None
        self._style = _build_style(ctx)

    def _complete_while_typing(self) -> bool:
        if self.ctx is None or not hasattr(self.ctx.config, "get_path"):
            return False
        return bool(
            self.ctx.config.get_path("ui.complete_while_typing", False)
        )

    def _ensure_session(self) -> None:
        if self.session is not None:
            return

        self._completer = ShellCompleter(self.ctx)
        self.session = PromptSession(
            completer=self._completer,
            complete_while_typing=self._complete_while_typing(),
            style=self._style,
        )

    def read(self, prompt: str) -> str:
        """Read one line. Ctrl-D raises EOFError, Ctrl-C KeyboardInterrupt."""
        self._ensure_session()
        assert self.session is not None
        return self.session.prompt(ANSI(prompt))

    def write(self, text: str) -> None:
        """Write EXACTLY what we receive (no extra newline)."""
        if not text:
            return
        print_formatted_text(ANSI(text), style=self._style, end="")
