# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
minishell CLI entry point.

Design:
- CLI owns process startup and config loading.
- ShellContext is the session engine (config + launcher + reader injected).
- An example custom command (`hello`) is registered before the loop starts.
"""

from __future__ import annotations

import os
import sys

from . import config
from .context import ShellContext
from .errors import ShellError
from .ui import PromptToolkitUI, StreamLineReader


def hello_command(ctx: ShellContext, argc: int, argv: list[str]) -> ShellError:
    """Greet the first argument, or the world."""
    if argc > 1:
        ctx.output_fn(f"Hello, {argv[1]}!\n")
    else:
        ctx.output_fn("Hello, world!\n")
    return ShellError.OK


def build_context(interactive: bool | None = None) -> ShellContext:
    """Wire a ShellContext with packaged config and the best line reader."""
    cfg = config.load_system_config()
    if interactive is None:
        interactive = sys.stdin.isatty()

    ctx = ShellContext(config=cfg)

    # Default: PromptToolkitUI when attached to a terminal
    if interactive and os.environ.get("MINISHELL_LEGACY_UI") != "1":
        ui = PromptToolkitUI(ctx)
        ctx.reader = ui
        ctx.output_fn = ui.write
        ctx.error_fn = ui.write
    else:
        ctx.reader = StreamLineReader()
        ctx.color = sys.stderr.isatty()

    return ctx


def main() -> None:
    """Main entry point for the minishell CLI."""
    ctx = build_context()
    prompt = ctx.config.shell.get("example_prompt", "my_shell> ")

    status = ctx.init(prompt, interactive=sys.stdin.isatty())
    if status is not ShellError.OK:
        print(f"minishell: init failed: {status.name}", file=sys.stderr)
        sys.exit(1)

    ctx.register_command("hello", hello_command)

    # Ends on end of input; `exit` leaves the process from inside run().
    ctx.run()

    ctx.cleanup()
    sys.exit(0)
