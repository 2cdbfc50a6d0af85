# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
minishell core package.

A line-oriented shell engine: custom commands, built-ins and background
external programs with basic redirection.
"""
from .context import ShellContext as ShellContext  # noqa: F401 (re-export)
from .errors import ShellError as ShellError  # noqa: F401 (re-export)
