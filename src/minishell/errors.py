# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Status codes shared by every shell operation.

Operations report failures by returning a ShellError rather than raising;
the session loop inspects the value and keeps going.
"""

from __future__ import annotations

from enum import IntEnum


class ShellError(IntEnum):
    """Closed taxonomy of shell operation outcomes."""

    OK = 0
    NULL_POINTER = 1
    MEMORY_ALLOCATION = 2
    INVALID_INPUT = 3
    COMMAND_NOT_FOUND = 4
    EXECUTION_FAILED = 5
    SIGNAL_HANDLING_FAILED = 6
    HISTORY_FULL = 7
    ENV_VAR_NOT_FOUND = 8
    ENV_VAR_FULL = 9
    CUSTOM_COMMAND_FULL = 10
    JOB_CONTROL_FULL = 11
    REDIRECTION_FAILED = 12
    PIPELINE_FAILED = 13
    ALIAS_FULL = 14
    TAB_COMPLETION_FAILED = 15

    @property
    def ok(self) -> bool:
        return self is ShellError.OK


class RedirectionSyntaxError(ValueError):
    """A redirection operator was not followed by a filename."""

    def __init__(self, operator: str):
        super().__init__(f"missing filename after '{operator}'")
        self.operator = operator
