# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Utility functions for minishell: tokenizing and redirection parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import ANSI_COLORS, TAG_COLORS
from .errors import RedirectionSyntaxError

INPUT_OPERATOR = "<"
OUTPUT_OPERATOR = ">"
APPEND_OPERATOR = ">>"

REDIRECTION_OPERATORS = (INPUT_OPERATOR, OUTPUT_OPERATOR, APPEND_OPERATOR)


@dataclass
class ParsedLine:
    """A tokenized command line with its redirection targets."""

    argv: list[str] = field(default_factory=list)
    input_file: str | None = None
    output_file: str | None = None
    append: bool = False

    @property
    def argc(self) -> int:
        return len(self.argv)

    @property
    def command(self) -> str | None:
        return self.argv[0] if self.argv else None


def tokenize(line: str) -> list[str]:
    """Split a line on whitespace. No quoting or escaping is recognized."""
    return line.split()


def parse_line(line: str) -> ParsedLine:
    """Tokenize a line and extract ``<``, ``>`` and ``>>`` targets.

    Operators are only recognized as standalone tokens. The operator and
    the filename after it are both removed from argv. When an operator
    repeats, the last one wins.

    Args:
        line: Raw command line (trailing newline already stripped)

    Returns:
        ParsedLine with argv and redirection targets

    Raises:
        RedirectionSyntaxError: if an operator is the last token
    """
    parsed = ParsedLine()
    tokens = tokenize(line)

    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok not in REDIRECTION_OPERATORS:
            parsed.argv.append(tok)
            i += 1
            continue

        if i + 1 >= len(tokens):
            raise RedirectionSyntaxError(tok)
        target = tokens[i + 1]

        if tok == INPUT_OPERATOR:
            parsed.input_file = target
        else:
            parsed.output_file = target
            parsed.append = tok == APPEND_OPERATOR
        i += 2

    return parsed


def tag(name: str, color: bool = True) -> str:
    """Render a ``[NAME]`` diagnostic tag, colored if requested."""
    if not color:
        return f"[{name}]"
    tag_color = ANSI_COLORS.get(TAG_COLORS.get(name, "reset"), "")
    reset = ANSI_COLORS["reset"]
    return f"{tag_color}[{name}]{reset}"
