# minishell - Line-Oriented Command Shell Engine
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Configuration and data root resolution for minishell.

Handles:
- Data root resolution (MINISHELL_DATA_HOME, ~/.local/share)
- Packaged YAML defaults loading (minishell/defaults/*.yaml)
- Table capacity defaults
- ANSI coloring constants for tagged diagnostics
"""

from __future__ import annotations

import os
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml

# -----------------------
# UI constants
# -----------------------

ANSI_COLORS: dict[str, str] = {
    "reset": "\033[0m",
    "red": "\033[31m",
}

TAG_COLORS: dict[str, str] = {
    "ERR": "red",
}

DEFAULT_PROMPT = "> "

# Capacities used when the config does not name one.
DEFAULT_LIMITS: dict[str, int] = {
    "input_size": 1024,
    "history": 100,
    "env_vars": 100,
    "custom_commands": 50,
    "jobs": 100,
    "aliases": 50,
    "tab_completions": 100,
}

DEFAULT_BLOCKED_SIGNALS: tuple[str, ...] = ("SIGINT", "SIGTERM")


# -----------------------
# Config model wrapper
# -----------------------


class YAMLConfig:
    """Simple config wrapper that implements ConfigModel protocol."""

    def __init__(self, config_dict: dict[str, Any]):
        self._config = config_dict

    @property
    def shell(self) -> dict[str, Any]:
        shell_cfg = self._config.get("shell", {})
        return shell_cfg if isinstance(shell_cfg, dict) else {}

    @property
    def limits(self) -> dict[str, Any]:
        limits_cfg = self._config.get("limits", {})
        return limits_cfg if isinstance(limits_cfg, dict) else {}

    def get_path(self, path: str, default: Any = None) -> Any:
        """
        Nested lookup using dot-separated path.
        Example: get_path("limits.history", 100) -> 100
        """
        if not path:
            return default

        cur: Any = self._config
        for part in path.split("."):
            if not isinstance(cur, dict):
                return default
            if part not in cur:
                return default
            cur = cur[part]
        return cur


def limit(cfg: Any, name: str) -> int:
    """Resolve a table capacity from config, falling back to defaults.

    Non-integer or negative values are ignored.
    """
    default = DEFAULT_LIMITS[name]
    limits = getattr(cfg, "limits", None)
    if not isinstance(limits, dict):
        return default
    value = limits.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return default
    return value


# -----------------------
# Data root helpers
# -----------------------


def get_data_root() -> Path:
    """Get the data root directory for minishell.

    Resolution order:
    1. MINISHELL_DATA_HOME environment variable (if set)
    2. ~/.local/share (default, XDG_DATA_HOME is ignored)
    """
    data_home = os.getenv("MINISHELL_DATA_HOME")
    if data_home:
        root = Path(data_home)
    else:
        root = Path.home() / ".local" / "share"

    root.mkdir(parents=True, exist_ok=True)
    return root


def crash_log_path(data_root: Path) -> Path:
    """<data_root>/minishell/logs/crash.log"""
    return data_root / "minishell" / "logs" / "crash.log"


# -----------------------
# Packaged defaults loading
# -----------------------


def _defaults_dir() -> Path:
    """Return the installed path to packaged defaults directory."""
    return Path(
        importlib_resources.files("minishell.defaults")
    )  # type: ignore[arg-type]


def load_defaults_yaml(filename: str) -> dict[str, Any]:
    """
    Load a YAML file from minishell/defaults/.
    """
    defaults_dir = _defaults_dir()
    path = defaults_dir / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Missing defaults YAML: {filename} "
            f"(looked in {defaults_dir})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Defaults YAML {filename} must load to a mapping/dict."
        )
    return data


def load_system_config() -> YAMLConfig:
    """
    Load system.yaml from packaged defaults and return a YAMLConfig wrapper.
    """
    return YAMLConfig(load_defaults_yaml("system.yaml"))
