# tests/test_interfaces.py
from __future__ import annotations

import minishell.interfaces as interfaces
from minishell.config import YAMLConfig
from minishell.executor import ProcessLauncher
from minishell.ui import StreamLineReader


def test_protocols_exist() -> None:
    assert hasattr(interfaces, "CommandCallback")
    assert hasattr(interfaces, "Launcher")
    assert hasattr(interfaces, "LineReader")
    assert hasattr(interfaces, "ConfigModel")


def test_concrete_classes_expose_protocol_methods() -> None:
    assert callable(getattr(ProcessLauncher(), "spawn", None))

    reader = StreamLineReader()
    assert callable(getattr(reader, "read", None))
    assert callable(getattr(reader, "write", None))

    cfg = YAMLConfig({})
    assert cfg.shell == {}
    assert cfg.limits == {}
    assert callable(getattr(cfg, "get_path", None))
