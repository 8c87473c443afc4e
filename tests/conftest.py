"""Shared pytest fixtures for the germ test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

import germ.config as config_module
from germ.asciicast.models import Env, Header
from germ.config import Settings, override_settings
from germ.logging import configure_logging
from germ.sequence.models import Command, Sequence, TimingConfig


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's config file and GERM_* variables out of every test."""
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "absent.yaml")
    for name in list(os.environ):
        if name.startswith("GERM_"):
            monkeypatch.delenv(name)
    override_settings(None)
    configure_logging(level="warning")


@pytest.fixture
def test_settings() -> Settings:
    settings = Settings(logging={"level": "debug", "format": "console"})
    override_settings(settings)
    return settings


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------


@pytest.fixture
def default_timings() -> TimingConfig:
    return TimingConfig()


@pytest.fixture
def hello_command() -> Command:
    return Command(prompt="$ ", input="echo Hello World", outputs=["Hello World\n"])


@pytest.fixture
def hello_sequence(hello_command: Command) -> Sequence:
    return Sequence.from_commands([hello_command])


@pytest.fixture
def demo_sequence() -> Sequence:
    return Sequence(
        timings=TimingConfig(begin=0.5, end=2.0, speed=1.5),
        commands=[
            Command(comment="# list files", prompt="~$ ", input="ls", outputs=["a.txt\nb.txt\n"]),
            Command(prompt="~$ ", input="cat a.txt", outputs=["first", "second\r\nthird"]),
            Command(prompt="~$ ", input="cd /tmp", outputs=[]),
        ],
    )


@pytest.fixture
def header() -> Header:
    return Header(env=Env(shell="/usr/bin/zsh", term="xterm-256color"))
