from __future__ import annotations

from pathlib import Path

import pytest

from tmux_installer.lib.env import Paths
from tmux_installer.logging_utils import reset_logging

from .fakes import FakeRunner


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def paths(home: Path) -> Paths:
    return Paths(home=home)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    src = tmp_path / "bundle"
    (src / "tmux").mkdir(parents=True)
    (src / "tmux.conf").write_text("set -g prefix C-a\nrun '~/.tmux/plugins/tpm/tpm'\n", encoding="utf-8")
    (src / "tmux.macos.conf").write_text("set -g default-command 'reattach-to-user-namespace -l zsh'\n", encoding="utf-8")
    (src / "tmux" / "theme.conf").write_text("set -g status-style bg=black\n", encoding="utf-8")
    return src


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()
