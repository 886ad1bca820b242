from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

HOME_ENV = "TMUX_INSTALLER_HOME"
SOURCE_ENV = "TMUX_INSTALLER_SOURCE"
TPM_URL_ENV = "TMUX_INSTALLER_TPM_URL"

DEFAULT_TPM_URL = "https://github.com/tmux-plugins/tpm"
BACKUP_PREFIX = ".tmux-backup-"
BACKUP_TIMESTAMP_FMT = "%Y%m%d_%H%M%S"


@dataclass(frozen=True)
class Paths:
    home: Path
    tpm_url: str = DEFAULT_TPM_URL

    @property
    def tmux_conf(self) -> Path:
        return self.home / ".tmux.conf"

    @property
    def tmux_dir(self) -> Path:
        return self.home / ".tmux"

    @property
    def tpm_dir(self) -> Path:
        return self.tmux_dir / "plugins" / "tpm"

    @property
    def tpm_install_plugins(self) -> Path:
        return self.tpm_dir / "bin" / "install_plugins"

    def backup_dir(self, when: datetime) -> Path:
        return self.home / f"{BACKUP_PREFIX}{when.strftime(BACKUP_TIMESTAMP_FMT)}"


def bundled_source_dir() -> Path:
    # tmux_installer/lib/env.py -> tmux_installer/assets
    return Path(__file__).resolve().parents[1] / "assets"


def resolve_paths(environ: Optional[Mapping[str, str]] = None) -> Paths:
    """Build Paths from the environment (home and TPM URL are overridable)."""
    env = os.environ if environ is None else environ
    home = env.get(HOME_ENV)
    return Paths(
        home=Path(home).expanduser() if home else Path.home(),
        tpm_url=env.get(TPM_URL_ENV) or DEFAULT_TPM_URL,
    )


def resolve_source_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    src = env.get(SOURCE_ENV)
    return Path(src).expanduser() if src else bundled_source_dir()
