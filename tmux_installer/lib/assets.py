from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from ..errors import InstallerError
from .env import Paths
from .hostdetect import MACOS

logger = logging.getLogger(__name__)

BASE_CONF = "tmux.conf"
MACOS_CONF = "tmux.macos.conf"
AUX_DIR = "tmux"


def merge_dir(src: Path, dst: Path) -> List[Path]:
    """Copy the contents of src into dst, overwriting same-named files and keeping the rest.

    Returns the destination paths of the files written.
    """

    written: List[Path] = []

    def _copy(s: str, d: str) -> str:
        written.append(Path(d))
        return shutil.copy2(s, d)

    shutil.copytree(src, dst, copy_function=_copy, dirs_exist_ok=True)
    return written


def deploy_config(source_dir: Path, paths: Paths, os_family: str, *, dry_run: bool = False) -> None:
    """Copy the bundle into the home directory, macOS fragment appended last."""

    base = source_dir / BASE_CONF
    if not base.is_file():
        raise InstallerError(f"Configuration source missing: {base}")

    aux = source_dir / AUX_DIR
    fragment = source_dir / MACOS_CONF
    if os_family == MACOS and not fragment.is_file():
        raise InstallerError(f"macOS configuration fragment missing: {fragment}")

    if dry_run:
        logger.info("Would copy %s -> %s", base, paths.tmux_conf)
        if aux.is_dir():
            logger.info("Would merge %s -> %s", aux, paths.tmux_dir)
        if os_family == MACOS:
            logger.info("Would append %s -> %s", fragment, paths.tmux_conf)
        return

    try:
        paths.tmux_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(base, paths.tmux_conf)
        if aux.is_dir():
            copied = merge_dir(aux, paths.tmux_dir)
            logger.debug("Copied %d file(s) into %s", len(copied), paths.tmux_dir)

        if os_family == MACOS:
            logger.info("Applying macOS-specific settings...")
            with paths.tmux_conf.open("a", encoding="utf-8") as out:
                out.write(fragment.read_text(encoding="utf-8"))
    except OSError as e:
        raise InstallerError(f"Failed to install configuration: {e}") from e

    logger.info("Configuration installed to %s", paths.tmux_conf)
