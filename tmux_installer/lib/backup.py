from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..errors import InstallerError
from .env import Paths

logger = logging.getLogger(__name__)


def _fresh_dir(base: Path) -> Path:
    """Return base, or base-N if a snapshot with that name already exists."""
    candidate = base
    n = 1
    while candidate.exists():
        candidate = base.with_name(f"{base.name}-{n}")
        n += 1
    return candidate


def backup_existing_config(
    paths: Paths,
    *,
    now: Optional[datetime] = None,
    dry_run: bool = False,
) -> Optional[Path]:
    """Snapshot ~/.tmux.conf and ~/.tmux into a new timestamped directory.

    Returns the snapshot directory, or None when there is no prior config.
    """

    if not paths.tmux_conf.is_file():
        logger.info("No existing tmux config at %s, nothing to back up", paths.tmux_conf)
        return None

    backup_dir = _fresh_dir(paths.backup_dir(now or datetime.now()))
    logger.info("Backing up existing tmux config to %s", backup_dir)
    if dry_run:
        logger.info("Would copy %s and %s -> %s", paths.tmux_conf, paths.tmux_dir, backup_dir)
        return backup_dir

    try:
        backup_dir.mkdir(parents=True)
    except OSError as e:
        raise InstallerError(f"Failed to create backup directory {backup_dir}: {e}") from e

    try:
        shutil.copy2(paths.tmux_conf, backup_dir / paths.tmux_conf.name)
        if paths.tmux_dir.is_dir():
            shutil.copytree(paths.tmux_dir, backup_dir / paths.tmux_dir.name, symlinks=True)
    except OSError as e:
        # An incomplete snapshot must not pass for a restorable one.
        shutil.rmtree(backup_dir, ignore_errors=True)
        raise InstallerError(f"Failed to back up existing config to {backup_dir}: {e}") from e

    logger.info("Backup created at %s", backup_dir)
    return backup_dir
