from __future__ import annotations

import logging

from ..errors import InstallerError
from .command import Runner
from .env import Paths

logger = logging.getLogger(__name__)


def ensure_tpm(paths: Paths, run: Runner, *, dry_run: bool = False) -> str:
    """Clone TPM, or pull it when already present. Returns "cloned" or "updated"."""

    tpm_dir = paths.tpm_dir
    if tpm_dir.is_dir():
        logger.info("TPM already installed, updating...")
        run(["git", "-C", str(tpm_dir), "pull"], capture=False)
        return "updated"

    logger.info("Installing Tmux Plugin Manager (TPM)...")
    if not dry_run:
        try:
            tpm_dir.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallerError(f"Cannot create {tpm_dir.parent}: {e}") from e
    run(["git", "clone", paths.tpm_url, str(tpm_dir)], capture=False)
    return "cloned"
