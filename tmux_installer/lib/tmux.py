from __future__ import annotations

import logging
import os
import secrets
from typing import Dict, Optional

from .command import Runner
from .env import Paths

logger = logging.getLogger(__name__)

SESSION_PREFIX = "plugin_install"


def ephemeral_session_name() -> str:
    return f"{SESSION_PREFIX}_{os.getpid()}_{secrets.token_hex(3)}"


def home_env(paths: Paths) -> Dict[str, str]:
    """Environment pinning HOME to the install target, so TPM reads the deployed config."""
    return {"HOME": str(paths.home)}


def server_running(run: Runner) -> bool:
    return run(["tmux", "list-sessions"], check=False).ok


def kill_session(run: Runner, name: str) -> None:
    """Best-effort teardown; failures are logged and dropped."""
    try:
        r = run(["tmux", "kill-session", "-t", name], check=False)
    except OSError as e:
        logger.debug("kill-session %s failed: %s", name, e)
        return
    if not r.ok:
        logger.debug("kill-session %s failed (%s): %s", name, r.returncode, r.stderr.strip())


def install_plugins(
    paths: Paths,
    run: Runner,
    *,
    session_name: Optional[str] = None,
    dry_run: bool = False,
) -> Optional[str]:
    """Run TPM's install_plugins against a live tmux server.

    Reuses a running server untouched. Otherwise starts one with a throwaway
    detached session, which is killed afterwards. Returns the name of the
    throwaway session, or None when an existing server was used.
    """

    script = str(paths.tpm_install_plugins)
    env = home_env(paths)

    if dry_run:
        logger.info(
            "Would run %s (HOME=%s), starting a throwaway tmux session if no server is running",
            script,
            env["HOME"],
        )
        return None

    if server_running(run):
        logger.info("Tmux is running, installing plugins against the existing server...")
        run([script], env=env, capture=False)
        return None

    name = session_name or ephemeral_session_name()
    logger.info("Starting tmux server to install plugins (session %s)...", name)
    run(["tmux", "start-server"], env=env)
    run(["tmux", "new-session", "-d", "-s", name], env=env)
    try:
        run([script], env=env, capture=False)
    finally:
        kill_session(run, name)
    return name
