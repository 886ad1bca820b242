from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
NOT_FOUND_RC = 127


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def cmdline(self) -> str:
        return _fmt_argv(self.argv)


class Runner(Protocol):
    """Anything that runs a command the way ``run_cmd`` does."""

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        capture: bool = True,
    ) -> CmdResult:
        ...


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    capture: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - capture=False lets the child talk to the terminal (sudo prompts,
      package manager progress); stdout/stderr are then empty in the result.
    - dry_run logs but does not execute.
    - A missing executable is reported as returncode 127, like a shell would.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    pipe = subprocess.PIPE if capture else None
    try:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=pipe,
            stderr=pipe,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError:
        result = CmdResult(
            argv=argv_list,
            returncode=NOT_FOUND_RC,
            stdout="",
            stderr=f"{argv_list[0]}: command not found",
        )
    else:
        result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")

    if result.stdout:
        logger.debug("STDOUT %s", result.stdout.strip())
    if result.stderr:
        logger.debug("STDERR %s", result.stderr.strip())

    if check and not result.ok:
        raise CommandError(result)

    return result


class CommandRunner:
    """Bind run_cmd to a run-wide dry_run setting."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        capture: bool = True,
    ) -> CmdResult:
        return run_cmd(argv, check=check, env=env, cwd=cwd, capture=capture, dry_run=self.dry_run)


def which(name: str, path: Optional[str] = None) -> Optional[str]:
    return shutil.which(name, path=path)
