from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lib.command import CmdResult


class InstallerError(RuntimeError):
    """Fatal installer failure. The run stops and exits with ``exit_code``."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class UnsupportedPlatformError(InstallerError):
    pass


class CommandError(InstallerError):
    def __init__(self, result: "CmdResult", message: str | None = None) -> None:
        self.result = result
        super().__init__(
            message or f"Command failed ({result.returncode}): {result.cmdline}\n{result.stderr}".rstrip(),
            exit_code=result.returncode if result.returncode > 0 else 1,
        )


class ManifestError(InstallerError):
    pass
