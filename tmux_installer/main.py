from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .errors import InstallerError, UnsupportedPlatformError
from .lib.command import CommandRunner, Runner
from .lib.env import Paths, resolve_paths, resolve_source_dir
from .lib.hostdetect import Platform, detect_platform
from .lib.prompt import confirm
from .logging_utils import configure_logging
from .pipeline import InstallContext, InstallOptions, PipelineResult, run_pipeline
from .steps import (
    BackupConfigStep,
    InstallConfigStep,
    InstallDependenciesStep,
    InstallPluginManagerStep,
    InstallPluginsStep,
)

logger = logging.getLogger(__name__)

RULE = "=" * 38

INSTALL_SUMMARY = """\
This will install:
  - Tmux (if not installed)
  - Tmux Plugin Manager (TPM)
  - Custom tmux configuration
  - Essential tmux plugins
"""

QUICK_REFERENCE = """\
To start using tmux:
  1. Start a new terminal session
  2. Run: tmux

Quick reference:
  Prefix key: Ctrl+a
  Reload config: prefix + r
  Split horizontal: prefix + |
  Split vertical: prefix + -

For more keybindings, see the README.md
"""


def build_steps():
    return [
        InstallDependenciesStep(),
        BackupConfigStep(),
        InstallPluginManagerStep(),
        InstallConfigStep(),
        InstallPluginsStep(),
    ]


def _banner(out: TextIO, title: str) -> None:
    out.write(f"\n{RULE}\n   {title}\n{RULE}\n\n")


def check_supported(platform: Platform) -> None:
    if platform.supported:
        return
    hint = "This installer supports Linux and macOS only."
    if platform.is_windows_layer:
        hint += " For Windows, please use WSL (Windows Subsystem for Linux)."
    raise UnsupportedPlatformError(f"Unsupported operating system: {platform.kernel or 'unknown'}. {hint}")


def install(
    options: InstallOptions,
    *,
    platform: Optional[Platform] = None,
    paths: Optional[Paths] = None,
    source_dir: Optional[Path] = None,
    run: Optional[Runner] = None,
    stdin: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> Optional[PipelineResult]:
    """Detect, confirm and run every install step in order.

    Returns None when the user declines the confirmation prompt.
    """

    o = out or sys.stdout
    _banner(o, "Tmux Configuration Installer")

    plat = platform or detect_platform()
    check_supported(plat)

    if not options.force:
        o.write(INSTALL_SUMMARY + "\n")
        if not confirm("Continue?", stream=stdin, out=o):
            logger.info("Installation cancelled.")
            return None

    ctx = InstallContext(
        platform=plat,
        options=options,
        paths=paths or resolve_paths(),
        source_dir=source_dir or resolve_source_dir(),
        run=run or CommandRunner(dry_run=options.dry_run),
    )
    result = run_pipeline(ctx=ctx, steps=build_steps())

    o.write(f"\n{RULE}\n")
    logger.info("Installation complete!")
    o.write(f"{RULE}\n\n{QUICK_REFERENCE}\n")
    return result


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tmux-installer",
        description="Install the bundled tmux configuration, TPM and plugins (Linux and macOS).",
    )
    p.add_argument("--skip-deps", action="store_true", help="Skip installing system dependencies")
    p.add_argument("--skip-backup", action="store_true", help="Skip backing up existing configuration")
    p.add_argument("-f", "--force", action="store_true", help="Force installation without prompts")
    p.add_argument("--dry-run", action="store_true", help="Log every command and file operation without doing it")
    p.add_argument("-v", "--verbose", action="store_true", help="Show command output and debug messages")
    p.add_argument("--log", default=None, metavar="PATH", help="Also write the log to PATH")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    options = InstallOptions(
        skip_deps=args.skip_deps,
        skip_backup=args.skip_backup,
        force=args.force,
        dry_run=args.dry_run,
    )

    try:
        install(options)
    except InstallerError as e:
        logger.error("%s", e)
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
