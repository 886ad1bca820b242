from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

_COLORS = {
    logging.DEBUG: "\033[0;36m",
    logging.INFO: "\033[0;34m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[0;31m",
    logging.CRITICAL: "\033[0;31m",
}
_RESET = "\033[0m"


class ConsoleFormatter(logging.Formatter):
    """``[LEVEL] message``, coloured by level when writing to a terminal."""

    def __init__(self, *, color: bool) -> None:
        super().__init__(fmt="%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        tag = f"[{record.levelname}]"
        if self.color:
            tag = f"{_COLORS.get(record.levelno, '')}{tag}{_RESET}"
        return f"{tag} {msg}"


def _wants_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
    stream: Optional[TextIO] = None,
) -> Optional[str]:
    """Configure logging.

    Console output goes to stderr in a short ``[LEVEL] message`` form. When
    log_path is given a timestamped copy of every record is written there as
    well; if that file cannot be opened the run continues console-only.

    Returns the log file path actually in use, if any.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_tmux_installer_configured", False):
        return getattr(logger, "_tmux_installer_log_path", None)

    chosen_path: Optional[str] = None
    handlers: list[logging.Handler] = []

    if also_console:
        out = stream or sys.stderr
        console = logging.StreamHandler(out)
        console.setFormatter(ConsoleFormatter(color=_wants_color(out)))
        handlers.append(console)

    open_error: Optional[OSError] = None
    if log_path:
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
        except OSError as e:
            open_error = e
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
                    datefmt="%Y-%m-%dT%H:%M:%S%z",
                )
            )
            handlers.append(file_handler)
            chosen_path = log_path

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_tmux_installer_configured", True)
    setattr(logger, "_tmux_installer_log_path", chosen_path)
    setattr(logger, "_tmux_installer_handlers", handlers)

    if open_error is not None:
        logging.getLogger(__name__).warning("Cannot write log file %s (%s); logging to console only", log_path, open_error)
    return chosen_path


def reset_logging() -> None:
    """Drop handlers installed by configure_logging (used between test runs)."""

    logger = logging.getLogger()
    for h in getattr(logger, "_tmux_installer_handlers", []):
        logger.removeHandler(h)
        h.close()
    for attr in ("_tmux_installer_configured", "_tmux_installer_log_path", "_tmux_installer_handlers"):
        if hasattr(logger, attr):
            delattr(logger, attr)
