from __future__ import annotations

import sys
from typing import Optional, TextIO


def read_key(stream: Optional[TextIO] = None) -> str:
    """Read one keystroke without waiting for Enter when stream is a TTY."""

    s = stream or sys.stdin
    if not s.isatty():
        return s.read(1)

    import termios
    import tty

    fd = s.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        return s.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def confirm(question: str, *, stream: Optional[TextIO] = None, out: Optional[TextIO] = None) -> bool:
    """Ask a [y/N] question; only y/Y counts as yes."""

    o = out or sys.stdout
    o.write(f"{question} [y/N] ")
    o.flush()
    answer = read_key(stream)
    o.write("\n")
    return answer in ("y", "Y")
