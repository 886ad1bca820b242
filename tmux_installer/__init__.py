"""tmux configuration bundle and installer.

Core design goals:
- Detect once, pass the platform explicitly to every step
- Strictly ordered, fail-fast steps
- Back up before overwriting
- Centralized logging
"""

__all__ = []
