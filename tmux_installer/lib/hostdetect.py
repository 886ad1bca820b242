from __future__ import annotations

import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .command import which

logger = logging.getLogger(__name__)

LINUX = "linux"
MACOS = "macos"
UNSUPPORTED = "unsupported"
UNKNOWN = "unknown"

# Kernel name prefixes of Windows compatibility layers. Not supported natively.
_WINDOWS_PREFIXES = ("CYGWIN", "MINGW", "MSYS", "WINDOWS")

# Probe order matters: first match wins.
PACKAGE_MANAGERS: Sequence[Tuple[str, str]] = (
    ("apt", "apt-get"),
    ("dnf", "dnf"),
    ("yum", "yum"),
    ("pacman", "pacman"),
    ("zypper", "zypper"),
    ("brew", "brew"),
    ("apk", "apk"),
)


@dataclass(frozen=True)
class Platform:
    os_family: str
    kernel: str
    package_manager: str
    distro: Optional[str] = None

    @property
    def supported(self) -> bool:
        return self.os_family in (LINUX, MACOS)

    @property
    def is_windows_layer(self) -> bool:
        return self.kernel.upper().startswith(_WINDOWS_PREFIXES)


def detect_os_family(kernel: Optional[str] = None) -> str:
    name = platform.system() if kernel is None else kernel
    if name.startswith("Linux"):
        return LINUX
    if name.startswith("Darwin"):
        return MACOS
    return UNSUPPORTED


def _read_os_release_id(path: Path) -> Optional[str]:
    try:
        lines = path.read_text(encoding="utf-8", errors="ignore").splitlines()
    except OSError:
        return None
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == "ID":
            value = value.strip().strip("\"'")
            return value or None
    return None


def detect_distro(root: str = "/") -> str:
    """Best-effort distribution id. Informational only."""

    r = Path(root)
    os_release = r / "etc" / "os-release"
    if os_release.is_file():
        distro_id = _read_os_release_id(os_release)
        if distro_id:
            return distro_id
    if (r / "etc" / "redhat-release").is_file():
        return "rhel"
    if (r / "etc" / "debian_version").is_file():
        return "debian"
    return UNKNOWN


def detect_package_manager(path: Optional[str] = None) -> str:
    for manager_id, executable in PACKAGE_MANAGERS:
        if which(executable, path=path):
            return manager_id
    return UNKNOWN


def detect_platform(
    *,
    kernel: Optional[str] = None,
    root: str = "/",
    path: Optional[str] = None,
) -> Platform:
    name = platform.system() if kernel is None else kernel
    os_family = detect_os_family(name)
    distro = detect_distro(root) if os_family == LINUX else None
    pm = detect_package_manager(path)

    logger.info("Detected OS: %s", os_family)
    if distro is not None:
        logger.info("Detected Distro: %s", distro)
    logger.info("Detected Package Manager: %s", pm)

    return Platform(os_family=os_family, kernel=name, package_manager=pm, distro=distro)
