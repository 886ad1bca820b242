from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..errors import ManifestError
from .command import Runner
from .manifests import load_packages_manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerSpec:
    manager_id: str
    install: List[str]
    packages: List[str]
    refresh: Optional[List[str]] = None
    sudo: bool = True
    # os_family -> package list replacing ``packages`` on that OS (e.g. Linuxbrew).
    os_packages: Dict[str, List[str]] = field(default_factory=dict)

    def packages_for(self, os_family: str) -> List[str]:
        return self.os_packages.get(os_family, self.packages)

    def commands(self, *, as_root: bool, os_family: Optional[str] = None) -> List[List[str]]:
        prefix = ["sudo"] if (self.sudo and not as_root) else []
        packages = self.packages_for(os_family) if os_family else self.packages
        cmds = []
        if self.refresh:
            cmds.append([*prefix, *self.refresh])
        cmds.append([*prefix, *self.install, *packages])
        return cmds


def _as_str_list(value: Any, *, key: str, manager_id: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(f"packages manifest: managers.{manager_id}.{key} must be a list of strings")
    return list(value)


def manager_specs(manifest: Optional[Mapping[str, Any]] = None) -> Dict[str, ManagerSpec]:
    raw = load_packages_manifest() if manifest is None else manifest
    managers = raw.get("managers") or {}
    if not isinstance(managers, dict):
        raise ManifestError("packages manifest: 'managers' must be a mapping")

    specs: Dict[str, ManagerSpec] = {}
    for manager_id, entry in managers.items():
        entry = entry or {}
        if not isinstance(entry, dict):
            raise ManifestError(f"packages manifest: managers.{manager_id} must be a mapping")
        refresh = entry.get("refresh")
        os_packages = entry.get("os_packages") or {}
        if not isinstance(os_packages, dict):
            raise ManifestError(f"packages manifest: managers.{manager_id}.os_packages must be a mapping")
        specs[manager_id] = ManagerSpec(
            manager_id=manager_id,
            install=_as_str_list(entry.get("install"), key="install", manager_id=manager_id),
            packages=_as_str_list(entry.get("packages"), key="packages", manager_id=manager_id),
            refresh=_as_str_list(refresh, key="refresh", manager_id=manager_id) if refresh else None,
            sudo=bool(entry.get("sudo", True)),
            os_packages={
                os_family: _as_str_list(pkgs, key=f"os_packages.{os_family}", manager_id=manager_id)
                for os_family, pkgs in os_packages.items()
            },
        )
    return specs


def is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return bool(geteuid and geteuid() == 0)


def install_packages(
    spec: ManagerSpec,
    run: Runner,
    *,
    os_family: Optional[str] = None,
    as_root: Optional[bool] = None,
) -> None:
    """Run the manager's refresh/install commands. Any failure raises CommandError."""

    root = is_root() if as_root is None else as_root
    packages = spec.packages_for(os_family) if os_family else spec.packages
    logger.info("Installing %s via %s", " ".join(packages), spec.manager_id)
    for argv in spec.commands(as_root=root, os_family=os_family):
        run(argv, capture=False)


def manual_install_hint(packages: Sequence[str] = ("tmux", "git")) -> str:
    return f"Unknown package manager. Please install {' and '.join(packages)} manually."
