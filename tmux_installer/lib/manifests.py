from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from ..errors import ManifestError


def _package_root() -> Path:
    # tmux_installer/lib/manifests.py -> tmux_installer
    return Path(__file__).resolve().parents[1]


def load_yaml_rel(rel_path: str) -> Dict[str, Any]:
    """Load a YAML file relative to the package root (manifests/...)."""

    p = _package_root() / rel_path.lstrip("/")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ManifestError(f"Cannot load manifest {p}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a mapping/dict: {p}")
    return data


def load_packages_manifest() -> Dict[str, Any]:
    return load_yaml_rel("manifests/packages.yaml")
