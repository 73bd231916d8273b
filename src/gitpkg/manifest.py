"""Manifest reading, upward lookup and installed-package probing."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from gitpkg.constants import Constants
from gitpkg.versioning.models import ProbeOutcome, ResolvedSpecifier
from gitpkg.versioning.ranges import satisfies

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    """Parsed package manifest.

    ``dependencies`` is None when the field is absent, which marks a leaf
    package with no resolution work. Mapping order is processing order.
    """
    name: Optional[str] = None
    version: Optional[str] = None
    dependencies: Optional[Dict[str, str]] = None
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    remotes: Optional[Dict[str, List[str]]] = None
    scripts: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        """Build a Manifest from decoded manifest data."""
        deps = data.get("dependencies")
        return cls(
            name=data.get("name"),
            version=data.get("version"),
            dependencies=dict(deps) if deps is not None else None,
            dev_dependencies=dict(data.get("devDependencies") or {}),
            remotes=data.get("remotes"),
            scripts=dict(data.get("scripts") or {}),
        )

    def merged_dependencies(self, production: bool = False) -> Dict[str, str]:
        """Return dependencies with devDependencies folded in.

        Dev entries never override a direct dependency of the same name.
        The manifest itself is left untouched.
        """
        merged = dict(self.dependencies or {})
        if production:
            return merged
        for name, src in self.dev_dependencies.items():
            if name not in merged:
                merged[name] = src
        return merged


def manifest_path(directory: str) -> str:
    return os.path.join(directory, Constants.MANIFEST_FILE)


def read_manifest(directory: str) -> Optional[Manifest]:
    """Read the manifest in ``directory``; None when the file does not exist.

    Other filesystem errors and malformed JSON propagate.
    """
    try:
        with open(manifest_path(directory), "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        return None
    return Manifest.from_dict(data or {})


def locate_manifest(start_dir: str, walk: bool = True) -> Tuple[Optional[str], Optional[Manifest]]:
    """Find the nearest manifest at or above ``start_dir``.

    Args:
        start_dir: Directory to start from.
        walk: Continue into parent directories until the filesystem root.

    Returns:
        (root, manifest) where root is the directory holding the manifest,
        or (None, None) when nothing was found.
    """
    cwd = os.path.abspath(start_dir)
    while True:
        manifest = read_manifest(cwd)
        if manifest is not None:
            logger.debug("Manifest found at %s", cwd)
            return cwd, manifest
        parent = os.path.dirname(cwd)
        if not walk or parent == cwd:
            return None, None
        cwd = parent


def probe_installed(path: str, spec: ResolvedSpecifier) -> ProbeOutcome:
    """Classify an installation path against a resolved specifier.

    A branch pin is satisfied by any installed package; a range only by an
    installed version inside it.
    """
    existing = read_manifest(path)
    if existing is None:
        return ProbeOutcome.ABSENT
    if spec.branch is not None:
        return ProbeOutcome.COMPATIBLE
    if satisfies(existing.version, spec.version):
        return ProbeOutcome.COMPATIBLE
    return ProbeOutcome.INCOMPATIBLE
