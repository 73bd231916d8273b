"""Recursive installation of git-sourced dependencies.

Each package's dependencies are processed strictly in manifest order. A
dependency is placed flat under ``<prefix>/<install dir>/<name>`` unless an
incompatible version already lives there, in which case it is nested under
the dependent package's own install dir. Newly installed packages are then
installed themselves, depth-first, always against the top-level prefix.

Recursion is expressed as a LIFO worklist of install and build tasks. A
package's build task is pushed before its children, so native builds run
only after every descendant has been installed.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from gitpkg.common.logging_utils import extra_context, is_debug_enabled
from gitpkg.constants import Constants
from gitpkg.errors import (
    TagNotFoundError,
    UnknownPackageError,
    UnresolvableRemotesError,
    VerificationError,
)
from gitpkg.manifest import Manifest, locate_manifest, probe_installed
from gitpkg.repository.git import GitCli, GitTransport
from gitpkg.scripts import has_native_build, rebuild
from gitpkg.versioning.models import ProbeOutcome, ResolvedSpecifier
from gitpkg.versioning.specifier import expand_specifier
from gitpkg.versioning.tag_match import match_tag

logger = logging.getLogger(__name__)


class TaskKind(Enum):
    """Kinds of work items on the installer's worklist."""
    INSTALL = "install"
    BUILD = "build"


@dataclass
class Task:
    """One worklist item: install a package's dependencies or build it."""
    kind: TaskKind
    path: str
    production: bool = False


class Installer:
    """Drives resolution, placement, fetch and verification."""

    def __init__(self, transport: Optional[GitTransport] = None):
        self.transport: GitTransport = transport or GitCli()

    async def install(
        self,
        target_dir: str,
        prefix: Optional[str] = None,
        production: bool = False,
    ) -> List[str]:
        """Install the package at ``target_dir`` and everything it pulls in.

        Args:
            target_dir: Directory holding the package manifest.
            prefix: Root of the flat installation tree; defaults to the
                package's own directory.
            production: Skip devDependencies of the target package.

        Returns:
            Every newly installed path, in installation order.
        """
        installed_all: List[str] = []
        worklist: List[Task] = [Task(TaskKind.INSTALL, target_dir, production)]

        while worklist:
            task = worklist.pop()
            if task.kind is TaskKind.BUILD:
                if has_native_build(task.path):
                    await rebuild(task.path)
                continue

            root, manifest = locate_manifest(task.path, walk=False)
            if manifest is None or root is None:
                raise UnknownPackageError(task.path)
            if prefix is None:
                prefix = root

            if manifest.dependencies is None:
                logger.debug("No dependencies declared in %s", root)
                continue

            installed = await self.install_dependencies(root, prefix, manifest, task.production)
            installed_all.extend(installed)

            worklist.append(Task(TaskKind.BUILD, root))
            # Recursed packages always merge their own devDependencies.
            for path in reversed(installed):
                worklist.append(Task(TaskKind.INSTALL, path, production=False))

        return installed_all

    async def install_dependencies(
        self,
        root: str,
        prefix: str,
        manifest: Manifest,
        production: bool,
    ) -> List[str]:
        """Install the direct dependencies of one package, in order."""
        installed: List[str] = []
        for name, src in manifest.merged_dependencies(production).items():
            path = await self.install_dependency(root, prefix, manifest, name, src)
            if path is not None:
                installed.append(path)
        return installed

    async def install_dependency(
        self,
        root: str,
        prefix: str,
        manifest: Manifest,
        name: str,
        src: str,
    ) -> Optional[str]:
        """Resolve and install one dependency.

        Returns:
            The installation path, or None when already satisfied.
        """
        spec = expand_specifier(prefix, manifest.remotes, name, src)

        dst = os.path.join(prefix, Constants.INSTALL_DIR, name)
        outcome = probe_installed(dst, spec)
        if outcome is ProbeOutcome.COMPATIBLE:
            logger.info("%s already satisfied at %s", name, dst)
            return None
        if outcome is ProbeOutcome.INCOMPATIBLE:
            dst = os.path.join(root, Constants.INSTALL_DIR, name)
            logger.info("Incompatible %s in flat tree, nesting at %s", name, dst)

        if not spec.resolvable:
            raise UnresolvableRemotesError(name)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolving %s",
                name,
                extra=extra_context(
                    event="resolve",
                    component="installer",
                    candidates=list(spec.git),
                    version_range=spec.version,
                    branch=spec.branch,
                ),
            )

        matched_any = False
        for url in spec.git:
            result = await self._fetch(spec, url, dst)
            if result:
                logger.info("Installed %s from %s at %s", name, url, dst)
                return dst
            matched_any = matched_any or result is not None

        if matched_any:
            raise VerificationError(dst, "no candidate host produced a verified clone")
        raise TagNotFoundError(name, spec.version if spec.branch is None else spec.branch)

    async def _fetch(self, spec: ResolvedSpecifier, url: str, dst: str) -> Optional[bool]:
        """Clone and verify from one host.

        Returns None when the host has no matching tag, otherwise whether
        the clone verified.
        """
        tag: Optional[str] = None
        commit: Optional[str] = None
        annotated = False

        if spec.branch is not None:
            ref = spec.branch
        else:
            tags = await self.transport.list_tags(url)
            tag = match_tag(tags.keys(), spec.version)
            if tag is None:
                logger.debug("No tag at %s satisfies %s", url, spec.version)
                return None
            ref = tag
            annotated = tags[tag].annotated
            commit = tags[tag].commit

        success = await self.transport.clone(ref, url, dst)
        try:
            if spec.branch is not None:
                success = await self.transport.verify(None, None, dst)
            elif annotated:
                success = await self.transport.verify(tag, None, dst)
            else:
                success = await self.transport.verify(None, commit, dst)
        except Exception as err:  # pylint: disable=broad-exception-caught
            raise VerificationError(dst, str(err)) from err

        if not success:
            logger.warning("Verification of %s from %s did not succeed", dst, url)
        return bool(success)


async def install(
    target_dir: str,
    prefix: Optional[str] = None,
    production: bool = False,
    transport: Optional[GitTransport] = None,
) -> List[str]:
    """Install the package at ``target_dir``; see Installer.install."""
    return await Installer(transport).install(target_dir, prefix, production=production)
