"""Manifest script runner and native build trigger."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from typing import List, Optional

from gitpkg.constants import Constants
from gitpkg.errors import NativeBuildError, UnknownPackageError, UnknownScriptError
from gitpkg.manifest import locate_manifest

logger = logging.getLogger(__name__)


def native_build_command() -> List[str]:
    """Return the configured native build command as argv."""
    command = Constants.NATIVE_BUILD_COMMAND
    if isinstance(command, str):
        return shlex.split(command)
    return list(command)


def has_native_build(root: str) -> bool:
    """Return True when ``root`` carries a readable native build descriptor.

    A missing descriptor is a negative result; other access errors propagate.
    """
    descriptor = os.path.join(root, Constants.NATIVE_BUILD_FILE)
    try:
        with open(descriptor, "rb"):
            return True
    except FileNotFoundError:
        return False


async def rebuild(dst: str) -> str:
    """Run the native build tool in ``dst`` and return its stdout.

    Raises:
        NativeBuildError: The tool exited with a non-zero status.
    """
    argv = native_build_command()
    logger.info("Building native addon in %s", dst)
    proc = await asyncio.create_subprocess_exec(
        *argv,
        cwd=dst,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        raise NativeBuildError(dst, proc.returncode, stderr.decode("utf-8", errors="replace"))
    return stdout.decode("utf-8", errors="replace")


async def run_script(dst: str, name: str) -> int:
    """Run the manifest script ``name`` from the package enclosing ``dst``.

    The command runs in the manifest's directory with inherited stdio.

    Returns:
        The child's exit code.

    Raises:
        UnknownPackageError: No manifest at or above ``dst``.
        UnknownScriptError: The manifest does not declare ``name``.
    """
    root, manifest = locate_manifest(dst)
    if manifest is None or root is None:
        raise UnknownPackageError(dst)

    command: Optional[str] = manifest.scripts.get(name)
    if not command:
        raise UnknownScriptError(name)

    argv = shlex.split(command)
    if not argv:
        raise UnknownScriptError(name)
    logger.info("Running script '%s': %s", name, command)
    proc = await asyncio.create_subprocess_exec(*argv, cwd=root)
    return await proc.wait()
