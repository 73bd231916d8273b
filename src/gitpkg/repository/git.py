"""Git transport: tag listing, cloning and verification.

The installer only talks to the ``GitTransport`` protocol so tests can swap
in fakes. ``GitCli`` is the real implementation and shells out to ``git``
through asyncio subprocesses; every non-zero exit raises GitCommandError.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Protocol, Tuple

from gitpkg.common.logging_utils import Timer, extra_context, is_debug_enabled
from gitpkg.constants import Constants
from gitpkg.errors import GitCommandError
from gitpkg.versioning.models import TagMap, TagRecord

logger = logging.getLogger(__name__)

_TAG_REF_PREFIX = "refs/tags/"
_PEELED_SUFFIX = "^{}"


class GitTransport(Protocol):
    """Capability interface the installer uses for all git operations."""

    async def list_tags(self, url: str) -> TagMap:
        """Return tag name -> TagRecord for the remote at ``url``."""
        ...

    async def clone(self, ref: str, url: str, dest: str) -> bool:
        """Clone ``ref`` (tag or branch) of ``url`` into ``dest``."""
        ...

    async def verify(self, tag: Optional[str], commit: Optional[str], dest: str) -> bool:
        """Verify the clone in ``dest`` against a tag, a commit, or HEAD."""
        ...


def parse_ls_remote(output: str) -> TagMap:
    """Parse ``git ls-remote --tags`` output into a TagMap.

    Annotated tags appear twice: once for the tag object and once peeled
    (``<name>^{}``) with the commit it points to.
    """
    listed: Dict[str, str] = {}
    peeled: Dict[str, str] = {}
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            sha, ref = line.split(None, 1)
        except ValueError:
            logger.debug("Skipping malformed ls-remote line: %r", line)
            continue
        if not ref.startswith(_TAG_REF_PREFIX):
            continue
        name = ref[len(_TAG_REF_PREFIX):]
        if name.endswith(_PEELED_SUFFIX):
            peeled[name[:-len(_PEELED_SUFFIX)]] = sha
        else:
            listed[name] = sha

    tags: TagMap = {}
    for name, sha in listed.items():
        if name in peeled:
            tags[name] = TagRecord(annotated=True, commit=peeled[name])
        else:
            tags[name] = TagRecord(annotated=False, commit=sha)
    return tags


class GitCli:
    """GitTransport backed by the ``git`` command line."""

    def __init__(self, git_binary: Optional[str] = None):
        self.git_binary = git_binary or Constants.GIT_BINARY

    async def _run(self, args: List[str], cwd: Optional[str] = None) -> Tuple[str, str]:
        """Run git with ``args`` and return (stdout, stderr)."""
        argv = [self.git_binary, *args]
        with Timer() as t:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        out = stdout.decode("utf-8", errors="replace")
        err = stderr.decode("utf-8", errors="replace")
        if is_debug_enabled(logger):
            logger.debug(
                "git %s",
                " ".join(args),
                extra=extra_context(
                    event="git_command",
                    component="git",
                    returncode=proc.returncode,
                    duration_ms=t.duration_ms(),
                    cwd=cwd,
                ),
            )
        if proc.returncode != 0:
            raise GitCommandError(argv, proc.returncode, err)
        return out, err

    async def list_tags(self, url: str) -> TagMap:
        out, _ = await self._run(["ls-remote", "--tags", url])
        tags = parse_ls_remote(out)
        logger.debug("Found %d tags at %s", len(tags), url)
        return tags

    async def clone(self, ref: str, url: str, dest: str) -> bool:
        await self._run(["clone", "--quiet", "--depth", "1", "--branch", ref, url, dest])
        return True

    async def verify(self, tag: Optional[str], commit: Optional[str], dest: str) -> bool:
        if tag is not None:
            await self._run(["tag", "--verify", tag], cwd=dest)
            return True
        if commit is not None:
            head, _ = await self._run(["rev-parse", "HEAD"], cwd=dest)
            if head.strip() != commit:
                raise GitCommandError(
                    [self.git_binary, "rev-parse", "HEAD"],
                    1,
                    f"HEAD {head.strip()} does not match expected commit {commit}",
                )
            await self._run(["verify-commit", commit], cwd=dest)
            return True
        await self._run(["verify-commit", "HEAD"], cwd=dest)
        return True
