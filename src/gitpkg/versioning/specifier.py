"""Dependency specifier expansion.

Turns the value side of a ``dependencies`` entry into candidate git URLs and
a version range or branch. Three forms are accepted:

- direct git URLs: ``git+ssh://``, ``git+https://`` and ``git://``
- a bare version range, only when no remotes table is supplied
- ``<remote>[:<repo>][#<fragment>]`` resolved against the remotes table

A fragment prefixed with ``semver:`` is a version range; any other fragment
is a branch name.
"""

import os
import re
from typing import Mapping, Optional, Sequence, Tuple

from gitpkg.constants import Constants
from gitpkg.errors import InvalidRemotesError, UnknownRemoteError

from .models import ResolvedSpecifier

_GIT_URL_RE = re.compile(r'^(git\+(ssh://|https://)|git://)(.*)$')


def split_fragment(fragment: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Return (version_range, branch) for a URL fragment.

    An absent or empty fragment means any version.
    """
    if not fragment:
        return Constants.DEFAULT_RANGE, None
    prefix = Constants.SEMVER_FRAGMENT_PREFIX
    if fragment.startswith(prefix):
        return fragment[len(prefix):].strip() or Constants.DEFAULT_RANGE, None
    return None, fragment


def _expand_git_url(match: "re.Match[str]") -> ResolvedSpecifier:
    # git+ssh:// and git+https:// drop the "git+" transport marker.
    if match.group(2):
        url = match.group(2) + match.group(3)
    else:
        url = match.group(1) + match.group(3)
    host, _, fragment = url.partition('#')
    version, branch = split_fragment(fragment)
    return ResolvedSpecifier(git=[host], version=version, branch=branch)


def _host_url(root: str, host: str, repo: str) -> str:
    prefix = Constants.LOCAL_REMOTE_PREFIX
    if host.startswith(prefix):
        directory = host[len(prefix):]
        if not os.path.isabs(directory):
            directory = os.path.abspath(os.path.join(root, directory))
        return f"{directory.rstrip('/')}/{repo}/.git"
    return f"{host.rstrip('/')}/{repo}.git"


def expand_specifier(
    root: str,
    remotes: Optional[Mapping[str, Sequence[str]]],
    name: str,
    src: str,
) -> ResolvedSpecifier:
    """Expand one dependency specifier into a ResolvedSpecifier.

    Args:
        root: Directory that relative ``file:`` hosts resolve against.
        remotes: Remote alias -> ordered host templates, or None.
        name: Dependency name, the default repository name.
        src: Specifier string from the manifest.

    Returns:
        ResolvedSpecifier with candidates in host-list order.

    Raises:
        UnknownRemoteError: ``src`` names an alias absent from ``remotes``.
        InvalidRemotesError: the alias maps to something other than a list.
    """
    src = src.strip()
    matched = _GIT_URL_RE.match(src)
    if matched:
        return _expand_git_url(matched)

    if remotes is None:
        return ResolvedSpecifier(git=[], version=src, branch=None)

    # Split the fragment first; "semver:" ranges contain a colon themselves.
    head, _, fragment = src.partition('#')
    remote, _, repo = head.partition(':')
    version, branch = split_fragment(fragment)
    repo = repo or name

    if remote not in remotes:
        raise UnknownRemoteError(remote)
    hosts = remotes[remote]
    if not isinstance(hosts, (list, tuple)):
        raise InvalidRemotesError(remote)

    git = [_host_url(root, host, repo) for host in hosts]
    return ResolvedSpecifier(git=git, version=version, branch=branch)
