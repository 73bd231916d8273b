"""Selection of the git tag that best satisfies a version range."""

from typing import Iterable, List, Optional, Tuple

import semantic_version

from gitpkg.constants import Constants

from .ranges import matches


def _tag_version(text: str) -> Optional[semantic_version.Version]:
    """Parse what follows the tag prefix, without stripping anything else."""
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def version_tags(tags: Iterable[str]) -> List[Tuple[semantic_version.Version, str]]:
    """Return (version, tag) pairs for ``v``-prefixed tags, newest first.

    Tags are ordered by parsed semantic version so that ``v10.0.0`` ranks
    above ``v2.0.0``; equal versions fall back to descending tag text.
    """
    prefix = Constants.TAG_PREFIX
    parsed = []
    for tag in set(tags):
        if not tag.startswith(prefix):
            continue
        version = _tag_version(tag[len(prefix):])
        if version is None:
            continue
        parsed.append((version, tag))
    parsed.sort(key=lambda item: item[1], reverse=True)
    parsed.sort(key=lambda item: item[0], reverse=True)
    return parsed


def match_tag(tags: Iterable[str], version_range: Optional[str]) -> Optional[str]:
    """Return the highest ``v``-prefixed tag satisfying ``version_range``.

    Returns None when no tag qualifies or no range is given.
    """
    if version_range is None:
        return None
    for version, tag in version_tags(tags):
        if matches(version, version_range):
            return tag
    return None
