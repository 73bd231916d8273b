"""Semantic version range predicate backed by ``semantic_version``.

Ranges use npm syntax (``^1.2.0``, ``~1.2``, ``>=1.0.0 <2.0.0``, ``1.x``,
hyphen ranges). ``NpmSpec`` handles these natively; anything it rejects is
normalized into ``SimpleSpec`` grammar before giving up.
"""

import re
from functools import lru_cache
from typing import Optional

import semantic_version


def _normalize_spec(spec_str: str) -> str:
    """Normalize hyphen and x-ranges into SimpleSpec-compatible form."""
    s = spec_str.strip()

    # Hyphen ranges: "1.2.3 - 1.4.5" => ">=1.2.3,<=1.4.5"
    m = re.match(r'^\s*([0-9A-Za-z\.\-\+]+)\s+-\s+([0-9A-Za-z\.\-\+]+)\s*$', s)
    if m:
        return f">={m.group(1)},<={m.group(2)}"

    s2 = s.replace('*', 'x').lower()
    m = re.match(r'^\s*(\d+)\.(\d+)\.x\s*$', s2)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor}.0,<{major}.{minor + 1}.0"

    m = re.match(r'^\s*(\d+)(?:\.x)?\s*$', s2)
    if m:
        major = int(m.group(1))
        return f">={major}.0.0,<{major + 1}.0.0"

    # Space separated comparators: ">=1.0.0 <2.0.0" => ">=1.0.0,<2.0.0"
    return ",".join(s.split())


@lru_cache(maxsize=256)
def parse_range(spec_str: str) -> Optional[semantic_version.base.BaseSpec]:
    """Parse an npm-style range, returning None when it cannot be parsed."""
    try:
        return semantic_version.NpmSpec(spec_str)
    except ValueError:
        pass
    try:
        return semantic_version.SimpleSpec(_normalize_spec(spec_str))
    except ValueError:
        return None


def parse_version(version: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse a concrete version, tolerating a single leading ``v`` or ``=``."""
    if not version or not isinstance(version, str):
        return None
    text = version.strip()
    if text[:1] in ("v", "="):
        text = text[1:]
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def satisfies(version: Optional[str], spec_str: Optional[str]) -> bool:
    """Return True when ``version`` satisfies the range ``spec_str``.

    Unparseable versions or ranges never satisfy.
    """
    parsed = parse_version(version)
    if parsed is None:
        return False
    return matches(parsed, spec_str)


def matches(version: semantic_version.Version, spec_str: Optional[str]) -> bool:
    """Return True when an already parsed version satisfies ``spec_str``."""
    if spec_str is None:
        return False
    spec = parse_range(spec_str.strip() or "*")
    if spec is None:
        return False
    return spec.match(version)
