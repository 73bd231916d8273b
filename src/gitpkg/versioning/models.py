"""Data models for specifier resolution and tag selection."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ProbeOutcome(Enum):
    """Result of probing an installation path for an existing package."""
    ABSENT = "absent"
    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"


@dataclass
class ResolvedSpecifier:
    """Candidate git URLs plus either a version range or a branch.

    ``git`` is ordered; the order is the fetch-attempt order.
    """
    git: List[str] = field(default_factory=list)
    version: Optional[str] = None
    branch: Optional[str] = None

    @property
    def resolvable(self) -> bool:
        return bool(self.git)


@dataclass(frozen=True)
class TagRecord:
    """One remote tag: whether it is annotated and the commit it points to."""
    annotated: bool
    commit: str


# Tag name -> record, as returned by a tag listing.
TagMap = Dict[str, TagRecord]
