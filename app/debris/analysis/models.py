"""Pattern models produced by classification.

A Pattern is a named group of discovered entries sharing a disposability
signature, with aggregate statistics and a deletion-safety tier. Patterns
are never patched in place: every classification pass builds a new set.
"""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from debris.filesystem.models import DiscoveredEntry


class SafetyTier(str, Enum):
    """How confidently a pattern's contents can be deleted.

    Attributes:
        HIGH: Regenerable dependencies and build output.
        MEDIUM: Logs, temp and cache files.
        LOW: Anything else; review before deleting.
    """

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def new_pattern_id() -> str:
    """Generate an opaque, unique pattern identifier."""
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True, slots=True)
class Pattern:
    """A group of discovered entries with a safety classification.

    Build instances with :meth:`from_entries`, which derives the total size
    from the member entries so the statistics cannot drift from the
    membership.

    Attributes:
        id: Unique identifier, opaque to ordering.
        name: Grouping key (literal, extension label, or fallback label).
        member_paths: Paths of the member entries (no duplicates).
        safety_tier: Deletion-safety tier.
        rationale: Short justification for the tier.
        total_size_bytes: Sum of member entry sizes.
    """

    id: str
    name: str
    member_paths: tuple[str, ...]
    safety_tier: SafetyTier
    rationale: str
    total_size_bytes: int

    def __post_init__(self) -> None:
        """Validate pattern data after initialization."""
        if not self.name:
            msg = "Pattern name cannot be empty"
            raise ValueError(msg)
        if len(set(self.member_paths)) != len(self.member_paths):
            msg = f"Pattern '{self.name}' has duplicate member paths"
            raise ValueError(msg)
        if self.total_size_bytes < 0:
            msg = f"Total size cannot be negative, got {self.total_size_bytes}"
            raise ValueError(msg)

    @property
    def item_count(self) -> int:
        """Number of member paths."""
        return len(self.member_paths)

    @classmethod
    def from_entries(
        cls,
        name: str,
        entries: Iterable["DiscoveredEntry"],
        safety_tier: SafetyTier,
        rationale: str,
        pattern_id: str | None = None,
    ) -> "Pattern":
        """Build a pattern whose statistics are computed from its entries."""
        members = list(entries)
        return cls(
            id=pattern_id or new_pattern_id(),
            name=name,
            member_paths=tuple(e.path for e in members),
            safety_tier=safety_tier,
            rationale=rationale,
            total_size_bytes=sum(e.size_bytes for e in members),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the snapshot ``patterns`` item format."""
        return {
            "id": self.id,
            "patternName": self.name,
            "paths": list(self.member_paths),
            "safetyScore": self.safety_tier.value,
            "reason": self.rationale,
            "count": self.item_count,
            "totalSize": self.total_size_bytes,
        }
