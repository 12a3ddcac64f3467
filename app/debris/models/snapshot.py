"""Scan snapshot model and its JSON representation.

A snapshot bundles one scan's discovered entries, the patterns derived
from them, and the time it was taken. On disk it looks like::

    {"files": [...], "patterns": [...], "scanDate": "2026-01-15T10:00:00+00:00"}

Deserialization rebuilds pattern statistics from the entries, so the
stored ``count`` and ``totalSize`` are informational only.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from debris.analysis.models import Pattern, SafetyTier
from debris.filesystem.models import DiscoveredEntry


@dataclass(frozen=True, slots=True)
class ScanSnapshot:
    """Persisted result of one scan.

    Attributes:
        entries: Discovered entries, one per distinct path.
        patterns: Patterns derived from the entries.
        taken_at: When the snapshot was created (UTC).
    """

    entries: tuple[DiscoveredEntry, ...]
    patterns: tuple[Pattern, ...]
    taken_at: datetime

    def __post_init__(self) -> None:
        """Validate referential integrity between patterns and entries."""
        paths = {e.path for e in self.entries}
        if len(paths) != len(self.entries):
            msg = "Snapshot contains duplicate entry paths"
            raise ValueError(msg)
        for pattern in self.patterns:
            missing = [p for p in pattern.member_paths if p not in paths]
            if missing:
                msg = f"Pattern '{pattern.name}' references unknown path {missing[0]}"
                raise ValueError(msg)

    @classmethod
    def create(
        cls,
        entries: list[DiscoveredEntry] | tuple[DiscoveredEntry, ...],
        patterns: list[Pattern] | tuple[Pattern, ...],
    ) -> "ScanSnapshot":
        """Create a snapshot stamped with the current time."""
        return cls(entries=tuple(entries), patterns=tuple(patterns), taken_at=datetime.now(UTC))

    @property
    def total_size(self) -> int:
        """Sum of entry sizes in bytes."""
        return sum(e.size_bytes for e in self.entries)

    def find_patterns(self, names: list[str]) -> list[Pattern]:
        """Return the patterns whose names are in ``names``, in snapshot order."""
        wanted = set(names)
        return [p for p in self.patterns if p.name in wanted]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "files": [e.to_dict() for e in self.entries],
            "patterns": [p.to_dict() for p in self.patterns],
            "scanDate": self.taken_at.isoformat(),
        }

    def to_json(self) -> str:
        """Serialize to a JSON document."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanSnapshot":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If values are invalid or integrity does not hold.
            TypeError: If values have the wrong type.
        """
        files = _object_list(data, "files")
        entries = tuple(DiscoveredEntry.from_dict(item) for item in files)
        by_path = {e.path: e for e in entries}

        patterns: list[Pattern] = []
        for item in _object_list(data, "patterns"):
            paths = [str(p) for p in item["paths"]]
            unknown = [p for p in paths if p not in by_path]
            if unknown:
                msg = f"Pattern '{item['patternName']}' references unknown path {unknown[0]}"
                raise ValueError(msg)
            patterns.append(
                Pattern.from_entries(
                    name=str(item["patternName"]),
                    entries=[by_path[p] for p in paths],
                    safety_tier=SafetyTier(item["safetyScore"]),
                    rationale=str(item["reason"]),
                    pattern_id=str(item["id"]),
                )
            )

        taken_at = datetime.fromisoformat(data["scanDate"])
        if taken_at.tzinfo is None:
            taken_at = taken_at.replace(tzinfo=UTC)

        return cls(entries=entries, patterns=tuple(patterns), taken_at=taken_at)

    @classmethod
    def from_json(cls, text: str) -> "ScanSnapshot":
        """Deserialize from a JSON document.

        Raises:
            json.JSONDecodeError: If the text is not valid JSON.
            KeyError, ValueError, TypeError: If the content is invalid.
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            msg = "Snapshot document must be a JSON object"
            raise TypeError(msg)
        return cls.from_dict(data)


def _object_list(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return ``data[key]`` if it is a list of JSON objects.

    Raises:
        KeyError: If the key is missing.
        TypeError: If the value is not a list of objects.
    """
    value = data[key]
    if not isinstance(value, list):
        msg = f"'{key}' must be a list, got {type(value).__name__}"
        raise TypeError(msg)
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            msg = f"'{key}[{index}]' must be an object, got {type(item).__name__}"
            raise TypeError(msg)
    return value
