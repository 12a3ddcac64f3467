"""Filesystem domain models for artifact discovery.

This module defines the data structures produced by directory traversal:
discovered entries, the criteria a walker matches against, and the
per-walk result that carries root-level failures back to the caller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class CriterionKind(str, Enum):
    """How a match criterion is compared against an entry name.

    Attributes:
        NAME: The entry name equals or contains the literal.
        EXTENSION: The entry name's extension equals the literal.
    """

    NAME = "name"
    EXTENSION = "extension"


@dataclass(frozen=True, slots=True)
class MatchCriterion:
    """A single name literal or file extension used to select entries.

    Extensions are stored period-normalized (``"log"`` becomes ``".log"``).

    Attributes:
        kind: Whether this is a name or an extension criterion.
        value: The literal or the normalized extension.
    """

    kind: CriterionKind
    value: str

    def __post_init__(self) -> None:
        """Validate and normalize the criterion value."""
        if not self.value or not self.value.strip("."):
            msg = "Match criterion value cannot be empty"
            raise ValueError(msg)
        if self.kind == CriterionKind.EXTENSION:
            object.__setattr__(self, "value", "." + self.value.lstrip("."))

    @classmethod
    def name(cls, literal: str) -> "MatchCriterion":
        """Create a name-literal criterion."""
        return cls(kind=CriterionKind.NAME, value=literal)

    @classmethod
    def extension(cls, ext: str) -> "MatchCriterion":
        """Create an extension criterion."""
        return cls(kind=CriterionKind.EXTENSION, value=ext)

    def __str__(self) -> str:
        if self.kind == CriterionKind.EXTENSION:
            return f"*{self.value}"
        return self.value


@dataclass(frozen=True, slots=True)
class DiscoveredEntry:
    """A filesystem entry that matched a criterion during a scan.

    Immutable once created. Directories are atomic units: their size is
    the recursive sum of the non-hidden regular files beneath them.

    Attributes:
        path: Absolute filesystem path.
        size_bytes: Size in bytes (recursive for directories).
        name: Final path component.
        is_directory: Whether the entry is a directory.
        modified_at: Last modification time (UTC), None if unreadable.
    """

    path: str
    size_bytes: int
    name: str
    is_directory: bool
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def display_path(self) -> str:
        """Path with the home directory replaced by ``~``."""
        home = str(Path.home())
        if self.path == home or self.path.startswith(home + "/"):
            return "~" + self.path[len(home) :]
        return self.path

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the snapshot ``files`` item format."""
        return {
            "path": self.path,
            "size": self.size_bytes,
            "name": self.name,
            "isDirectory": self.is_directory,
            "modificationDate": (
                self.modified_at.isoformat() if self.modified_at is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiscoveredEntry":
        """Deserialize from the snapshot ``files`` item format.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If a field has an invalid value.
            TypeError: If a field has the wrong type.
        """
        raw_date = data.get("modificationDate")
        size = data["size"]
        if not isinstance(size, int) or isinstance(size, bool):
            msg = f"size must be an integer, got {size!r}"
            raise TypeError(msg)
        return cls(
            path=str(data["path"]),
            size_bytes=size,
            name=str(data["name"]),
            is_directory=bool(data["isDirectory"]),
            modified_at=datetime.fromisoformat(raw_date) if raw_date else None,
        )


@dataclass(frozen=True, slots=True)
class WalkResult:
    """Outcome of walking one root for one criterion.

    Attributes:
        root: The root that was walked.
        criterion: The criterion entries were matched against.
        entries: Matching entries, in traversal order.
        root_missing: True if the root did not exist.
        error: Description of a root-level failure, None on success.
    """

    root: str
    criterion: MatchCriterion
    entries: tuple[DiscoveredEntry, ...] = field(default_factory=tuple)
    root_missing: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the root was walked without a root-level failure."""
        return not self.root_missing and self.error is None

    @property
    def total_size(self) -> int:
        """Sum of entry sizes in bytes."""
        return sum(e.size_bytes for e in self.entries)
