"""Snapshot persistence.

This module provides the ScanStore class for persisting the most recent
scan snapshot as a single JSON file that is always replaced whole.
"""

import contextlib
import json
import os
import threading
from datetime import UTC, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile

from debris.core.events import EventCategory, EventLog
from debris.core.paths import get_snapshot_path
from debris.models.snapshot import ScanSnapshot

_CAT = EventCategory.SYSTEM


class ScanStore:
    """Owns the on-disk scan snapshot.

    Storage location: ~/.local/state/debris/scan-data.json

    At most one snapshot exists at a time. ``save`` writes a temporary file
    next to the target and renames it over the old one, so readers never
    see a partially written file. None of the methods raise: failures are
    reported through the event log.

    Args:
        events: Event sink for save/load outcomes.
        path: Optional override for the snapshot file location.
    """

    def __init__(self, events: EventLog, path: Path | None = None) -> None:
        self._events = events
        self._path = path if path is not None else get_snapshot_path()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Location of the snapshot file."""
        return self._path

    def save(self, snapshot: ScanSnapshot) -> bool:
        """Replace the persisted snapshot.

        Args:
            snapshot: Snapshot to persist.

        Returns:
            True if the snapshot was written, False on failure.
        """
        with self._lock:
            tmp_path: Path | None = None
            try:
                payload = snapshot.to_json()
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with NamedTemporaryFile(
                    mode="w",
                    encoding="utf-8",
                    dir=self._path.parent,
                    prefix=".scan-data.",
                    suffix=".tmp",
                    delete=False,
                ) as f:
                    tmp_path = Path(f.name)
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                # os.replace() is atomic on POSIX
                os.replace(tmp_path, self._path)
            except (OSError, TypeError, ValueError) as e:
                if tmp_path is not None:
                    with contextlib.suppress(OSError):
                        tmp_path.unlink(missing_ok=True)
                self._events.error(f"Failed to save scan data: {e}", _CAT)
                return False

        self._events.success("Scan data saved successfully", _CAT)
        return True

    def load(self) -> ScanSnapshot | None:
        """Read the persisted snapshot.

        Returns:
            The snapshot, or None if none exists or it cannot be parsed.
        """
        if not self._path.exists():
            self._events.info("No saved scan data found", _CAT)
            return None

        try:
            text = self._path.read_text(encoding="utf-8")
            snapshot = ScanSnapshot.from_json(text)
        except (
            OSError,
            json.JSONDecodeError,
            AttributeError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            self._events.error(f"Failed to load scan data: {e}", _CAT)
            return None

        self._events.success(
            f"Loaded scan data from {snapshot.taken_at.astimezone():%Y-%m-%d %H:%M}", _CAT
        )
        return snapshot

    def clear(self) -> None:
        """Remove the persisted snapshot. Safe to call when none exists."""
        with self._lock:
            try:
                self._path.unlink(missing_ok=True)
            except OSError as e:
                self._events.error(f"Failed to clear scan data: {e}", _CAT)
                return
        self._events.info("Scan data cleared", _CAT)

    def age_description(self, now: datetime | None = None) -> str | None:
        """Describe how long ago the persisted snapshot was taken.

        Args:
            now: Reference time (defaults to the current UTC time).

        Returns:
            A string such as "5 minutes ago", or None if no snapshot exists.
        """
        snapshot = self.load()
        if snapshot is None:
            return None
        return describe_age(snapshot.taken_at, now)


def describe_age(taken_at: datetime, now: datetime | None = None) -> str:
    """Bucket the time since ``taken_at`` into minutes, hours or days."""
    reference = now or datetime.now(UTC)
    seconds = max(0.0, (reference - taken_at).total_seconds())

    if seconds < 3600:
        minutes = int(seconds // 60)
        return f"{minutes} minute{'' if minutes == 1 else 's'} ago"
    if seconds < 86400:
        hours = int(seconds // 3600)
        return f"{hours} hour{'' if hours == 1 else 's'} ago"
    days = int(seconds // 86400)
    return f"{days} day{'' if days == 1 else 's'} ago"
