"""Deletion of pattern members by moving them to the trash.

Paths are never unlinked. Each one is moved into the freedesktop.org
trash (``<trash>/files``) with a matching ``.trashinfo`` record so it can
be restored from any file manager.
"""

import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from urllib.parse import quote

from debris.analysis.models import Pattern
from debris.core.events import EventCategory, EventLog
from debris.core.paths import get_trash_dir
from debris.filesystem.policy import is_excluded

logger = logging.getLogger(__name__)

_CAT = EventCategory.DELETION


@dataclass(frozen=True, slots=True)
class TrashResult:
    """Result of trashing a single path.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the path was moved (or would be, in dry-run).
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (nothing moved).
        trashed_as: Location inside the trash, None if not moved.
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False
    trashed_as: str | None = None


@dataclass(frozen=True, slots=True)
class DeletionSummary:
    """Aggregated outcome of trashing one pattern's members."""

    pattern_name: str
    results: tuple[TrashResult, ...] = field(default_factory=tuple)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def fail_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def failed_paths(self) -> list[str]:
        return [r.path for r in self.results if not r.success]

    @property
    def succeeded_paths(self) -> list[str]:
        return [r.path for r in self.results if r.success and not r.dry_run]


class TrashOperator:
    """Moves paths to the user's trash.

    Excluded paths are refused and failures are isolated per path, so one
    unmovable entry never stops the rest of a pattern from being trashed.

    Args:
        events: Event sink for deletion reporting.
        dry_run: If True, report what would be trashed without moving.
        trash_dir: Trash location (defaults to ~/.local/share/Trash).
    """

    def __init__(
        self,
        events: EventLog,
        dry_run: bool = False,
        trash_dir: Path | None = None,
    ) -> None:
        self._events = events
        self._dry_run = dry_run
        self._trash_dir = trash_dir if trash_dir is not None else get_trash_dir()

    @property
    def trash_dir(self) -> Path:
        return self._trash_dir

    def trash(self, paths: list[str]) -> list[TrashResult]:
        """Trash multiple paths and return one result per input path."""
        results: list[TrashResult] = []

        for path in paths:
            if is_excluded(path):
                self._events.error(f"Refusing to delete protected path: {path}", _CAT)
                results.append(
                    TrashResult(
                        path=path,
                        success=False,
                        error=f"Protected path cannot be deleted: {path}",
                    )
                )
                continue

            results.append(self._trash_single(path))

        return results

    def delete_pattern(self, pattern: Pattern) -> DeletionSummary:
        """Trash every member path of a pattern.

        Args:
            pattern: Pattern whose members should be removed.

        Returns:
            DeletionSummary with per-path results.
        """
        self._events.info(
            f"Deleting pattern '{pattern.name}' ({pattern.item_count} items)", _CAT
        )
        summary = DeletionSummary(
            pattern_name=pattern.name,
            results=tuple(self.trash(list(pattern.member_paths))),
        )

        if summary.fail_count:
            self._events.warning(
                f"Deleted {summary.success_count} items from '{pattern.name}', "
                f"{summary.fail_count} failed",
                _CAT,
            )
        else:
            self._events.success(
                f"Deleted {summary.success_count} items from '{pattern.name}'", _CAT
            )
        return summary

    def _trash_single(self, path: str) -> TrashResult:
        """Move one path into the trash."""
        target = Path(path)
        if not target.exists() and not target.is_symlink():
            self._events.warning(f"Path does not exist: {path}", _CAT)
            return TrashResult(path=path, success=False, error=f"Path does not exist: {path}")

        if self._dry_run:
            logger.info("Dry-run: would trash %s", path)
            return TrashResult(path=path, success=True, dry_run=True)

        info_path: Path | None = None
        try:
            files_dir = self._trash_dir / "files"
            info_dir = self._trash_dir / "info"
            files_dir.mkdir(parents=True, exist_ok=True)
            info_dir.mkdir(parents=True, exist_ok=True)

            name = _unique_name(files_dir, info_dir, target.name)
            info_path = info_dir / f"{name}.trashinfo"
            info_path.write_text(_trashinfo(path), encoding="utf-8")

            destination = files_dir / name
            shutil.move(path, destination)
        except OSError as e:
            if info_path is not None and info_path.exists():
                info_path.unlink()
            self._events.error(f"Failed to delete {path}: {e}", _CAT)
            return TrashResult(path=path, success=False, error=str(e))

        self._events.debug(f"Moved to trash: {path}", _CAT)
        return TrashResult(path=path, success=True, trashed_as=str(destination))


def _unique_name(files_dir: Path, info_dir: Path, name: str) -> str:
    """Pick a name not used in either trash subdirectory."""
    candidate = name
    counter = 1
    while (files_dir / candidate).exists() or (info_dir / f"{candidate}.trashinfo").exists():
        stem, dot, suffix = name.partition(".")
        candidate = f"{stem}.{counter}{dot}{suffix}" if dot else f"{name}.{counter}"
        counter += 1
    return candidate


def _trashinfo(original: str) -> str:
    """Render a .trashinfo record for a trashed path."""
    deleted_at = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
    return f"[Trash Info]\nPath={quote(original)}\nDeletionDate={deleted_at}\n"
