"""Recursive directory walker for artifact discovery.

A DirectoryWalker traverses one root and returns every entry matching one
criterion. It keeps no state between calls and shares nothing with other
walkers, so the coordinator runs many of them concurrently.
"""

import logging
import os
from datetime import UTC, datetime

from debris.filesystem.models import CriterionKind, DiscoveredEntry, MatchCriterion, WalkResult
from debris.filesystem.policy import is_excluded, is_hidden

logger = logging.getLogger(__name__)


def _list_dir(path: str) -> list[os.DirEntry[str]]:
    """List a directory, closing the scandir handle.

    Raises:
        OSError: If the directory cannot be read.
    """
    with os.scandir(path) as it:
        return list(it)


class DirectoryWalker:
    """Finds entries under a root that match a name or extension criterion.

    Hidden entries and excluded paths are pruned. Symbolic links are never
    followed. A matched directory is recorded once with its aggregate size
    and not descended into.
    """

    def walk(self, root: str, criterion: MatchCriterion) -> WalkResult:
        """Walk a root and collect matching entries.

        Never raises: unreadable entries below the root are skipped, a
        missing root is flagged with ``root_missing`` and an unreadable
        root is reported through ``error``.

        Args:
            root: Absolute path of the directory to traverse.
            criterion: Name literal or extension to match.

        Returns:
            WalkResult with matched entries or the root-level failure.
        """
        if not os.path.isdir(root):
            if os.path.lexists(root):
                return WalkResult(root=root, criterion=criterion, error="Not a directory")
            return WalkResult(root=root, criterion=criterion, root_missing=True)

        try:
            top = _list_dir(root)
        except OSError as e:
            return WalkResult(root=root, criterion=criterion, error=str(e))

        found: list[DiscoveredEntry] = []
        self._walk_entries(top, criterion, found)
        return WalkResult(root=root, criterion=criterion, entries=tuple(found))

    def _walk_entries(
        self,
        entries: list[os.DirEntry[str]],
        criterion: MatchCriterion,
        found: list[DiscoveredEntry],
    ) -> None:
        """Match and descend into a list of directory entries.

        Uses an explicit stack so deep trees do not hit the recursion limit.
        """
        stack = list(reversed(entries))

        while stack:
            entry = stack.pop()
            if is_hidden(entry.name) or is_excluded(entry.path):
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                logger.debug("Cannot determine type of: %s", entry.path)
                continue

            if self._matches(entry.name, criterion):
                discovered = self._build_entry(entry, is_dir)
                if discovered is not None:
                    found.append(discovered)
                continue

            if is_dir:
                try:
                    children = _list_dir(entry.path)
                except OSError:
                    logger.debug("Cannot read directory: %s", entry.path)
                    continue
                stack.extend(reversed(children))

    @staticmethod
    def _matches(name: str, criterion: MatchCriterion) -> bool:
        """Check whether an entry name satisfies a criterion."""
        if criterion.kind == CriterionKind.NAME:
            return criterion.value in name
        return os.path.splitext(name)[1] == criterion.value

    def _build_entry(self, entry: os.DirEntry[str], is_dir: bool) -> DiscoveredEntry | None:
        """Create a DiscoveredEntry with size and modification time.

        Returns None if the entry cannot be stat'ed.
        """
        try:
            stat = entry.stat(follow_symlinks=False)
        except OSError:
            logger.debug("Cannot stat: %s", entry.path)
            return None

        size = self.directory_size(entry.path) if is_dir else stat.st_size

        try:
            modified_at: datetime | None = datetime.fromtimestamp(stat.st_mtime, tz=UTC)
        except (OverflowError, OSError, ValueError):
            modified_at = None

        return DiscoveredEntry(
            path=entry.path,
            size_bytes=size,
            name=entry.name,
            is_directory=is_dir,
            modified_at=modified_at,
        )

    @staticmethod
    def directory_size(path: str) -> int:
        """Sum the sizes of non-hidden regular files beneath a directory.

        Hidden files and hidden subdirectories are not counted. Unreadable
        entries contribute nothing.

        Args:
            path: Directory to measure.

        Returns:
            Total size in bytes.
        """
        total = 0
        pending = [path]

        while pending:
            current = pending.pop()
            try:
                children = _list_dir(current)
            except OSError:
                continue

            for child in children:
                if is_hidden(child.name):
                    continue
                try:
                    if child.is_dir(follow_symlinks=False):
                        pending.append(child.path)
                    elif child.is_file(follow_symlinks=False):
                        total += child.stat(follow_symlinks=False).st_size
                except OSError:
                    continue

        return total
