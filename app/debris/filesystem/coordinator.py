"""Scan orchestration across roots and match criteria.

The ScanCoordinator processes roots one at a time. Within a root it runs
one DirectoryWalker per criterion on a thread pool and merges each batch
into the accumulated entries as the walkers finish. Only the
coordinating thread writes to the accumulated entries; other threads
(progress observers, progressive analysis) read consistent copies.
"""

import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum

from debris.core.events import EventCategory, EventLog
from debris.filesystem.models import DiscoveredEntry, MatchCriterion, WalkResult
from debris.filesystem.walker import DirectoryWalker
from debris.utils.formatting import format_size

BatchCallback = Callable[[WalkResult], None]
ProgressCallback = Callable[[str, float], None]  # (root, progress fraction)

DEFAULT_MAX_WORKERS = 4

_CAT = EventCategory.SCANNING


class ScanState(str, Enum):
    """Lifecycle state of the coordinator."""

    IDLE = "idle"
    SCANNING = "scanning"


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Result of a completed or cancelled scan.

    Attributes:
        entries: Accumulated entries, one per distinct path.
        roots_scanned: Roots that were walked.
        roots_skipped: Roots that were missing or unreadable.
        cancelled: Whether the scan stopped early at a root boundary.
    """

    entries: tuple[DiscoveredEntry, ...]
    roots_scanned: tuple[str, ...] = field(default_factory=tuple)
    roots_skipped: tuple[str, ...] = field(default_factory=tuple)
    cancelled: bool = False

    @property
    def total_size(self) -> int:
        """Sum of entry sizes in bytes."""
        return sum(e.size_bytes for e in self.entries)


class ScanCoordinator:
    """Runs walkers over every root and criterion and accumulates entries.

    Args:
        events: Event sink for scan lifecycle reporting.
        walker: Walker used for every (root, criterion) unit of work.
        max_workers: Upper bound on concurrent walkers within a root.
    """

    def __init__(
        self,
        events: EventLog,
        walker: DirectoryWalker | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            msg = f"max_workers must be positive, got {max_workers}"
            raise ValueError(msg)
        self._events = events
        self._walker = walker or DirectoryWalker()
        self._max_workers = max_workers

        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._state = ScanState.IDLE
        self._progress = 0.0
        # Keyed by path so an entry matched by several criteria is kept once
        self._entries: dict[str, DiscoveredEntry] = {}

    @property
    def state(self) -> ScanState:
        """Current lifecycle state."""
        with self._lock:
            return self._state

    @property
    def is_scanning(self) -> bool:
        """Whether a scan is in progress."""
        return self.state == ScanState.SCANNING

    @property
    def progress(self) -> float:
        """Fraction of roots processed, in [0, 1]."""
        with self._lock:
            return self._progress

    @property
    def entry_count(self) -> int:
        """Number of distinct entries accumulated so far."""
        with self._lock:
            return len(self._entries)

    def entries_snapshot(self) -> list[DiscoveredEntry]:
        """Copy of the entries accumulated so far."""
        with self._lock:
            return list(self._entries.values())

    def cancel(self) -> None:
        """Request the running scan to stop at the next root boundary."""
        if self.is_scanning:
            self._events.info("Scan cancellation requested", _CAT)
            self._cancel.set()

    def run_scan(
        self,
        roots: Sequence[str],
        name_patterns: Sequence[str],
        extensions: Sequence[str],
        on_batch: BatchCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ScanOutcome | None:
        """Scan every root for every name pattern and extension.

        Roots are processed sequentially; the walkers for one root run
        concurrently. Missing or unreadable roots are logged and skipped.
        Cancellation is honored between roots.

        Args:
            roots: Absolute root directories, in scan order.
            name_patterns: Name literals to match.
            extensions: File extensions to match.
            on_batch: Called with each non-empty walker result after merge.
            on_progress: Called after each root with (root, progress).

        Returns:
            ScanOutcome with the accumulated entries, or None if a scan is
            already running.
        """
        with self._lock:
            if self._state == ScanState.SCANNING:
                self._events.warning("Scan already in progress; request ignored", _CAT)
                return None
            self._state = ScanState.SCANNING
            self._progress = 0.0
            self._entries = {}
            self._cancel.clear()

        criteria = [MatchCriterion.name(p) for p in name_patterns] + [
            MatchCriterion.extension(e) for e in extensions
        ]

        scanned: list[str] = []
        skipped: list[str] = []
        cancelled = False

        self._events.info("Starting directory scan", _CAT)
        self._events.info(
            f"Scanning {len(roots)} directories for {len(criteria)} criteria", _CAT
        )

        try:
            for index, root in enumerate(roots):
                if self._cancel.is_set():
                    cancelled = True
                    break

                if self._scan_root(root, criteria, on_batch):
                    scanned.append(root)
                else:
                    skipped.append(root)

                fraction = (index + 1) / len(roots)
                with self._lock:
                    self._progress = fraction
                if on_progress:
                    on_progress(root, fraction)
        finally:
            with self._lock:
                self._state = ScanState.IDLE
                if not cancelled:
                    self._progress = 1.0
                entries = tuple(self._entries.values())

        if cancelled:
            self._events.warning(
                f"Scan cancelled after {len(scanned) + len(skipped)} of {len(roots)} "
                f"directories: kept {len(entries)} items",
                _CAT,
            )
        else:
            self._events.success(f"Scan complete: found {len(entries)} items", _CAT)

        return ScanOutcome(
            entries=entries,
            roots_scanned=tuple(scanned),
            roots_skipped=tuple(skipped),
            cancelled=cancelled,
        )

    def _scan_root(
        self,
        root: str,
        criteria: list[MatchCriterion],
        on_batch: BatchCallback | None,
    ) -> bool:
        """Fan out walkers for one root and merge their results.

        Returns:
            False if the root was missing or unreadable, True otherwise.
        """
        self._events.info(f"Scanning: {root}", _CAT)
        if not criteria:
            return True

        failure: WalkResult | None = None
        max_workers = min(self._max_workers, len(criteria))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self._walker.walk, root, c) for c in criteria]
            for future in as_completed(futures):
                try:
                    result = future.result()
                except Exception as e:  # noqa: BLE001 - a crashing walker must not abort the scan
                    self._events.error(f"Walker crashed while scanning {root}: {e}", _CAT)
                    continue

                if not result.ok:
                    failure = result
                    continue

                self._merge(result)
                if result.entries and on_batch:
                    on_batch(result)

        # Every walker sees the same root, so a root failure is reported once
        if failure is not None:
            if failure.root_missing:
                self._events.warning(f"Directory does not exist: {root}", _CAT)
            else:
                self._events.error(f"Cannot read directory {root}: {failure.error}", _CAT)
            return False

        return True

    def _merge(self, result: WalkResult) -> None:
        """Append a walker batch to the accumulated entries."""
        if not result.entries:
            return

        with self._lock:
            for entry in result.entries:
                self._entries[entry.path] = entry

        self._events.info(
            f"Found {len(result.entries)} items matching '{result.criterion}' "
            f"({format_size(result.total_size)})",
            _CAT,
        )
        for entry in result.entries[:3]:
            self._events.debug(
                f"  -> {entry.display_path} ({format_size(entry.size_bytes)})", _CAT
            )
        if len(result.entries) > 3:
            self._events.debug(f"  -> ... and {len(result.entries) - 3} more", _CAT)

