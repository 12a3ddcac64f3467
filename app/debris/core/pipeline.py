"""Scan, classify and persist in one pass.

The pipeline drives the ScanCoordinator in the calling thread while a
background thread periodically reclassifies the entries found so far, so
callers can show interim patterns during long scans. Once the scan ends
the background thread is stopped and a single authoritative
classification is stored as the new snapshot.
"""

import logging
import threading
from collections.abc import Callable, Iterable

from debris.analysis.advisor import AgentCapability, classify_with_fallback
from debris.analysis.classifier import PatternClassifier
from debris.analysis.models import Pattern
from debris.core.config import DebrisConfig
from debris.core.events import EventCategory, EventLog
from debris.core.store import ScanStore
from debris.filesystem.coordinator import ProgressCallback, ScanCoordinator
from debris.filesystem.policy import expand_roots
from debris.models.snapshot import ScanSnapshot

logger = logging.getLogger(__name__)

InterimCallback = Callable[[list[Pattern]], None]

_CAT = EventCategory.SCANNING


class ScanPipeline:
    """Coordinates scanning, progressive analysis and persistence.

    Args:
        config: Roots, criteria and tuning settings.
        events: Shared event sink.
        store: Snapshot persistence.
        classifier: Deterministic classifier.
        capability: Resolved external agent capability.
        coordinator: Optional coordinator override (built from config otherwise).
    """

    def __init__(
        self,
        config: DebrisConfig,
        events: EventLog,
        store: ScanStore,
        classifier: PatternClassifier,
        capability: AgentCapability,
        coordinator: ScanCoordinator | None = None,
    ) -> None:
        self._config = config
        self._events = events
        self._store = store
        self._classifier = classifier
        self._capability = capability
        self._coordinator = coordinator or ScanCoordinator(
            events, max_workers=config.max_workers
        )

    @property
    def coordinator(self) -> ScanCoordinator:
        return self._coordinator

    def run(
        self,
        on_interim: InterimCallback | None = None,
        on_progress: ProgressCallback | None = None,
        save: bool = True,
    ) -> ScanSnapshot | None:
        """Scan the configured roots and produce a snapshot.

        Args:
            on_interim: Called from the background thread with interim patterns.
            on_progress: Called after each root with (root, progress).
            save: Whether to persist the resulting snapshot.

        Returns:
            The new snapshot, or None if nothing was found or a scan was
            already running.
        """
        roots = expand_roots(self._config.roots)
        stop = threading.Event()
        consumer = threading.Thread(
            target=self._progressive_loop,
            args=(stop, on_interim),
            name="debris-progressive",
            daemon=True,
        )
        consumer.start()

        try:
            outcome = self._coordinator.run_scan(
                roots,
                self._config.name_patterns,
                self._config.extensions,
                on_progress=on_progress,
            )
        finally:
            stop.set()
            consumer.join()

        if outcome is None:
            return None

        if not outcome.entries:
            self._events.warning("No temporary files found", _CAT)
            return None

        patterns = classify_with_fallback(
            outcome.entries, self._classifier, self._capability, self._events
        )
        snapshot = ScanSnapshot.create(outcome.entries, patterns)
        if save:
            self._store.save(snapshot)
        return snapshot

    def cancel(self) -> None:
        """Request the running scan to stop at the next root boundary."""
        self._coordinator.cancel()

    def apply_deletions(
        self, snapshot: ScanSnapshot, deleted_paths: Iterable[str]
    ) -> ScanSnapshot:
        """Drop deleted entries, reclassify the rest and persist the result."""
        gone = set(deleted_paths)
        remaining = [e for e in snapshot.entries if e.path not in gone]
        self._events.info(
            f"Reclassifying {len(remaining)} remaining items after deletion",
            EventCategory.DELETION,
        )
        patterns = self._classifier.classify(remaining, quiet=not remaining)
        updated = ScanSnapshot.create(remaining, patterns)
        self._store.save(updated)
        return updated

    def _progressive_loop(self, stop: threading.Event, on_interim: InterimCallback | None) -> None:
        """Reclassify interim entries until ``stop`` is set."""
        last_count = 0
        # wait() returns True once stop is set
        while not stop.wait(self._config.progressive_interval):
            count = self._coordinator.entry_count
            if count == last_count:
                continue
            last_count = count

            patterns = self._classifier.classify(self._coordinator.entries_snapshot(), quiet=True)
            logger.debug("Interim analysis: %d patterns from %d entries", len(patterns), count)
            if on_interim:
                on_interim(patterns)
