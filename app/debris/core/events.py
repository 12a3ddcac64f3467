"""Categorized event log for scan, analysis and deletion activity.

The EventLog is the single logging sink that core components report to.
It is constructed once by the CLI and handed to every collaborator that
needs it. Each event is kept in a bounded in-memory buffer (newest last),
forwarded to the standard library logger for its category, and can be
exported as plain text.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

DEFAULT_MAX_EVENTS = 500


class EventLevel(str, Enum):
    """Severity of a logged event.

    SUCCESS is an INFO-severity event that marks a completed operation.
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


class EventCategory(str, Enum):
    """Subsystem that emitted an event."""

    SCANNING = "Scanning"
    AI = "AI Analysis"
    DELETION = "Deletion"
    SYSTEM = "System"
    GENERAL = "General"


_STDLIB_LEVELS: dict[EventLevel, int] = {
    EventLevel.DEBUG: logging.DEBUG,
    EventLevel.INFO: logging.INFO,
    EventLevel.SUCCESS: logging.INFO,
    EventLevel.WARNING: logging.WARNING,
    EventLevel.ERROR: logging.ERROR,
}

_LOGGER_NAMES: dict[EventCategory, str] = {
    EventCategory.SCANNING: "debris.scanning",
    EventCategory.AI: "debris.ai",
    EventCategory.DELETION: "debris.deletion",
    EventCategory.SYSTEM: "debris.system",
    EventCategory.GENERAL: "debris.general",
}


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single recorded event.

    Attributes:
        timestamp: Local time the event was recorded.
        level: Event severity.
        category: Emitting subsystem.
        message: Human-readable description.
    """

    timestamp: datetime
    level: EventLevel
    category: EventCategory
    message: str

    def format(self) -> str:
        """Render the entry as a single export line."""
        return (
            f"[{self.timestamp.strftime('%H:%M:%S')}] "
            f"[{self.level.value}] [{self.category.value}] {self.message}"
        )


class EventLog:
    """Bounded, thread-safe event sink.

    Walker threads and the progressive analysis thread may log at the
    same time as the coordinating thread, so appends are serialized.

    Args:
        max_events: Number of most recent events kept in memory.
    """

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS) -> None:
        if max_events < 1:
            msg = f"max_events must be positive, got {max_events}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def log(
        self,
        message: str,
        level: EventLevel = EventLevel.INFO,
        category: EventCategory = EventCategory.GENERAL,
    ) -> LogEntry:
        """Record an event and forward it to the standard logging tree."""
        entry = LogEntry(
            timestamp=datetime.now(),
            level=level,
            category=category,
            message=message,
        )
        with self._lock:
            self._entries.append(entry)

        logger = logging.getLogger(_LOGGER_NAMES[category])
        if level == EventLevel.SUCCESS:
            logger.log(_STDLIB_LEVELS[level], "%s (success)", message)
        else:
            logger.log(_STDLIB_LEVELS[level], "%s", message)
        return entry

    def debug(self, message: str, category: EventCategory = EventCategory.GENERAL) -> None:
        self.log(message, EventLevel.DEBUG, category)

    def info(self, message: str, category: EventCategory = EventCategory.GENERAL) -> None:
        self.log(message, EventLevel.INFO, category)

    def success(self, message: str, category: EventCategory = EventCategory.GENERAL) -> None:
        self.log(message, EventLevel.SUCCESS, category)

    def warning(self, message: str, category: EventCategory = EventCategory.GENERAL) -> None:
        self.log(message, EventLevel.WARNING, category)

    def error(self, message: str, category: EventCategory = EventCategory.GENERAL) -> None:
        self.log(message, EventLevel.ERROR, category)

    @property
    def entries(self) -> list[LogEntry]:
        """Recorded events, oldest first."""
        with self._lock:
            return list(self._entries)

    def filter(
        self,
        *,
        level: EventLevel | None = None,
        category: EventCategory | None = None,
    ) -> list[LogEntry]:
        """Return recorded events matching the given level and/or category."""
        return [
            e
            for e in self.entries
            if (level is None or e.level == level)
            and (category is None or e.category == category)
        ]

    def clear(self) -> None:
        """Drop all recorded events."""
        with self._lock:
            self._entries.clear()

    def export(self) -> str:
        """Render all recorded events, oldest first, one per line."""
        return "\n".join(entry.format() for entry in self.entries)

    def export_to(self, path: Path) -> Path:
        """Write the exported log to a file.

        Raises:
            OSError: If the file cannot be written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.export() + "\n", encoding="utf-8")
        return path
