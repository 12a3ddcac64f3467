"""Unit tests for the categorized event log."""

import logging
from pathlib import Path

import pytest
from debris.core.events import EventCategory, EventLevel, EventLog


class TestEventLog:
    """Tests for EventLog."""

    def test_records_in_order(self, events: EventLog) -> None:
        events.info("first", EventCategory.SCANNING)
        events.error("second", EventCategory.DELETION)

        assert [e.message for e in events.entries] == ["first", "second"]
        assert events.entries[1].level == EventLevel.ERROR
        assert events.entries[1].category == EventCategory.DELETION

    def test_default_category_is_general(self, events: EventLog) -> None:
        events.warning("careful")
        assert events.entries[0].category == EventCategory.GENERAL

    def test_bounded_buffer_keeps_newest(self) -> None:
        log = EventLog(max_events=3)
        for i in range(5):
            log.info(f"event {i}")

        assert [e.message for e in log.entries] == ["event 2", "event 3", "event 4"]

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            EventLog(max_events=0)

    def test_filter(self, events: EventLog) -> None:
        events.info("a", EventCategory.SCANNING)
        events.success("b", EventCategory.SCANNING)
        events.success("c", EventCategory.AI)

        assert [e.message for e in events.filter(level=EventLevel.SUCCESS)] == ["b", "c"]
        assert [e.message for e in events.filter(category=EventCategory.SCANNING)] == ["a", "b"]
        assert [
            e.message
            for e in events.filter(level=EventLevel.SUCCESS, category=EventCategory.AI)
        ] == ["c"]

    def test_clear(self, events: EventLog) -> None:
        events.info("x")
        events.clear()
        assert events.entries == []

    def test_export_format(self, events: EventLog) -> None:
        entry = events.log("Scan complete", EventLevel.SUCCESS, EventCategory.AI)

        line = events.export()

        stamp = entry.timestamp.strftime("%H:%M:%S")
        assert line == f"[{stamp}] [SUCCESS] [AI Analysis] Scan complete"

    def test_export_to_file(self, events: EventLog, tmp_path: Path) -> None:
        events.info("one")
        events.info("two")

        path = events.export_to(tmp_path / "logs" / "session.log")

        assert path.read_text().splitlines()[1].endswith("[INFO] [General] two")

    def test_forwards_to_stdlib_logging(
        self, events: EventLog, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="debris"):
            events.warning("disk almost full", EventCategory.SYSTEM)
            events.success("done", EventCategory.SCANNING)

        records = [(r.name, r.levelno, r.getMessage()) for r in caplog.records]
        assert ("debris.system", logging.WARNING, "disk almost full") in records
        assert ("debris.scanning", logging.INFO, "done (success)") in records
