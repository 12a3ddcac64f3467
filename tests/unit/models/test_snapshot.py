"""Unit tests for ScanSnapshot."""

import json
from datetime import UTC, datetime

import pytest
from debris.analysis.classifier import PatternClassifier
from debris.analysis.models import Pattern, SafetyTier
from debris.core.events import EventLog
from debris.models.snapshot import ScanSnapshot


@pytest.fixture
def snapshot(events: EventLog, make_entry) -> ScanSnapshot:
    entries = [
        make_entry("/p/node_modules", size=500, is_directory=True),
        make_entry("/p/app.log", size=20),
        make_entry("/p/notes.txt", size=3),
    ]
    patterns = PatternClassifier(events).classify(entries)
    return ScanSnapshot(
        entries=tuple(entries),
        patterns=tuple(patterns),
        taken_at=datetime(2026, 2, 1, 8, 15, 30, tzinfo=UTC),
    )


class TestScanSnapshot:
    """Tests for ScanSnapshot."""

    def test_to_dict_format(self, snapshot: ScanSnapshot) -> None:
        data = snapshot.to_dict()

        assert set(data) == {"files", "patterns", "scanDate"}
        assert data["scanDate"] == "2026-02-01T08:15:30+00:00"
        assert data["files"][0]["isDirectory"] is True
        first = data["patterns"][0]
        assert first["patternName"] == "node_modules"
        assert first["safetyScore"] == "High"
        assert first["paths"] == ["/p/node_modules"]
        assert first["count"] == 1
        assert first["totalSize"] == 500

    def test_round_trip(self, snapshot: ScanSnapshot) -> None:
        """Serializing then deserializing yields an equal snapshot."""
        assert ScanSnapshot.from_json(snapshot.to_json()) == snapshot

    def test_stats_recomputed_on_load(self, snapshot: ScanSnapshot) -> None:
        """Stored count and totalSize are ignored in favor of the entries."""
        data = snapshot.to_dict()
        data["patterns"][0]["count"] = 99
        data["patterns"][0]["totalSize"] = 1

        loaded = ScanSnapshot.from_dict(data)

        assert loaded.patterns[0].item_count == 1
        assert loaded.patterns[0].total_size_bytes == 500

    def test_unknown_member_path_rejected(self, snapshot: ScanSnapshot) -> None:
        data = snapshot.to_dict()
        data["patterns"][0]["paths"].append("/not/scanned")

        with pytest.raises(ValueError, match="unknown path"):
            ScanSnapshot.from_dict(data)

    def test_invalid_safety_rejected(self, snapshot: ScanSnapshot) -> None:
        data = snapshot.to_dict()
        data["patterns"][0]["safetyScore"] = "Extreme"

        with pytest.raises(ValueError):
            ScanSnapshot.from_dict(data)

    def test_naive_timestamp_read_as_utc(self, snapshot: ScanSnapshot) -> None:
        data = snapshot.to_dict()
        data["scanDate"] = "2026-02-01T08:15:30"

        assert ScanSnapshot.from_dict(data).taken_at.tzinfo == UTC

    def test_non_object_document_rejected(self) -> None:
        with pytest.raises(TypeError):
            ScanSnapshot.from_json(json.dumps([1, 2]))

    @pytest.mark.parametrize(
        ("files", "patterns", "message"),
        [
            (["oops"], [], r"'files\[0\]' must be an object"),
            ({"a": 1}, [], "'files' must be a list"),
            ([], [None], r"'patterns\[0\]' must be an object"),
            ([], "node_modules", "'patterns' must be a list"),
        ],
    )
    def test_wrong_container_shapes_rejected(
        self, files: object, patterns: object, message: str
    ) -> None:
        data = {"files": files, "patterns": patterns, "scanDate": "2026-01-01T00:00:00"}
        with pytest.raises(TypeError, match=message):
            ScanSnapshot.from_dict(data)

    def test_duplicate_entries_rejected(self, make_entry) -> None:
        entry = make_entry("/p/a.log")
        with pytest.raises(ValueError, match="duplicate"):
            ScanSnapshot.create([entry, entry], [])

    def test_pattern_referencing_missing_entry_rejected(self, make_entry) -> None:
        pattern = Pattern(
            id="x",
            name="dist",
            member_paths=("/p/dist",),
            safety_tier=SafetyTier.HIGH,
            rationale="r",
            total_size_bytes=0,
        )
        with pytest.raises(ValueError, match="unknown path"):
            ScanSnapshot.create([make_entry("/p/a.log")], [pattern])

    def test_find_patterns_keeps_snapshot_order(self, snapshot: ScanSnapshot) -> None:
        found = snapshot.find_patterns(["Other temporary files", "node_modules", "missing"])
        assert [p.name for p in found] == ["node_modules", "Other temporary files"]

    def test_total_size(self, snapshot: ScanSnapshot) -> None:
        assert snapshot.total_size == 523
