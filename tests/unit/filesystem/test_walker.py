"""Unit tests for DirectoryWalker."""

import os
from pathlib import Path

from debris.filesystem.models import MatchCriterion
from debris.filesystem.walker import DirectoryWalker


class TestDirectoryWalker:
    """Tests for DirectoryWalker.walk."""

    def test_finds_named_directory_with_aggregate_size(self, project_tree: Path) -> None:
        """A matched directory is one entry sized by its contents."""
        result = DirectoryWalker().walk(str(project_tree), MatchCriterion.name("node_modules"))

        assert result.ok
        assert len(result.entries) == 1
        entry = result.entries[0]
        assert entry.path == str(project_tree / "web" / "node_modules")
        assert entry.is_directory is True
        assert entry.size_bytes == 300
        assert entry.modified_at is not None

    def test_does_not_descend_into_match(self, tmp_path: Path) -> None:
        """Nested matches inside a matched directory are not reported."""
        nested = tmp_path / "node_modules" / "pkg" / "node_modules"
        nested.mkdir(parents=True)
        (nested / "f.js").write_bytes(b"abc")

        result = DirectoryWalker().walk(str(tmp_path), MatchCriterion.name("node_modules"))

        assert [e.path for e in result.entries] == [str(tmp_path / "node_modules")]
        assert result.entries[0].size_bytes == 3

    def test_name_literal_is_substring_match(self, tmp_path: Path) -> None:
        """Name literals match when contained in the entry name."""
        (tmp_path / "build-output").mkdir()
        (tmp_path / "rebuild.txt").write_text("x")

        result = DirectoryWalker().walk(str(tmp_path), MatchCriterion.name("build"))

        assert sorted(e.name for e in result.entries) == ["build-output", "rebuild.txt"]

    def test_extension_match(self, project_tree: Path) -> None:
        """Extension criteria compare the final suffix."""
        result = DirectoryWalker().walk(str(project_tree), MatchCriterion.extension(".log"))

        assert [e.name for e in result.entries] == ["app.log"]
        assert result.entries[0].size_bytes == 50
        assert result.entries[0].is_directory is False

    def test_extension_requires_exact_suffix(self, tmp_path: Path) -> None:
        (tmp_path / "archive.tar.gz").write_text("x")
        (tmp_path / "notes.logbook").write_text("x")

        gz = DirectoryWalker().walk(str(tmp_path), MatchCriterion.extension("gz"))
        log = DirectoryWalker().walk(str(tmp_path), MatchCriterion.extension("log"))

        assert [e.name for e in gz.entries] == ["archive.tar.gz"]
        assert log.entries == ()

    def test_hidden_entries_skipped(self, project_tree: Path) -> None:
        """Hidden directories are neither matched nor descended into."""
        result = DirectoryWalker().walk(str(project_tree), MatchCriterion.extension(".log"))

        assert all(".cache-dir" not in e.path for e in result.entries)

    def test_hidden_files_not_counted_in_size(self, tmp_path: Path) -> None:
        target = tmp_path / "dist"
        target.mkdir()
        (target / "bundle.js").write_bytes(b"x" * 10)
        (target / ".map").write_bytes(b"x" * 99)

        result = DirectoryWalker().walk(str(tmp_path), MatchCriterion.name("dist"))

        assert result.entries[0].size_bytes == 10

    def test_symlinks_not_followed(self, tmp_path: Path) -> None:
        """A symlinked directory is not traversed."""
        outside = tmp_path / "outside"
        (outside / "node_modules").mkdir(parents=True)
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)

        result = DirectoryWalker().walk(str(root), MatchCriterion.name("node_modules"))

        assert result.entries == ()

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root is flagged, not raised."""
        result = DirectoryWalker().walk(str(tmp_path / "nope"), MatchCriterion.name("build"))

        assert result.root_missing is True
        assert result.ok is False
        assert result.entries == ()

    def test_root_is_file(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")

        result = DirectoryWalker().walk(str(target), MatchCriterion.name("build"))

        assert result.root_missing is False
        assert result.error == "Not a directory"

    def test_unreadable_subdirectory_skipped(self, tmp_path: Path) -> None:
        """Unreadable directories below the root are skipped silently."""
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "build").mkdir()
        (tmp_path / "build").mkdir()
        os.chmod(locked, 0)
        try:
            result = DirectoryWalker().walk(str(tmp_path), MatchCriterion.name("build"))
        finally:
            os.chmod(locked, 0o755)

        assert result.ok
        assert str(tmp_path / "build") in [e.path for e in result.entries]


class TestDirectorySize:
    """Tests for DirectoryWalker.directory_size."""

    def test_sums_nested_files(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "one").write_bytes(b"x" * 7)
        (tmp_path / "two").write_bytes(b"x" * 3)

        assert DirectoryWalker.directory_size(str(tmp_path)) == 10

    def test_missing_directory_is_zero(self, tmp_path: Path) -> None:
        assert DirectoryWalker.directory_size(str(tmp_path / "nope")) == 0
