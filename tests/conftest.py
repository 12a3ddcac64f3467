"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from debris.core.events import EventLog
from debris.filesystem.models import DiscoveredEntry

EntryFactory = Callable[..., DiscoveredEntry]


@pytest.fixture
def events() -> EventLog:
    """A fresh event log."""
    return EventLog()


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory for DiscoveredEntry objects with sensible defaults."""

    def _make(
        path: str,
        size: int = 100,
        is_directory: bool = False,
        modified_at: datetime | None = None,
    ) -> DiscoveredEntry:
        return DiscoveredEntry(
            path=path,
            size_bytes=size,
            name=Path(path).name,
            is_directory=is_directory,
            modified_at=modified_at or datetime(2026, 1, 15, 10, 30, tzinfo=UTC),
        )

    return _make


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point all XDG base directories into tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """A small project directory with typical disposable artifacts.

    Layout::

        projects/
            web/node_modules/lodash/index.js   (300 bytes)
            web/app.log                         (50 bytes)
            web/src/main.js                     (20 bytes, not matched)
            web/.cache-dir/hidden.log           (hidden, never scanned)
            py/__pycache__/mod.cpython-312.pyc  (40 bytes)
    """
    root = tmp_path / "projects"
    lodash = root / "web" / "node_modules" / "lodash"
    lodash.mkdir(parents=True)
    (lodash / "index.js").write_bytes(b"x" * 300)
    (root / "web" / "app.log").write_bytes(b"l" * 50)
    (root / "web" / "src").mkdir()
    (root / "web" / "src" / "main.js").write_bytes(b"m" * 20)
    hidden = root / "web" / ".cache-dir"
    hidden.mkdir()
    (hidden / "hidden.log").write_bytes(b"h" * 10)
    pycache = root / "py" / "__pycache__"
    pycache.mkdir(parents=True)
    (pycache / "mod.cpython-312.pyc").write_bytes(b"p" * 40)
    return root
