"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

from debris.core.paths import (
    APP_NAME,
    get_config_dir,
    get_config_path,
    get_snapshot_path,
    get_state_dir,
    get_theme_path,
    get_trash_dir,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestGetStateDir:
    """Tests for get_state_dir function."""

    def test_default_state_dir(self) -> None:
        """get_state_dir returns default path when XDG_STATE_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME

    def test_empty_env_var_uses_default(self) -> None:
        """An empty XDG variable is treated as unset."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": ""}):
            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME


class TestFilePaths:
    """Tests for file path helpers."""

    def test_file_locations(self, xdg_dirs: Path) -> None:
        assert get_config_path() == xdg_dirs / "config" / APP_NAME / "config.toml"
        assert get_theme_path() == xdg_dirs / "config" / APP_NAME / "theme.toml"
        assert get_snapshot_path() == xdg_dirs / "state" / APP_NAME / "scan-data.json"
        assert get_trash_dir() == xdg_dirs / "data" / "Trash"
