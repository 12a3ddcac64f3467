"""XDG-compliant path management for debris.

This module provides standardized paths following the XDG base directory layout
for configuration, state and trash storage.

XDG defaults:
- Config: ~/.config/debris/
- State: ~/.local/state/debris/
- Trash: ~/.local/share/Trash/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "debris"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the XDG base directory (without the application suffix).
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/debris/ (or XDG_CONFIG_HOME/debris/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the persisted scan snapshot, which should survive
    between runs but is not configuration.

    Returns:
        Path to ~/.local/state/debris/ (or XDG_STATE_HOME/debris/).
    """
    return _get_xdg_base("XDG_STATE_HOME", ".local/state") / APP_NAME


def get_config_path() -> Path:
    """Get the main configuration file path.

    Returns:
        Path to ~/.config/debris/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/debris/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_snapshot_path() -> Path:
    """Get the scan snapshot file path.

    Returns:
        Path to ~/.local/state/debris/scan-data.json.
    """
    return get_state_dir() / "scan-data.json"


def get_trash_dir() -> Path:
    """Get the user's FreeDesktop trash directory.

    Returns:
        Path to ~/.local/share/Trash (or XDG_DATA_HOME/Trash).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share") / "Trash"
