"""Path exclusion policy for scanning.

This module decides which paths are never traversed (system and OS
support directories) and turns configured scan roots into a clean list
of absolute paths. All checks are string comparisons; nothing here
touches the filesystem.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Path prefixes excluded from scanning.
# Prefixes starting with ~ are expanded to the user's home directory
# before matching. A path is excluded if it equals a prefix or lies
# beneath it.
EXCLUDED_PATH_PREFIXES: list[str] = [
    # System binaries and libraries
    "/bin",
    "/sbin",
    "/usr",
    "/lib",
    "/lib32",
    "/lib64",
    "/opt/homebrew",
    # Kernel and device pseudo filesystems
    "/dev",
    "/proc",
    "/sys",
    "/run",
    # macOS system areas and application bundles
    "/System",
    "/Library/System",
    "/private",
    "/Applications",
    # OS preference and application support directories
    "~/Library/Application Support",
    "~/Library/Preferences",
    "~/.ssh",
    "~/.gnupg",
    "~/.local/share/Trash",
]


def _expand(prefix: str) -> str:
    """Expand a leading ~ to the home directory."""
    if prefix.startswith("~"):
        return str(Path.home()) + prefix[1:]
    return prefix


def is_excluded(path: str) -> bool:
    """Check if a path lies under an excluded system or OS directory.

    Comparison is on path component boundaries, so ``/usr`` excludes
    ``/usr/lib`` but not ``/usrdata``. Non-existent paths are evaluated
    the same way as existing ones.

    Args:
        path: Absolute filesystem path to check.

    Returns:
        True if the path matches an excluded prefix, False otherwise.
    """
    normalized = path.rstrip("/") or "/"

    for prefix in EXCLUDED_PATH_PREFIXES:
        expanded = _expand(prefix)
        if normalized == expanded or normalized.startswith(expanded + "/"):
            return True

    return False


def is_hidden(name: str) -> bool:
    """Check if a path component is a hidden (dot) entry."""
    return name.startswith(".")


def expand_roots(roots: Iterable[str]) -> list[str]:
    """Expand and validate configured scan roots.

    Expands ``~``, makes every root absolute, and drops excluded roots and
    duplicates while keeping the configured order. Roots that do not exist
    are kept; the walker reports them as missing.

    Args:
        roots: Root directories as configured (may use ``~``).

    Returns:
        Absolute root paths, in configured order.
    """
    result: list[str] = []
    seen: set[str] = set()

    for root in roots:
        if not root or not root.strip():
            continue
        absolute = os.path.abspath(os.path.expanduser(root.strip()))
        if is_excluded(absolute):
            logger.warning("Skipping excluded scan root: %s", absolute)
            continue
        if absolute in seen:
            continue
        seen.add(absolute)
        result.append(absolute)

    return result
