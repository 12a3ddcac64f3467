"""Rule tables for pattern grouping and safety inference.

Order matters: the classifier assigns an entry to the first literal in
COMMON_TEMP_PATTERNS contained in its name, then to the first suffix in
FILE_EXTENSIONS, then to OTHER_GROUP_NAME.
"""

from debris.analysis.models import SafetyTier

# Directory and file names that mark disposable artifacts.
COMMON_TEMP_PATTERNS: tuple[str, ...] = (
    "node_modules",
    "build",
    ".gradle",
    "target",
    "dist",
    ".next",
    ".nuxt",
    "vendor",
    "__pycache__",
    ".pytest_cache",
    "Pods",
    "DerivedData",
    ".DS_Store",
)

# File extensions that mark disposable files.
FILE_EXTENSIONS: tuple[str, ...] = (
    ".log",
    ".tmp",
    ".cache",
    ".zip",
    ".tar",
    ".gz",
)

# Default scan roots (tilde-expanded at scan time).
DEFAULT_ROOTS: tuple[str, ...] = (
    "~/Documents",
    "~/Downloads",
    "~/Desktop",
    "~/Library/Caches",
    "~/Library/Logs",
)

OTHER_GROUP_NAME = "Other temporary files"

# Dependency and build output directories, regenerated by a build.
HIGH_SAFETY_PATTERNS: tuple[str, ...] = (
    "node_modules",
    "build",
    ".gradle",
    "target",
    "dist",
    "__pycache__",
    "Pods",
    "DerivedData",
)

# Logs, temp and cache files, OS metadata.
MEDIUM_SAFETY_PATTERNS: tuple[str, ...] = (
    ".log",
    ".tmp",
    ".cache",
    ".DS_Store",
)

SAFETY_REASONS: dict[SafetyTier, str] = {
    SafetyTier.HIGH: "Build artifacts or dependencies that can be regenerated",
    SafetyTier.MEDIUM: "Temporary files that are typically safe to remove",
    SafetyTier.LOW: "Review carefully before deletion",
}


def extension_group_name(extension: str) -> str:
    """Return the group label for an extension, e.g. ``"*.log files"``."""
    return f"*{extension} files"


def safety_for(group_name: str) -> SafetyTier:
    """Derive the safety tier of a group from its name."""
    if any(literal in group_name for literal in HIGH_SAFETY_PATTERNS):
        return SafetyTier.HIGH
    if any(literal in group_name for literal in MEDIUM_SAFETY_PATTERNS):
        return SafetyTier.MEDIUM
    return SafetyTier.LOW


def reason_for(tier: SafetyTier) -> str:
    """Return the fixed rationale string for a safety tier."""
    return SAFETY_REASONS[tier]
