"""Filesystem discovery and cleanup module.

This module provides the exclusion policy, directory walking, scan
coordination across roots, and trash-based deletion of discovered entries.
"""

from debris.filesystem.coordinator import ScanCoordinator, ScanOutcome, ScanState
from debris.filesystem.models import CriterionKind, DiscoveredEntry, MatchCriterion, WalkResult
from debris.filesystem.operator import DeletionSummary, TrashOperator, TrashResult
from debris.filesystem.policy import EXCLUDED_PATH_PREFIXES, expand_roots, is_excluded
from debris.filesystem.walker import DirectoryWalker

__all__ = [
    "EXCLUDED_PATH_PREFIXES",
    "CriterionKind",
    "DeletionSummary",
    "DirectoryWalker",
    "DiscoveredEntry",
    "MatchCriterion",
    "ScanCoordinator",
    "ScanOutcome",
    "ScanState",
    "TrashOperator",
    "TrashResult",
    "WalkResult",
    "expand_roots",
    "is_excluded",
]
