"""Data models for debris.

This module exports the persisted snapshot structure.
"""

from debris.models.snapshot import ScanSnapshot

__all__ = ["ScanSnapshot"]
