"""CLI commands for debris.

This package contains all subcommand implementations.
"""

from debris.cli.commands import ask, cache, clean, config, patterns, scan

__all__ = ["ask", "cache", "clean", "config", "patterns", "scan"]
