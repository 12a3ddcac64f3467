"""CLI package for debris.

This package contains the Typer application and all subcommands.
"""

from debris.cli.main import app

__all__ = ["app"]
