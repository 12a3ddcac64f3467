"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from debris.core.theme import get_theme

if TYPE_CHECKING:
    from debris.analysis.models import Pattern


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_SAFETY_STYLES = {
    "High": "safety_high",
    "Medium": "safety_medium",
    "Low": "safety_low",
}


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def create_pattern_table(title: str = "Disposable Patterns") -> Table:
    """Create a pre-configured table for displaying patterns.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for pattern display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Pattern", no_wrap=True, style="text")
    table.add_column("Items", justify="right")
    table.add_column("Size", style="size", justify="right")
    table.add_column("Safety", width=8)
    table.add_column("Reason", style="muted", overflow="ellipsis")
    return table


def format_pattern_row(pattern: Pattern) -> tuple[str, str, str, str, str]:
    """Format a pattern as a table row with safety coloring.

    Returns:
        Tuple of (name, items, size, safety, reason) with Rich markup.
    """
    tier = pattern.safety_tier.value
    style = _SAFETY_STYLES.get(tier, "text")
    return (
        pattern.name,
        str(pattern.item_count),
        format_size(pattern.total_size_bytes),
        f"[{style}]{tier}[/]",
        pattern.rationale,
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
