"""Scan command implementation.

Walks the configured roots, groups what was found into patterns, and
stores the result as the current snapshot.
"""

import json
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from debris.analysis.models import Pattern
from debris.cli.types import OutputFormat, get_app_context
from debris.core.pipeline import ScanPipeline
from debris.models.snapshot import ScanSnapshot
from debris.utils.formatting import (
    console,
    create_pattern_table,
    err_console,
    format_pattern_row,
    format_size,
    print_info,
    print_warning,
)


def scan(
    ctx: typer.Context,
    roots: Annotated[
        list[str] | None,
        typer.Option(
            "--root",
            "-r",
            help="Directory to scan (repeatable). Overrides configured roots.",
        ),
    ] = None,
    no_save: Annotated[
        bool,
        typer.Option(
            "--no-save",
            help="Do not replace the stored snapshot.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of patterns to display.",
        ),
    ] = None,
) -> None:
    """Scan for disposable files and group them into patterns.

    Press Ctrl+C once to stop after the directory being scanned.

    Examples:
        debris scan                         # Scan configured directories
        debris scan --root ~/Projects       # Scan one directory
        debris scan --format json           # Output patterns as JSON
        debris scan --no-save --limit 5     # Preview the five largest patterns
    """
    app_ctx = get_app_context(ctx)
    config = app_ctx.config
    if roots:
        config = config.model_copy(update={"roots": list(roots)})

    pipeline = app_ctx.pipeline(config)
    show_progress = output_format == OutputFormat.TABLE

    with _cancel_on_interrupt(pipeline):
        if show_progress:
            snapshot = _run_with_progress(pipeline, save=not no_save)
        else:
            snapshot = pipeline.run(save=not no_save)

    if snapshot is None:
        print_warning("No disposable files found.")
        return

    patterns = list(snapshot.patterns)
    display = patterns[:limit] if limit else patterns

    # JSON output
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([p.to_dict() for p in display]))
        return

    # Table output (default)
    table = create_pattern_table()
    for pattern in display:
        table.add_row(*format_pattern_row(pattern))
    console.print(table)

    console.print(
        f"\n[muted]Found {len(snapshot.entries)} items in {len(patterns)} patterns "
        f"({format_size(snapshot.total_size)} total)[/]"
    )
    if limit and len(display) < len(patterns):
        console.print(f"[muted](showing {len(display)} of {len(patterns)}, limited to {limit})[/]")
    if no_save:
        print_info("Snapshot not saved (--no-save).")


def _run_with_progress(pipeline: ScanPipeline, save: bool) -> ScanSnapshot | None:
    """Run the pipeline while rendering a progress bar on stderr."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning", total=1.0)

        def on_progress(root: str, fraction: float) -> None:
            progress.update(task, completed=fraction, description=f"Scanned {root}")

        def on_interim(patterns: list[Pattern]) -> None:
            size = format_size(sum(p.total_size_bytes for p in patterns))
            progress.update(task, description=f"Scanning: {len(patterns)} patterns, {size}")

        return pipeline.run(on_interim=on_interim, on_progress=on_progress, save=save)


@contextmanager
def _cancel_on_interrupt(pipeline: ScanPipeline) -> Iterator[None]:
    """Turn the first Ctrl+C into a cancellation request."""

    def _handler(signum: int, frame: object) -> None:
        print_warning("Cancelling after the current directory...")
        pipeline.cancel()
        # A second Ctrl+C aborts immediately
        signal.signal(signal.SIGINT, previous)

    previous = signal.getsignal(signal.SIGINT)
    signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)
