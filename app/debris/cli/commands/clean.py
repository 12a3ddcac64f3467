"""Clean command implementation.

Moves every member of the named patterns to the trash, then reclassifies
what is left and stores it as the new snapshot.
"""

from typing import Annotated

import typer
from rich.table import Table

from debris.analysis.models import Pattern
from debris.cli.types import get_app_context
from debris.filesystem.operator import DeletionSummary, TrashOperator
from debris.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def clean(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="Pattern names to clean, as shown by 'debris patterns'."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be moved to the trash."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Move the members of the named patterns to the trash.

    Examples:
        debris clean node_modules                 # Trash all node_modules dirs
        debris clean "*.log files" --dry-run      # Preview only
        debris clean build dist -y                # Skip confirmation
    """
    app_ctx = get_app_context(ctx)
    snapshot = app_ctx.store.load()
    if snapshot is None:
        print_error("No saved scan. Run 'debris scan' first.")
        raise typer.Exit(code=1)

    selected = snapshot.find_patterns(names)
    known = {p.name for p in selected}
    for name in names:
        if name not in known:
            print_warning(f"Unknown pattern: {name}")

    if not selected:
        print_error("None of the given patterns exist in the saved scan.")
        raise typer.Exit(code=1)

    _print_deletion_plan(selected, dry_run)

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        total = sum(p.item_count for p in selected)
        confirmed = typer.confirm(
            f"\nMove {total} item(s) to the trash?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = TrashOperator(app_ctx.events, dry_run=dry_run)
    summaries = [operator.delete_pattern(p) for p in selected]

    _print_deletion_results(summaries)

    if not dry_run:
        trashed = [path for s in summaries for path in s.succeeded_paths]
        if trashed:
            app_ctx.pipeline().apply_deletions(snapshot, trashed)
            print_info("Saved scan updated.")

    # Exit with error if any deletion failed
    if any(s.fail_count for s in summaries):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_deletion_plan(patterns: list[Pattern], dry_run: bool) -> None:
    """Display the patterns about to be cleaned."""
    title = "Planned Cleanup (Dry Run)" if dry_run else "Planned Cleanup"
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Pattern", style="text")
    table.add_column("Items", justify="right")
    table.add_column("Size", style="size", justify="right")

    for p in patterns:
        table.add_row(p.name, str(p.item_count), format_size(p.total_size_bytes))

    console.print(table)


def _print_deletion_results(summaries: list[DeletionSummary]) -> None:
    """Display per-pattern outcomes and any failed paths."""
    for summary in summaries:
        dry = any(r.dry_run for r in summary.results)
        verb = "Would trash" if dry else "Trashed"
        if summary.fail_count:
            print_warning(
                f"{summary.pattern_name}: {verb.lower()} {summary.success_count}, "
                f"{summary.fail_count} failed"
            )
            for result in summary.results:
                if not result.success:
                    console.print(f"  [error]FAIL[/] {result.path}: {result.error}")
        else:
            print_success(f"{summary.pattern_name}: {verb.lower()} {summary.success_count} item(s)")
