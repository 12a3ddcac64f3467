"""Patterns command implementation.

Shows the patterns of the stored snapshot without scanning again.
"""

import json
from typing import Annotated

import typer

from debris.cli.types import OutputFormat, get_app_context
from debris.core.store import describe_age
from debris.utils.formatting import (
    console,
    create_pattern_table,
    format_pattern_row,
    format_size,
    print_info,
)


def patterns(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the patterns from the last saved scan."""
    app_ctx = get_app_context(ctx)
    snapshot = app_ctx.store.load()
    if snapshot is None:
        print_info("No saved scan. Run 'debris scan' first.")
        return

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([p.to_dict() for p in snapshot.patterns]))
        return

    table = create_pattern_table(title=f"Disposable Patterns ({describe_age(snapshot.taken_at)})")
    for pattern in snapshot.patterns:
        table.add_row(*format_pattern_row(pattern))
    console.print(table)
    console.print(
        f"\n[muted]{len(snapshot.entries)} items in {len(snapshot.patterns)} patterns "
        f"({format_size(snapshot.total_size)} total)[/]"
    )
