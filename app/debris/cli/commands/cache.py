"""Cache commands.

Inspect or remove the stored scan snapshot.
"""

import typer

from debris.cli.types import get_app_context
from debris.core.store import describe_age
from debris.utils.formatting import console, format_size, print_info, print_success

app = typer.Typer(
    help="Inspect or clear the stored scan snapshot.",
    no_args_is_help=True,
)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show where the snapshot lives and what it contains."""
    app_ctx = get_app_context(ctx)
    store = app_ctx.store

    console.print(f"[header]Snapshot:[/] {store.path}")
    snapshot = store.load()
    if snapshot is None:
        print_info("No saved scan.")
        return

    console.print(f"[header]Taken:[/] {describe_age(snapshot.taken_at)}")
    console.print(f"[header]Items:[/] {len(snapshot.entries)}")
    console.print(f"[header]Patterns:[/] {len(snapshot.patterns)}")
    console.print(f"[header]Total size:[/] [size]{format_size(snapshot.total_size)}[/]")


@app.command()
def clear(ctx: typer.Context) -> None:
    """Remove the stored snapshot."""
    app_ctx = get_app_context(ctx)
    app_ctx.store.clear()
    print_success("Saved scan cleared.")
