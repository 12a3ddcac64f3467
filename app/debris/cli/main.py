"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from debris import __version__
from debris.cli.commands import ask, cache, clean, config, patterns, scan
from debris.cli.types import get_events
from debris.utils.formatting import err_console, print_info, print_warning

# Create main Typer app
app = typer.Typer(
    name="debris",
    help="Find and clean disposable build artifacts, caches and logs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"debris version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route standard logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Echo debug events to stderr.",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Export this session's event log to a file on exit.",
        ),
    ] = None,
) -> None:
    """debris - find and clean disposable build artifacts, caches and logs.

    Scan your project and download directories, group what was found into
    patterns with a deletion safety rating, and move chosen patterns to
    the trash.
    """
    _configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    events = get_events(ctx)

    if log_file is not None:

        def _export_log() -> None:
            try:
                path = events.export_to(log_file)
            except OSError as e:
                print_warning(f"Could not write log file: {e}")
                return
            print_info(f"Event log written to {path}")

        ctx.call_on_close(_export_log)


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="patterns")(patterns.patterns)
app.command(name="clean")(clean.clean)
app.command(name="ask")(ask.ask)
app.add_typer(cache.app, name="cache")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
