"""Configuration commands.

Show the effective configuration or write a default config file.
"""

from typing import Annotated

import tomli_w
import typer

from debris.core.config import ConfigError, DebrisConfig, load_config_or_default, save_config
from debris.core.paths import get_config_path
from debris.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the configuration file.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Print the effective configuration as TOML."""
    path = get_config_path()
    try:
        config = load_config_or_default(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if path.exists():
        print_info(f"Loaded from {path}")
    else:
        print_info(f"No config file at {path}; showing defaults.")

    data = config.model_dump(mode="json", exclude_none=True)
    console.print(tomli_w.dumps(data), markup=False, highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(DebrisConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Created default configuration at {saved}")
