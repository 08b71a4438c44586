"""Config commands.

Shows the effective configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from kernel_janitor.cli.types import get_config
from kernel_janitor.core.config import (
    ConfigError,
    JanitorConfig,
    config_to_dict,
    find_config_path,
    save_config,
)
from kernel_janitor.core.paths import CONFIG_FILE_NAME
from kernel_janitor.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as TOML."""
    config = get_config(ctx)

    source = (ctx.obj or {}).get("config_path") or find_config_path()
    if source is None:
        print_info("No config file found, showing defaults.")
    else:
        print_info(f"Config: {source}")

    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Option("--path", "-p", help="Where to write the config."),
    ] = Path(CONFIG_FILE_NAME),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(JanitorConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
