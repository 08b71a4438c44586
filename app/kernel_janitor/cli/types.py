"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from kernel_janitor.core.config import JanitorConfig, require_config
from kernel_janitor.kernel.errors import JanitorError
from kernel_janitor.kernel.models import InstalledKernel
from kernel_janitor.kernel.operator import RemovalResult
from kernel_janitor.kernel.search import KernelSearch
from kernel_janitor.utils.formatting import console, print_error, print_info


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> JanitorConfig:
    """Load the config selected by the global --config option.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    obj = ctx.obj or {}
    config_path: Path | None = obj.get("config_path")
    return require_config(config_path)


def discover_kernels(config: JanitorConfig) -> list[InstalledKernel]:
    """Find installed kernels or exit with an error message.

    Args:
        config: Janitor configuration holding the search paths.

    Returns:
        Installed kernels, oldest first.

    Raises:
        typer.Exit: If discovery fails.
    """
    try:
        return KernelSearch(config.search_paths).execute()
    except JanitorError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def print_removal_results(results: list[RemovalResult]) -> None:
    """Print one line per deleted (or planned) path."""
    for result in results:
        if result.dry_run:
            print_info(f"Would delete {result.path}")
        else:
            console.print(f"[success]Deleted[/] {result.path}")
