"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from kernel_janitor.core.theme import get_theme

if TYPE_CHECKING:
    from pathlib import Path

    from kernel_janitor.kernel.models import InstalledKernel


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


def create_kernel_table(title: str = "Installed Kernels") -> Table:
    """Create a pre-configured table for displaying kernels.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for kernel display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("#", justify="right", style="muted")
    table.add_column("Version", no_wrap=True)
    table.add_column("Status")
    table.add_column("Image", style="text", overflow="fold")
    table.add_column("Config", style="text", overflow="fold")
    table.add_column("System.map", style="text", overflow="fold")
    table.add_column("Modules", style="text", overflow="fold")
    table.add_column("Sources", style="text", overflow="fold")
    return table


def format_kernel_status(kernel: InstalledKernel, *, newest: bool, running: bool) -> str:
    """Format the status tags of a kernel with color markup.

    Args:
        kernel: The installed kernel.
        newest: Whether this is the newest installed kernel.
        running: Whether this is the booted kernel.

    Returns:
        Comma separated Rich markup tags, or a muted dash.
    """
    tags: list[str] = []
    if newest:
        tags.append("[kernel_newest]newest[/]")
    if running:
        tags.append("[kernel_running]running[/]")
    if kernel.is_legacy:
        tags.append("[kernel_legacy]legacy[/]")
    if not kernel.is_complete():
        tags.append("[kernel_incomplete]incomplete[/]")
    return ", ".join(tags) if tags else "[muted]-[/]"


def format_kernel_row(
    ordinal: int,
    kernel: InstalledKernel,
    *,
    newest: bool = False,
    running: bool = False,
) -> tuple[str, ...]:
    """Format a kernel as a table row with proper styling.

    Args:
        ordinal: 1-based position in the sorted kernel list.
        kernel: The installed kernel to format.
        newest: Whether this is the newest installed kernel.
        running: Whether this is the booted kernel.

    Returns:
        Tuple of cells matching create_kernel_table's columns.
    """
    if newest:
        version = f"[kernel_newest]{kernel.version}[/]"
    elif kernel.is_legacy:
        version = f"[kernel_legacy]{kernel.version}[/]"
    else:
        version = f"[text]{kernel.version}[/]"

    return (
        str(ordinal),
        version,
        format_kernel_status(kernel, newest=newest, running=running),
        _format_path(kernel.image_path),
        _format_path(kernel.config_path),
        _format_path(kernel.system_map_path),
        _format_path(kernel.module_path),
        _format_path(kernel.source_path),
    )


def _format_path(path: Path | None) -> str:
    """Format an optional path, marking missing ones."""
    if path is None:
        return "[kernel_incomplete]missing[/]"
    return str(path)


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
