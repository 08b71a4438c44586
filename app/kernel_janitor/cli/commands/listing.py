"""List command implementation.

Lists installed kernels with their discovered artifacts.
"""

import json
from typing import Annotated

import typer

from kernel_janitor.cli.types import OutputFormat, discover_kernels, get_config
from kernel_janitor.core.workflow import get_running_release
from kernel_janitor.kernel.models import InstalledKernel
from kernel_janitor.kernel.selection import number_kernels, parse_running_release
from kernel_janitor.kernel.version import KernelVersion
from kernel_janitor.utils.formatting import (
    console,
    create_kernel_table,
    format_kernel_row,
    print_info,
)

app = typer.Typer(
    help="List installed kernels.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_kernels(
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
    """List installed kernels, oldest first.

    The number in the first column selects a kernel for
    ``kernel-janitor remove``.

    Examples:
        kernel-janitor list                 # Show table
        kernel-janitor list --format json   # Output as JSON
    """
    config = get_config(ctx)
    kernels = discover_kernels(config)

    if not kernels:
        print_info(f"No kernels found in {config.install_path}.")
        return

    running = parse_running_release(get_running_release())

    if output_format == OutputFormat.JSON:
        _print_json(kernels, running)
        return

    table = create_kernel_table()
    for ordinal, kernel in number_kernels(kernels):
        table.add_row(
            *format_kernel_row(
                ordinal,
                kernel,
                newest=ordinal == len(kernels),
                running=_is_running(kernel, running),
            )
        )
    console.print(table)

    incomplete = sum(1 for k in kernels if not k.is_complete())
    summary = f"\n[dim]Found {len(kernels)} kernel(s)"
    if incomplete:
        summary += f", {incomplete} incomplete"
    console.print(summary + "[/dim]")


def _is_running(kernel: InstalledKernel, running: KernelVersion | None) -> bool:
    """Check if a kernel is the booted one (legacy installs share its release)."""
    return running is not None and not kernel.is_legacy and kernel.version == running


def _print_json(kernels: list[InstalledKernel], running: KernelVersion | None) -> None:
    """Display kernels as JSON."""
    data = [
        {
            "ordinal": ordinal,
            "version": kernel.version.render(),
            "legacy": kernel.is_legacy,
            "complete": kernel.is_complete(),
            "newest": ordinal == len(kernels),
            "running": _is_running(kernel, running),
            "image_path": _path_or_none(kernel.image_path),
            "config_path": _path_or_none(kernel.config_path),
            "system_map_path": _path_or_none(kernel.system_map_path),
            "module_path": _path_or_none(kernel.module_path),
            "source_path": _path_or_none(kernel.source_path),
        }
        for ordinal, kernel in number_kernels(kernels)
    ]
    console.print_json(json.dumps(data))


def _path_or_none(path: object) -> str | None:
    return str(path) if path is not None else None
