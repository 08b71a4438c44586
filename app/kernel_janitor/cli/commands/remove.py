"""Remove command implementation.

Removes kernels selected by their number in ``kernel-janitor list``.
"""

from typing import Annotated

import typer

from kernel_janitor.cli.types import discover_kernels, get_config, print_removal_results
from kernel_janitor.kernel.errors import IncompleteKernelError, JanitorError, SelectionError
from kernel_janitor.kernel.selection import select_kernels
from kernel_janitor.utils.formatting import print_error, print_info, print_success, print_warning


def remove_kernels(
    ctx: typer.Context,
    ordinals: Annotated[
        list[int],
        typer.Argument(help="Kernel numbers as shown by 'kernel-janitor list'."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove the selected kernels.

    Legacy (.old) kernels only lose their image, config and symbol map;
    their module and source trees belong to the current kernel.

    Examples:
        kernel-janitor remove 1 2 --dry-run
    """
    config = get_config(ctx)
    kernels = discover_kernels(config)

    try:
        selected = select_kernels(kernels, ordinals)
    except SelectionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not dry_run and not yes:
        versions = ", ".join(str(k.version) for k in selected)
        if not typer.confirm(f"Remove kernel(s) {versions}?", default=False):
            print_info("Aborted.")
            raise typer.Exit(code=0)

    removed = 0
    skipped = 0
    for kernel in selected:
        try:
            results = kernel.remove(dry_run=dry_run)
        except IncompleteKernelError as e:
            print_warning(f"{e}; skipping")
            skipped += 1
            continue
        except JanitorError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_removal_results(results)
        removed += 1

    if dry_run:
        print_info(f"Dry-run: {removed} kernel(s) would be removed.")
    elif removed:
        print_success(f"Removed {removed} kernel(s).")

    if skipped:
        raise typer.Exit(code=1)
