"""Clean command implementation.

Removes all but the newest installed kernels.
"""

from typing import Annotated

import typer
from rich.table import Table

from kernel_janitor.cli.types import discover_kernels, get_config, print_removal_results
from kernel_janitor.core.workflow import get_running_release
from kernel_janitor.kernel.errors import JanitorError
from kernel_janitor.kernel.models import InstalledKernel
from kernel_janitor.kernel.selection import CleanupPlan, plan_cleanup
from kernel_janitor.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Remove old kernels.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_kernels(
    ctx: typer.Context,
    keep: Annotated[
        int | None,
        typer.Option(
            "--keep",
            "-k",
            min=1,
            help="Number of newest kernels to keep (default: versions_to_keep from config).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove old kernels, keeping the newest ones and the running kernel.

    Incomplete kernels are never removed.

    Examples:
        kernel-janitor clean --dry-run      # Show what would be removed
        kernel-janitor clean --keep 2 -y    # Keep two kernels, don't ask
    """
    config = get_config(ctx)
    kernels = discover_kernels(config)
    versions_to_keep = keep or config.versions_to_keep

    plan = plan_cleanup(kernels, versions_to_keep, get_running_release())

    for kernel in plan.skipped:
        print_warning(
            f"Skipping incomplete kernel {kernel.version} "
            f"(missing: {', '.join(kernel.missing_fields())})"
        )

    if plan.is_empty:
        print_success(f"Nothing to clean. {len(plan.keep)} kernel(s) kept.")
        return

    _print_plan(plan, dry_run)

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with removing {len(plan.remove)} kernel(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    removed: list[InstalledKernel] = []
    for kernel in plan.remove:
        try:
            results = kernel.remove(dry_run=dry_run)
        except JanitorError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_removal_results(results)
        removed.append(kernel)

    if dry_run:
        print_info(f"Dry-run: {len(removed)} kernel(s) would be removed.")
    else:
        print_success(f"Removed {len(removed)} kernel(s).")


def _print_plan(plan: CleanupPlan, dry_run: bool) -> None:
    """Display which kernels are kept and removed."""
    title = "Cleanup Plan (dry-run)" if dry_run else "Cleanup Plan"
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Version", no_wrap=True)
    table.add_column("Action", width=8)
    table.add_column("Shares trees", style="dim")

    for kernel in plan.keep:
        table.add_row(str(kernel.version), "[success]keep[/]", "")
    for kernel in plan.remove:
        shares = "yes" if kernel.is_legacy else ""
        table.add_row(str(kernel.version), "[warning]remove[/]", shares)

    console.print(table)
