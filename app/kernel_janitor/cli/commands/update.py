"""Update command implementation.

Builds and installs the newest kernel sources, then prunes old kernels.
"""

from typing import Annotated

import typer

from kernel_janitor.cli.types import get_config, print_removal_results
from kernel_janitor.core.workflow import UpdateReport, run_update
from kernel_janitor.kernel.errors import JanitorError
from kernel_janitor.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Build, install and clean up the newest kernel.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def update_kernel(
    ctx: typer.Context,
    manual_edit: Annotated[
        bool,
        typer.Option(
            "--manual-edit",
            "-m",
            help="Edit the kernel configuration (make menuconfig) before building.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be run and deleted."),
    ] = False,
    no_clean: Annotated[
        bool,
        typer.Option("--no-clean", help="Keep old kernels after installing."),
    ] = False,
) -> None:
    """Build the newest kernel sources and install them.

    Copies the most recent installed config into the newest source tree,
    builds and installs the kernel and its modules, rebuilds out-of-tree
    modules, regenerates the GRUB config and removes old kernels.

    Examples:
        kernel-janitor update --dry-run     # Show every step
        kernel-janitor update -m            # Edit config before building
    """
    config = get_config(ctx)

    try:
        report = run_update(config, manual_edit=manual_edit, dry_run=dry_run, clean=not no_clean)
    except JanitorError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_report(report, dry_run)


def _print_report(report: UpdateReport, dry_run: bool) -> None:
    """Display the steps an update ran."""
    verb = "Would run" if dry_run else "Ran"
    console.print(f"[bold_header]Kernel {report.kernel.version}[/]")
    print_info(f"{'Would copy' if dry_run else 'Copied'} config to {report.config_destination}")
    for step in report.steps:
        cwd = f" [dim](in {step.cwd})[/dim]" if step.cwd else ""
        console.print(f"[muted]{verb}[/] {step}{cwd}")

    if report.cleanup is not None:
        for kernel in report.cleanup.skipped:
            print_info(f"Kept incomplete kernel {kernel.version}")
        print_removal_results(report.removals)

    if dry_run:
        print_info("Dry-run: nothing was changed.")
    else:
        print_success(f"Kernel {report.kernel.version} installed.")
