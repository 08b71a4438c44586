"""Kernel update workflow.

Sequences the steps of installing the newest kernel sources: copy the
running configuration into the new source tree, build and install the
kernel, rebuild out-of-tree modules, regenerate the bootloader config,
and prune old kernels. Every step honors dry-run mode.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from kernel_janitor.kernel.errors import RemovalError, WorkflowError
from kernel_janitor.kernel.search import KernelSearch
from kernel_janitor.kernel.selection import CleanupPlan, plan_cleanup
from kernel_janitor.utils.shell import (
    command_exists,
    format_command,
    run_command,
    run_interactive,
)

if TYPE_CHECKING:
    from kernel_janitor.core.config import JanitorConfig
    from kernel_janitor.kernel.models import InstalledKernel
    from kernel_janitor.kernel.operator import RemovalResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StepResult:
    """A command run (or planned) by the workflow.

    Attributes:
        command: Command and arguments.
        cwd: Working directory of the command.
        dry_run: Whether the command was only planned.
    """

    command: tuple[str, ...]
    cwd: Path | None = None
    dry_run: bool = False

    def __str__(self) -> str:
        return format_command(self.command)


@dataclass(slots=True)
class UpdateReport:
    """Everything a full update did or planned.

    Attributes:
        kernel: Newest kernel the update was built from.
        config_destination: Where the kernel config was copied to.
        steps: Commands run, in order.
        cleanup: Cleanup plan, or None if cleanup was disabled.
        removals: Deletions performed (or planned) by cleanup.
    """

    kernel: InstalledKernel
    config_destination: Path
    steps: list[StepResult] = field(default_factory=list)
    cleanup: CleanupPlan | None = None
    removals: list[RemovalResult] = field(default_factory=list)


def get_running_release() -> str | None:
    """Get the release of the booted kernel.

    Returns:
        Output of ``uname -r``, or None if it cannot be determined.
    """
    try:
        result = run_command(["uname", "-r"], timeout=10.0)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Cannot determine running kernel: %s", e)
        return None

    if not result.success:
        logger.warning("uname -r failed: %s", result.stderr.strip())
        return None
    return result.stdout.strip() or None


def newest_kernel(kernels: list[InstalledKernel]) -> InstalledKernel:
    """Return the newest installed kernel.

    Args:
        kernels: Installed kernels, oldest first.

    Returns:
        The last kernel of the list.

    Raises:
        WorkflowError: If no kernels are installed.
    """
    if not kernels:
        raise WorkflowError("No installed kernels found")

    newest = kernels[-1]
    if not newest.is_complete():
        logger.warning(
            "Newest kernel %s is incomplete (missing: %s)",
            newest.version,
            ", ".join(newest.missing_fields()),
        )
    return newest


def copy_config(kernels: list[InstalledKernel], *, dry_run: bool = False) -> Path:
    """Copy the most recent installed kernel config into the newest sources.

    Freshly unpacked sources have no installed config of their own, so
    the config of the newest kernel that has one is used.

    Args:
        kernels: Installed kernels, oldest first.
        dry_run: If True, only report the copy.

    Returns:
        Destination ``.config`` path inside the newest source tree.

    Raises:
        WorkflowError: If there are no sources or no config to copy.
    """
    newest = newest_kernel(kernels)
    if newest.source_path is None:
        msg = f"Could not find a source directory for kernel version {newest.version}"
        raise WorkflowError(msg)

    donor = next((k for k in reversed(kernels) if k.config_path is not None), None)
    if donor is None or donor.config_path is None:
        msg = f"Could not find an installed config for kernel version {newest.version}"
        raise WorkflowError(msg)
    if donor is not newest:
        logger.info("Using config of kernel %s for kernel %s", donor.version, newest.version)

    destination = newest.source_path / ".config"
    if dry_run:
        logger.info("Dry-run: would copy %s to %s", donor.config_path, destination)
        return destination

    try:
        shutil.copy2(donor.config_path, destination)
    except OSError as e:
        raise WorkflowError(f"Failed to copy {donor.config_path} to {destination}: {e}") from e

    logger.debug("Copied %s to %s", donor.config_path, destination)
    return destination


def _run_step(
    command: list[str],
    *,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
    dry_run: bool = False,
) -> StepResult:
    """Run one workflow command, failing the workflow on a non-zero exit."""
    step = StepResult(command=tuple(command), cwd=cwd, dry_run=dry_run)
    if dry_run:
        logger.info("Dry-run: would run %s", step)
        return step

    if not command_exists(command[0]):
        raise WorkflowError(f"Command not found: {command[0]}")

    try:
        returncode = run_interactive(command, cwd=str(cwd) if cwd else None, env=env)
    except OSError as e:
        raise WorkflowError(f"Cannot run {step}: {e}") from e

    if returncode != 0:
        raise WorkflowError(f"{step} failed with exit code {returncode}")
    return step


def build_kernel(
    source_path: Path,
    install_path: Path,
    *,
    jobs: int,
    manual_edit: bool = False,
    dry_run: bool = False,
) -> list[StepResult]:
    """Configure, build and install the kernel in a source tree.

    Args:
        source_path: Kernel source tree to build.
        install_path: Directory ``make install`` installs into.
        jobs: Number of parallel make jobs.
        manual_edit: Open ``make menuconfig`` instead of ``make oldconfig``.
        dry_run: If True, only report the commands.

    Returns:
        The commands run, in order.

    Raises:
        WorkflowError: If any build step fails.
    """
    configure = "menuconfig" if manual_edit else "oldconfig"
    install_env = {"INSTALL_PATH": str(install_path)}

    return [
        _run_step(["make", configure], cwd=source_path, dry_run=dry_run),
        _run_step(["make", f"-j{jobs}"], cwd=source_path, dry_run=dry_run),
        _run_step(["make", "modules_install"], cwd=source_path, dry_run=dry_run),
        _run_step(["make", "install"], cwd=source_path, env=install_env, dry_run=dry_run),
    ]


def rebuild_modules(*, dry_run: bool = False) -> StepResult:
    """Rebuild out-of-tree kernel modules against the new kernel."""
    return _run_step(["emerge", "@module-rebuild"], dry_run=dry_run)


def regenerate_grub_config(grub_config_path: Path, *, dry_run: bool = False) -> StepResult:
    """Regenerate the GRUB config so it lists the installed kernels."""
    return _run_step(["grub-mkconfig", "-o", str(grub_config_path)], dry_run=dry_run)


def cleanup_kernels(
    kernels: list[InstalledKernel],
    versions_to_keep: int,
    *,
    running_release: str | None = None,
    dry_run: bool = False,
) -> tuple[CleanupPlan, list[RemovalResult]]:
    """Remove all but the newest kernels.

    Removal stops at the first failure.

    Args:
        kernels: Installed kernels, oldest first.
        versions_to_keep: Number of newest kernels to keep.
        running_release: Release of the booted kernel, which is always kept.
        dry_run: If True, only report planned deletions.

    Returns:
        The cleanup plan and the deletions performed (or planned).

    Raises:
        RemovalError: If a deletion fails. ``results`` holds every
            deletion completed before it, across all kernels.
    """
    plan = plan_cleanup(kernels, versions_to_keep, running_release)

    results: list[RemovalResult] = []
    for kernel in plan.remove:
        try:
            results.extend(kernel.remove(dry_run=dry_run))
        except RemovalError as e:
            e.results = results + e.results
            raise

    return plan, results


def run_update(
    config: JanitorConfig,
    *,
    manual_edit: bool = False,
    dry_run: bool = False,
    clean: bool = True,
) -> UpdateReport:
    """Build and install the newest kernel, then clean up old ones.

    Args:
        config: Janitor configuration.
        manual_edit: Edit the kernel config interactively before building.
        dry_run: If True, run nothing and delete nothing.
        clean: Whether to prune old kernels afterwards.

    Returns:
        UpdateReport describing what was done.

    Raises:
        JanitorError: If discovery, any build step, or cleanup fails.
    """
    search = KernelSearch(config.search_paths)
    kernels = search.execute()

    newest = newest_kernel(kernels)
    destination = copy_config(kernels, dry_run=dry_run)
    report = UpdateReport(kernel=newest, config_destination=destination)

    report.steps.extend(
        build_kernel(
            destination.parent,
            config.install_path,
            jobs=config.effective_build_jobs,
            manual_edit=manual_edit,
            dry_run=dry_run,
        )
    )

    if config.rebuild_modules:
        report.steps.append(rebuild_modules(dry_run=dry_run))

    if config.regenerate_grub_config:
        report.steps.append(
            regenerate_grub_config(config.effective_grub_config_path, dry_run=dry_run)
        )

    if clean:
        # The freshly installed image, config and map are new artifacts
        kernels = search.execute()
        report.cleanup, report.removals = cleanup_kernels(
            kernels,
            config.versions_to_keep,
            running_release=get_running_release(),
            dry_run=dry_run,
        )

    return report
