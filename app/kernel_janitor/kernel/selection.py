"""Selection of installed kernels for removal.

Kernels are addressed by 1-based ordinals over the sorted kernel list,
and cleanup plans decide which kernels to keep.
"""

import logging
from dataclasses import dataclass, field

from kernel_janitor.kernel.errors import SelectionError, VersionParseError
from kernel_janitor.kernel.models import InstalledKernel
from kernel_janitor.kernel.version import KernelVersion

logger = logging.getLogger(__name__)


def number_kernels(kernels: list[InstalledKernel]) -> list[tuple[int, InstalledKernel]]:
    """Assign stable 1-based ordinals to a sorted kernel list."""
    return list(enumerate(kernels, start=1))


def select_kernels(kernels: list[InstalledKernel], ordinals: list[int]) -> list[InstalledKernel]:
    """Resolve user-supplied ordinals against a sorted kernel list.

    Args:
        kernels: Installed kernels, oldest first.
        ordinals: 1-based ordinals as shown by ``kernel-janitor list``.

    Returns:
        Selected kernels in list order, without duplicates.

    Raises:
        SelectionError: If any ordinal is outside the list.
    """
    for ordinal in ordinals:
        if not 1 <= ordinal <= len(kernels):
            raise SelectionError(ordinal, len(kernels))

    wanted = set(ordinals)
    return [kernel for ordinal, kernel in number_kernels(kernels) if ordinal in wanted]


@dataclass(slots=True)
class CleanupPlan:
    """Kernels to keep and to remove during cleanup.

    Attributes:
        keep: Kernels that stay installed.
        remove: Kernels scheduled for removal, oldest first.
        skipped: Incomplete kernels that cannot be removed safely.
    """

    keep: list[InstalledKernel] = field(default_factory=list)
    remove: list[InstalledKernel] = field(default_factory=list)
    skipped: list[InstalledKernel] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if nothing is scheduled for removal."""
        return not self.remove


def parse_running_release(release: str | None) -> KernelVersion | None:
    """Parse a ``uname -r`` release string, or return None if it has no version."""
    if not release:
        return None
    try:
        return KernelVersion.parse(release)
    except VersionParseError:
        logger.warning("Cannot read running kernel release %r as a version", release)
        return None


def plan_cleanup(
    kernels: list[InstalledKernel],
    versions_to_keep: int,
    running_release: str | None = None,
) -> CleanupPlan:
    """Decide which kernels to remove.

    Keeps the newest ``versions_to_keep`` kernels, the running kernel
    (both its current and legacy installs), and the current counterpart
    of every kept legacy kernel, since legacy kernels share its module
    and source trees. Incomplete kernels are never removed.

    Args:
        kernels: Installed kernels, oldest first.
        versions_to_keep: Number of newest kernels to keep.
        running_release: Release of the booted kernel (``uname -r``).

    Returns:
        CleanupPlan splitting the kernels.

    Raises:
        ValueError: If versions_to_keep is less than 1.
    """
    if versions_to_keep < 1:
        msg = f"versions_to_keep must be at least 1, got {versions_to_keep}"
        raise ValueError(msg)

    running = parse_running_release(running_release)
    kept: set[KernelVersion] = {kernel.version for kernel in kernels[-versions_to_keep:]}

    if running is not None:
        kept.update(k.version for k in kernels if k.version.equals_ignoring_legacy(running))

    kept.update(version.counterpart() for version in list(kept) if version.is_legacy)

    plan = CleanupPlan()
    for kernel in kernels:
        if kernel.version in kept:
            plan.keep.append(kernel)
        elif not kernel.is_complete():
            logger.warning(
                "Not removing incomplete kernel %s (missing: %s)",
                kernel.version,
                ", ".join(kernel.missing_fields()),
            )
            plan.skipped.append(kernel)
        else:
            plan.remove.append(kernel)

    return plan
