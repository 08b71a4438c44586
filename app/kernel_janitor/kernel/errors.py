"""Exceptions raised while discovering and pruning kernels.

Every error derives from JanitorError so the CLI can report any
failure of the engine uniformly.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kernel_janitor.kernel.models import InstalledKernel
    from kernel_janitor.kernel.operator import RemovalResult
    from kernel_janitor.kernel.version import KernelVersion


class JanitorError(Exception):
    """Base exception for kernel-janitor errors."""


class VersionParseError(JanitorError, ValueError):
    """Raised when a file name cannot be read as a kernel version."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Could not parse {raw!r} as a kernel version: {reason}")


class ScanError(JanitorError):
    """Raised when a search directory cannot be listed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot list directory {path}: {reason}")


class LinkageError(JanitorError):
    """Raised when a legacy kernel has no usable non-legacy counterpart.

    Attributes:
        version: The legacy version being linked.
        counterpart: The non-legacy version it depends on.
        missing_field: Name of the path the counterpart lacks, or None
            if the counterpart itself was never discovered.
    """

    def __init__(
        self,
        version: KernelVersion,
        counterpart: KernelVersion,
        missing_field: str | None = None,
    ) -> None:
        self.version = version
        self.counterpart = counterpart
        self.missing_field = missing_field
        if missing_field is None:
            msg = (
                f"Legacy kernel {version} has no counterpart: "
                f"kernel {counterpart} was not found"
            )
        else:
            msg = (
                f"Legacy kernel {version} depends on {missing_field} of kernel "
                f"{counterpart}, which is missing"
            )
        super().__init__(msg)


class IncompleteKernelError(JanitorError):
    """Raised when removing a kernel that is missing artifacts."""

    def __init__(self, kernel: InstalledKernel) -> None:
        self.kernel = kernel
        self.missing_fields = kernel.missing_fields()
        missing = ", ".join(self.missing_fields)
        super().__init__(f"Kernel {kernel.version} is incomplete (missing: {missing})")


class RemovalError(JanitorError):
    """Raised when deleting a kernel artifact fails.

    Attributes:
        path: Path that could not be deleted.
        results: Results of the deletions completed before the failure.
    """

    def __init__(
        self,
        path: Path,
        reason: str,
        results: list[RemovalResult] | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        self.results = results or []
        super().__init__(f"Failed to delete {path}: {reason}")


class SelectionError(JanitorError):
    """Raised when a kernel ordinal does not match any installed kernel."""

    def __init__(self, ordinal: int, count: int) -> None:
        self.ordinal = ordinal
        self.count = count
        if count == 0:
            msg = f"Kernel #{ordinal} does not exist: no kernels installed"
        else:
            msg = f"Kernel #{ordinal} does not exist (valid range: 1-{count})"
        super().__init__(msg)


class WorkflowError(JanitorError):
    """Raised when a build, install or config step fails."""
