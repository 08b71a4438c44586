"""Kernel artifact discovery and reconciliation.

This module parses kernel versions from artifact file names, scans the
install, source and module directories, and reconciles the results
into one InstalledKernel record per kernel version.
"""

from kernel_janitor.kernel.classifier import classify_artifact
from kernel_janitor.kernel.dir_search import DirectoryScanner
from kernel_janitor.kernel.errors import (
    IncompleteKernelError,
    JanitorError,
    LinkageError,
    RemovalError,
    ScanError,
    SelectionError,
    VersionParseError,
    WorkflowError,
)
from kernel_janitor.kernel.models import ArtifactKind, InstalledKernel, KernelArtifact
from kernel_janitor.kernel.operator import RemovalResult, delete_path
from kernel_janitor.kernel.search import KernelSearch, SearchPaths
from kernel_janitor.kernel.selection import (
    CleanupPlan,
    number_kernels,
    plan_cleanup,
    select_kernels,
)
from kernel_janitor.kernel.version import KernelVersion

__all__ = [
    "ArtifactKind",
    "CleanupPlan",
    "DirectoryScanner",
    "IncompleteKernelError",
    "InstalledKernel",
    "JanitorError",
    "KernelArtifact",
    "KernelSearch",
    "KernelVersion",
    "LinkageError",
    "RemovalError",
    "RemovalResult",
    "ScanError",
    "SearchPaths",
    "SelectionError",
    "VersionParseError",
    "WorkflowError",
    "classify_artifact",
    "delete_path",
    "number_kernels",
    "plan_cleanup",
    "select_kernels",
]
