"""Discovery and reconciliation of installed kernels.

Scans the install, source and module directories, classifies every
entry by kernel version, and folds the artifacts into one
InstalledKernel per version. Legacy (``.old``) kernels are then linked
to the module and source trees of their current counterpart.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from kernel_janitor.kernel.classifier import classify_artifact
from kernel_janitor.kernel.dir_search import DirectoryScanner
from kernel_janitor.kernel.errors import LinkageError, VersionParseError
from kernel_janitor.kernel.models import (
    ARTIFACT_FIELDS,
    ArtifactKind,
    InstalledKernel,
    KernelArtifact,
)
from kernel_janitor.kernel.version import KernelVersion

logger = logging.getLogger(__name__)

# File name prefixes searched for in the install directory
_INSTALL_PREFIXES: tuple[tuple[ArtifactKind, str], ...] = (
    (ArtifactKind.KERNEL_IMAGE, "vmlinuz-"),
    (ArtifactKind.CONFIG, "config-"),
    (ArtifactKind.SYSTEM_MAP, "System.map-"),
)

_SOURCE_PREFIX = "linux-"

# Fields a legacy kernel borrows from its counterpart
_SHARED_KINDS: tuple[ArtifactKind, ...] = (ArtifactKind.MODULE_TREE, ArtifactKind.SOURCE_TREE)


@dataclass(frozen=True, slots=True)
class SearchPaths:
    """Directories searched for kernel artifacts.

    Attributes:
        install_path: Directory holding boot images, configs and symbol maps.
        source_path: Directory holding ``linux-*`` source trees.
        module_path: Directory holding one module tree per kernel.
    """

    install_path: Path = Path("/boot")
    source_path: Path = Path("/usr/src")
    module_path: Path = Path("/lib/modules")


class KernelSearch:
    """Finds installed kernels and their artifacts.

    Args:
        paths: Directories to search.
        scanner: Directory lister. Defaults to a DirectoryScanner.

    Example:
        >>> search = KernelSearch(SearchPaths(install_path=Path("/boot/EFI/Gentoo")))
        >>> newest = search.execute()[-1]
    """

    def __init__(
        self,
        paths: SearchPaths | None = None,
        scanner: DirectoryScanner | None = None,
    ) -> None:
        self._paths = paths or SearchPaths()
        self._scanner = scanner or DirectoryScanner()

    @property
    def paths(self) -> SearchPaths:
        """Return the directories this search covers."""
        return self._paths

    def execute(self) -> list[InstalledKernel]:
        """Run the search and return every installed kernel.

        Returns:
            Installed kernels sorted by version, oldest first, so the
            last entry is the newest kernel.

        Raises:
            ScanError: If a search directory cannot be listed.
            LinkageError: If a legacy kernel cannot be linked.
        """
        artifacts = self.discover_all()
        kernels = self.fold(artifacts)
        self.link_legacy_artifacts(kernels)
        return sorted(kernels.values(), key=lambda kernel: kernel.version)

    def discover_all(self) -> list[KernelArtifact]:
        """Scan all search directories and classify what they contain.

        Entries whose names hold no kernel version are logged and
        skipped.

        Returns:
            Every artifact that could be classified.

        Raises:
            ScanError: If a search directory cannot be listed.
        """
        found: list[tuple[ArtifactKind, Path]] = []

        for kind, prefix in _INSTALL_PREFIXES:
            paths = self._scanner.list_entries_with_prefix(self._paths.install_path, prefix)
            found.extend((kind, path) for path in paths)

        source_dirs = self._scanner.list_entries_with_prefix(
            self._paths.source_path, _SOURCE_PREFIX
        )
        found.extend((ArtifactKind.SOURCE_TREE, path) for path in source_dirs)

        module_dirs = self._scanner.list_entries(self._paths.module_path)
        found.extend((ArtifactKind.MODULE_TREE, path) for path in module_dirs)

        artifacts: list[KernelArtifact] = []
        for kind, path in found:
            try:
                artifacts.append(classify_artifact(kind, path))
            except VersionParseError as e:
                logger.warning("Skipping %s: %s", path, e.reason)

        logger.debug("Discovered %d kernel artifacts", len(artifacts))
        return artifacts

    @staticmethod
    def fold(artifacts: list[KernelArtifact]) -> dict[KernelVersion, InstalledKernel]:
        """Group artifacts into one InstalledKernel per version.

        When two artifacts of the same kind share a version, the later
        one wins and a warning is logged.

        Args:
            artifacts: Classified artifacts.

        Returns:
            Installed kernels keyed by version.
        """
        kernels: dict[KernelVersion, InstalledKernel] = {}

        for artifact in artifacts:
            kernel = kernels.get(artifact.version)
            if kernel is None:
                kernel = kernels[artifact.version] = InstalledKernel(version=artifact.version)

            previous = kernel.set_path(artifact.kind, artifact.path)
            if previous is not None:
                logger.warning(
                    "Overwriting %s %s with %s for kernel %s",
                    artifact.kind.value,
                    previous,
                    artifact.path,
                    artifact.version,
                )

        return kernels

    @staticmethod
    def link_legacy_artifacts(kernels: dict[KernelVersion, InstalledKernel]) -> None:
        """Give each legacy kernel the module and source trees of its counterpart.

        Must run after all artifacts are folded, since a counterpart may
        be discovered after its legacy kernel.

        Args:
            kernels: Installed kernels keyed by version, updated in place.

        Raises:
            LinkageError: If a counterpart is missing or lacks a shared tree.
        """
        for version, kernel in kernels.items():
            if not version.is_legacy:
                continue

            counterpart = version.counterpart()
            current = kernels.get(counterpart)
            if current is None:
                raise LinkageError(version, counterpart)

            for kind in _SHARED_KINDS:
                shared = current.get_path(kind)
                if shared is None:
                    raise LinkageError(version, counterpart, missing_field=ARTIFACT_FIELDS[kind])
                own = kernel.set_path(kind, shared)
                if own is not None and own != shared:
                    logger.debug(
                        "Kernel %s shares %s %s instead of %s",
                        version,
                        kind.value,
                        shared,
                        own,
                    )
