"""Kernel artifact and installed kernel models.

An artifact is one filesystem object (file or directory) belonging to
exactly one kernel version. An installed kernel gathers the five
artifacts of one version into a single record.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from kernel_janitor.kernel.errors import IncompleteKernelError, RemovalError
from kernel_janitor.kernel.operator import RemovalResult, delete_path
from kernel_janitor.kernel.version import KernelVersion

logger = logging.getLogger(__name__)


class ArtifactKind(str, Enum):
    """Kind of kernel artifact.

    Attributes:
        KERNEL_IMAGE: Boot image (``vmlinuz-*``).
        CONFIG: Kernel configuration (``config-*``).
        SYSTEM_MAP: Symbol map (``System.map-*``).
        SOURCE_TREE: Source directory (``linux-*``).
        MODULE_TREE: Compiled module directory (``/lib/modules/<version>``).
    """

    KERNEL_IMAGE = "kernel_image"
    CONFIG = "config"
    SYSTEM_MAP = "system_map"
    SOURCE_TREE = "source_tree"
    MODULE_TREE = "module_tree"


# The InstalledKernel field each artifact kind is stored in
ARTIFACT_FIELDS: dict[ArtifactKind, str] = {
    ArtifactKind.KERNEL_IMAGE: "image_path",
    ArtifactKind.CONFIG: "config_path",
    ArtifactKind.SYSTEM_MAP: "system_map_path",
    ArtifactKind.SOURCE_TREE: "source_path",
    ArtifactKind.MODULE_TREE: "module_path",
}


@dataclass(frozen=True, slots=True)
class KernelArtifact:
    """A classified artifact discovered during a scan.

    Attributes:
        kind: What the artifact is.
        version: Kernel version parsed from the artifact's name.
        path: Location of the artifact.
    """

    kind: ArtifactKind
    version: KernelVersion
    path: Path


@dataclass(slots=True)
class InstalledKernel:
    """All discovered artifacts of a single kernel version.

    Records start empty and are filled in as artifacts are found.
    Legacy records share the module and source trees of their
    non-legacy counterpart.

    Attributes:
        version: Kernel version of this record.
        module_path: Compiled module directory.
        source_path: Source directory.
        image_path: Boot image.
        config_path: Installed kernel configuration.
        system_map_path: Installed symbol map.
    """

    version: KernelVersion
    module_path: Path | None = field(default=None)
    source_path: Path | None = field(default=None)
    image_path: Path | None = field(default=None)
    config_path: Path | None = field(default=None)
    system_map_path: Path | None = field(default=None)

    @property
    def is_legacy(self) -> bool:
        """Check if this record is a superseded ``.old`` install."""
        return self.version.is_legacy

    def get_path(self, kind: ArtifactKind) -> Path | None:
        """Return the path stored for an artifact kind."""
        return getattr(self, ARTIFACT_FIELDS[kind])

    def set_path(self, kind: ArtifactKind, path: Path) -> Path | None:
        """Store the path of an artifact kind.

        Args:
            kind: Artifact kind to set.
            path: New path for that kind.

        Returns:
            The path previously stored for the kind, or None.
        """
        previous = self.get_path(kind)
        setattr(self, ARTIFACT_FIELDS[kind], path)
        return previous

    def missing_fields(self) -> list[str]:
        """Return the names of path fields that were not discovered."""
        return [name for name in ARTIFACT_FIELDS.values() if getattr(self, name) is None]

    def is_complete(self) -> bool:
        """Check if all five artifacts were discovered."""
        return not self.missing_fields()

    def _owned_kinds(self) -> list[ArtifactKind]:
        kinds = [ArtifactKind.KERNEL_IMAGE, ArtifactKind.CONFIG, ArtifactKind.SYSTEM_MAP]
        if not self.is_legacy:
            kinds += [ArtifactKind.MODULE_TREE, ArtifactKind.SOURCE_TREE]
        return kinds

    def removal_targets(self) -> list[Path]:
        """Return the paths that removing this kernel deletes.

        Legacy records only own their image, config and symbol map; the
        module and source trees belong to the non-legacy counterpart.
        Unset fields are skipped.
        """
        return [
            path for kind in self._owned_kinds() if (path := self.get_path(kind)) is not None
        ]

    def remove(self, dry_run: bool = False) -> list[RemovalResult]:
        """Delete this kernel's artifacts from the filesystem.

        Each field is cleared once its artifact is deleted, so a removed
        record is no longer complete. A legacy record also drops its
        references to the shared trees, which stay on disk. Deletion
        stops at the first failure.

        Args:
            dry_run: If True, report planned deletions without deleting.

        Returns:
            One RemovalResult per deleted (or planned) path.

        Raises:
            IncompleteKernelError: If any artifact is missing.
            RemovalError: If a deletion fails. ``results`` holds the
                deletions that completed before it.
        """
        if not self.is_complete():
            raise IncompleteKernelError(self)

        results: list[RemovalResult] = []
        for kind in self._owned_kinds():
            path = self.get_path(kind)
            try:
                results.append(delete_path(path, dry_run=dry_run))
            except RemovalError as e:
                e.results = results
                raise
            if not dry_run:
                setattr(self, ARTIFACT_FIELDS[kind], None)

        if not dry_run:
            if self.is_legacy:
                self.module_path = None
                self.source_path = None
            logger.info("Removed kernel %s", self.version)
        return results

    def __str__(self) -> str:
        return (
            f"Version: {self.version}, image: {self.image_path}, config: {self.config_path}, "
            f"system map: {self.system_map_path}, sources: {self.source_path}, "
            f"modules: {self.module_path}"
        )
