"""Deletion of kernel artifacts.

Removes boot images, configs, symbol maps and whole module or source
trees with dry-run support. Failures raise immediately so a kernel is
never left in an unknown, partially deleted state without the caller
knowing.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from kernel_janitor.kernel.errors import RemovalError

logger = logging.getLogger(__name__)

# Never delete these, whatever a misconfigured search path points at
_PROTECTED_PATHS: frozenset[Path] = frozenset(
    Path(p) for p in ("/", "/boot", "/usr", "/usr/src", "/lib", "/lib/modules", "/etc")
)


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of a single artifact deletion.

    Attributes:
        path: Path that was operated on.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: Path
    dry_run: bool = False


def delete_path(path: Path, *, dry_run: bool = False) -> RemovalResult:
    """Delete a single kernel artifact.

    Directories (but not symlinks to directories) are removed
    recursively; files and symlinks are unlinked.

    Args:
        path: Artifact path to delete.
        dry_run: If True, only report what would be deleted.

    Returns:
        RemovalResult for the path.

    Raises:
        RemovalError: If the path is protected, missing, or cannot be deleted.
    """
    if path in _PROTECTED_PATHS:
        raise RemovalError(path, "refusing to delete a system directory")

    if dry_run:
        logger.info("Dry-run: would delete %s", path)
        return RemovalResult(path=path, dry_run=True)

    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        else:
            raise RemovalError(path, "path does not exist")
    except OSError as e:
        raise RemovalError(path, str(e)) from e

    logger.debug("Deleted %s", path)
    return RemovalResult(path=path)
