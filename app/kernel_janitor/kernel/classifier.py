"""Classification of discovered paths into kernel artifacts."""

from pathlib import Path

from kernel_janitor.kernel.errors import VersionParseError
from kernel_janitor.kernel.models import ArtifactKind, KernelArtifact
from kernel_janitor.kernel.version import KernelVersion


def classify_artifact(kind: ArtifactKind, path: Path) -> KernelArtifact:
    """Tag a path with the kernel version parsed from its file name.

    Module directories never carry the legacy marker: a legacy kernel
    always shares the module tree of its current counterpart, so a
    ``.old`` module directory is rejected.

    Args:
        kind: Kind of artifact the path was discovered as.
        path: Path of the artifact.

    Returns:
        KernelArtifact binding kind, version and path.

    Raises:
        VersionParseError: If the file name holds no usable version. The
            error names the path and the kind it was found as.
    """
    try:
        version = KernelVersion.parse(path.name)
    except VersionParseError as e:
        raise VersionParseError(str(path), f"not a valid {kind.value} name: {e.reason}") from e

    if kind == ArtifactKind.MODULE_TREE and version.is_legacy:
        raise VersionParseError(str(path), "module directories cannot be legacy installs")

    return KernelArtifact(kind=kind, version=version, path=path)
