"""Unit tests for artifact classification."""

from pathlib import Path

import pytest
from kernel_janitor.kernel.classifier import classify_artifact
from kernel_janitor.kernel.errors import VersionParseError
from kernel_janitor.kernel.models import ArtifactKind
from kernel_janitor.kernel.version import KernelVersion


class TestClassifyArtifact:
    """Tests for classify_artifact."""

    def test_image(self) -> None:
        """Boot images are tagged with their version."""
        artifact = classify_artifact(
            ArtifactKind.KERNEL_IMAGE, Path("/boot/vmlinuz-5.4.97-gentoo")
        )

        assert artifact.kind == ArtifactKind.KERNEL_IMAGE
        assert artifact.version == KernelVersion(5, 4, 97)
        assert artifact.path == Path("/boot/vmlinuz-5.4.97-gentoo")

    def test_legacy_config(self) -> None:
        """Legacy files keep the legacy flag."""
        artifact = classify_artifact(ArtifactKind.CONFIG, Path("/boot/config-5.4.97-gentoo.old"))

        assert artifact.version.is_legacy is True

    def test_module_tree(self) -> None:
        """Module directories use the numeric-leading form."""
        artifact = classify_artifact(ArtifactKind.MODULE_TREE, Path("/lib/modules/5.4.97-gentoo"))

        assert artifact.version == KernelVersion(5, 4, 97)

    def test_legacy_module_tree_rejected(self) -> None:
        """Module directories cannot be legacy."""
        with pytest.raises(VersionParseError, match="cannot be legacy"):
            classify_artifact(ArtifactKind.MODULE_TREE, Path("/lib/modules/5.4.97-gentoo.old"))

    def test_unparsable_name(self) -> None:
        """Names without a version raise VersionParseError."""
        with pytest.raises(VersionParseError, match="source_tree") as exc_info:
            classify_artifact(ArtifactKind.SOURCE_TREE, Path("/usr/src/linux-next"))

        assert exc_info.value.raw == "/usr/src/linux-next"
