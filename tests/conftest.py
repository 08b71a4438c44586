"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import pytest
from kernel_janitor.kernel.search import SearchPaths


@dataclass
class KernelTree:
    """A fake kernel installation laid out under a temporary directory."""

    root: Path
    install: Path
    source: Path
    modules: Path

    @property
    def paths(self) -> SearchPaths:
        return SearchPaths(
            install_path=self.install, source_path=self.source, module_path=self.modules
        )

    def add_boot_files(self, name: str) -> None:
        """Create vmlinuz, config and System.map files for ``name``."""
        for prefix in ("vmlinuz", "config", "System.map"):
            (self.install / f"{prefix}-{name}").write_text(f"{prefix} {name}")

    def add_modules(self, name: str) -> Path:
        """Create a module tree for ``name``."""
        path = self.modules / name
        (path / "kernel").mkdir(parents=True)
        (path / "kernel" / "ext4.ko").write_text("module")
        return path

    def add_sources(self, name: str) -> Path:
        """Create a ``linux-<name>`` source tree."""
        path = self.source / f"linux-{name}"
        path.mkdir()
        (path / "Makefile").write_text("VERSION = 5")
        return path

    def add_kernel(self, name: str) -> None:
        """Create all five artifacts of a kernel."""
        self.add_boot_files(name)
        self.add_modules(name)
        self.add_sources(name)

    def write_config(self, extra: str = "") -> Path:
        """Write a kernel-janitor.toml pointing at this tree."""
        path = self.root / "kernel-janitor.toml"
        path.write_text(
            f'install_path = "{self.install}"\n'
            f'source_path = "{self.source}"\n'
            f'module_path = "{self.modules}"\n'
            "regenerate_grub_config = false\n"
            "rebuild_modules = false\n" + extra
        )
        return path


@pytest.fixture
def kernel_tree(tmp_path: Path) -> KernelTree:
    """Empty install, source and module directories."""
    tree = KernelTree(
        root=tmp_path,
        install=tmp_path / "boot",
        source=tmp_path / "usr" / "src",
        modules=tmp_path / "lib" / "modules",
    )
    for directory in (tree.install, tree.source, tree.modules):
        directory.mkdir(parents=True)
    return tree


@pytest.fixture
def gentoo_tree(kernel_tree: KernelTree) -> KernelTree:
    """A tree with one complete 5.4.97-gentoo kernel."""
    kernel_tree.add_kernel("5.4.97-gentoo")
    return kernel_tree


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo the logging setup the CLI callback performs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
