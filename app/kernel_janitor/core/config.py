"""Janitor configuration and settings.

This module provides the configuration model and I/O functions for
kernel-janitor: where kernels are installed, how many to keep, and
which post-build steps to run.

Configuration is stored as TOML, looked up in ./kernel-janitor.toml,
~/.config/kernel-janitor/config.toml and /etc/kernel-janitor.toml.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kernel_janitor.core.paths import get_config_search_paths
from kernel_janitor.kernel.search import SearchPaths

logger = logging.getLogger(__name__)


class JanitorConfig(BaseModel):
    """Configuration for kernel-janitor.

    Attributes:
        install_path: Directory holding vmlinuz, config and System.map files.
        source_path: Directory holding linux-* source trees.
        module_path: Directory holding compiled module trees.
        versions_to_keep: Number of newest kernels kept by cleanup.
        regenerate_grub_config: Run grub-mkconfig after installing a kernel.
        grub_config_path: GRUB config to write (None = install_path/grub/grub.cfg).
        rebuild_modules: Run ``emerge @module-rebuild`` after installing a kernel.
        build_jobs: Parallel make jobs (None = number of CPUs).
    """

    model_config = ConfigDict(extra="forbid")

    install_path: Annotated[
        Path,
        Field(description="Directory holding boot images, configs and symbol maps"),
    ] = Path("/boot")
    source_path: Annotated[
        Path,
        Field(description="Directory holding kernel source trees"),
    ] = Path("/usr/src")
    module_path: Annotated[
        Path,
        Field(description="Directory holding compiled module trees"),
    ] = Path("/lib/modules")
    versions_to_keep: Annotated[
        int,
        Field(ge=1, description="Number of newest kernels to keep"),
    ] = 3
    regenerate_grub_config: Annotated[
        bool,
        Field(description="Regenerate the GRUB config after installing"),
    ] = True
    grub_config_path: Annotated[
        Path | None,
        Field(description="GRUB config path (None = <install_path>/grub/grub.cfg)"),
    ] = None
    rebuild_modules: Annotated[
        bool,
        Field(description="Rebuild out-of-tree modules after installing"),
    ] = True
    build_jobs: Annotated[
        int | None,
        Field(ge=1, description="Parallel make jobs (None = CPU count)"),
    ] = None

    @property
    def search_paths(self) -> SearchPaths:
        """Get the directories searched for kernel artifacts."""
        return SearchPaths(
            install_path=self.install_path,
            source_path=self.source_path,
            module_path=self.module_path,
        )

    @property
    def effective_grub_config_path(self) -> Path:
        """Get the GRUB config path, defaulting to one under install_path."""
        if self.grub_config_path is not None:
            return self.grub_config_path
        return self.install_path / "grub" / "grub.cfg"

    @property
    def effective_build_jobs(self) -> int:
        """Get the number of parallel make jobs."""
        if self.build_jobs is not None:
            return self.build_jobs
        return os.cpu_count() or 1


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""


def find_config_path() -> Path | None:
    """Find the first existing configuration file.

    Returns:
        Path of the config file to use, or None if none exists.
    """
    for candidate in get_config_search_paths():
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> JanitorConfig:
    """Load janitor configuration from a TOML file.

    Args:
        path: Path to the config file. If None, the search paths are
            tried in order and defaults are used when none exists.

    Returns:
        Validated JanitorConfig object.

    Raises:
        ConfigNotFoundError: If an explicit config path doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    if path is None:
        path = find_config_path()
        if path is None:
            logger.debug("No config file found, using defaults")
            return JanitorConfig()
    elif not path.exists():
        raise ConfigNotFoundError(f"Config not found: {path}")

    logger.debug("Loading config from %s", path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    try:
        return JanitorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {path}: {e}") from e


def save_config(config: JanitorConfig, path: Path) -> Path:
    """Save janitor configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The JanitorConfig object to save.
        path: Path to save the config to.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {path}: {e}") from e

    return path


def config_to_dict(config: JanitorConfig) -> dict[str, object]:
    """Convert JanitorConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.

    Args:
        config: The JanitorConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return config.model_dump(mode="json", exclude_none=True)


def require_config(path: Path | None = None) -> JanitorConfig:
    """Load configuration or exit with a helpful error message.

    Args:
        path: Optional explicit config path.

    Returns:
        Loaded and validated JanitorConfig.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    import typer

    from kernel_janitor.utils.formatting import print_error

    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e
