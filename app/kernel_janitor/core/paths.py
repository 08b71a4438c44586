"""XDG-compliant path management for kernel-janitor.

Kernel installation settings are system-wide, so the configuration is
looked up in the working directory and /etc as well as in the XDG
config directory.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "kernel-janitor"

CONFIG_FILE_NAME = f"{APP_NAME}.toml"

SYSTEM_CONFIG_PATH = Path("/etc") / CONFIG_FILE_NAME


def get_config_dir() -> Path:
    """Get the user configuration directory path.

    Returns:
        Path to ~/.config/kernel-janitor/ (or XDG_CONFIG_HOME/kernel-janitor/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_config_path() -> Path:
    """Get the per-user configuration file path.

    Returns:
        Path to ~/.config/kernel-janitor/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_config_search_paths() -> list[Path]:
    """Get the configuration files to look for, in priority order.

    Returns:
        ./kernel-janitor.toml, the per-user config, then /etc/kernel-janitor.toml.
    """
    return [Path.cwd() / CONFIG_FILE_NAME, get_user_config_path(), SYSTEM_CONFIG_PATH]


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/kernel-janitor/theme.toml.
    """
    return get_config_dir() / "theme.toml"
