"""Unit tests for path management.

Tests for the paths module that locates configuration files.
"""

import os
from pathlib import Path
from unittest.mock import patch

from kernel_janitor.core.paths import (
    APP_NAME,
    CONFIG_FILE_NAME,
    SYSTEM_CONFIG_PATH,
    get_config_dir,
    get_config_search_paths,
    get_user_config_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestConfigFiles:
    """Tests for config file locations."""

    def test_user_config_path(self, tmp_path: Path) -> None:
        """The per-user config lives in the config dir."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_user_config_path() == tmp_path / APP_NAME / "config.toml"

    def test_system_config_path(self) -> None:
        """The system config lives in /etc."""
        assert SYSTEM_CONFIG_PATH == Path("/etc/kernel-janitor.toml")

    def test_search_order(self, tmp_path: Path, monkeypatch) -> None:
        """Working directory first, then user, then system config."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        paths = get_config_search_paths()

        assert paths == [
            tmp_path / CONFIG_FILE_NAME,
            tmp_path / "xdg" / APP_NAME / "config.toml",
            SYSTEM_CONFIG_PATH,
        ]


class TestGetUserThemePath:
    """Tests for get_user_theme_path function."""

    def test_returns_xdg_config_path(self) -> None:
        """Returns path under ~/.config/kernel-janitor/."""
        path = get_user_theme_path()

        assert path.parts[-1] == "theme.toml"
        assert path.parts[-2] == APP_NAME
