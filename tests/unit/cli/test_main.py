"""Unit tests for the main CLI application."""

import logging

from kernel_janitor import __version__
from kernel_janitor.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_commands_registered(self) -> None:
        """All commands appear in the help text."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("list", "clean", "remove", "update", "config"):
            assert command in result.stdout

    def test_verbose_enables_debug(self, tmp_path) -> None:
        """--verbose sets the root logger to DEBUG."""
        runner.invoke(app, ["--verbose", "config", "init", "--path", str(tmp_path / "c.toml")])

        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_only_errors(self, tmp_path) -> None:
        """--quiet only reports errors."""
        runner.invoke(app, ["--quiet", "config", "init", "--path", str(tmp_path / "c.toml")])

        assert logging.getLogger().level == logging.ERROR
