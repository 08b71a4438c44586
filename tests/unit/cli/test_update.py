"""Unit tests for update command."""

from unittest.mock import patch

from kernel_janitor.cli.main import app
from kernel_janitor.kernel.errors import WorkflowError
from typer.testing import CliRunner

runner = CliRunner()


class TestUpdateCommand:
    """Tests for kernel-janitor update."""

    def test_dry_run(self, kernel_tree) -> None:
        """A dry-run prints every step and changes nothing."""
        kernel_tree.add_kernel("4.19.3-gentoo")
        kernel_tree.add_kernel("5.4.97-gentoo")
        config = kernel_tree.write_config("versions_to_keep = 1\n")

        with (
            patch("kernel_janitor.core.workflow.run_interactive") as mock_run,
            patch("kernel_janitor.core.workflow.get_running_release", return_value=None),
        ):
            result = runner.invoke(app, ["--config", str(config), "update", "--dry-run"])

        assert result.exit_code == 0
        mock_run.assert_not_called()
        assert "Kernel 5.4.97" in result.stdout
        assert "make oldconfig" in result.stdout
        assert "make modules_install" in result.stdout
        assert "Would delete" in result.stdout
        assert "nothing was changed" in result.stdout
        assert (kernel_tree.modules / "4.19.3-gentoo").exists()
        assert not (kernel_tree.source / "linux-5.4.97-gentoo" / ".config").exists()

    def test_manual_edit_no_clean(self, gentoo_tree) -> None:
        """-m runs menuconfig and --no-clean skips cleanup."""
        config = gentoo_tree.write_config()

        with (
            patch("kernel_janitor.core.workflow.command_exists", return_value=True),
            patch("kernel_janitor.core.workflow.run_interactive", return_value=0) as mock_run,
        ):
            result = runner.invoke(app, ["--config", str(config), "update", "-m", "--no-clean"])

        assert result.exit_code == 0
        assert mock_run.call_args_list[0].args[0] == ["make", "menuconfig"]
        assert "Kernel 5.4.97 installed." in result.stdout
        assert (gentoo_tree.source / "linux-5.4.97-gentoo" / ".config").exists()

    def test_failure_exits(self, gentoo_tree) -> None:
        """A failing step exits with code 1."""
        config = gentoo_tree.write_config()

        with patch(
            "kernel_janitor.cli.commands.update.run_update",
            side_effect=WorkflowError("make -j4 failed with exit code 2"),
        ):
            result = runner.invoke(app, ["--config", str(config), "update"])

        assert result.exit_code == 1
        assert "failed with exit code 2" in result.output

    def test_no_kernels(self, kernel_tree) -> None:
        """Updating an empty system fails."""
        config = kernel_tree.write_config()

        result = runner.invoke(app, ["--config", str(config), "update", "--dry-run"])

        assert result.exit_code == 1
        assert "No installed kernels" in result.output
