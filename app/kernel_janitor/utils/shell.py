"""Subprocess helpers.

Short queries such as ``uname -r`` are captured; build and install
steps run attached to the terminal.
"""

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Standard output.
        stderr: Standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0


def format_command(args: list[str] | tuple[str, ...]) -> str:
    """Render a command line the way a shell user would type it."""
    return shlex.join(args)


def command_exists(name: str) -> bool:
    """Check if an executable is on PATH."""
    return shutil.which(name) is not None


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command and capture its output.

    Args:
        args: Command and arguments.
        timeout: Seconds to wait before giving up.
        cwd: Working directory, or None for the current one.

    Returns:
        CommandResult with the captured output. A non-zero exit is not
        an error here; check ``success``.

    Raises:
        FileNotFoundError: If the executable does not exist.
        subprocess.TimeoutExpired: If the command outlives the timeout.
    """
    logger.debug("Running %s", format_command(args))
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


def run_interactive(
    args: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Run a command attached to the user's terminal.

    Output is not captured, so compiler output streams live and
    ``make menuconfig`` can draw its interface.

    Args:
        args: Command and arguments.
        cwd: Working directory, or None for the current one.
        env: Variables added to the inherited environment.

    Returns:
        Exit status of the command.

    Raises:
        FileNotFoundError: If the executable does not exist.
        OSError: If the command cannot be started.
    """
    logger.debug("Running %s attached to the terminal", format_command(args))
    completed = subprocess.run(
        args,
        check=False,
        cwd=cwd,
        env={**os.environ, **(env or {})},
    )
    return completed.returncode
