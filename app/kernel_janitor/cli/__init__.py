"""CLI package for kernel-janitor.

This package contains the Typer application and all subcommands.
"""

from kernel_janitor.cli.main import app

__all__ = ["app"]
