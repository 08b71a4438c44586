"""CLI commands for kernel-janitor.

This package contains all subcommand implementations.
"""

from kernel_janitor.cli.commands import clean, config, listing, remove, update

__all__ = ["clean", "config", "listing", "remove", "update"]
