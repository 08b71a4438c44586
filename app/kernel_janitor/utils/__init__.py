"""Utility modules for kernel-janitor.

This module exports commonly used utility functions.
"""

from kernel_janitor.utils.formatting import (
    console,
    create_kernel_table,
    err_console,
    format_kernel_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from kernel_janitor.utils.shell import (
    CommandResult,
    command_exists,
    format_command,
    run_command,
    run_interactive,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_kernel_table",
    "err_console",
    "format_command",
    "format_kernel_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
]
