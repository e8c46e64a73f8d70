"""Utility modules for diskord.

This module exports commonly used utility functions.
"""

from diskord.utils.formatting import (
    console,
    err_console,
    format_bytes,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from diskord.utils.shell import CommandResult, command_exists, du_bytes, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "du_bytes",
    "err_console",
    "format_bytes",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
