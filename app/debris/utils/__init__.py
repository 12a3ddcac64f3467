"""Utility modules for debris.

This module exports commonly used utility functions.
"""

from debris.utils.formatting import (
    console,
    create_pattern_table,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from debris.utils.shell import CommandResult, command_exists, find_command, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_pattern_table",
    "err_console",
    "find_command",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
