"""Utility modules for pkgdeck.

This module exports commonly used utility functions.
"""

from pkgdeck.utils.formatting import (
    console,
    create_package_table,
    create_release_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from pkgdeck.utils.shell import CommandResult, command_exists, stream_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_package_table",
    "create_release_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "stream_command",
]
