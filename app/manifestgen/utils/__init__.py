"""Utility modules for manifestgen.

This module exports commonly used console helpers.
"""

from manifestgen.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_muted,
    print_separator,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_muted",
    "print_separator",
    "print_success",
    "print_warning",
]
