"""CLI utility functions"""

from .output import (
    console,
    print_success,
    print_error,
    print_warning,
    format_export_result,
    format_export_error,
    format_validation_result,
)

__all__ = [
    'console',
    'print_success',
    'print_error',
    'print_warning',
    'format_export_result',
    'format_export_error',
    'format_validation_result',
]
