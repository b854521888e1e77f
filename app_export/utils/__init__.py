# app_export/utils/__init__.py
"""Utility functions for app-export-tool"""

from .naming import (
    compose_name,
    file_name_part,
    decode_unicode_escapes,
    is_cjk_ideograph,
)

from .file_utils import (
    prepare_export_dir,
    copy_file,
    write_text_async,
    write_bytes_async,
    file_mode_octal,
    format_size,
)

from .hash_utils import (
    calculate_sha1,
    calculate_file_hash_async,
)

__all__ = [
    # Naming
    "compose_name",
    "file_name_part",
    "decode_unicode_escapes",
    "is_cjk_ideograph",

    # Files
    "prepare_export_dir",
    "copy_file",
    "write_text_async",
    "write_bytes_async",
    "file_mode_octal",
    "format_size",

    # Hashing
    "calculate_sha1",
    "calculate_file_hash_async",
]
