# app_export/utils/file_utils.py
"""File operation utilities"""

import shutil
import stat
from pathlib import Path
from typing import Union

import aiofiles


def prepare_export_dir(export_path: Path) -> Path:
    """
    Delete the export directory and recreate it empty

    Args:
        export_path: Staging directory

    Returns:
        The recreated directory
    """
    if export_path.is_dir() and not export_path.is_symlink():
        shutil.rmtree(export_path)
    elif export_path.exists() or export_path.is_symlink():
        export_path.unlink()
    export_path.mkdir(parents=True, mode=0o755)
    return export_path


def copy_file(src: Path, dst: Path) -> Path:
    """
    Copy a regular file

    Args:
        src: Source file
        dst: Destination file

    Returns:
        Destination path

    Raises:
        FileNotFoundError: If source does not exist
        ValueError: If source is not a regular file
    """
    if not src.exists():
        raise FileNotFoundError(f"Source file not found: {src}")
    if not src.is_file():
        raise ValueError(f"{src} is not a regular file")

    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
    return dst


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> Path:
    """Write text file asynchronously, creating parent directories"""
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, 'w', encoding=encoding) as f:
        await f.write(content)
    return path


async def write_bytes_async(path: Path, content: bytes) -> Path:
    """Write binary file asynchronously, creating parent directories"""
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, 'wb') as f:
        await f.write(content)
    return path


def file_mode_octal(path: Path) -> str:
    """Permission bits of a path as a 4-digit octal string (e.g. 0644)"""
    return f"{stat.S_IMODE(path.stat().st_mode):04o}"


def format_size(size: Union[int, float]) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"
