# app_export/core/file_list.py
"""Checksummed file list of a container package payload"""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List, Optional

from ..api.exceptions import ManifestError
from ..utils.file_utils import file_mode_octal
from ..utils.hash_utils import calculate_file_hash_async


@dataclass
class FileListEntry:
    """One line of the file list"""
    kind: str  # "F" or "D"
    path: str
    size: int
    mode: str
    sha1: Optional[str] = None

    def to_line(self) -> str:
        fields = [self.kind, self.path, str(self.size), self.mode]
        if self.kind == "F":
            fields.append(self.sha1 or "")
        return ",".join(fields)


class FileList:
    """
    Records payload files in the order they were staged

    Paths are written absolute from the payload root, e.g. ``/image.json``.
    Directory entries carry an aggregate size of 0.
    """

    def __init__(self, payload_root: Path):
        self.payload_root = payload_root
        self.entries: List[FileListEntry] = []

    def _entry_path(self, path: Path) -> str:
        try:
            relative = path.relative_to(self.payload_root)
        except ValueError:
            raise ManifestError(f"{path} is outside payload root {self.payload_root}")
        return str(PurePosixPath("/") / PurePosixPath(*relative.parts))

    async def add_file(self, path: Path) -> FileListEntry:
        """Record a staged file with its size, mode and SHA1"""
        try:
            entry = FileListEntry(
                kind="F",
                path=self._entry_path(path),
                size=path.stat().st_size,
                mode=file_mode_octal(path),
                sha1=await calculate_file_hash_async(path, "sha1"),
            )
        except OSError as e:
            raise ManifestError(f"Failed to checksum {path}: {e}") from e
        self.entries.append(entry)
        return entry

    def add_directory(self, path: Path) -> FileListEntry:
        """Record a staged directory"""
        try:
            entry = FileListEntry(
                kind="D",
                path=self._entry_path(path),
                size=0,
                mode=file_mode_octal(path),
            )
        except OSError as e:
            raise ManifestError(f"Failed to stat {path}: {e}") from e
        self.entries.append(entry)
        return entry

    def render(self) -> str:
        return "\n".join(entry.to_line() for entry in self.entries)
