# app_export/core/archiver.py
"""Bundle a staging directory into one compressed artifact via tar"""

import logging
import subprocess
from pathlib import Path

from ..api.exceptions import ArchiveError, StagingError
from ..constants import Compression, DEFAULT_TAR_COMMAND, TAR_BENIGN_WARNING

logger = logging.getLogger(__name__)


class Archiver:
    """Runs the external archiving process and validates its output"""

    def __init__(self,
                 compression: Compression = Compression.GZIP,
                 tar_command: str = DEFAULT_TAR_COMMAND):
        """
        Initialize archiver

        Args:
            compression: Compression used by tar
            tar_command: tar executable
        """
        self.compression = compression
        self.tar_command = tar_command

    def build_command(self, artifact_path: Path, staging_dir: Path) -> list:
        """Command line archiving the staging directory by its base name"""
        return [
            self.tar_command,
            f"-c{self.compression.value}f",
            str(artifact_path),
            staging_dir.name,
        ]

    def package(self, artifact_name: str, output_dir: Path, staging_dir: Path) -> str:
        """
        Package the staging directory

        tar runs from the staging directory's parent, so the archive holds
        one top-level directory named after the staging directory. That parent
        is the output directory in the default layout.

        Args:
            artifact_name: File name of the artifact
            output_dir: Directory receiving the artifact
            staging_dir: Prepared staging directory

        Returns:
            Artifact name

        Raises:
            StagingError: If the staging directory is missing
            ArchiveError: If tar fails or no artifact was produced
        """
        output_dir = Path(output_dir).absolute()
        staging_dir = Path(staging_dir).absolute()

        if not staging_dir.exists():
            raise StagingError(f"Staging directory not found: {staging_dir}", str(staging_dir))
        if not staging_dir.is_dir():
            raise StagingError(f"Staging path is not a directory: {staging_dir}", str(staging_dir))

        output_dir.mkdir(parents=True, exist_ok=True)
        artifact_path = output_dir / artifact_name
        cmd = self.build_command(artifact_path, staging_dir)
        logger.info(f"Package cmd: [{' '.join(cmd)}]")

        try:
            result = subprocess.run(
                cmd,
                cwd=staging_dir.parent,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ArchiveError(f"Failed to start {self.tar_command}: {e}") from e

        if result.returncode != 0:
            if TAR_BENIGN_WARNING in result.stderr:
                logger.warning(f"Ignored changed files warning: {result.stderr.strip()}")
            else:
                raise ArchiveError(
                    f"Failed to package {artifact_name}: exit code {result.returncode}, "
                    f"stdout is [{result.stdout.strip()}], stderr is [{result.stderr.strip()}]",
                    stdout=result.stdout,
                    stderr=result.stderr,
                )

        if not artifact_path.is_file():
            raise ArchiveError(
                f"Package {artifact_path} was not created",
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return artifact_name
