# app_export/services/export_service.py
"""Export service: runs one export job end to end"""

import asyncio
import logging
import time
from typing import Iterable, Optional

from ..api.exceptions import ArchiveError, StagingError
from ..core.archiver import Archiver
from ..core.image_client import ImageClient
from ..core.image_materializer import ImageMaterializer
from ..core.pipeline import PipelineRunner
from ..formats import get_export_format
from ..models.config import ExportConfig
from ..models.descriptor import ApplicationDescriptor
from ..models.job import ExportJob, ExportResult
from ..utils.file_utils import prepare_export_dir

logger = logging.getLogger(__name__)


class ExportService:
    """Export orchestration service"""

    def __init__(self,
                 image_client: ImageClient,
                 config: Optional[ExportConfig] = None):
        """
        Initialize export service

        Args:
            image_client: Client used to pull and save images
            config: Export configuration
        """
        self.image_client = image_client
        self.config = config or ExportConfig()
        self.materializer = ImageMaterializer(
            image_client,
            pull_timeout=self.config.pull_timeout,
            pull_concurrency=self.config.pull_concurrency,
        )

    async def export(self,
                     descriptor: ApplicationDescriptor,
                     job: ExportJob,
                     dependent_images: Iterable[str] = ()) -> ExportResult:
        """
        Execute export workflow

        Args:
            descriptor: Application descriptor (left unmodified)
            job: Export job
            dependent_images: Local base images archived with the components

        Returns:
            ExportResult

        Raises:
            ExportToolError: Any failure aborts the job
        """
        start_time = time.time()
        logger.info(f"Start export app {descriptor.app_name} as {job.package_format.value}")

        # 1. Recreate staging directory
        staging = job.staging_dir.resolve()
        output = job.output_dir.resolve()
        if staging == output or staging in output.parents:
            raise StagingError(
                f"Staging dir {job.staging_dir} must not be or contain output dir {job.output_dir}",
                str(job.staging_dir),
            )
        try:
            prepare_export_dir(job.staging_dir)
        except OSError as e:
            logger.error(f"Prepare export dir failure: {e}")
            raise StagingError(f"Failed to prepare staging dir {job.staging_dir}: {e}",
                               str(job.staging_dir)) from e
        logger.info("Success prepare export dir")

        export_format = get_export_format(job.package_format, descriptor, job.mode, self.config)

        # 2. Offline image materialization
        if job.is_offline and export_format.materializes_offline_images:
            await self._materialize(descriptor, job, dependent_images)

        # 3. Staging steps
        target = export_format.export_target()
        if target is None:
            logger.warning(f"App {descriptor.app_name} has nothing to stage")
        else:
            runner = PipelineRunner(export_format.build_steps())
            await runner.run(job.staging_dir, target, self.image_client)
        logger.info("Success write package files")

        # 4. Packaging
        package_name = export_format.package_name()
        archiver = Archiver(export_format.compression, self.config.tar_command)
        try:
            name = await asyncio.to_thread(
                archiver.package, package_name, job.output_dir, job.staging_dir
            )
        except ArchiveError as e:
            logger.error(f"Failed to package app {package_name}: {e}")
            raise

        logger.info(
            f"Success export app {descriptor.app_name} in {time.time() - start_time:.2f}s"
        )
        return ExportResult(package_path=job.output_dir / name, package_name=name)

    async def _materialize(self,
                           descriptor: ApplicationDescriptor,
                           job: ExportJob,
                           dependent_images: Iterable[str]) -> None:
        dependent_images = [image for image in dependent_images if image]

        if descriptor.components or dependent_images:
            await self.materializer.materialize_components(
                descriptor, job.staging_dir, dependent_images
            )
            logger.info("Success save components")
        else:
            logger.warning("No components to save, skipping component images")

        if descriptor.plugins:
            await self.materializer.materialize_plugins(descriptor, job.staging_dir)
            logger.info("Success save plugins")
        else:
            logger.warning("No plugins to save, skipping plugin images")
