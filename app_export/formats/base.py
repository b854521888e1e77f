# app_export/formats/base.py
"""Export format abstraction shared by all package formats"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..constants import Compression, ExportMode, PackageFormat
from ..core.pipeline import PipelineStep, Target
from ..models.config import ExportConfig
from ..models.descriptor import ApplicationDescriptor


class ExportFormat(ABC):
    """
    Package format capability

    A format decides the package name, the compression, which target the
    pipeline runs against and the ordered steps that stage its files.
    """

    package_format: PackageFormat
    compression: Compression = Compression.GZIP
    # Run the orchestrator's component/plugin image materialization in offline mode
    materializes_offline_images: bool = False

    def __init__(self,
                 descriptor: ApplicationDescriptor,
                 mode: ExportMode,
                 config: Optional[ExportConfig] = None):
        """
        Initialize format

        Args:
            descriptor: Descriptor being exported (not mutated)
            mode: Export mode
            config: Export configuration
        """
        self.descriptor = descriptor
        self.mode = mode
        self.config = config or ExportConfig()

    @property
    def is_offline(self) -> bool:
        return self.mode == ExportMode.OFFLINE

    @abstractmethod
    def package_name(self) -> str:
        """File name of the final artifact"""
        pass

    @abstractmethod
    def export_target(self) -> Optional[Target]:
        """Target the pipeline runs against, None to skip the pipeline"""
        pass

    @abstractmethod
    def build_steps(self) -> List[PipelineStep]:
        """Ordered staging steps"""
        pass
