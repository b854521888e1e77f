"""Exporter API for export operations"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

from ..constants import ExportMode, PackageFormat
from ..core import DockerCliImageClient, ImageClient, ValidationEngine
from ..models import ApplicationDescriptor, ExportConfig, ExportJob, ExportResult
from ..services import ExportService
from ..utils.naming import compose_name
from .exceptions import ValidationError


def load_descriptor(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a raw descriptor mapping from a JSON or YAML file

    Args:
        path: Descriptor file

    Returns:
        Descriptor dictionary
    """
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"Descriptor file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"Cannot parse descriptor {path}: {e}")

    if not isinstance(data, dict):
        raise ValidationError(f"Descriptor {path} must be a mapping")
    return data


class Exporter:
    """Exporter class for export operations"""

    def __init__(self,
                 config: Optional[ExportConfig] = None,
                 image_client: Optional[ImageClient] = None):
        """
        Initialize exporter

        Args:
            config: Export configuration
            image_client: Image client (docker CLI by default)
        """
        self.config = config or ExportConfig()
        self.image_client = image_client or DockerCliImageClient(self.config.docker_command)
        self.validation_engine = ValidationEngine()
        self.export_service = ExportService(self.image_client, self.config)

    def parse_descriptor(self, data: Dict[str, Any]) -> ApplicationDescriptor:
        """
        Validate and build a descriptor from a raw mapping

        Raises:
            ValidationError: If the mapping is not a valid descriptor
        """
        result = self.validation_engine.validate_descriptor(data)
        if not result.is_valid:
            raise ValidationError(f"Invalid descriptor: {'; '.join(result.errors)}")
        return ApplicationDescriptor.from_dict(data)

    def export(self,
               descriptor: Union[ApplicationDescriptor, Dict[str, Any]],
               output_dir: Union[str, Path],
               package_format: Union[str, PackageFormat] = PackageFormat.RAM,
               mode: Union[str, ExportMode] = ExportMode.ONLINE,
               staging_dir: Optional[Union[str, Path]] = None,
               dependent_images: Iterable[str] = ()) -> ExportResult:
        """
        Export an application into a package

        Args:
            descriptor: Descriptor object or raw mapping
            output_dir: Directory receiving the package
            package_format: cpk or ram
            mode: online or offline
            staging_dir: Staging directory (default: <output_dir>/<app name>)
            dependent_images: Extra local images archived with components

        Returns:
            ExportResult

        Raises:
            ExportToolError: If the export fails
        """
        if isinstance(descriptor, dict):
            descriptor = self.parse_descriptor(descriptor)

        if staging_dir is None:
            job = ExportJob.create(output_dir, compose_name(descriptor.app_name) or "app",
                                   mode=mode, package_format=package_format)
        else:
            job = ExportJob(staging_dir=Path(staging_dir), output_dir=Path(output_dir),
                            mode=mode, package_format=package_format)

        return asyncio.run(self.export_service.export(descriptor, job, dependent_images))


# Convenience function
def export(descriptor: Union[ApplicationDescriptor, Dict[str, Any], str, Path],
           output_dir: Union[str, Path],
           **options) -> ExportResult:
    """
    Export an application (convenience function)

    Args:
        descriptor: Descriptor object, raw mapping, or descriptor file path
        output_dir: Output directory
        **options: Options
            - package_format: cpk or ram
            - mode: online or offline
            - staging_dir: Staging directory
            - dependent_images: Extra local images
            - config: ExportConfig
            - image_client: ImageClient

    Returns:
        ExportResult
    """
    exporter = Exporter(
        config=options.pop('config', None),
        image_client=options.pop('image_client', None),
    )
    if isinstance(descriptor, (str, Path)):
        descriptor = load_descriptor(descriptor)
    return exporter.export(descriptor, output_dir, **options)
