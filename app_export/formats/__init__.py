# app_export/formats/__init__.py
"""Package formats"""

from typing import Dict, Optional, Type

from ..constants import ExportMode, PackageFormat
from ..models.config import ExportConfig
from ..models.descriptor import ApplicationDescriptor
from .base import ExportFormat
from .container_package import ContainerPackageFormat, build_image_manifest
from .metadata_archive import MetadataArchiveFormat, scrub_credentials

FORMATS: Dict[PackageFormat, Type[ExportFormat]] = {
    PackageFormat.CPK: ContainerPackageFormat,
    PackageFormat.RAM: MetadataArchiveFormat,
}


def get_export_format(package_format: PackageFormat,
                      descriptor: ApplicationDescriptor,
                      mode: ExportMode,
                      config: Optional[ExportConfig] = None) -> ExportFormat:
    """Instantiate the format selected by the job"""
    try:
        format_cls = FORMATS[package_format]
    except KeyError:
        raise ValueError(f"Unsupported package format: {package_format}")
    return format_cls(descriptor, mode, config)


__all__ = [
    "ExportFormat",
    "ContainerPackageFormat",
    "MetadataArchiveFormat",
    "FORMATS",
    "get_export_format",
    "build_image_manifest",
    "scrub_credentials",
]
