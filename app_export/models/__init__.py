# app_export/models/__init__.py
"""Data models for app-export-tool"""

from .descriptor import (
    ApplicationDescriptor,
    Component,
    Plugin,
    ImageInfo,
    Port,
    Volume,
    EnvVar,
    Probe,
)
from .job import ExportJob, ExportResult
from .manifest import (
    ImageManifest,
    AppSpec,
    ContainerSpec,
    DockerSpec,
    Parameter,
    PortMapping,
    VolumeMapping,
    HealthCheck,
    PackageInfo,
    VendorInfo,
)
from .config import ExportConfig, VendorConfig

__all__ = [
    # Descriptor models
    "ApplicationDescriptor",
    "Component",
    "Plugin",
    "ImageInfo",
    "Port",
    "Volume",
    "EnvVar",
    "Probe",

    # Job models
    "ExportJob",
    "ExportResult",

    # Container package manifest models
    "ImageManifest",
    "AppSpec",
    "ContainerSpec",
    "DockerSpec",
    "Parameter",
    "PortMapping",
    "VolumeMapping",
    "HealthCheck",
    "PackageInfo",
    "VendorInfo",

    # Config models
    "ExportConfig",
    "VendorConfig",
]
