"""App Export Tool - Turn application descriptors into distributable packages.

Supports two package formats: a container package (cpk) with a nested
container manifest and checksummed file list, and a metadata archive (ram)
carrying the descriptor itself plus its images for offline installs.
"""

from .__version__ import __version__, __version_info__, __license__

# Exceptions
from .api.exceptions import (
    ExportToolError,
    ConfigError,
    ValidationError,
    StagingError,
    PullError,
    SaveError,
    ManifestError,
    ArchiveError,
    StepError,
)

# Core API
from .api.exporter import Exporter, export, load_descriptor

# Data models
from .constants import ExportMode, PackageFormat
from .models import (
    ApplicationDescriptor,
    Component,
    Plugin,
    ExportJob,
    ExportResult,
    ExportConfig,
)

# Utility functions
from .utils import compose_name, decode_unicode_escapes

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Exporter",

    # Core API functions
    "export",
    "load_descriptor",

    # Data models
    "ApplicationDescriptor",
    "Component",
    "Plugin",
    "ExportJob",
    "ExportResult",
    "ExportConfig",
    "ExportMode",
    "PackageFormat",

    # Exceptions
    "ExportToolError",
    "ConfigError",
    "ValidationError",
    "StagingError",
    "PullError",
    "SaveError",
    "ManifestError",
    "ArchiveError",
    "StepError",

    # Utility functions
    "compose_name",
    "decode_unicode_escapes",
]
