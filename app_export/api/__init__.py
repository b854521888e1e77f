# app_export/api/__init__.py
"""Public API for app-export-tool"""

from .exceptions import (
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
from .exporter import Exporter, export, load_descriptor

__all__ = [
    # Main classes
    "Exporter",

    # Functions
    "export",
    "load_descriptor",

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
]
