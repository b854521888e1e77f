# app_export/services/__init__.py
"""Service layer for app-export-tool"""

from .export_service import ExportService
from .config_service import ConfigService

__all__ = [
    "ExportService",
    "ConfigService",
]
