# app_export/core/__init__.py
"""Core modules for app-export-tool"""

from .image_client import ImageClient, DockerCliImageClient, ImageClientError
from .image_materializer import ImageMaterializer, ImageRef
from .pipeline import PipelineRunner, PipelineStep, FunctionStep
from .archiver import Archiver
from .file_list import FileList, FileListEntry
from .validation_engine import ValidationEngine, ValidationResult

__all__ = [
    "ImageClient",
    "DockerCliImageClient",
    "ImageClientError",
    "ImageMaterializer",
    "ImageRef",
    "PipelineRunner",
    "PipelineStep",
    "FunctionStep",
    "Archiver",
    "FileList",
    "FileListEntry",
    "ValidationEngine",
    "ValidationResult",
]
