"""Exception definitions for app-export-tool API"""

from typing import Optional

from ..constants import ErrorCode


class ExportToolError(Exception):
    """Base exception for app-export-tool"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(ExportToolError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class ValidationError(ExportToolError):
    """Descriptor validation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DESCRIPTOR_INVALID)


class StagingError(ExportToolError):
    """Staging directory could not be prepared or verified"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.STAGING_FAILED)
        self.path = path


class PullError(ExportToolError):
    """Image pull failed for a component or plugin"""

    def __init__(self, owner: str, reference: str, cause: Exception):
        message = f"Failed to pull image {reference} for {owner}: {cause}"
        super().__init__(message, ErrorCode.IMAGE_PULL_FAILED)
        self.owner = owner
        self.reference = reference
        self.cause = cause


class SaveError(ExportToolError):
    """Batched image save failed"""

    def __init__(self, destination: str, images, cause: Exception):
        message = f"Failed to save images {list(images)} to {destination}: {cause}"
        super().__init__(message, ErrorCode.IMAGE_SAVE_FAILED)
        self.destination = destination
        self.images = list(images)
        self.cause = cause


class ManifestError(ExportToolError):
    """Manifest serialization or checksum computation failed"""

    def __init__(self, message: str, owner: Optional[str] = None):
        super().__init__(message, ErrorCode.MANIFEST_FAILED)
        self.owner = owner


class ArchiveError(ExportToolError):
    """Archiving process failed or produced no artifact"""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        super().__init__(message, ErrorCode.ARCHIVE_FAILED)
        self.stdout = stdout
        self.stderr = stderr


class StepError(ExportToolError):
    """A pipeline step failed with an unexpected error"""

    def __init__(self, step_name: str, owner: str, cause: Exception):
        message = f"Step '{step_name}' failed for {owner}: {cause}"
        super().__init__(message, ErrorCode.STEP_FAILED)
        self.step_name = step_name
        self.owner = owner
        self.cause = cause
