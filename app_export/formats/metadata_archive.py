# app_export/formats/metadata_archive.py
"""Metadata archive (ram) format: near-verbatim descriptor document"""

import base64
import binascii
import copy
import json
import logging
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from ..api.exceptions import ManifestError
from ..constants import (
    Compression,
    PackageFormat,
    RAM_METADATA_FILE,
    RAM_PACKAGE_SUFFIX,
    ANNOTATION_IMAGE_BASE64,
    ANNOTATION_IMAGE_SUFFIX,
    ANNOTATION_PICTURE_NAME,
    DEFAULT_PICTURE_SUFFIX,
    SAFE_NAME_CHAR_PATTERN,
)
from ..core.image_client import ImageClient
from ..core.pipeline import PipelineStep
from ..models.descriptor import ApplicationDescriptor, ImageInfo
from ..utils.file_utils import write_bytes_async, write_text_async
from ..utils.naming import file_name_part
from .base import ExportFormat

logger = logging.getLogger(__name__)


def scrub_credentials(descriptor: ApplicationDescriptor) -> ApplicationDescriptor:
    """Reset every component and plugin registry record in place"""
    for component in descriptor.components:
        component.image_info = ImageInfo()
    for plugin in descriptor.plugins:
        plugin.image_info = ImageInfo()
    return descriptor


def picture_suffix(annotations: Dict[str, str]) -> str:
    """Extension for the staged picture; anything but a plain extension falls back to jpg"""
    suffix = (annotations.get(ANNOTATION_IMAGE_SUFFIX) or "").lstrip(".")
    if not suffix:
        return DEFAULT_PICTURE_SUFFIX
    if not all(SAFE_NAME_CHAR_PATTERN.fullmatch(c) for c in suffix):
        logger.warning(f"Ignored picture suffix {suffix!r}, using {DEFAULT_PICTURE_SUFFIX}")
        return DEFAULT_PICTURE_SUFFIX
    return suffix


class PictureStep(PipelineStep):
    """Replaces an inline base64 picture annotation with a staged file"""

    name = "picture"

    async def run(self, staging_dir: Path, target: ApplicationDescriptor,
                  image_client: ImageClient) -> None:
        encoded = target.annotations.get(ANNOTATION_IMAGE_BASE64)
        if encoded is None:
            return

        try:
            content = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Save picture failed, invalid base64 payload: {e}")
            return

        file_name = f"{uuid.uuid4().hex}.{picture_suffix(target.annotations)}"
        try:
            await write_bytes_async(staging_dir / file_name, content)
        except OSError as e:
            logger.error(f"Save picture failed: {e}")
            return

        del target.annotations[ANNOTATION_IMAGE_BASE64]
        target.annotations[ANNOTATION_PICTURE_NAME] = file_name
        logger.info(f"Saved app picture as {file_name}")


class MetadataStep(PipelineStep):
    """Writes metadata.json, scrubbing registry credentials in offline mode"""

    name = "metadata"

    def __init__(self, offline: bool):
        self.offline = offline

    async def run(self, staging_dir: Path, target: ApplicationDescriptor,
                  image_client: ImageClient) -> None:
        if self.offline:
            scrub_credentials(target)

        try:
            meta = json.dumps(target.to_dict(), indent=4, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ManifestError(f"Marshal app metadata failure: {e}", target.app_name) from e

        try:
            await write_text_async(staging_dir / RAM_METADATA_FILE, meta)
        except OSError as e:
            raise ManifestError(f"Write app metadata file failure: {e}", target.app_name) from e


class MetadataArchiveFormat(ExportFormat):
    """Serializes the whole descriptor; component and plugin images are archived alongside"""

    package_format = PackageFormat.RAM
    compression = Compression.GZIP
    materializes_offline_images = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.document = copy.deepcopy(self.descriptor)

    def export_target(self) -> Optional[ApplicationDescriptor]:
        return self.document

    def package_name(self) -> str:
        name = file_name_part(self.descriptor.app_name)
        version = file_name_part(self.descriptor.app_version)
        return f"{name}-{version}-{RAM_PACKAGE_SUFFIX}.tar.gz"

    def build_steps(self) -> List[PipelineStep]:
        return [
            PictureStep(),
            MetadataStep(offline=self.is_offline),
        ]
