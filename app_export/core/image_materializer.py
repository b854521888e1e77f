# app_export/core/image_materializer.py
"""Pull referenced images and save them into a single local archive"""

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..api.exceptions import PullError, SaveError
from ..constants import (
    COMPONENT_IMAGES_ARCHIVE,
    PLUGIN_IMAGES_ARCHIVE,
    DEFAULT_PULL_TIMEOUT,
    DEFAULT_PULL_CONCURRENCY,
)
from ..models.descriptor import ApplicationDescriptor
from ..utils.naming import decode_unicode_escapes
from .image_client import ImageClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageRef:
    """Image reference owned by a component or plugin"""
    owner: str
    reference: str
    hub_user: str = ""
    hub_password: str = ""


class ImageMaterializer:
    """Turns image references into one local image archive"""

    def __init__(self,
                 image_client: ImageClient,
                 pull_timeout: int = DEFAULT_PULL_TIMEOUT,
                 pull_concurrency: int = DEFAULT_PULL_CONCURRENCY):
        """
        Initialize materializer

        Args:
            image_client: Client used for pull and save
            pull_timeout: Timeout for each pull in seconds
            pull_concurrency: Number of pulls allowed to run at once
        """
        self.image_client = image_client
        self.pull_timeout = pull_timeout
        self.pull_concurrency = max(1, pull_concurrency)

    async def _pull(self, image: ImageRef, semaphore: asyncio.Semaphore) -> str:
        async with semaphore:
            try:
                local_name = await asyncio.to_thread(
                    self.image_client.pull,
                    image.reference,
                    image.hub_user,
                    image.hub_password,
                    self.pull_timeout,
                )
            except Exception as e:
                raise PullError(image.owner, image.reference, e) from e
        logger.info(f"Pull {image.owner} image {image.reference} success")
        return local_name

    async def pull_all(self, images: Sequence[ImageRef]) -> List[str]:
        """
        Pull every non-empty reference

        Args:
            images: Ordered image references

        Returns:
            Local image names in input order

        Raises:
            PullError: On the first failing pull
        """
        wanted = [image for image in images if image.reference]
        if not wanted:
            return []

        semaphore = asyncio.Semaphore(self.pull_concurrency)
        if self.pull_concurrency == 1:
            return [await self._pull(image, semaphore) for image in wanted]

        tasks = [asyncio.ensure_future(self._pull(image, semaphore)) for image in wanted]
        try:
            return list(await asyncio.gather(*tasks))
        except PullError:
            for task in tasks:
                task.cancel()
            raise

    async def materialize_set(self,
                              images: Sequence[ImageRef],
                              destination: Path,
                              dependent_images: Iterable[str] = ()) -> Optional[Path]:
        """
        Pull images and save them into one archive

        Args:
            images: Ordered image references
            destination: Archive path
            dependent_images: Extra local image names appended after pulls

        Returns:
            Archive path, or None when there was nothing to save

        Raises:
            PullError: If any pull fails
            SaveError: If the batched save fails
        """
        image_names = await self.pull_all(images)
        image_names.extend(name for name in dependent_images if name)

        if not image_names:
            logger.warning(f"No images to save, skipping {destination.name}")
            return None

        start = time.time()
        try:
            await asyncio.to_thread(self.image_client.save, destination, image_names)
        except Exception as e:
            logger.error(f"Failed to save images {image_names}: {e}")
            raise SaveError(str(destination), image_names, e) from e

        logger.info(
            f"Save {len(image_names)} image(s) to {destination.name} success, "
            f"took {time.time() - start:.2f}s"
        )
        return destination

    async def materialize_components(self,
                                     descriptor: ApplicationDescriptor,
                                     staging_dir: Path,
                                     dependent_images: Iterable[str] = ()) -> Optional[Path]:
        """Materialize all component images into the component archive"""
        images = [
            ImageRef(
                owner=f"component {decode_unicode_escapes(component.name)}",
                reference=component.share_image,
                hub_user=component.image_info.hub_user,
                hub_password=component.image_info.hub_password,
            )
            for component in descriptor.components
        ]
        return await self.materialize_set(
            images, staging_dir / COMPONENT_IMAGES_ARCHIVE, dependent_images
        )

    async def materialize_plugins(self,
                                  descriptor: ApplicationDescriptor,
                                  staging_dir: Path) -> Optional[Path]:
        """Materialize all plugin images into the plugin archive"""
        images = [
            ImageRef(
                owner=f"plugin {decode_unicode_escapes(plugin.name)}",
                reference=plugin.share_image,
                hub_user=plugin.image_info.hub_user,
                hub_password=plugin.image_info.hub_password,
            )
            for plugin in descriptor.plugins
        ]
        return await self.materialize_set(images, staging_dir / PLUGIN_IMAGES_ARCHIVE)
