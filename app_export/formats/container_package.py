# app_export/formats/container_package.py
"""Container package (cpk) format: nested container manifest plus file list"""

import json
import logging
import math
import posixpath
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import yaml

from ..api.exceptions import ManifestError
from ..constants import (
    Compression,
    PackageFormat,
    CPK_PACKAGE_EXTENSION,
    CPK_EMPTY_PACKAGE_NAME,
    CPK_APPLICATION_FILE,
    CPK_PACKAGE_FILE,
    CPK_FILES_DIR,
    CPK_IMAGE_DIR,
    CPK_IMAGE_MANIFEST_FILE,
    CPK_FILE_LIST,
    CPK_ICONS_DIR,
    CPK_SCREENSHOTS_DIR,
    CPK_PACKAGE_SUMMARY,
    DEFAULT_CPU,
    DEFAULT_CONTAINER_PORT,
    DEFAULT_PROTOCOL,
    SUPPORTED_PROTOCOLS,
    PLACEHOLDER_COMMAND,
    VOLUME_MODE_RW,
    DOCKER_NETWORK_BRIDGE,
    CONTAINER_TYPE_DOCKER,
    HEALTH_CHECK_GRACE_PERIOD,
    HEALTH_CHECK_INTERVAL,
    HEALTH_CHECK_MAX_FAILURES,
    HEALTH_CHECK_TIMEOUT,
    HEALTH_CHECK_PROTOCOL,
    PROBE_SCHEME_CMD,
    PROBE_SCHEME_COMMAND,
)
from ..core.file_list import FileList
from ..core.image_client import ImageClient
from ..core.image_materializer import ImageMaterializer, ImageRef
from ..core.pipeline import PipelineStep
from ..models.config import ExportConfig
from ..models.descriptor import Component
from ..models.manifest import (
    AppSpec,
    ContainerSpec,
    DockerSpec,
    HealthCheck,
    ImageManifest,
    PackageInfo,
    Parameter,
    PortMapping,
    VendorInfo,
    VolumeMapping,
)
from ..utils.file_utils import copy_file, write_text_async
from .base import ExportFormat

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Field mapping
# ----------------------------------------------------------------------

def map_cpu(milli_cpu: Optional[int]) -> float:
    """Whole CPUs, rounded up, never below one"""
    if not milli_cpu:
        return float(DEFAULT_CPU)
    return float(max(DEFAULT_CPU, math.ceil(milli_cpu / 1000)))


def map_ports(component: Component) -> List[PortMapping]:
    ports = []
    for port in component.ports:
        protocol = port.protocol if port.protocol in SUPPORTED_PROTOCOLS else DEFAULT_PROTOCOL
        ports.append(PortMapping(
            container_port=port.container_port,
            protocol=protocol,
            name=f"app_{port.container_port}",
        ))

    if not ports:
        ports.append(PortMapping(
            container_port=DEFAULT_CONTAINER_PORT,
            protocol=DEFAULT_PROTOCOL,
            name=f"app_{DEFAULT_CONTAINER_PORT}",
        ))
    return ports


def map_parameters(component: Component) -> List[Parameter]:
    return [Parameter(key=env.name, value=env.value) for env in component.envs]


def map_health_checks(component: Component, ports: List[PortMapping]) -> List[HealthCheck]:
    checks = []
    for probe in component.probes:
        scheme = (probe.scheme or "").upper()
        path = probe.path
        if scheme == PROBE_SCHEME_CMD:
            scheme = PROBE_SCHEME_COMMAND
            path = probe.cmd
        checks.append(HealthCheck(
            grace_period_seconds=probe.initial_delay_seconds,
            interval_seconds=probe.period_seconds,
            max_consecutive_failures=probe.failure_threshold,
            path=path,
            port_index=probe.port,
            protocol=scheme,
            timeout_seconds=probe.timeout_seconds,
        ))

    if not checks:
        checks.append(HealthCheck(
            grace_period_seconds=HEALTH_CHECK_GRACE_PERIOD,
            interval_seconds=HEALTH_CHECK_INTERVAL,
            max_consecutive_failures=HEALTH_CHECK_MAX_FAILURES,
            path="",
            port_index=ports[0].container_port,
            protocol=HEALTH_CHECK_PROTOCOL,
            timeout_seconds=HEALTH_CHECK_TIMEOUT,
        ))
    return checks


def volume_host_path(component: Component, mount_path: str) -> str:
    return posixpath.normpath(posixpath.join(component.component_id, mount_path.lstrip("/")))


def map_volumes(component: Component) -> List[VolumeMapping]:
    return [
        VolumeMapping(
            container_path=volume.mount_path,
            host_path=volume_host_path(component, volume.mount_path),
            mode=VOLUME_MODE_RW,
        )
        for volume in component.volumes
    ]


def package_id(component: Component, config: ExportConfig) -> str:
    return f"/{config.namespace_prefix}.{component.component_id}-{component.deploy_version}"


def build_image_manifest(component: Component, config: Optional[ExportConfig] = None) -> ImageManifest:
    """
    Map a component onto the container manifest schema

    Args:
        component: Component with deploy_version set
        config: Export configuration

    Returns:
        ImageManifest
    """
    config = config or ExportConfig()

    ports = map_ports(component)
    base_id = package_id(component, config)
    app_id = base_id + base_id if config.doubled_app_id else base_id
    cmd = "" if component.cmd == PLACEHOLDER_COMMAND else component.cmd

    docker = DockerSpec(
        image=component.share_image,
        network=DOCKER_NETWORK_BRIDGE,
        parameters=map_parameters(component),
        port_mappings=ports,
    )
    app = AppSpec(
        id=app_id,
        cmd=cmd,
        container=ContainerSpec(
            docker=docker,
            type=CONTAINER_TYPE_DOCKER,
            volumes=map_volumes(component),
        ),
        cpus=map_cpu(component.cpu),
        mem=component.memory,
        instances=component.replicas,
        health_checks=map_health_checks(component, ports),
        labels=dict(component.labels),
    )
    return ImageManifest(id=base_id, apps=[app])


def build_package_info(component: Component, config: Optional[ExportConfig] = None) -> PackageInfo:
    config = config or ExportConfig()
    return PackageInfo(
        id=f"{config.namespace_prefix}.{component.component_id}",
        name=component.component_id,
        version=component.deploy_version,
        architecture=component.arch,
        summary=CPK_PACKAGE_SUMMARY,
        vendor=VendorInfo(
            name=config.vendor.name,
            homepage=config.vendor.homepage,
            email=config.vendor.email,
            telephone=config.vendor.telephone,
        ),
    )


def _to_json(data) -> str:
    return json.dumps(data, indent=4, ensure_ascii=False)


# ----------------------------------------------------------------------
# Steps
# ----------------------------------------------------------------------

class ApplicationFileStep(PipelineStep):
    """Writes application.yml"""

    name = "application-file"

    def __init__(self, config: ExportConfig):
        self.config = config

    async def run(self, staging_dir: Path, target: Component, image_client: ImageClient) -> None:
        document = {
            "id": f"{self.config.namespace_prefix}.{target.component_id}",
            "name": target.component_id,
            "version": target.deploy_version,
            "architecture": target.arch,
        }
        try:
            content = yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
            await write_text_async(staging_dir / CPK_APPLICATION_FILE, content)
        except (OSError, yaml.YAMLError) as e:
            raise ManifestError(f"Write {CPK_APPLICATION_FILE} failure: {e}", target.component_id) from e


class PayloadFilesStep(PipelineStep):
    """Writes files/: image manifest, component image, config files and the file list"""

    name = "payload-files"

    def __init__(self, config: ExportConfig):
        self.config = config

    def image_archive_name(self, component: Component) -> str:
        return f"{self.config.namespace_prefix}.{component.component_id}_{component.deploy_version}.tar"

    async def run(self, staging_dir: Path, target: Component, image_client: ImageClient) -> None:
        files_dir = staging_dir / CPK_FILES_DIR
        image_dir = files_dir / CPK_IMAGE_DIR
        image_dir.mkdir(parents=True, exist_ok=True)
        file_list = FileList(files_dir)

        manifest = build_image_manifest(target, self.config)
        manifest_path = files_dir / CPK_IMAGE_MANIFEST_FILE
        try:
            await write_text_async(manifest_path, _to_json(manifest.to_dict()))
        except (OSError, TypeError, ValueError) as e:
            raise ManifestError(f"Write {CPK_IMAGE_MANIFEST_FILE} failure: {e}", target.component_id) from e
        await file_list.add_file(manifest_path)

        materializer = ImageMaterializer(
            image_client,
            pull_timeout=self.config.pull_timeout,
        )
        archive = await materializer.materialize_set(
            [ImageRef(
                owner=f"component {target.component_id}",
                reference=target.share_image,
                hub_user=target.image_info.hub_user,
                hub_password=target.image_info.hub_password,
            )],
            image_dir / self.image_archive_name(target),
        )
        if archive is not None:
            await file_list.add_file(archive)

        for volume in target.volumes:
            if not volume.file_content:
                continue
            host_path = volume_host_path(target, volume.mount_path)
            if host_path.startswith(".."):
                raise ManifestError(f"Volume path {volume.mount_path} escapes the payload", target.component_id)
            config_path = files_dir / host_path
            try:
                await write_text_async(config_path, volume.file_content)
            except OSError as e:
                raise ManifestError(f"Write config file {config_path} failure: {e}", target.component_id) from e
            await file_list.add_file(config_path)

        file_list.add_directory(image_dir)

        try:
            await write_text_async(staging_dir / CPK_FILE_LIST, file_list.render())
        except OSError as e:
            raise ManifestError(f"Write {CPK_FILE_LIST} failure: {e}", target.component_id) from e


class ArtworkStep(PipelineStep):
    """Copies a configured picture into the package (icons, screenshots)"""

    def __init__(self, name: str, directory: str, source: Optional[Path], filename_pattern: str,
                 config: ExportConfig):
        self.name = name
        self.directory = directory
        self.source = source
        self.filename_pattern = filename_pattern
        self.config = config

    async def run(self, staging_dir: Path, target: Component, image_client: ImageClient) -> None:
        target_dir = staging_dir / self.directory
        target_dir.mkdir(parents=True, exist_ok=True)

        if self.source is None:
            logger.warning(f"No {self.name} source configured, leaving {self.directory}/ empty")
            return

        filename = self.filename_pattern.format(
            prefix=self.config.namespace_prefix,
            component_id=target.component_id,
        )
        try:
            copy_file(self.source, target_dir / filename)
        except (OSError, ValueError) as e:
            raise ManifestError(f"Copy {self.source} failure: {e}", target.component_id) from e


class PackageFileStep(PipelineStep):
    """Writes package.json"""

    name = "package-file"

    def __init__(self, config: ExportConfig):
        self.config = config

    async def run(self, staging_dir: Path, target: Component, image_client: ImageClient) -> None:
        info = build_package_info(target, self.config)
        try:
            await write_text_async(staging_dir / CPK_PACKAGE_FILE, _to_json(info.to_dict()))
        except (OSError, TypeError, ValueError) as e:
            raise ManifestError(f"Write {CPK_PACKAGE_FILE} failure: {e}", target.component_id) from e


# ----------------------------------------------------------------------
# Format
# ----------------------------------------------------------------------

class ContainerPackageFormat(ExportFormat):
    """Exports the descriptor's first component as a container package"""

    package_format = PackageFormat.CPK
    compression = Compression.BZIP2
    materializes_offline_images = False

    def export_target(self) -> Optional[Component]:
        if not self.descriptor.components:
            return None
        return replace(self.descriptor.components[0], deploy_version=self.descriptor.app_version)

    def package_name(self) -> str:
        component = self.export_target()
        if component is None:
            return f"{CPK_EMPTY_PACKAGE_NAME}.{CPK_PACKAGE_EXTENSION}"
        return (
            f"{self.config.namespace_prefix}.{component.component_id}"
            f"_v{component.deploy_version}_{component.arch}.{CPK_PACKAGE_EXTENSION}"
        )

    def build_steps(self) -> List[PipelineStep]:
        return [
            ApplicationFileStep(self.config),
            PayloadFilesStep(self.config),
            ArtworkStep("icon", CPK_ICONS_DIR, self.config.icon_path,
                        "{prefix}.{component_id}.png", self.config),
            ArtworkStep("screenshot", CPK_SCREENSHOTS_DIR, self.config.screenshot_path,
                        "{prefix}.{component_id}_1.png", self.config),
            PackageFileStep(self.config),
        ]
