"""Tests for ExportService and the Exporter API"""

import json
import tarfile

import pytest

from app_export import Exporter, export
from app_export.api.exceptions import ArchiveError, PullError, StagingError, ValidationError
from app_export.constants import ExportMode, PackageFormat
from app_export.models import ApplicationDescriptor, Component, ExportConfig, ExportJob
from app_export.services import ExportService

from .conftest import FakeImageClient, requires_tar


@pytest.fixture
def config(fake_tar):
    return ExportConfig(tar_command=str(fake_tar["ok"]))


def _job(tmp_path, package_format, mode):
    return ExportJob.create(tmp_path / "dist", "demo-app", mode=mode, package_format=package_format)


@pytest.mark.asyncio
async def test_offline_metadata_archive_bundles_images(tmp_path, descriptor, image_client, config):
    service = ExportService(image_client, config)
    job = _job(tmp_path, PackageFormat.RAM, ExportMode.OFFLINE)

    result = await service.export(descriptor, job, dependent_images=["base/runtime:1"])

    assert result.package_name == "demo-app-1.0-ram.tar.gz"
    assert result.package_path == tmp_path / "dist" / "demo-app-1.0-ram.tar.gz"
    assert result.package_path.exists()

    components_tar = job.staging_dir / "component-images.tar"
    plugins_tar = job.staging_dir / "plugins-images.tar"
    assert components_tar.exists()
    assert plugins_tar.exists()
    assert image_client.saves == [
        (components_tar, [
            "local/demo:1.0",
            "local/registry.example.com/team/worker:2.1",
            "base/runtime:1",
        ]),
        (plugins_tar, ["local/plugins/log-agent:0.3"]),
    ]

    metadata = json.loads((job.staging_dir / "metadata.json").read_text())
    assert all(not c["image_info"]["hub_password"] for c in metadata["components"])
    assert descriptor.components[0].image_info.hub_password == "secret"


@pytest.mark.asyncio
async def test_online_export_pulls_nothing(tmp_path, descriptor, image_client, config):
    service = ExportService(image_client, config)

    await service.export(descriptor, _job(tmp_path, PackageFormat.RAM, ExportMode.ONLINE))

    assert image_client.pulls == []
    assert image_client.saves == []


@pytest.mark.asyncio
async def test_empty_plugin_set_is_skipped(tmp_path, descriptor, image_client, config):
    descriptor.plugins = []
    service = ExportService(image_client, config)
    job = _job(tmp_path, PackageFormat.RAM, ExportMode.OFFLINE)

    await service.export(descriptor, job)

    assert (job.staging_dir / "component-images.tar").exists()
    assert not (job.staging_dir / "plugins-images.tar").exists()


@pytest.mark.asyncio
async def test_staging_dir_recreated(tmp_path, descriptor, image_client, config):
    job = _job(tmp_path, PackageFormat.RAM, ExportMode.ONLINE)
    job.staging_dir.mkdir(parents=True)
    (job.staging_dir / "stale.txt").write_text("left over")

    await ExportService(image_client, config).export(descriptor, job)

    assert not (job.staging_dir / "stale.txt").exists()
    assert (job.staging_dir / "metadata.json").exists()


@pytest.mark.asyncio
@pytest.mark.parametrize("staging,output", [
    ("dist", "dist"),
    ("dist", "dist/packages"),
])
async def test_staging_dir_must_not_hold_output(tmp_path, descriptor, image_client, config,
                                                staging, output):
    output_dir = tmp_path / output
    output_dir.mkdir(parents=True)
    previous = output_dir / "demo-app-0.9-ram.tar.gz"
    previous.write_text("earlier package")
    job = ExportJob(staging_dir=tmp_path / staging, output_dir=output_dir)

    with pytest.raises(StagingError):
        await ExportService(image_client, config).export(descriptor, job)

    assert previous.read_text() == "earlier package"


@pytest.mark.asyncio
async def test_pull_failure_aborts_job(tmp_path, descriptor, config):
    client = FakeImageClient(fail_on=["registry.example.com/team/worker:2.1"])
    job = _job(tmp_path, PackageFormat.RAM, ExportMode.OFFLINE)

    with pytest.raises(PullError) as exc_info:
        await ExportService(client, config).export(descriptor, job)

    assert "worker" in str(exc_info.value)
    assert client.saves == []
    assert not (job.staging_dir / "metadata.json").exists()
    assert not (tmp_path / "dist" / "demo-app-1.0-ram.tar.gz").exists()


@pytest.mark.asyncio
async def test_archive_failure_propagates(tmp_path, descriptor, image_client, fake_tar):
    service = ExportService(image_client, ExportConfig(tar_command=str(fake_tar["fatal"])))

    with pytest.raises(ArchiveError):
        await service.export(descriptor, _job(tmp_path, PackageFormat.RAM, ExportMode.ONLINE))


@pytest.mark.asyncio
async def test_container_package_export(tmp_path, descriptor, image_client, config):
    job = _job(tmp_path, PackageFormat.CPK, ExportMode.OFFLINE)

    result = await ExportService(image_client, config).export(descriptor, job)

    assert result.package_name == "cpk.rbd.demo_v1.0_amd64.cpk"
    assert (job.staging_dir / "package.json").exists()
    assert not (job.staging_dir / "component-images.tar").exists()
    # only the exported component's image is pulled
    assert [p[0] for p in image_client.pulls] == ["demo:1.0"]


@pytest.mark.asyncio
async def test_container_package_without_components(tmp_path, image_client, config):
    descriptor = ApplicationDescriptor(app_name="empty", app_version="0.1")

    result = await ExportService(image_client, config).export(
        descriptor, _job(tmp_path, PackageFormat.CPK, ExportMode.ONLINE)
    )

    assert result.package_name == "null-app.cpk"


@requires_tar
@pytest.mark.asyncio
async def test_real_archive_contents(tmp_path, descriptor, image_client):
    job = _job(tmp_path, PackageFormat.RAM, ExportMode.OFFLINE)

    result = await ExportService(image_client).export(descriptor, job)

    with tarfile.open(result.package_path, "r:gz") as archive:
        names = set(archive.getnames())
    assert {
        "demo-app/metadata.json",
        "demo-app/component-images.tar",
        "demo-app/plugins-images.tar",
    } <= names


class TestExporter:

    def test_export_from_mapping(self, tmp_path, image_client, config):
        exporter = Exporter(config=config, image_client=image_client)
        data = {
            "app_name": "\\u4e2d\\u6587 app",
            "app_version": 2,
            "components": [{"component_id": "web", "share_image": "web:2"}],
        }

        result = exporter.export(data, tmp_path / "out", package_format="ram", mode="offline")

        assert result.package_name == "中文 app-2-ram.tar.gz"
        assert (tmp_path / "out" / "zhongwen_app" / "metadata.json").exists()
        assert image_client.pulls[0][0] == "web:2"

    def test_path_separators_in_app_name(self, tmp_path, image_client, config):
        exporter = Exporter(config=config, image_client=image_client)
        data = {"app_name": "team/shop", "app_version": "1", "components": []}

        result = exporter.export(data, tmp_path / "out", package_format="ram")

        assert result.package_name == "team_shop-1-ram.tar.gz"
        assert result.package_path == tmp_path / "out" / "team_shop-1-ram.tar.gz"
        assert result.package_path.exists()

    def test_explicit_staging_dir(self, tmp_path, descriptor, image_client, config):
        exporter = Exporter(config=config, image_client=image_client)

        exporter.export(descriptor, tmp_path / "out", staging_dir=tmp_path / "work" / "job-1")

        assert (tmp_path / "work" / "job-1" / "metadata.json").exists()

    def test_invalid_mapping_rejected(self, tmp_path, image_client, config):
        exporter = Exporter(config=config, image_client=image_client)

        with pytest.raises(ValidationError, match="app_version"):
            exporter.export({"app_name": "x"}, tmp_path)

    def test_convenience_function_reads_file(self, tmp_path, image_client, config):
        path = tmp_path / "app.yaml"
        path.write_text(
            "app_name: shop\n"
            "app_version: '1.2'\n"
            "components:\n"
            "  - component_id: api\n"
            "    share_image: shop/api:1.2\n"
        )

        result = export(path, tmp_path / "dist", package_format=PackageFormat.CPK,
                        config=config, image_client=image_client)

        assert result.package_name == "cpk.rbd.api_v1.2_amd64.cpk"
        assert isinstance(result.to_dict()["package_path"], str)


def test_component_descriptor_roundtrip_keeps_env_order():
    component = Component.from_dict({
        "component_id": "c",
        "envs": [{"name": "A", "value": 1}, {"name": "A", "value": "2"}],
    })

    assert [(e.name, e.value) for e in component.envs] == [("A", "1"), ("A", "2")]
