"""Tests for the metadata archive (ram) format"""

import base64
import json

import pytest

from app_export.constants import ExportMode
from app_export.core.pipeline import PipelineRunner
from app_export.formats.metadata_archive import (
    MetadataArchiveFormat,
    picture_suffix,
    scrub_credentials,
)
from app_export.models import ApplicationDescriptor


async def _stage(tmp_path, export_format, image_client):
    await PipelineRunner(export_format.build_steps()).run(
        tmp_path, export_format.export_target(), image_client
    )
    return json.loads((tmp_path / "metadata.json").read_text())


def _credentials(metadata):
    records = [c["image_info"] for c in metadata["components"]]
    records += [p["image_info"] for p in metadata["plugins"]]
    return records


def test_package_name(descriptor):
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)
    assert export_format.package_name() == "demo-app-1.0-ram.tar.gz"


@pytest.mark.parametrize("app_name,app_version,expected", [
    ("team/shop", "1", "team_shop-1-ram.tar.gz"),
    ("a\\b", "2/3", "a_b-2_3-ram.tar.gz"),
    ("\\u4e2d\\u6587", "1.0", "中文-1.0-ram.tar.gz"),
])
def test_package_name_stays_a_single_file(app_name, app_version, expected):
    descriptor = ApplicationDescriptor(app_name=app_name, app_version=app_version)
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)

    assert export_format.package_name() == expected


def test_scrub_credentials_resets_every_record(descriptor):
    scrub_credentials(descriptor)

    assert all(c.image_info.is_empty for c in descriptor.components)
    assert all(p.image_info.is_empty for p in descriptor.plugins)


@pytest.mark.asyncio
async def test_offline_metadata_has_no_credentials(tmp_path, descriptor, image_client):
    export_format = MetadataArchiveFormat(descriptor, ExportMode.OFFLINE)

    metadata = await _stage(tmp_path, export_format, image_client)

    for record in _credentials(metadata):
        assert record["hub_url"] == ""
        assert record["hub_user"] == ""
        assert record["hub_password"] == ""
        assert record["namespace"] == ""
    assert metadata["annotations"] == {"owner": "platform"}
    assert [c["component_id"] for c in metadata["components"]] == ["demo", "worker"]


@pytest.mark.asyncio
async def test_online_metadata_keeps_credentials(tmp_path, descriptor, image_client):
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)

    metadata = await _stage(tmp_path, export_format, image_client)

    assert metadata["components"][1]["image_info"]["hub_password"] == "hunter2"
    assert metadata["plugins"][0]["image_info"]["hub_user"] == "plugin"


@pytest.mark.asyncio
async def test_callers_descriptor_not_mutated(tmp_path, descriptor, image_client):
    descriptor.annotations["image_base64_string"] = base64.b64encode(b"img").decode()
    export_format = MetadataArchiveFormat(descriptor, ExportMode.OFFLINE)

    await _stage(tmp_path, export_format, image_client)

    assert descriptor.components[0].image_info.hub_password == "secret"
    assert "image_base64_string" in descriptor.annotations
    assert "picture_name" not in descriptor.annotations


@pytest.mark.asyncio
async def test_inline_picture_replaced_by_file(tmp_path, descriptor, image_client):
    descriptor.annotations["image_base64_string"] = base64.b64encode(b"\x89PNG data").decode()
    descriptor.annotations["suffix"] = "png"
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)

    metadata = await _stage(tmp_path, export_format, image_client)

    annotations = metadata["annotations"]
    assert "image_base64_string" not in annotations
    picture_name = annotations["picture_name"]
    assert picture_name.endswith(".png")
    assert (tmp_path / picture_name).read_bytes() == b"\x89PNG data"


@pytest.mark.asyncio
async def test_picture_suffix_defaults_to_jpg(tmp_path, descriptor, image_client):
    descriptor.annotations["image_base64_string"] = base64.b64encode(b"jpeg").decode()
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)

    metadata = await _stage(tmp_path, export_format, image_client)

    assert metadata["annotations"]["picture_name"].endswith(".jpg")


@pytest.mark.asyncio
async def test_invalid_picture_is_not_fatal(tmp_path, descriptor, image_client):
    descriptor.annotations["image_base64_string"] = "not base64!!"
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)

    metadata = await _stage(tmp_path, export_format, image_client)

    assert metadata["annotations"]["image_base64_string"] == "not base64!!"
    assert "picture_name" not in metadata["annotations"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["metadata.json"]


@pytest.mark.asyncio
@pytest.mark.parametrize("suffix", ["x/../../escaped.png", "..\\evil", "png/"])
async def test_unsafe_picture_suffix_falls_back_to_jpg(tmp_path, descriptor, image_client, suffix):
    staging = tmp_path / "staging"
    staging.mkdir()
    descriptor.annotations["image_base64_string"] = base64.b64encode(b"img").decode()
    descriptor.annotations["suffix"] = suffix
    export_format = MetadataArchiveFormat(descriptor, ExportMode.ONLINE)

    metadata = await _stage(staging, export_format, image_client)

    picture_name = metadata["annotations"]["picture_name"]
    assert picture_name.endswith(".jpg")
    assert "/" not in picture_name
    assert (staging / picture_name).read_bytes() == b"img"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["staging"]


def test_picture_suffix_leading_dot_dropped():
    assert picture_suffix({"suffix": ".png"}) == "png"
    assert picture_suffix({"suffix": ""}) == "jpg"
    assert picture_suffix({}) == "jpg"
