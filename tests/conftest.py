"""
Shared pytest fixtures for app-export-tool tests.

This module provides:
- FakeImageClient recording pulls/saves without a docker daemon
- Sample descriptors
- Fake ``tar`` executables for archiver scenarios
"""

import shutil
import stat
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from app_export.core.image_client import ImageClient, ImageClientError
from app_export.models import (
    ApplicationDescriptor,
    Component,
    ImageInfo,
    Plugin,
)


class FakeImageClient(ImageClient):
    """In-memory image client"""

    def __init__(self, fail_on: Optional[Sequence[str]] = None, fail_save: bool = False):
        self.fail_on = set(fail_on or [])
        self.fail_save = fail_save
        self.pulls: List[Tuple[str, str, str, int]] = []
        self.saves: List[Tuple[Path, List[str]]] = []

    def pull(self, reference, user="", password="", timeout=30):
        self.pulls.append((reference, user, password, timeout))
        if reference in self.fail_on:
            raise ImageClientError(f"manifest for {reference} not found")
        return f"local/{reference}"

    def save(self, destination, images):
        if self.fail_save:
            raise ImageClientError("no space left on device")
        self.saves.append((Path(destination), list(images)))
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
        Path(destination).write_bytes(("\n".join(images)).encode())


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def demo_component() -> Component:
    """Component with no ports, probes or volumes"""
    return Component(
        component_id="demo",
        display_name="Demo",
        share_image="demo:1.0",
        image_info=ImageInfo(hub_user="admin", hub_password="secret"),
        cpu=1500,
        memory=512,
    )


@pytest.fixture
def descriptor(demo_component) -> ApplicationDescriptor:
    return ApplicationDescriptor(
        app_name="demo-app",
        app_version="1.0",
        components=[
            demo_component,
            Component(
                component_id="worker",
                share_image="registry.example.com/team/worker:2.1",
                image_info=ImageInfo(
                    hub_url="registry.example.com",
                    hub_user="bot",
                    hub_password="hunter2",
                    namespace="team",
                ),
            ),
        ],
        plugins=[
            Plugin(
                plugin_id="log-agent",
                display_name="Log Agent",
                share_image="plugins/log-agent:0.3",
                image_info=ImageInfo(hub_user="plugin", hub_password="p@ss"),
            ),
        ],
        annotations={"owner": "platform"},
    )


def write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_tar(tmp_path) -> Dict[str, Path]:
    """Fake tar executables; argument 2 is the artifact path"""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return {
        "ok": write_script(bin_dir / "tar-ok", 'touch "$2"\nexit 0\n'),
        "changed": write_script(
            bin_dir / "tar-changed",
            'touch "$2"\necho "tar: app/files: file changed as we read it" >&2\nexit 1\n',
        ),
        "fatal": write_script(
            bin_dir / "tar-fatal",
            'echo "partial listing"\necho "tar: Cannot open: Permission denied" >&2\nexit 2\n',
        ),
        "silent": write_script(bin_dir / "tar-silent", 'exit 0\n'),
    }


requires_tar = pytest.mark.skipif(
    shutil.which("tar") is None or shutil.which("gzip") is None or shutil.which("bzip2") is None,
    reason="tar with gzip and bzip2 required",
)
