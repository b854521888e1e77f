"""Tests for ConfigService"""

import pytest

from app_export.api.exceptions import ConfigError
from app_export.models import ExportConfig
from app_export.services import ConfigService


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = ConfigService(environ={}).config

    assert config == ExportConfig()
    assert config.namespace_prefix == "cpk.rbd"
    assert config.pull_timeout == 30
    assert config.pull_concurrency == 1
    assert config.doubled_app_id is False


def test_project_file_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".app-export.yaml").write_text("pull_timeout: 90\n")

    assert ConfigService(environ={}).load_config().pull_timeout == 90


def test_explicit_file_with_env_expansion(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPORT_TEST_TAR", "/opt/bin/gtar")
    path = tmp_path / "export.yaml"
    path.write_text(
        "namespace_prefix: cpk.acme\n"
        "tar_command: ${EXPORT_TEST_TAR}\n"
        "doubled_app_id: true\n"
        "vendor:\n"
        "  name: acme\n"
        "  email: ops@acme.test\n"
    )

    config = ConfigService(path, environ={}).load_config()

    assert config.namespace_prefix == "cpk.acme"
    assert config.tar_command == "/opt/bin/gtar"
    assert config.doubled_app_id is True
    assert config.vendor.name == "acme"
    assert config.vendor.homepage == "rainbond.com"


def test_config_path_from_environment(tmp_path):
    path = tmp_path / "from-env.yaml"
    path.write_text("pull_concurrency: 4\n")

    service = ConfigService(environ={"APP_EXPORT_CONFIG": str(path)})

    assert service.config_path == path
    assert service.config.pull_concurrency == 4


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "export.yaml"
    path.write_text("pull_timeout: 90\ndocker_command: docker\n")

    config = ConfigService(path, environ={
        "APP_EXPORT_PULL_TIMEOUT": "15",
        "APP_EXPORT_DOCKER_COMMAND": "podman",
        "APP_EXPORT_NAMESPACE_PREFIX": "",
    }).load_config()

    assert config.pull_timeout == 15
    assert config.docker_command == "podman"
    assert config.namespace_prefix == "cpk.rbd"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigService(tmp_path / "missing.yaml", environ={}).load_config()


@pytest.mark.parametrize("content", ["key: [unclosed\n", "- just\n- a list\n"])
def test_malformed_file(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)

    with pytest.raises(ConfigError):
        ConfigService(path, environ={}).load_config()


@pytest.mark.parametrize("environ", [
    {"APP_EXPORT_PULL_TIMEOUT": "soon"},
    {"APP_EXPORT_PULL_CONCURRENCY": "0"},
])
def test_invalid_values(tmp_path, monkeypatch, environ):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigError):
        ConfigService(environ=environ).load_config()
