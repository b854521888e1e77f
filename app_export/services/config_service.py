"""Configuration management service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..api.exceptions import ConfigError
from ..models.config import ExportConfig
from ..constants import (
    PROJECT_CONFIG_FILE,
    ENV_CONFIG_PATH,
    ENV_NAMESPACE_PREFIX,
    ENV_PULL_TIMEOUT,
    ENV_PULL_CONCURRENCY,
    ENV_TAR_COMMAND,
    ENV_DOCKER_COMMAND,
)

logger = logging.getLogger(__name__)

# Environment variable -> (config key, converter)
ENV_OVERRIDES = {
    ENV_NAMESPACE_PREFIX: ("namespace_prefix", str),
    ENV_PULL_TIMEOUT: ("pull_timeout", int),
    ENV_PULL_CONCURRENCY: ("pull_concurrency", int),
    ENV_TAR_COMMAND: ("tar_command", str),
    ENV_DOCKER_COMMAND: ("docker_command", str),
}


class ConfigService:
    """Service for loading export configuration"""

    def __init__(self, config_path: Optional[Path] = None,
                 environ: Optional[Dict[str, str]] = None):
        """Initialize config service

        Args:
            config_path: Explicit config file; falls back to $APP_EXPORT_CONFIG,
                then ./.app-export.yaml
            environ: Environment mapping (defaults to os.environ)
        """
        self.environ = os.environ if environ is None else environ
        if config_path is None and self.environ.get(ENV_CONFIG_PATH):
            config_path = Path(self.environ[ENV_CONFIG_PATH])
        self.config_path = config_path
        self._config: Optional[ExportConfig] = None

    @property
    def config(self) -> ExportConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def _read_file(self) -> Dict[str, Any]:
        path = self.config_path
        if path is None:
            default = Path.cwd() / PROJECT_CONFIG_FILE
            if not default.exists():
                return {}
            path = default
        elif not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration in {path} must be a mapping")
        logger.debug(f"Loaded configuration from {path}")
        return data

    def load_config(self) -> ExportConfig:
        """Load configuration from file and environment

        Returns:
            Loaded configuration
        """
        data = self._read_file()

        for env_name, (key, converter) in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value is None or value == "":
                continue
            try:
                data[key] = converter(value)
            except ValueError:
                raise ConfigError(f"Invalid value for {env_name}: {value!r}")

        try:
            self._config = ExportConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}")

        return self._config
