"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Any

from ..constants import (
    DEFAULT_NAMESPACE_PREFIX,
    DEFAULT_PULL_TIMEOUT,
    DEFAULT_PULL_CONCURRENCY,
    DEFAULT_TAR_COMMAND,
    DEFAULT_DOCKER_COMMAND,
)


@dataclass
class VendorConfig:
    """Vendor information written into container packages"""

    name: str = "rbd"
    homepage: str = "rainbond.com"
    email: str = ""
    telephone: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "homepage": self.homepage,
            "email": self.email,
            "telephone": self.telephone,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VendorConfig':
        return cls(
            name=data.get("name", "rbd"),
            homepage=data.get("homepage", "rainbond.com"),
            email=data.get("email", ""),
            telephone=data.get("telephone", ""),
        )


@dataclass
class ExportConfig:
    """Export tool configuration"""

    namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX
    pull_timeout: int = DEFAULT_PULL_TIMEOUT
    pull_concurrency: int = DEFAULT_PULL_CONCURRENCY
    tar_command: str = DEFAULT_TAR_COMMAND
    docker_command: str = DEFAULT_DOCKER_COMMAND
    icon_path: Optional[Path] = None
    screenshot_path: Optional[Path] = None
    # Emit the app id as the base id repeated twice (legacy consumers only)
    doubled_app_id: bool = False
    vendor: VendorConfig = field(default_factory=VendorConfig)

    def __post_init__(self):
        """Validate configuration values"""
        if isinstance(self.icon_path, str):
            self.icon_path = Path(self.icon_path)
        if isinstance(self.screenshot_path, str):
            self.screenshot_path = Path(self.screenshot_path)

        if not self.namespace_prefix:
            raise ValueError("namespace_prefix must not be empty")
        if self.pull_timeout <= 0:
            raise ValueError("pull_timeout must be positive")
        if self.pull_concurrency < 1:
            raise ValueError("pull_concurrency must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "namespace_prefix": self.namespace_prefix,
            "pull_timeout": self.pull_timeout,
            "pull_concurrency": self.pull_concurrency,
            "tar_command": self.tar_command,
            "docker_command": self.docker_command,
            "doubled_app_id": self.doubled_app_id,
            "vendor": self.vendor.to_dict(),
        }

        if self.icon_path:
            data["icon_path"] = str(self.icon_path)
        if self.screenshot_path:
            data["screenshot_path"] = str(self.screenshot_path)

        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ExportConfig':
        """Create from dictionary"""
        data = data or {}
        return cls(
            namespace_prefix=data.get("namespace_prefix", DEFAULT_NAMESPACE_PREFIX),
            pull_timeout=int(data.get("pull_timeout", DEFAULT_PULL_TIMEOUT)),
            pull_concurrency=int(data.get("pull_concurrency", DEFAULT_PULL_CONCURRENCY)),
            tar_command=data.get("tar_command", DEFAULT_TAR_COMMAND),
            docker_command=data.get("docker_command", DEFAULT_DOCKER_COMMAND),
            icon_path=data.get("icon_path"),
            screenshot_path=data.get("screenshot_path"),
            doubled_app_id=bool(data.get("doubled_app_id", False)),
            vendor=VendorConfig.from_dict(data.get("vendor") or {}),
        )
