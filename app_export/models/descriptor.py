"""Application descriptor data models"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass
class ImageInfo:
    """Registry credentials for an image"""

    hub_url: str = ""
    hub_user: str = ""
    hub_password: str = ""
    namespace: str = ""
    is_trust: bool = False

    @property
    def is_empty(self) -> bool:
        """Check if no registry field is set"""
        return not any([self.hub_url, self.hub_user, self.hub_password,
                        self.namespace, self.is_trust])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "hub_url": self.hub_url,
            "hub_user": self.hub_user,
            "hub_password": self.hub_password,
            "namespace": self.namespace,
            "is_trust": self.is_trust,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ImageInfo':
        """Create from dictionary"""
        data = data or {}
        return cls(
            hub_url=data.get("hub_url", ""),
            hub_user=data.get("hub_user", ""),
            hub_password=data.get("hub_password", ""),
            namespace=data.get("namespace", ""),
            is_trust=bool(data.get("is_trust", False)),
        )


@dataclass
class Port:
    """Declared container port"""

    container_port: int
    protocol: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"container_port": self.container_port, "protocol": self.protocol}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Port':
        return cls(
            container_port=int(data["container_port"]),
            protocol=data.get("protocol", "") or "",
        )


@dataclass
class Volume:
    """Declared volume, backed by inline file content or a host path"""

    mount_path: str
    file_content: str = ""
    host_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mount_path": self.mount_path,
            "file_content": self.file_content,
            "host_path": self.host_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Volume':
        return cls(
            mount_path=data["mount_path"],
            file_content=data.get("file_content", ""),
            host_path=data.get("host_path", ""),
        )


@dataclass
class EnvVar:
    """Environment variable; order is significant and names may repeat"""

    name: str
    value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EnvVar':
        return cls(name=data["name"], value=str(data.get("value", "")))


@dataclass
class Probe:
    """Health probe definition"""

    scheme: str = "tcp"
    path: str = ""
    cmd: str = ""
    initial_delay_seconds: int = 0
    period_seconds: int = 0
    failure_threshold: int = 0
    timeout_seconds: int = 0
    port: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "path": self.path,
            "cmd": self.cmd,
            "initial_delay_seconds": self.initial_delay_seconds,
            "period_seconds": self.period_seconds,
            "failure_threshold": self.failure_threshold,
            "timeout_seconds": self.timeout_seconds,
            "port": self.port,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Probe':
        return cls(
            scheme=data.get("scheme", "tcp"),
            path=data.get("path", ""),
            cmd=data.get("cmd", ""),
            initial_delay_seconds=int(data.get("initial_delay_seconds", 0)),
            period_seconds=int(data.get("period_seconds", 0)),
            failure_threshold=int(data.get("failure_threshold", 0)),
            timeout_seconds=int(data.get("timeout_seconds", 0)),
            port=int(data.get("port", 0)),
        )


@dataclass
class Component:
    """Deployable component of an application"""

    component_id: str
    display_name: str = ""
    share_image: str = ""
    image_info: ImageInfo = field(default_factory=ImageInfo)
    cpu: int = 0  # milli-units
    memory: int = 0  # MiB
    ports: List[Port] = field(default_factory=list)
    volumes: List[Volume] = field(default_factory=list)
    envs: List[EnvVar] = field(default_factory=list)
    probes: List[Probe] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    cmd: str = ""
    arch: str = "amd64"
    deploy_version: str = ""
    replicas: int = 1

    @property
    def name(self) -> str:
        """Display name, falling back to the identifier"""
        return self.display_name or self.component_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "component_id": self.component_id,
            "display_name": self.display_name,
            "share_image": self.share_image,
            "image_info": self.image_info.to_dict(),
            "cpu": self.cpu,
            "memory": self.memory,
            "ports": [p.to_dict() for p in self.ports],
            "volumes": [v.to_dict() for v in self.volumes],
            "envs": [e.to_dict() for e in self.envs],
            "probes": [p.to_dict() for p in self.probes],
            "labels": dict(self.labels),
            "cmd": self.cmd,
            "arch": self.arch,
            "deploy_version": self.deploy_version,
            "replicas": self.replicas,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Component':
        """Create from dictionary"""
        return cls(
            component_id=data["component_id"],
            display_name=data.get("display_name", ""),
            share_image=data.get("share_image", ""),
            image_info=ImageInfo.from_dict(data.get("image_info")),
            cpu=int(data.get("cpu") or 0),
            memory=int(data.get("memory") or 0),
            ports=[Port.from_dict(p) for p in data.get("ports") or []],
            volumes=[Volume.from_dict(v) for v in data.get("volumes") or []],
            envs=[EnvVar.from_dict(e) for e in data.get("envs") or []],
            probes=[Probe.from_dict(p) for p in data.get("probes") or []],
            labels=dict(data.get("labels") or {}),
            cmd=data.get("cmd", ""),
            arch=data.get("arch", "amd64"),
            deploy_version=data.get("deploy_version", ""),
            replicas=int(data.get("replicas", 1)),
        )


@dataclass
class Plugin:
    """Plugin attached to components; only its image is exported"""

    plugin_id: str
    display_name: str = ""
    share_image: str = ""
    image_info: ImageInfo = field(default_factory=ImageInfo)

    @property
    def name(self) -> str:
        return self.display_name or self.plugin_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plugin_id": self.plugin_id,
            "display_name": self.display_name,
            "share_image": self.share_image,
            "image_info": self.image_info.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Plugin':
        return cls(
            plugin_id=data["plugin_id"],
            display_name=data.get("display_name", ""),
            share_image=data.get("share_image", ""),
            image_info=ImageInfo.from_dict(data.get("image_info")),
        )


@dataclass
class ApplicationDescriptor:
    """Generic application descriptor handed in by the caller"""

    app_name: str
    app_version: str
    components: List[Component] = field(default_factory=list)
    plugins: List[Plugin] = field(default_factory=list)
    annotations: Dict[str, str] = field(default_factory=dict)
    app_id: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "app_id": self.app_id,
            "app_name": self.app_name,
            "app_version": self.app_version,
            "description": self.description,
            "components": [c.to_dict() for c in self.components],
            "plugins": [p.to_dict() for p in self.plugins],
            "annotations": dict(self.annotations),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationDescriptor':
        """Create from dictionary"""
        return cls(
            app_name=data["app_name"],
            app_version=str(data["app_version"]),
            components=[Component.from_dict(c) for c in data.get("components") or []],
            plugins=[Plugin.from_dict(p) for p in data.get("plugins") or []],
            annotations={k: str(v) for k, v in (data.get("annotations") or {}).items()},
            app_id=data.get("app_id", ""),
            description=data.get("description", ""),
        )
