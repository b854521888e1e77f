"""Container package (cpk) manifest models"""

from dataclasses import dataclass, field
from typing import Dict, List, Any


@dataclass
class Parameter:
    """Docker run parameter (environment variable pair)"""
    key: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value}


@dataclass
class PortMapping:
    """Port mapping; host and service ports are assigned at deploy time"""
    container_port: int
    protocol: str
    name: str
    host_port: int = 0
    service_port: int = 0
    labels: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "containerPort": self.container_port,
            "hostPort": self.host_port,
            "labels": self.labels,
            "name": self.name,
            "protocol": self.protocol,
            "servicePort": self.service_port,
        }


@dataclass
class VolumeMapping:
    """Container volume mapping"""
    container_path: str
    host_path: str
    mode: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "containerPath": self.container_path,
            "hostPath": self.host_path,
            "mode": self.mode,
        }


@dataclass
class HealthCheck:
    """Health check entry"""
    grace_period_seconds: int
    interval_seconds: int
    max_consecutive_failures: int
    path: str
    port_index: int
    protocol: str
    timeout_seconds: int
    ignore_http1xx: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gracePeriodSeconds": self.grace_period_seconds,
            "ignoreHttp1xx": self.ignore_http1xx,
            "intervalSeconds": self.interval_seconds,
            "maxConsecutiveFailures": self.max_consecutive_failures,
            "path": self.path,
            "portIndex": self.port_index,
            "protocol": self.protocol,
            "timeoutSeconds": self.timeout_seconds,
        }


@dataclass
class DockerSpec:
    """Docker section of a container"""
    image: str
    network: str
    parameters: List[Parameter] = field(default_factory=list)
    port_mappings: List[PortMapping] = field(default_factory=list)
    force_pull_image: bool = False
    privileged: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "forcePullImage": self.force_pull_image,
            "image": self.image,
            "network": self.network,
            "parameters": [p.to_dict() for p in self.parameters],
            "portMappings": [p.to_dict() for p in self.port_mappings],
            "privileged": self.privileged,
        }


@dataclass
class ContainerSpec:
    """Container definition"""
    docker: DockerSpec
    type: str
    volumes: List[VolumeMapping] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "docker": self.docker.to_dict(),
            "type": self.type,
            "volumes": [v.to_dict() for v in self.volumes],
        }


@dataclass
class AppSpec:
    """One runnable unit of the package"""
    id: str
    cmd: str
    container: ContainerSpec
    cpus: float
    mem: int
    instances: int
    health_checks: List[HealthCheck] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    env: Dict[str, str] = field(default_factory=dict)
    constraints: List[List[str]] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    disk: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cmd": self.cmd,
            "constraints": self.constraints,
            "container": self.container.to_dict(),
            "cpus": self.cpus,
            "dependencies": self.dependencies,
            "disk": self.disk,
            "healthChecks": [h.to_dict() for h in self.health_checks],
            "id": self.id,
            "instances": self.instances,
            "labels": self.labels,
            "env": self.env,
            "mem": self.mem,
        }


@dataclass
class ImageManifest:
    """Top-level image.json document"""
    id: str
    apps: List[AppSpec] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apps": [a.to_dict() for a in self.apps],
            "id": self.id,
        }


@dataclass
class VendorInfo:
    """Package vendor block"""
    name: str = ""
    homepage: str = ""
    email: str = ""
    telephone: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "email": self.email,
            "homepage": self.homepage,
            "name": self.name,
            "telephone": self.telephone,
        }


@dataclass
class PackageInfo:
    """package.json document of a container package"""
    id: str
    name: str
    version: str
    architecture: str
    summary: str
    vendor: VendorInfo = field(default_factory=VendorInfo)
    category: str = "application"
    classification: str = "L0"
    os: str = "all"
    start: str = "/"
    type: str = "web"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "architecture": self.architecture,
            "browser": {"height": "", "width": "", "x": "", "y": ""},
            "category": self.category,
            "classification": self.classification,
            "count": 5,
            "description": self.summary,
            "genericname": self.name,
            "glibc": "",
            "id": self.id,
            "name": self.name,
            "news": self.summary,
            "os": self.os,
            "permission": {
                "dbus": False,
                "display": False,
                "filesystem": "",
                "ipc": False,
                "network": False,
                "root": False,
            },
            "runtime": "",
            "scripts": {
                "enter": "", "postinst": "", "postrm": "", "postup": "",
                "preinst": "", "prerm": "", "prestart": "", "preup": "",
            },
            "search": "",
            "secret": "",
            "size": "",
            "start": self.start,
            "summary": self.summary,
            "todo": "",
            "type": self.type,
            "vendor": self.vendor.to_dict(),
            "version": self.version,
            "web": {
                "application": "",
                "database": {"name": "", "version": ""},
                "middleware": {"extensions": "", "name": "", "version": ""},
                "runtime": {"extensions": "", "name": "", "version": ""},
            },
        }
