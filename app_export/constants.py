"""Global constants for app-export-tool"""

from enum import Enum
import re

APP_NAME = "app-export"
LOG_FORMAT = "%(message)s"

# Project configuration
PROJECT_CONFIG_FILE = ".app-export.yaml"

# Export modes
class ExportMode(Enum):
    ONLINE = "online"
    OFFLINE = "offline"


# Package formats
class PackageFormat(Enum):
    CPK = "cpk"  # nested container manifest with checksummed file list
    RAM = "ram"  # flat metadata archive


# Image materialization
DEFAULT_PULL_TIMEOUT = 30  # seconds
DEFAULT_PULL_CONCURRENCY = 1
COMPONENT_IMAGES_ARCHIVE = "component-images.tar"
PLUGIN_IMAGES_ARCHIVE = "plugins-images.tar"

# Archiving
DEFAULT_TAR_COMMAND = "tar"
DEFAULT_DOCKER_COMMAND = "docker"
TAR_BENIGN_WARNING = "file changed as we read it"


class Compression(Enum):
    GZIP = "z"
    BZIP2 = "j"


# Container package (format A)
DEFAULT_NAMESPACE_PREFIX = "cpk.rbd"
CPK_PACKAGE_EXTENSION = "cpk"
CPK_EMPTY_PACKAGE_NAME = "null-app"
CPK_APPLICATION_FILE = "application.yml"
CPK_PACKAGE_FILE = "package.json"
CPK_FILES_DIR = "files"
CPK_IMAGE_DIR = "image"
CPK_IMAGE_MANIFEST_FILE = "image.json"
CPK_FILE_LIST = "filelist"
CPK_ICONS_DIR = "icons"
CPK_SCREENSHOTS_DIR = "screenshots"
CPK_PACKAGE_SUMMARY = "Exported by app-export-tool"

DEFAULT_CPU = 1
DEFAULT_CONTAINER_PORT = 80
DEFAULT_PROTOCOL = "tcp"
SUPPORTED_PROTOCOLS = ("tcp", "udp")
PLACEHOLDER_COMMAND = "start web"
VOLUME_MODE_RW = "RW"
DOCKER_NETWORK_BRIDGE = "BRIDGE"
CONTAINER_TYPE_DOCKER = "DOCKER"

# Default health check
HEALTH_CHECK_GRACE_PERIOD = 300
HEALTH_CHECK_INTERVAL = 60
HEALTH_CHECK_MAX_FAILURES = 3
HEALTH_CHECK_TIMEOUT = 20
HEALTH_CHECK_PROTOCOL = "TCP"
PROBE_SCHEME_CMD = "CMD"
PROBE_SCHEME_COMMAND = "COMMAND"

# Metadata archive (format B)
RAM_METADATA_FILE = "metadata.json"
RAM_PACKAGE_SUFFIX = "ram"
ANNOTATION_IMAGE_BASE64 = "image_base64_string"
ANNOTATION_IMAGE_SUFFIX = "suffix"
ANNOTATION_PICTURE_NAME = "picture_name"
DEFAULT_PICTURE_SUFFIX = "jpg"

# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "EX001"
    DESCRIPTOR_INVALID = "EX002"
    STAGING_FAILED = "EX003"
    IMAGE_PULL_FAILED = "EX004"
    IMAGE_SAVE_FAILED = "EX005"
    MANIFEST_FAILED = "EX006"
    ARCHIVE_FAILED = "EX007"
    STEP_FAILED = "EX008"


# Environment variables
ENV_CONFIG_PATH = "APP_EXPORT_CONFIG"
ENV_LOG_LEVEL = "APP_EXPORT_LOG_LEVEL"
ENV_NAMESPACE_PREFIX = "APP_EXPORT_NAMESPACE_PREFIX"
ENV_PULL_TIMEOUT = "APP_EXPORT_PULL_TIMEOUT"
ENV_PULL_CONCURRENCY = "APP_EXPORT_PULL_CONCURRENCY"
ENV_TAR_COMMAND = "APP_EXPORT_TAR_COMMAND"
ENV_DOCKER_COMMAND = "APP_EXPORT_DOCKER_COMMAND"

# Validation patterns
SAFE_NAME_CHAR_PATTERN = re.compile(r"[a-zA-Z0-9._-]")
UNICODE_ESCAPE_PATTERN = re.compile(r"\\u([0-9a-fA-F]{4})")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_PACKAGE = "📦"
