# app_export/core/image_client.py
"""Container image client abstraction and docker CLI implementation"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from ..constants import DEFAULT_DOCKER_COMMAND, DEFAULT_PULL_TIMEOUT

logger = logging.getLogger(__name__)


class ImageClientError(RuntimeError):
    """Raised by image clients when a pull or save fails"""


class ImageClient(ABC):
    """Client able to pull images from a registry and save them locally"""

    @abstractmethod
    def pull(self,
             reference: str,
             user: str = "",
             password: str = "",
             timeout: int = DEFAULT_PULL_TIMEOUT) -> str:
        """
        Pull an image

        Args:
            reference: Image reference (registry/repo:tag)
            user: Registry user
            password: Registry password
            timeout: Timeout in seconds

        Returns:
            Local image name
        """
        pass

    @abstractmethod
    def save(self, destination: Path, images: Sequence[str]) -> None:
        """
        Save local images into one archive

        Args:
            destination: Archive path
            images: Local image names
        """
        pass


class DockerCliImageClient(ImageClient):
    """Image client backed by the ``docker`` CLI"""

    def __init__(self, docker_command: str = DEFAULT_DOCKER_COMMAND,
                 save_timeout: Optional[int] = None):
        self.docker_command = docker_command
        self.save_timeout = save_timeout

    def _docker(self) -> str:
        docker = shutil.which(self.docker_command)
        if docker is None:
            raise ImageClientError(
                f"Docker CLI '{self.docker_command}' not found on PATH"
            )
        return docker

    def _run(self, args: List[str], timeout: Optional[int],
             input_text: Optional[str] = None) -> subprocess.CompletedProcess:
        cmd = [self._docker(), *args]
        logger.debug(f"Running: {' '.join(cmd[:3])} ...")
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ImageClientError(f"docker {args[0]} timed out after {timeout}s") from e
        except OSError as e:
            raise ImageClientError(f"docker {args[0]} could not be started: {e}") from e

        if result.returncode != 0:
            raise ImageClientError(
                f"docker {args[0]} exited with {result.returncode}: {result.stderr.strip()}"
            )
        return result

    @staticmethod
    def _registry_host(reference: str) -> Optional[str]:
        first = reference.split("/", 1)[0]
        if "/" in reference and ("." in first or ":" in first or first == "localhost"):
            return first
        return None

    def pull(self,
             reference: str,
             user: str = "",
             password: str = "",
             timeout: int = DEFAULT_PULL_TIMEOUT) -> str:
        if user and password:
            login_args = ["login", "--username", user, "--password-stdin"]
            registry = self._registry_host(reference)
            if registry:
                login_args.append(registry)
            self._run(login_args, timeout, input_text=password)

        self._run(["pull", reference], timeout)
        logger.info(f"Pulled image {reference}")
        return reference

    def save(self, destination: Path, images: Sequence[str]) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        self._run(["save", "-o", str(destination), *images], self.save_timeout)
