# app_export/core/pipeline.py
"""Ordered staging pipeline executed against one component"""

import inspect
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Union

from ..api.exceptions import ExportToolError, StepError
from ..models.descriptor import ApplicationDescriptor, Component, Plugin
from .image_client import ImageClient

logger = logging.getLogger(__name__)

Target = Union[Component, Plugin, ApplicationDescriptor]
StepCallable = Callable[[Path, Target, ImageClient], Union[None, Awaitable[None]]]


class PipelineStep(ABC):
    """One staging step writing its contribution into the staging directory"""

    name: str = ""

    @property
    def step_name(self) -> str:
        return self.name or self.__class__.__name__

    @abstractmethod
    async def run(self, staging_dir: Path, target: Target, image_client: ImageClient) -> None:
        """
        Execute the step

        Args:
            staging_dir: Staging directory owned by the current job
            target: Component (or plugin) being exported
            image_client: Image client for steps that need images
        """
        pass


class FunctionStep(PipelineStep):
    """Adapts a plain (sync or async) callable into a pipeline step"""

    def __init__(self, func: StepCallable, name: Optional[str] = None):
        self.func = func
        self.name = name or func.__name__

    async def run(self, staging_dir: Path, target: Target, image_client: ImageClient) -> None:
        result = self.func(staging_dir, target, image_client)
        if inspect.isawaitable(result):
            await result


def _target_name(target: Any) -> str:
    for attr in ("component_id", "plugin_id", "app_name"):
        value = getattr(target, attr, None)
        if value:
            return value
    return str(target)


class PipelineRunner:
    """Runs an explicit, ordered list of steps"""

    def __init__(self, steps: Optional[Iterable[PipelineStep]] = None):
        """
        Initialize runner

        Args:
            steps: Steps in execution order
        """
        self._steps: List[PipelineStep] = list(steps or [])

    @property
    def steps(self) -> List[PipelineStep]:
        """Registered steps in execution order"""
        return list(self._steps)

    def add_step(self, step: Union[PipelineStep, StepCallable]) -> 'PipelineRunner':
        """Append a step; plain callables are wrapped in FunctionStep"""
        if not isinstance(step, PipelineStep):
            step = FunctionStep(step)
        self._steps.append(step)
        return self

    async def run(self, staging_dir: Path, target: Target, image_client: ImageClient) -> None:
        """
        Execute all steps sequentially

        The first failure stops the run. Files already written are left in
        place; the next job recreates the staging directory anyway.

        Raises:
            ExportToolError: Errors raised by steps, unexpected ones wrapped in StepError
        """
        owner = _target_name(target)
        for index, step in enumerate(self._steps, start=1):
            logger.debug(f"[{index}/{len(self._steps)}] {step.step_name} for {owner}")
            try:
                await step.run(staging_dir, target, image_client)
            except ExportToolError:
                logger.error(f"Step {step.step_name} failed for {owner}")
                raise
            except Exception as e:
                logger.error(f"Step {step.step_name} failed for {owner}: {e}")
                raise StepError(step.step_name, owner, e) from e

        logger.info(f"Ran {len(self._steps)} step(s) for {owner}")
