"""
Lifecycle host.

Stages are registered at named slots. Running a slot executes its stages
in registration order and then hands the context to the continuation
exactly once. A stage that raises stops the slot before the continuation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from cookfetch.core.pipeline.context import PipelineContext
from cookfetch.core.pipeline.stages import ConfigureProvisionerStage, FetchCheckoutsStage, Stage
from cookfetch.core.sync.vcs import VcsClient

logger = logging.getLogger(__name__)

Continuation = Callable[[PipelineContext], PipelineContext]


class LifecycleSlot(str, Enum):
    """Points in the host lifecycle where stages run."""

    BEFORE_PROVISION = "before_provision"
    BEFORE_START = "before_start"


class LifecycleHost:
    """
    Registry of stages per lifecycle slot.

    Example:
        >>> host = LifecycleHost()
        >>> host.register(LifecycleSlot.BEFORE_PROVISION, FetchCheckoutsStage())
        >>> context = host.run(LifecycleSlot.BEFORE_PROVISION, PipelineContext(Path(".")))
    """

    def __init__(self) -> None:
        self._stages: dict[LifecycleSlot, list[Stage]] = {}

    def register(self, slot: LifecycleSlot, stage: Stage) -> None:
        """Append a stage to a slot."""
        self._stages.setdefault(slot, []).append(stage)

    def stages(self, slot: LifecycleSlot) -> list[Stage]:
        """Stages registered at a slot, in run order."""
        return list(self._stages.get(slot, []))

    def run(
        self,
        slot: LifecycleSlot,
        context: PipelineContext,
        continuation: Continuation | None = None,
    ) -> PipelineContext:
        """Run every stage at a slot, then the continuation."""
        for stage in self.stages(slot):
            logger.debug("Running %s at %s", type(stage).__name__, slot.value)
            context = stage.execute(context)

        if continuation is not None:
            context = continuation(context)
        return context


def build_default_host(vcs: VcsClient | None = None) -> LifecycleHost:
    """Host with fetch then configure registered before provisioning and before start."""
    host = LifecycleHost()
    for slot in (LifecycleSlot.BEFORE_PROVISION, LifecycleSlot.BEFORE_START):
        host.register(slot, FetchCheckoutsStage(vcs=vcs))
        host.register(slot, ConfigureProvisionerStage())
    return host
