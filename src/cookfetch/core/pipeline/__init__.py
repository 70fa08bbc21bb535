"""
Lifecycle pipeline: fetch checkouts, then patch chef-solo.

Example:
    >>> from cookfetch.core.pipeline import LifecycleSlot, PipelineContext, build_default_host
    >>> host = build_default_host()
    >>> context = PipelineContext(project_dir=Path("."), config=load_config())
    >>> context = host.run(LifecycleSlot.BEFORE_PROVISION, context)
"""

from cookfetch.core.pipeline.context import PipelineContext
from cookfetch.core.pipeline.host import (
    Continuation,
    LifecycleHost,
    LifecycleSlot,
    build_default_host,
)
from cookfetch.core.pipeline.stages import ConfigureProvisionerStage, FetchCheckoutsStage, Stage

__all__ = [
    "ConfigureProvisionerStage",
    "Continuation",
    "FetchCheckoutsStage",
    "LifecycleHost",
    "LifecycleSlot",
    "PipelineContext",
    "Stage",
    "build_default_host",
]
