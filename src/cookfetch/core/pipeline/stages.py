"""
Lifecycle stages.

Each stage takes the pipeline context and returns it, possibly enriched.
A stage that raises aborts the rest of the lifecycle slot.
"""

from __future__ import annotations

import logging
from typing import Protocol

from cookfetch.core.links.linker import OverlayLinker
from cookfetch.core.manifest.parser import ManifestParser
from cookfetch.core.pipeline.context import PipelineContext
from cookfetch.core.provisioner.patch import configure_provisioner
from cookfetch.core.sync.service import RepositorySyncer
from cookfetch.core.sync.vcs import VcsClient

logger = logging.getLogger(__name__)


class Stage(Protocol):
    """A unit of work registered at a lifecycle slot."""

    def execute(self, context: PipelineContext) -> PipelineContext: ...


class FetchCheckoutsStage:
    """
    Fetch the manifest, sync every checkout, and rebuild the combined tree.

    Skips with a notice when fetching is disabled or no URL is configured.
    Any failure while fetching, syncing or linking propagates and aborts
    the run.
    """

    def __init__(self, vcs: VcsClient | None = None) -> None:
        self.vcs = vcs

    def execute(self, context: PipelineContext) -> PipelineContext:
        config = context.config

        if not config.sync_enabled:
            context.messages.info("Cookbook fetching disabled, skipping")
            context.skipped = True
            return context

        if config.url is None:
            context.messages.warn("No URL set for cookbook fetching, skipping")
            context.skipped = True
            return context

        context.messages.info(f"Fetching checkout list from {config.url}")

        parser = ManifestParser(context.order_store, checkouts_dir=config.checkouts_dir)
        manifest = parser.fetch(config.url, verify_tls=config.verify_tls, timeout=config.timeout)
        context.manifest = manifest
        logger.debug(
            "Manifest has %d lines, %d unique checkouts",
            len(manifest.cookbook_list),
            len(manifest.by_directory),
        )

        syncer = RepositorySyncer(context.checkouts_root, vcs=self.vcs, messages=context.messages)
        context.sync_results = syncer.sync_all(manifest)

        linker = OverlayLinker(
            context.project_dir,
            checkouts_dir=config.checkouts_dir,
            combined_dir=config.combined_dir,
            link_root=config.link_root,
            messages=context.messages,
        )
        context.link_report = linker.link(manifest.cookbook_list)

        return context


class ConfigureProvisionerStage:
    """
    Point chef-solo at the combined tree and the recorded cookbook order.

    Runs regardless of whether fetching ran. Does nothing when the host has
    no chef-solo provisioner.
    """

    def execute(self, context: PipelineContext) -> PipelineContext:
        if context.provisioner is None:
            logger.debug("No chef-solo provisioner configured, nothing to patch")
            return context

        context.patch_result = configure_provisioner(
            context.provisioner,
            context.order_store,
            context.messages,
            combined_dir=context.config.combined_dir,
        )
        return context
