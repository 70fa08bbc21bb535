"""
Context passed between lifecycle stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cookfetch.core.config.models import FetcherConfig
from cookfetch.core.links.linker import LinkReport
from cookfetch.core.manifest.models import CheckoutManifest
from cookfetch.core.messages import Messages, NullMessages
from cookfetch.core.order.store import OrderStore
from cookfetch.core.provisioner.models import ProvisionerConfig
from cookfetch.core.provisioner.patch import PatchResult
from cookfetch.core.sync.models import EntrySyncResult


@dataclass
class PipelineContext:
    """State shared by the stages of one lifecycle run.

    Attributes:
        project_dir: Directory holding checkouts, the combined tree and the order file
        config: Fetcher configuration
        messages: Operator message sink
        provisioner: Chef-solo settings to patch, if the host has any
        manifest: Parsed manifest, set once fetched
        sync_results: Per-entry sync results
        link_report: Result of rebuilding the combined tree
        patch_result: Result of patching the provisioner
        skipped: Set when the fetch stage decided not to run
    """

    project_dir: Path
    config: FetcherConfig = field(default_factory=FetcherConfig)
    messages: Messages = field(default_factory=NullMessages)
    provisioner: ProvisionerConfig | None = None

    manifest: CheckoutManifest | None = None
    sync_results: list[EntrySyncResult] = field(default_factory=list)
    link_report: LinkReport | None = None
    patch_result: PatchResult | None = None
    skipped: bool = False

    @property
    def order_store(self) -> OrderStore:
        return OrderStore(self.project_dir / self.config.order_file)

    @property
    def checkouts_root(self) -> Path:
        return self.project_dir / self.config.checkouts_dir
