"""
Checkout syncing.

Brings one working copy per manifest entry to its pinned branch: a
missing working copy is cloned, an existing one is switched to the branch
and pulled. Entries are processed one at a time and the first failure
aborts the run; earlier checkouts are left as they are.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from cookfetch.core.errors import UnsupportedVcsError
from cookfetch.core.manifest.models import CheckoutEntry, CheckoutManifest, VcsKind
from cookfetch.core.manifest.parser import check_directory
from cookfetch.core.messages import Messages, NullMessages
from cookfetch.core.sync.models import EntrySyncResult, SyncAction
from cookfetch.core.sync.vcs import GitClient, VcsClient

logger = logging.getLogger(__name__)


class RepositorySyncer:
    """
    Syncs manifest entries into a shared checkouts root.

    Sync order follows ``CheckoutManifest.by_directory`` and carries no
    meaning; overlay precedence comes from the cookbook list alone.

    Example:
        >>> syncer = RepositorySyncer(Path("checkouts"))
        >>> results = syncer.sync_all(manifest)
        >>> [r.action for r in results]
        [<SyncAction.CLONED: 'cloned'>, <SyncAction.UPDATED: 'updated'>]
    """

    def __init__(
        self,
        checkouts_root: Path,
        vcs: VcsClient | None = None,
        messages: Messages | None = None,
    ) -> None:
        """
        Initialize the syncer.

        Args:
            checkouts_root: Directory holding one working copy per entry
            vcs: Version control client (defaults to GitClient)
            messages: Sink for progress messages
        """
        self.checkouts_root = checkouts_root
        self.vcs: VcsClient = vcs or GitClient()
        self.messages: Messages = messages or NullMessages()

    def working_copy_path(self, entry: CheckoutEntry) -> Path:
        """Path of the working copy for an entry."""
        return self.checkouts_root / entry.directory

    def sync_entry(self, entry: CheckoutEntry) -> EntrySyncResult:
        """
        Clone or update a single entry.

        Raises:
            UnsupportedVcsError: If the entry's VCS is not git
            InvalidCheckoutDirectoryError: If the directory would not resolve
                to its own working copy below the checkouts root
            VcsCommandError: If a git command fails
        """
        if entry.vcs_kind is not VcsKind.GIT:
            raise UnsupportedVcsError(entry.vcs, entry.directory)
        check_directory(entry.directory)

        started_at = datetime.now()
        path = self.working_copy_path(entry)

        self.messages.info(f"Updating checkout '{entry.directory}'")

        # credentials are never passed to git
        if path.is_dir():
            logger.debug("Updating %s to %s", path, entry.branch)
            self.vcs.checkout(entry.branch, path)
            self.vcs.pull(path)
            action = SyncAction.UPDATED
        else:
            logger.debug("Cloning %s at %s into %s", entry.repository, entry.branch, path)
            self.vcs.clone(entry.repository, entry.branch, entry.directory, self.checkouts_root)
            action = SyncAction.CLONED

        return EntrySyncResult(
            directory=entry.directory,
            branch=entry.branch,
            action=action,
            path=path.resolve(),
            started_at=started_at,
            completed_at=datetime.now(),
        )

    def sync_all(self, manifest: CheckoutManifest) -> list[EntrySyncResult]:
        """Sync every unique entry of a manifest, stopping at the first failure."""
        self.checkouts_root.mkdir(parents=True, exist_ok=True)
        return [self.sync_entry(entry) for entry in manifest.entries]
