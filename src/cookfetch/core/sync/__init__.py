"""
Checkout syncing over git.

Example:
    >>> from cookfetch.core.sync import RepositorySyncer
    >>> syncer = RepositorySyncer(checkouts_root=Path("checkouts"))
    >>> for result in syncer.sync_all(manifest):
    ...     print(result.directory, result.action.value)
"""

from cookfetch.core.sync.models import EntrySyncResult, SyncAction
from cookfetch.core.sync.service import RepositorySyncer
from cookfetch.core.sync.vcs import GitClient, VcsClient

__all__ = [
    "EntrySyncResult",
    "GitClient",
    "RepositorySyncer",
    "SyncAction",
    "VcsClient",
]
