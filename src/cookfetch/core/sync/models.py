"""
Data models for the checkout syncer.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class SyncAction(str, Enum):
    """What the syncer did to a working copy."""

    CLONED = "cloned"
    UPDATED = "updated"


class EntrySyncResult(BaseModel):
    """Result of syncing one checkout entry."""

    directory: str = Field(description="Manifest directory of the entry")
    branch: str = Field(description="Branch the working copy was synced to")
    action: SyncAction = Field(description="Whether the working copy was cloned or updated")
    path: Path = Field(description="Absolute path of the working copy")

    started_at: datetime | None = Field(default=None)
    completed_at: datetime | None = Field(default=None)

    @property
    def duration_seconds(self) -> float | None:
        """Calculate sync duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None
