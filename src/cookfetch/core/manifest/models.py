"""
Data models for the checkout manifest.

A manifest is a line-oriented list of repositories to check out, one
``vcs,repository,directory,branch,credentials`` row per line.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class VcsKind(str, Enum):
    """Version control systems that can be synced."""

    GIT = "git"


class CheckoutEntry(BaseModel):
    """
    One manifest line describing a single repository to sync.

    ``vcs`` is kept as the raw manifest value so an unsupported kind
    survives parsing and is rejected when the entry is synced.

    Example:
        >>> entry = CheckoutEntry(
        ...     vcs="git",
        ...     repository="https://x/repo",
        ...     directory="teamA/cookA",
        ...     branch="main",
        ... )
        >>> entry.cookbook_root
        'teamA'
    """

    vcs: str = Field(description="Version control system (only 'git' is supported)")
    repository: str = Field(description="Clone source")
    directory: str = Field(description="Working copy path relative to the checkouts root")
    branch: str = Field(description="Ref to check out")
    credentials: str = Field(
        default="",
        description="Reserved; parsed from the manifest but never applied",
    )

    @property
    def vcs_kind(self) -> VcsKind | None:
        """The parsed VCS kind, or None if unsupported."""
        try:
            return VcsKind(self.vcs)
        except ValueError:
            return None

    @property
    def cookbook_root(self) -> str:
        """First path segment of the directory; the cookbooks live beneath it."""
        return self.directory.split("/")[0]

    def cookbook_path(self, checkouts_dir: str = "checkouts") -> str:
        """Cookbook path for this entry, e.g. ``checkouts/teamA/cookbooks``."""
        return f"{checkouts_dir}/{self.cookbook_root}/cookbooks"


class CheckoutManifest(BaseModel):
    """
    Parsed checkout manifest.

    ``by_directory`` is a keyed lookup where a repeated directory replaces
    the earlier entry. ``cookbook_list`` keeps one path per manifest line,
    repeats included, and is the only thing that defines overlay precedence.
    """

    by_directory: dict[str, CheckoutEntry] = Field(default_factory=dict)
    cookbook_list: list[str] = Field(default_factory=list)

    def add(self, entry: CheckoutEntry, checkouts_dir: str = "checkouts") -> None:
        """Record one manifest line."""
        self.by_directory[entry.directory] = entry
        self.cookbook_list.append(entry.cookbook_path(checkouts_dir))

    @property
    def entries(self) -> list[CheckoutEntry]:
        """Unique entries, one per directory."""
        return list(self.by_directory.values())
