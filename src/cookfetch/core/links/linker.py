"""
Combined overlay tree.

Builds ``combined/{roles,nodes,handlers,data_bags}`` as a flat set of
symlinks into the checkouts. Cookbook paths are walked in manifest order
and each link replaces any earlier link of the same name, so the last
checkout providing a file wins.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from cookfetch.core.errors import ConfigurationError, LinkError
from cookfetch.core.messages import Messages, NullMessages

logger = logging.getLogger(__name__)

LINKED_SUBDIRS = ("roles", "nodes", "handlers", "data_bags")
LINKED_SUFFIXES = (".rb", ".json")


class LinkReport(BaseModel):
    """Outcome of a relink."""

    removed: int = Field(default=0, description="Stale links cleared before rebuilding")
    links: dict[str, str] = Field(
        default_factory=dict,
        description="Final link targets keyed by '<subdir>/<filename>'",
    )
    overridden: list[str] = Field(
        default_factory=list,
        description="Link names that a later checkout took over",
    )


class OverlayLinker:
    """
    Rebuilds the combined tree from the cookbook order.

    Example:
        >>> linker = OverlayLinker(Path("."))
        >>> report = linker.link(["checkouts/base/cookbooks", "checkouts/site/cookbooks"])
        >>> report.links["roles/web.rb"]
        '/home/ops/project/checkouts/site/roles/web.rb'
    """

    def __init__(
        self,
        project_dir: Path,
        *,
        checkouts_dir: str = "checkouts",
        combined_dir: str = "combined",
        link_root: str | None = None,
        messages: Messages | None = None,
    ) -> None:
        """
        Initialize the linker.

        Args:
            project_dir: Directory holding the checkouts and combined trees
            checkouts_dir: Checkouts root relative to project_dir
            combined_dir: Combined tree root relative to project_dir
            link_root: Prefix written into link targets in place of the
                absolute project directory (e.g. '/vagrant')
            messages: Sink for progress messages
        """
        for name, value in (("checkouts_dir", checkouts_dir), ("combined_dir", combined_dir)):
            if PurePosixPath(value).is_absolute():
                raise ConfigurationError(
                    f"{name} must be relative to the project directory, got '{value}'"
                )

        self.project_dir = project_dir
        self.checkouts_dir = checkouts_dir
        self.combined_dir = combined_dir
        self.link_root = link_root
        self.messages: Messages = messages or NullMessages()

    @property
    def combined_path(self) -> Path:
        return self.project_dir / self.combined_dir

    def checkout_name(self, cookbook_path: str) -> str:
        """Checkout directory name a cookbook path belongs to."""
        parts = PurePosixPath(cookbook_path).parts
        prefix = PurePosixPath(self.checkouts_dir).parts
        if parts[: len(prefix)] == prefix and len(parts) > len(prefix):
            return parts[len(prefix)]
        if len(parts) < 2:
            raise ConfigurationError(
                f"Cannot derive a checkout from cookbook path '{cookbook_path}'"
            )
        return parts[1]

    def _target_for(self, name: str, subdir: str, filename: str) -> str:
        root = self.link_root if self.link_root is not None else str(self.project_dir.resolve())
        return str(PurePosixPath(root, self.checkouts_dir, name, subdir, filename))

    def reset(self) -> int:
        """
        Ensure the combined subdirectories exist and clear their symlinks.

        Regular files are left alone.

        Returns:
            Number of links removed
        """
        removed = 0
        for subdir in LINKED_SUBDIRS:
            directory = self.combined_path / subdir
            directory.mkdir(parents=True, exist_ok=True)
            for item in directory.iterdir():
                if item.is_symlink():
                    item.unlink()
                    removed += 1
        logger.debug("Removed %d stale links from %s", removed, self.combined_path)
        return removed

    def _link(self, target: str, link_path: Path) -> None:
        try:
            if link_path.is_symlink() or link_path.is_file():
                link_path.unlink()
            link_path.symlink_to(target)
        except OSError as e:
            raise LinkError(
                f"Could not link {link_path} -> {target}: {e}",
                source=target,
                target=str(link_path),
            ) from e

    def rebuild(self, cookbook_list: list[str]) -> LinkReport:
        """Create links for every cookbook path, later paths overriding earlier ones."""
        report = LinkReport()

        for cookbook_path in cookbook_list:
            name = self.checkout_name(cookbook_path)
            for subdir in LINKED_SUBDIRS:
                source_dir = self.project_dir / self.checkouts_dir / name / subdir
                if not source_dir.is_dir():
                    continue

                for item in sorted(source_dir.iterdir()):
                    if not item.name.endswith(LINKED_SUFFIXES):
                        continue

                    key = f"{subdir}/{item.name}"
                    target = self._target_for(name, subdir, item.name)
                    if key in report.links and report.links[key] != target:
                        report.overridden.append(key)

                    self._link(target, self.combined_path / subdir / item.name)
                    report.links[key] = target
                    logger.debug("Linked %s -> %s", key, target)

        return report

    def link(self, cookbook_list: list[str]) -> LinkReport:
        """Reset the combined tree and rebuild it."""
        self.messages.info(f"Updating links to {', '.join(LINKED_SUBDIRS)}")
        removed = self.reset()
        report = self.rebuild(cookbook_list)
        report.removed = removed
        return report
