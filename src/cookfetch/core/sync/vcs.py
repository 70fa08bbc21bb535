"""
Version control client used to sync checkouts.

Git is driven through its command line. The ``VcsClient`` protocol keeps
the syncer independent of the subprocess calls so tests can substitute a
recording fake.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from cookfetch.core.errors import VcsCommandError

logger = logging.getLogger(__name__)


class VcsClient(Protocol):
    """Operations the syncer needs from a version control tool."""

    def clone(self, repository: str, branch: str, directory: str, cwd: Path) -> None:
        """Clone ``repository`` at ``branch`` into ``cwd/directory``."""
        ...

    def checkout(self, branch: str, cwd: Path) -> None:
        """Switch the working copy at ``cwd`` to ``branch``."""
        ...

    def pull(self, cwd: Path) -> None:
        """Bring the working copy at ``cwd`` up to date with its upstream."""
        ...


class GitClient:
    """
    VcsClient backed by the ``git`` executable.

    Commands block until git exits. No timeout is applied unless one is
    given, since a large clone has no sensible upper bound.
    """

    def __init__(self, executable: str = "git", timeout: float | None = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def _run_git(self, args: list[str], cwd: Path) -> str:
        """
        Run a git command and return its stdout.

        Raises:
            VcsCommandError: If the command exits non-zero, times out,
                or git cannot be found.
        """
        cmd = [self.executable] + args

        logger.debug("Running git command in %s: %s", cwd, " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise VcsCommandError(
                cmd, cwd=str(cwd), stderr=f"timed out after {self.timeout}s"
            ) from e
        except FileNotFoundError as e:
            raise VcsCommandError(cmd, cwd=str(cwd), stderr="git not found in PATH") from e

        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else ""
            raise VcsCommandError(
                cmd,
                cwd=str(cwd),
                returncode=result.returncode,
                stderr=stderr,
            )

        return result.stdout.strip() if result.stdout else ""

    def clone(self, repository: str, branch: str, directory: str, cwd: Path) -> None:
        self._run_git(["clone", "-b", branch, repository, directory], cwd)

    def checkout(self, branch: str, cwd: Path) -> None:
        self._run_git(["checkout", branch], cwd)

    def pull(self, cwd: Path) -> None:
        self._run_git(["pull"], cwd)
