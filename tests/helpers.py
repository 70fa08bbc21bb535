"""Shared test doubles and filesystem/git helpers."""

import subprocess
from pathlib import Path


# ==============================================================================
# Test Doubles
# ==============================================================================


class RecordingMessages:
    """Message sink that records (level, message) pairs."""

    def __init__(self):
        self.records: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def at(self, level: str) -> list[str]:
        return [message for lvl, message in self.records if lvl == level]


class FakeVcs:
    """
    VcsClient that records calls instead of running git.

    clone() creates the target directory so a second sync sees an
    existing working copy. Populate ``files`` to have clone() write files
    into the new working copy.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self.files: dict[str, dict[str, str]] = {}

    def clone(self, repository: str, branch: str, directory: str, cwd: Path) -> None:
        self.calls.append(("clone", repository, branch, directory))
        target = cwd / directory
        target.mkdir(parents=True)
        for relpath, content in self.files.get(directory, {}).items():
            path = target / relpath
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)

    def checkout(self, branch: str, cwd: Path) -> None:
        self.calls.append(("checkout", branch, cwd))

    def pull(self, cwd: Path) -> None:
        self.calls.append(("pull", cwd))


def add_checkout_files(project_dir: Path, name: str, files: dict[str, str]) -> Path:
    """Write files into checkouts/<name>/ and return the checkout path."""
    checkout = project_dir / "checkouts" / name
    for relpath, content in files.items():
        path = checkout / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return checkout


def git(*args: str, cwd: Path) -> str:
    """Run git in cwd and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_files(repo: Path, files: dict[str, str], message: str) -> None:
    """Write files into a repo and commit them."""
    for relpath, content in files.items():
        path = repo / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    git("add", ".", cwd=repo)
    git("commit", "-m", message, cwd=repo)
