"""
Pytest configuration and shared fixtures.

Provides fixtures for project directories, recording message sinks, a fake
VCS client, real git origin repositories, and isolated configuration.
"""

from pathlib import Path

import pytest
from helpers import FakeVcs, RecordingMessages, commit_files, git

from cookfetch.core.config import clear_cache

# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def project_dir(tmp_path):
    """Provide an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def messages():
    """Provide a recording message sink."""
    return RecordingMessages()


@pytest.fixture
def fake_vcs():
    """Provide a recording VCS client."""
    return FakeVcs()


# ==============================================================================
# Git Fixtures
# ==============================================================================


@pytest.fixture
def origin_repo(tmp_path: Path) -> Path:
    """
    Create a git repository to clone from.

    Has a 'main' branch with roles/base.rb and a 'staging' branch that
    adds roles/staging.rb.
    """
    repo = tmp_path / "origin"
    repo.mkdir()

    git("init", cwd=repo)
    git("config", "user.email", "test@example.com", cwd=repo)
    git("config", "user.name", "Test User", cwd=repo)
    git("checkout", "-b", "main", cwd=repo)

    commit_files(repo, {"roles/base.rb": "name 'base'\n"}, "Initial commit")

    git("checkout", "-b", "staging", cwd=repo)
    commit_files(repo, {"roles/staging.rb": "name 'staging'\n"}, "Add staging role")
    git("checkout", "main", cwd=repo)

    return repo


# ==============================================================================
# Configuration Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Isolate every test from real user config and COOKFETCH_* env vars.
    """
    for var in ("COOKFETCH_URL", "COOKFETCH_DISABLE", "COOKFETCH_VERIFY_TLS"):
        monkeypatch.delenv(var, raising=False)

    xdg = tmp_path / "xdg-config"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))

    clear_cache()
    yield xdg
    clear_cache()
