"""Shared fixtures: isolated config and throwaway git repositories."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes.repos import ClonedRepo, commit_file, configure_identity, git
from vcsstate import config


# ═══════════════════════════════════════════════════════════════════════════════
# Config isolation
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def temp_config_dir(tmp_path, monkeypatch):
    """Point the config module at an empty temporary directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.json")
    monkeypatch.delenv("VCSSTATE_GIT", raising=False)
    monkeypatch.delenv("VCSSTATE_STRATEGY", raising=False)
    return config_dir


# ═══════════════════════════════════════════════════════════════════════════════
# Git repositories
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def cloned_repo(tmp_path) -> ClonedRepo:
    """Create a bare origin on branch main and a clone of it."""
    origin = tmp_path / "origin.git"
    git(tmp_path, "init", "-q", "--bare", str(origin))
    git(origin, "symbolic-ref", "HEAD", "refs/heads/main")

    seed = tmp_path / "seed"
    git(tmp_path, "init", "-q", str(seed))
    git(seed, "symbolic-ref", "HEAD", "refs/heads/main")
    configure_identity(seed)
    revision = commit_file(seed, "README.md", "# Test\n", "Initial commit")
    git(seed, "remote", "add", "origin", str(origin))
    git(seed, "push", "-q", "origin", "main")

    work = tmp_path / "work"
    git(tmp_path, "clone", "-q", str(origin), str(work))
    configure_identity(work)
    return ClonedRepo(work=work, origin=origin, initial_revision=revision)


@pytest.fixture
def lonely_repo(tmp_path) -> Path:
    """Create a repository on branch master with one commit and no remote."""
    repo = tmp_path / "lonely"
    git(tmp_path, "init", "-q", str(repo))
    git(repo, "symbolic-ref", "HEAD", "refs/heads/master")
    configure_identity(repo)
    commit_file(repo, "README.md", "# Lonely\n", "Initial commit")
    return repo
