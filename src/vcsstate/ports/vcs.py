"""Version strategy port definitions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

RepositoryHandle = Union[str, Path]


@dataclass(frozen=True)
class RemoteDescriptor:
    """Remote default branch and the revision it points at.

    The revision is taken from the remote listing as-is; unlike local
    revisions its length is not validated.
    """

    branch: str
    revision: str
    url: str = ""


class GitStrategy(Protocol):
    """Repository state queries for one family of git versions."""

    name: str

    def status(self, dir: RepositoryHandle) -> str:
        """Return `git status --porcelain` output; empty when clean."""

    def branch(self, dir: RepositoryHandle) -> str:
        """Return the checked out branch ("HEAD" when detached)."""

    def local_revision(self, dir: RepositoryHandle, default_branch: str) -> str:
        """Return the 40 character revision default_branch points at."""

    def stash(self, dir: RepositoryHandle) -> str:
        """Return `git stash list` output; empty when nothing is stashed."""

    def contains(self, dir: RepositoryHandle, revision: str, default_branch: str) -> bool:
        """Return True if revision is an ancestor of the local default_branch."""

    def remote_contains(self, dir: RepositoryHandle, revision: str, default_branch: str) -> bool:
        """Return True if revision is an ancestor of origin/default_branch."""

    def remote_url(self, dir: RepositoryHandle) -> str:
        """Return the fetch URL of the origin remote."""

    def remote_branch_and_revision(self, dir: RepositoryHandle) -> RemoteDescriptor:
        """Query origin for its default branch and that branch's revision."""

    def cached_remote_default_branch(self, dir: RepositoryHandle) -> str:
        """Return origin's default branch as last recorded locally."""

    def no_remote_default_branch(self) -> str:
        """Return the default branch to assume when there is no remote."""


class RemoteGitStrategy(Protocol):
    """Remote queries that need only a URL, no working copy."""

    name: str

    def remote_branch_and_revision(self, remote_url: str) -> RemoteDescriptor:
        """Query remote_url for its default branch and that branch's revision."""
