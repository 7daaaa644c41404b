"""Strategy for git 1.7 up to 2.7."""

from __future__ import annotations

from ..core.errors import NoRemoteError
from ..parsing import parse_ls_remote, parse_remote_fetch_url
from ..ports.vcs import RemoteDescriptor, RepositoryHandle
from ..stderr_patterns import ORIGIN
from .git_base import GitBase, RemoteGitBase


class LegacyGit(GitBase):
    """Git strategy using only commands available since git 1.7."""

    name = "legacy"

    def contains(self, dir: RepositoryHandle, revision: str, default_branch: str) -> bool:
        # Contained: exactly "* <branch>\n", or "  <branch>\n" when another
        # branch is checked out.
        return self._contains(
            dir,
            ["branch", "--contains", revision, default_branch],
            revision,
            {f"* {default_branch}\n", f"  {default_branch}\n"},
        )

    def remote_contains(self, dir: RepositoryHandle, revision: str, default_branch: str) -> bool:
        return self._contains(
            dir,
            ["branch", "-r", "--contains", revision, f"{ORIGIN}/{default_branch}"],
            revision,
            {f"  {ORIGIN}/{default_branch}\n"},
        )

    def remote_url(self, dir: RepositoryHandle) -> str:
        """
        Return origin's fetch URL from `git remote -v`.

        Only "origin" counts, even if the current branch tracks another
        remote; a working copy without origin has no remote.
        """
        out = self._output(dir, ["remote", "-v"])
        url = parse_remote_fetch_url(out, ORIGIN)
        if url is None:
            raise NoRemoteError()
        return url

    def remote_branch_and_revision(self, dir: RepositoryHandle) -> RemoteDescriptor:
        out = self._output(dir, ["ls-remote", ORIGIN, "HEAD", "refs/heads/*"], remote=True)
        _, revision = parse_ls_remote(out)
        # The listing alone can be ambiguous; remote show names HEAD exactly.
        branch = self._remote_head_branch(dir)
        return RemoteDescriptor(branch=branch, revision=revision)


class LegacyRemoteGit(RemoteGitBase):
    """URL-only queries for git 1.7 up to 2.7."""

    name = "legacy"

    def remote_branch_and_revision(self, remote_url: str) -> RemoteDescriptor:
        branch, revision = parse_ls_remote(self._ls_remote(remote_url))
        return RemoteDescriptor(branch=branch, revision=revision, url=remote_url)
