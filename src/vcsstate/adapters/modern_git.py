"""Strategy for git 2.8 and newer."""

from __future__ import annotations

import logging

from ..core.errors import MalformedOutputError
from ..parsing import guess_branch, parse_ls_remote_symref, trim_last_newline
from ..ports.vcs import RemoteDescriptor, RepositoryHandle
from ..stderr_patterns import ORIGIN
from .git_base import GitBase, RemoteGitBase

logger = logging.getLogger(__name__)

# Arbitrary constant printed once per matching ref by for-each-ref.
CONTAINS_MARKER = "contains"


class ModernGit(GitBase):
    """Git strategy using for-each-ref, remote get-url and ls-remote --symref."""

    name = "modern"

    def _for_each_ref_contains(self, dir: RepositoryHandle, revision: str, ref: str) -> bool:
        return self._contains(
            dir,
            ["for-each-ref", f"--format={CONTAINS_MARKER}", "--count=1", "--contains", revision, ref],
            revision,
            {f"{CONTAINS_MARKER}\n"},
        )

    def contains(self, dir: RepositoryHandle, revision: str, default_branch: str) -> bool:
        return self._for_each_ref_contains(dir, revision, f"refs/heads/{default_branch}")

    def remote_contains(self, dir: RepositoryHandle, revision: str, default_branch: str) -> bool:
        return self._for_each_ref_contains(dir, revision, f"refs/remotes/{ORIGIN}/{default_branch}")

    def remote_url(self, dir: RepositoryHandle) -> str:
        # "No such remote 'origin'" maps to NoRemoteError.
        return trim_last_newline(self._output(dir, ["remote", "get-url", ORIGIN]))

    def remote_branch_and_revision(self, dir: RepositoryHandle) -> RemoteDescriptor:
        # TODO: classify "fatal: unable to access" as a connectivity error.
        out = self._output(dir, ["ls-remote", "--symref", ORIGIN, "HEAD", "refs/heads/*"], remote=True)
        branch, revision = parse_ls_remote_symref(out)
        if branch is None:
            logger.debug("origin ignored --symref; asking remote show for HEAD branch")
            branch = self._remote_head_branch(dir)
        return RemoteDescriptor(branch=branch, revision=revision)


class ModernRemoteGit(RemoteGitBase):
    """URL-only queries for git 2.8 and newer."""

    name = "modern"

    def remote_branch_and_revision(self, remote_url: str) -> RemoteDescriptor:
        out = self._ls_remote(remote_url, "--symref")
        branch, revision = parse_ls_remote_symref(out)
        if branch is None:
            # No working copy to run remote show in; guess from the listing.
            logger.debug("%s ignored --symref; guessing HEAD branch from listing", remote_url)
            branch = guess_branch(out, revision)
            if branch is None:
                raise MalformedOutputError(
                    user_message="HEAD branch not found in ls-remote output",
                    debug_context=out,
                )
        return RemoteDescriptor(branch=branch, revision=revision, url=remote_url)
