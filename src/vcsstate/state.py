"""
Repository state snapshot.

collect_repo_state() runs every strategy query for one working copy and
gathers the answers the way a status dashboard needs them: which branch
is the default, whether the working tree is dirty, and how the local
default branch relates to the remote one.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .config import GitSettings
from .core.errors import CommandError, NoCachedDefaultBranchError, NoRemoteError
from .parsing import trim_last_newline
from .ports.vcs import GitStrategy, RemoteDescriptor, RepositoryHandle
from .stderr_patterns import error_for_result
from .subprocess_utils import run_git

logger = logging.getLogger(__name__)


@dataclass
class RepoState:
    """Everything known about one working copy."""

    root: str
    strategy: str
    branch: str
    default_branch: str
    status: str = ""
    stash: str = ""
    local_revision: str | None = None
    remote_url: str | None = None
    remote_revision: str | None = None
    local_contains_remote: bool | None = None
    remote_contains_local: bool | None = None

    @property
    def is_dirty(self) -> bool:
        return bool(self.status)

    @property
    def has_stash(self) -> bool:
        return bool(self.stash)

    @property
    def on_default_branch(self) -> bool:
        return self.branch == self.default_branch

    @property
    def in_sync(self) -> bool | None:
        """True when local and remote default branches are the same revision."""
        if self.local_revision is None or self.remote_revision is None:
            return None
        return self.local_revision == self.remote_revision

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.update(
            is_dirty=self.is_dirty,
            has_stash=self.has_stash,
            on_default_branch=self.on_default_branch,
            in_sync=self.in_sync,
        )
        return data


def find_repo_root(dir: RepositoryHandle, settings: GitSettings | None = None) -> Path:
    """
    Return the top level directory of the working copy containing dir.

    Raises:
        CommandError: dir is not inside a working copy
    """
    result = run_git(["rev-parse", "--show-toplevel"], dir, settings=settings)
    if not result.ok:
        raise error_for_result(result)
    return Path(trim_last_newline(result.stdout))


def _remote_descriptor(strategy: GitStrategy, dir: RepositoryHandle) -> RemoteDescriptor | None:
    try:
        return strategy.remote_branch_and_revision(dir)
    except NoRemoteError:
        return None


def _default_branch(strategy: GitStrategy, dir: RepositoryHandle) -> str:
    try:
        return strategy.cached_remote_default_branch(dir)
    except NoCachedDefaultBranchError:
        return strategy.no_remote_default_branch()


def collect_repo_state(
    strategy: GitStrategy,
    dir: RepositoryHandle,
    include_remote: bool = True,
    settings: GitSettings | None = None,
) -> RepoState:
    """
    Gather a RepoState for the working copy containing dir.

    With include_remote the remote is queried over the network for its
    default branch; without it the locally cached origin/HEAD is used.
    A missing origin remote is not an error here. Every other failure
    propagates.
    """
    root = find_repo_root(dir, settings)

    remote: RemoteDescriptor | None = None
    remote_url: str | None = None
    try:
        remote_url = strategy.remote_url(root)
    except NoRemoteError:
        logger.debug("%s has no origin remote", root)

    if remote_url is not None and include_remote:
        remote = _remote_descriptor(strategy, root)

    if remote is not None:
        default_branch = remote.branch
    elif remote_url is not None:
        default_branch = _default_branch(strategy, root)
    else:
        default_branch = strategy.no_remote_default_branch()

    state = RepoState(
        root=str(root),
        strategy=getattr(strategy, "name", type(strategy).__name__),
        branch=strategy.branch(root),
        default_branch=default_branch,
        status=strategy.status(root),
        stash=strategy.stash(root),
        remote_url=remote_url,
        remote_revision=remote.revision if remote else None,
    )

    # The default branch may not exist locally, e.g. in a single-branch clone.
    try:
        state.local_revision = strategy.local_revision(root, default_branch)
    except CommandError as e:
        logger.debug("no local %s branch in %s: %s", default_branch, root, e)

    if remote is not None:
        state.local_contains_remote = strategy.contains(root, remote.revision, default_branch)
        if state.local_revision is not None:
            state.remote_contains_local = strategy.remote_contains(root, state.local_revision, default_branch)

    return state
