"""Operations shared by every git version strategy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Sequence

from ..config import GitSettings
from ..core.errors import NoCachedDefaultBranchError
from ..parsing import (
    parse_head_branch,
    parse_revision,
    parse_symbolic_ref_branch,
    trim_last_newline,
)
from ..ports.vcs import RepositoryHandle
from ..stderr_patterns import ORIGIN, error_for_result, is_no_such_commit
from ..subprocess_utils import CommandResult, run_git

logger = logging.getLogger(__name__)

GitRunner = Callable[..., CommandResult]

# Assumed when a working copy has no remote to ask.
NO_REMOTE_DEFAULT_BRANCH = "master"


class GitBase:
    """Commands whose syntax and output are the same on git 1.7 and 2.8+."""

    name = "base"

    def __init__(self, settings: GitSettings | None = None, runner: GitRunner = run_git) -> None:
        self.settings = settings or GitSettings()
        self._runner = runner

    def __repr__(self) -> str:
        return f"{type(self).__name__}(binary={self.settings.binary!r})"

    # ─────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────

    def _run(self, dir: RepositoryHandle | None, args: Sequence[str], remote: bool = False) -> CommandResult:
        return self._runner(list(args), dir, settings=self.settings, remote=remote)

    def _output(self, dir: RepositoryHandle | None, args: Sequence[str], remote: bool = False) -> str:
        result = self._run(dir, args, remote=remote)
        if not result.ok:
            raise error_for_result(result)
        return result.stdout

    def _contains(
        self,
        dir: RepositoryHandle,
        args: Sequence[str],
        revision: str,
        expected: Collection[str],
    ) -> bool:
        """Run a containment query; True iff stdout is one of expected."""
        result = self._run(dir, args)
        if result.ok:
            return result.stdout in expected
        if is_no_such_commit(result, revision):
            return False
        raise error_for_result(result)

    def _remote_head_branch(self, dir: RepositoryHandle) -> str:
        """Default branch as reported by `git remote show origin`."""
        out = self._output(dir, ["remote", "show", ORIGIN], remote=True)
        return parse_head_branch(out)

    # ─────────────────────────────────────────────────────────────────────
    # Local state
    # ─────────────────────────────────────────────────────────────────────

    def status(self, dir: RepositoryHandle) -> str:
        return self._output(dir, ["status", "--porcelain"])

    def branch(self, dir: RepositoryHandle) -> str:
        # rev-parse is porcelain and may change; keep parsing minimal.
        return trim_last_newline(self._output(dir, ["rev-parse", "--abbrev-ref", "HEAD"]))

    def local_revision(self, dir: RepositoryHandle, default_branch: str) -> str:
        return parse_revision(self._output(dir, ["rev-parse", default_branch]))

    def stash(self, dir: RepositoryHandle) -> str:
        return self._output(dir, ["stash", "list"])

    # ─────────────────────────────────────────────────────────────────────
    # Default branch
    # ─────────────────────────────────────────────────────────────────────

    def cached_remote_default_branch(self, dir: RepositoryHandle) -> str:
        """
        Read origin's default branch from the local refs/remotes/origin/HEAD.

        This never contacts the remote, so it is only as fresh as the last
        clone or `git remote set-head`.

        Raises:
            NoCachedDefaultBranchError: origin/HEAD is not recorded
        """
        ref = f"refs/remotes/{ORIGIN}/HEAD"
        result = self._run(dir, ["symbolic-ref", "-q", ref])
        if result.returncode == 1:
            raise NoCachedDefaultBranchError(debug_context=f"{ref} is not a symbolic ref")
        if not result.ok:
            raise error_for_result(result)

        branch = parse_symbolic_ref_branch(result.stdout, ORIGIN)
        if branch is None:
            raise NoCachedDefaultBranchError(debug_context=trim_last_newline(result.stdout))
        return branch

    def no_remote_default_branch(self) -> str:
        return NO_REMOTE_DEFAULT_BRANCH


class RemoteGitBase:
    """URL-only queries; no working copy involved."""

    name = "base"

    def __init__(self, settings: GitSettings | None = None, runner: GitRunner = run_git) -> None:
        self.settings = settings or GitSettings()
        self._runner = runner

    def __repr__(self) -> str:
        return f"{type(self).__name__}(binary={self.settings.binary!r})"

    def _ls_remote(self, remote_url: str, *flags: str) -> str:
        result = self._runner(
            ["ls-remote", *flags, remote_url, "HEAD", "refs/heads/*"],
            None,
            settings=self.settings,
            remote=True,
        )
        if not result.ok:
            raise error_for_result(result)
        return result.stdout
