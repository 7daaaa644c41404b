"""
Known git stderr messages and the error each one means.

All stderr matching lives here. Call sites classify a failed result and
decide per kind; anything unrecognized becomes a CommandError carrying
the stderr text.
"""

from __future__ import annotations

from enum import Enum

from .core.errors import NoRemoteError, RepositoryNotFoundError, VcsStateError
from .subprocess_utils import CommandResult, command_error

ORIGIN = "origin"


class StderrKind(str, Enum):
    """Classified git failure."""

    NO_ORIGIN_REPOSITORY = "no_origin_repository"
    NO_SUCH_REMOTE = "no_such_remote"
    REPOSITORY_NOT_FOUND = "repository_not_found"
    NO_SUCH_COMMIT = "no_such_commit"


# (kind, prefix template). Templates are formatted with remote and revision.
STDERR_PATTERNS: tuple[tuple[StderrKind, str], ...] = (
    (StderrKind.NO_ORIGIN_REPOSITORY, "fatal: '{remote}' does not appear to be a git repository\n"),
    (StderrKind.NO_SUCH_REMOTE, "fatal: No such remote '{remote}'\n"),
    # git 2.26+ reports the same condition as an error rather than fatal.
    (StderrKind.NO_SUCH_REMOTE, "error: No such remote '{remote}'\n"),
    (StderrKind.REPOSITORY_NOT_FOUND, "remote: Repository not found.\n"),
    (StderrKind.NO_SUCH_COMMIT, "error: no such commit {revision}\n"),
)


def classify_stderr(stderr: str, *, remote: str = ORIGIN, revision: str | None = None) -> StderrKind | None:
    """Return the first kind whose prefix matches stderr, or None."""
    for kind, template in STDERR_PATTERNS:
        if kind is StderrKind.NO_SUCH_COMMIT and revision is None:
            continue
        if stderr.startswith(template.format(remote=remote, revision=revision)):
            return kind
    return None


def error_for_result(result: CommandResult, *, remote: str = ORIGIN) -> VcsStateError:
    """Map a failed git call to the error its stderr identifies."""
    kind = classify_stderr(result.stderr, remote=remote)
    if kind in (StderrKind.NO_ORIGIN_REPOSITORY, StderrKind.NO_SUCH_REMOTE):
        return NoRemoteError(debug_context=result.stderr.removesuffix("\n"))
    if kind is StderrKind.REPOSITORY_NOT_FOUND:
        generic = command_error(result)
        return RepositoryNotFoundError(
            user_message=f"Remote repository not found: {generic.user_message}",
            debug_context=generic.debug_context,
        )
    return command_error(result)


def is_no_such_commit(result: CommandResult, revision: str) -> bool:
    """True when git failed only because revision does not exist locally."""
    return classify_stderr(result.stderr, revision=revision) is StderrKind.NO_SUCH_COMMIT
