"""
Typed exceptions for vcsstate.

Every error carries a user-facing message, an optional fix hint and an
optional debug context (usually git's stderr). The CLI renders these
fields and exits with ``exit_code``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .exit_codes import get_exit_code_for_exception


@dataclass(eq=False)
class VcsStateError(Exception):
    """Base class for all vcsstate errors."""

    user_message: str
    suggested_action: str | None = None
    debug_context: str | None = None
    exit_code: int = field(default=-1)

    def __post_init__(self) -> None:
        super().__init__(self.user_message)
        if self.exit_code < 0:
            self.exit_code = get_exit_code_for_exception(self)

    def __str__(self) -> str:
        return self.user_message


# ═══════════════════════════════════════════════════════════════════════════════
# Prerequisites
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(eq=False)
class GitNotFoundError(VcsStateError):
    """git binary is not installed or not in PATH."""

    user_message: str = "Git is not installed or not in PATH"
    suggested_action: str | None = "Install Git from https://git-scm.com/downloads"


@dataclass(eq=False)
class UnsupportedGitVersionError(VcsStateError):
    """`git --version` output could not be understood."""

    user_message: str = "Could not determine the installed git version"
    suggested_action: str | None = "Check that `git --version` prints 'git version X.Y.Z'"


@dataclass(eq=False)
class ConfigError(VcsStateError):
    """Configuration holds an invalid value."""

    user_message: str = "Invalid configuration"


# ═══════════════════════════════════════════════════════════════════════════════
# Remote errors
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(eq=False)
class NoRemoteError(VcsStateError):
    """Working copy has no 'origin' remote."""

    user_message: str = "No 'origin' remote is configured"
    suggested_action: str | None = "Add one with `git remote add origin <url>`"


@dataclass(eq=False)
class RepositoryNotFoundError(VcsStateError):
    """Remote reports that the repository does not exist."""

    user_message: str = "Remote repository not found"
    suggested_action: str | None = "Check the remote URL and your access to it"


@dataclass(eq=False)
class NoCachedDefaultBranchError(VcsStateError):
    """No locally cached origin/HEAD to read the default branch from."""

    user_message: str = "No cached remote default branch"
    suggested_action: str | None = "Run `git remote set-head origin --auto`"


# ═══════════════════════════════════════════════════════════════════════════════
# Tool errors
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(eq=False)
class MalformedOutputError(VcsStateError):
    """git succeeded but its output did not have the expected shape."""

    user_message: str = "Unexpected git output"


@dataclass(eq=False)
class CommandError(VcsStateError):
    """git exited non-zero for a reason we do not classify further."""

    user_message: str = "git command failed"
    command: str | None = None
    returncode: int | None = None
    stderr: str | None = None
