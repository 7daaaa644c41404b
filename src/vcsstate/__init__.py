"""
vcsstate - query the state of git working copies through the git CLI.

Example:
    >>> from vcsstate import get_strategy
    >>> git = get_strategy()
    >>> git.branch(".")
    'main'
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_installed_version

try:
    __version__ = _get_installed_version("vcsstate")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .bootstrap import Strategies, build_strategies, get_remote_strategy, get_strategy  # noqa: E402
from .core.errors import (  # noqa: E402
    CommandError,
    ConfigError,
    GitNotFoundError,
    MalformedOutputError,
    NoCachedDefaultBranchError,
    NoRemoteError,
    RepositoryNotFoundError,
    UnsupportedGitVersionError,
    VcsStateError,
)
from .ports.vcs import GitStrategy, RemoteDescriptor, RemoteGitStrategy  # noqa: E402
from .state import RepoState, collect_repo_state, find_repo_root  # noqa: E402

__all__ = [
    "__version__",
    "CommandError",
    "ConfigError",
    "GitNotFoundError",
    "GitStrategy",
    "MalformedOutputError",
    "NoCachedDefaultBranchError",
    "NoRemoteError",
    "RemoteDescriptor",
    "RemoteGitStrategy",
    "RepoState",
    "RepositoryNotFoundError",
    "Strategies",
    "UnsupportedGitVersionError",
    "VcsStateError",
    "build_strategies",
    "collect_repo_state",
    "find_repo_root",
    "get_remote_strategy",
    "get_strategy",
]
