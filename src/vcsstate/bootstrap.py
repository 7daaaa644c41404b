"""Composition root: pick the strategy pair for the installed git."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from .adapters import LegacyGit, LegacyRemoteGit, ModernGit, ModernRemoteGit
from .adapters.git_base import GitRunner
from .config import STRATEGY_AUTO, STRATEGY_LEGACY, STRATEGY_MODERN, GitSettings, get_git_settings
from .ports.vcs import GitStrategy, RemoteGitStrategy
from .subprocess_utils import run_git
from .version import GitVersion, detect_git_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Strategies:
    """Strategy instances selected for one git binary."""

    name: str
    local: GitStrategy
    remote: RemoteGitStrategy
    version: GitVersion | None = None


def select_strategy_name(version: GitVersion | None, forced: str = STRATEGY_AUTO) -> str:
    """Return "modern" or "legacy" for version, unless forced."""
    if forced != STRATEGY_AUTO:
        return forced
    if version is None:
        raise ValueError("version is required when the strategy is auto")
    return STRATEGY_MODERN if version.is_modern else STRATEGY_LEGACY


def build_strategies(
    settings: GitSettings | None = None,
    version: GitVersion | None = None,
    runner: GitRunner = run_git,
) -> Strategies:
    """
    Build the strategy pair for settings.

    The git version is detected (once per process) unless given or the
    strategy is forced by configuration.

    Raises:
        GitNotFoundError: git could not be executed
        UnsupportedGitVersionError: git --version is unparseable
    """
    settings = settings or GitSettings()
    if version is None and settings.strategy == STRATEGY_AUTO:
        version = detect_git_version(settings)

    name = select_strategy_name(version, settings.strategy)
    logger.debug("using %s git strategy (git %s)", name, version or "unknown")

    if name == STRATEGY_MODERN:
        return Strategies(
            name=name,
            local=ModernGit(settings, runner),
            remote=ModernRemoteGit(settings, runner),
            version=version,
        )
    return Strategies(
        name=name,
        local=LegacyGit(settings, runner),
        remote=LegacyRemoteGit(settings, runner),
        version=version,
    )


@lru_cache(maxsize=1)
def get_default_strategies() -> Strategies:
    """Return the process-wide strategies for the configured git."""
    return build_strategies(get_git_settings())


def get_strategy() -> GitStrategy:
    """Return the process-wide working copy strategy."""
    return get_default_strategies().local


def get_remote_strategy() -> RemoteGitStrategy:
    """Return the process-wide URL-only strategy."""
    return get_default_strategies().remote
