"""Detect the installed git version."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from .config import GitSettings
from .core.errors import UnsupportedGitVersionError
from .subprocess_utils import check_result, run_git

logger = logging.getLogger(__name__)

# First release whose ls-remote supports --symref and remote get-url.
MODERN_MIN_VERSION = (2, 8)

_VERSION_RE = re.compile(r"git version (\d+)\.(\d+)(?:\.(\d+))?")


@dataclass(frozen=True)
class GitVersion:
    """Parsed `git --version` output."""

    major: int
    minor: int
    patch: int
    raw: str

    @property
    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_modern(self) -> bool:
        return self.as_tuple >= MODERN_MIN_VERSION

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_git_version(output: str) -> GitVersion:
    """
    Parse `git --version` output.

    Handles vendor suffixes such as "git version 2.39.2 (Apple Git-143)"
    and "git version 2.45.1.windows.1".

    Raises:
        UnsupportedGitVersionError: output does not name a version
    """
    raw = output.strip()
    match = _VERSION_RE.search(raw)
    if not match:
        raise UnsupportedGitVersionError(debug_context=raw or None)
    major, minor, patch = match.groups()
    return GitVersion(int(major), int(minor), int(patch or 0), raw)


@lru_cache(maxsize=None)
def detect_git_version(settings: GitSettings | None = None) -> GitVersion:
    """
    Query `git --version` once per settings for the life of the process.

    Raises:
        GitNotFoundError: git could not be executed
        CommandError: git --version failed
        UnsupportedGitVersionError: output does not name a version
    """
    out = check_result(run_git(["--version"], settings=settings))
    version = parse_git_version(out)
    logger.debug("detected git %s (%s)", version, version.raw)
    return version
