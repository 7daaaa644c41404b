"""Git strategy adapters, one per supported git version range."""

from .legacy_git import LegacyGit, LegacyRemoteGit
from .modern_git import ModernGit, ModernRemoteGit

__all__ = ["LegacyGit", "LegacyRemoteGit", "ModernGit", "ModernRemoteGit"]
