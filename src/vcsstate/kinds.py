"""Define centralized JSON envelope kind names to prevent drift.

Usage:
    from vcsstate.kinds import Kind

    envelope = build_envelope(Kind.REPO_STATE, data={...})
"""

from enum import Enum


class Kind(str, Enum):
    """Define JSON envelope kind identifiers.

    Inherit from str so enum values serialize directly to JSON without .value.
    """

    REPO_STATE = "RepoState"
    REMOTE_STATE = "RemoteState"
    CONTAINS = "Contains"
    DOCTOR_REPORT = "DoctorReport"
    CONFIG = "Config"
    ERROR = "Error"
