"""JSON envelope output for --json modes."""

from __future__ import annotations

import json
from typing import Any

import typer

from . import __version__
from .core.errors import CommandError, VcsStateError
from .kinds import Kind

ENVELOPE_VERSION = 1


def build_envelope(kind: Kind, data: Any = None, ok: bool = True, errors: list[dict] | None = None) -> dict:
    """Wrap command output in the standard envelope."""
    return {
        "apiVersion": ENVELOPE_VERSION,
        "kind": kind,
        "ok": ok,
        "generator": f"vcsstate/{__version__}",
        "data": data if data is not None else {},
        "errors": errors or [],
    }


def build_error_envelope(error: VcsStateError) -> dict:
    """Envelope describing a failed command."""
    detail: dict[str, Any] = {
        "type": type(error).__name__,
        "message": error.user_message,
        "suggested_action": error.suggested_action,
        "exit_code": error.exit_code,
    }
    if isinstance(error, CommandError):
        detail["command"] = error.command
        detail["stderr"] = error.stderr
    return build_envelope(Kind.ERROR, ok=False, errors=[detail])


def print_json(envelope: dict) -> None:
    """Write an envelope to stdout, bypassing Rich markup."""
    typer.echo(json.dumps(envelope, indent=2))
