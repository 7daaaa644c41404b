"""
Run git as a subprocess with a controlled environment.

stdout and stderr are captured separately so callers can classify
failures by their stderr prefix. There is one attempt per call and no
deadline unless the settings carry a timeout.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import GitSettings
from .core.errors import CommandError, GitNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one git invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command(self) -> str:
        return " ".join(self.args)


def build_git_env(settings: GitSettings, remote: bool = False) -> dict[str, str]:
    """
    Build the environment for a git call.

    The locale is forced so stderr prefixes are stable. Commands that
    reach a remote must never wait on a prompt: GIT_ASKPASS is the
    `true` command, so a password prompt gets an empty answer and git
    fails instead of blocking.
    """
    env = dict(os.environ)
    env["LANG"] = settings.locale
    if remote:
        env["GIT_ASKPASS"] = "true"
        env["GIT_SSH_COMMAND"] = settings.ssh_command
    return env


def run_git(
    args: Sequence[str],
    cwd: str | Path | None = None,
    *,
    settings: GitSettings | None = None,
    remote: bool = False,
) -> CommandResult:
    """
    Run `git <args>` and capture its output.

    A non-zero exit is returned, not raised; use check_result() for that.

    Raises:
        GitNotFoundError: the git binary could not be executed
        CommandError: the configured timeout expired
    """
    settings = settings or GitSettings()
    argv = (settings.binary, *args)
    logger.debug("running %s (cwd=%s, remote=%s)", " ".join(argv), cwd, remote)

    try:
        proc = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            env=build_git_env(settings, remote=remote),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=settings.timeout,
        )
    except FileNotFoundError as e:
        raise GitNotFoundError(debug_context=str(e)) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            user_message=f"{' '.join(argv)} timed out after {settings.timeout}s",
            command=" ".join(argv),
        ) from e

    logger.debug("%s exited with status %d", " ".join(argv), proc.returncode)
    return CommandResult(
        args=argv,
        returncode=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
    )


def command_error(result: CommandResult) -> CommandError:
    """Describe a failed git call, with its stderr appended."""
    stderr = result.stderr.removesuffix("\n")
    message = f"{result.command}: exit status {result.returncode}"
    if stderr:
        message = f"{message}: {stderr}"
    return CommandError(
        user_message=message,
        debug_context=stderr or None,
        command=result.command,
        returncode=result.returncode,
        stderr=result.stderr,
    )


def check_result(result: CommandResult) -> str:
    """Return stdout of a successful call, else raise CommandError."""
    if not result.ok:
        raise command_error(result)
    return result.stdout
