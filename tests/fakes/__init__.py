"""Test fakes for vcsstate ports."""

from __future__ import annotations

from dataclasses import dataclass, field

from vcsstate.adapters import LegacyGit, LegacyRemoteGit, ModernGit, ModernRemoteGit
from vcsstate.bootstrap import Strategies
from vcsstate.subprocess_utils import CommandResult

REV_A = "7cafcd837844e784b526369c9bce262804aebc60"
REV_B = "0123456789abcdef0123456789abcdef01234567"


@dataclass
class FakeCall:
    """One recorded git invocation."""

    args: tuple[str, ...]
    cwd: object
    remote: bool


@dataclass
class FakeGitRunner:
    """Scripted stand-in for run_git.

    Responses are keyed by the git argument tuple (without the binary).
    Unscripted calls fail the test.
    """

    responses: dict[tuple[str, ...], CommandResult] = field(default_factory=dict)
    calls: list[FakeCall] = field(default_factory=list)

    def on(self, *args: str, stdout: str = "", stderr: str = "", returncode: int = 0) -> FakeGitRunner:
        self.responses[args] = CommandResult(
            args=("git", *args),
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
        return self

    def fail(self, *args: str, stderr: str, returncode: int = 128) -> FakeGitRunner:
        return self.on(*args, stderr=stderr, returncode=returncode)

    def __call__(self, args, cwd=None, *, settings=None, remote=False) -> CommandResult:
        key = tuple(args)
        self.calls.append(FakeCall(args=key, cwd=cwd, remote=remote))
        if key not in self.responses:
            raise AssertionError(f"unexpected git call: git {' '.join(key)}")
        return self.responses[key]

    @property
    def called_args(self) -> list[tuple[str, ...]]:
        return [c.args for c in self.calls]


def build_fake_strategies(runner: FakeGitRunner, modern: bool = True) -> Strategies:
    """Return a strategy pair wired to a fake runner."""
    if modern:
        return Strategies(
            name="modern",
            local=ModernGit(runner=runner),
            remote=ModernRemoteGit(runner=runner),
        )
    return Strategies(
        name="legacy",
        local=LegacyGit(runner=runner),
        remote=LegacyRemoteGit(runner=runner),
    )
