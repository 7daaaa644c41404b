"""Tests for the vcsstate command line."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tests.fakes import REV_A, REV_B, FakeGitRunner, build_fake_strategies
from vcsstate import config
from vcsstate.cli import app
from vcsstate.core.errors import GitNotFoundError
from vcsstate.core.exit_codes import (
    EXIT_CONFIG,
    EXIT_NOT_CONTAINED,
    EXIT_NOT_FOUND,
    EXIT_PREREQ,
    EXIT_TOOL,
)
from vcsstate.doctor import CheckResult, DoctorResult

runner = CliRunner()

REPO = "/work/repo"
URL = "https://github.com/example/vcsstate"


@pytest.fixture
def fake_git():
    """Scripted git wired into the CLI for a modern strategy."""
    fake = FakeGitRunner()
    fake.on("rev-parse", "--show-toplevel", stdout=f"{REPO}\n")
    with (
        patch("vcsstate.cli.get_default_strategies", return_value=build_fake_strategies(fake)),
        patch("vcsstate.state.run_git", fake),
    ):
        yield fake


def _clean_clone(fake: FakeGitRunner) -> None:
    fake.on("remote", "get-url", "origin", stdout=f"{URL}\n")
    fake.on(
        "ls-remote", "--symref", "origin", "HEAD", "refs/heads/*",
        stdout=f"ref: refs/heads/main\tHEAD\n{REV_A}\tHEAD\n",
    )
    fake.on("rev-parse", "--abbrev-ref", "HEAD", stdout="main\n")
    fake.on("status", "--porcelain", stdout="")
    fake.on("stash", "list", stdout="")
    fake.on("rev-parse", "main", stdout=f"{REV_A}\n")
    for ref in ("refs/heads/main", "refs/remotes/origin/main"):
        fake.on("for-each-ref", "--format=contains", "--count=1", "--contains", REV_A, ref, stdout="contains\n")


# ═══════════════════════════════════════════════════════════════════════════════
# Global options
# ═══════════════════════════════════════════════════════════════════════════════


class TestGlobalOptions:
    """Tests for the app callback."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "vcsstate" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "status" in result.output
        assert "contains" in result.output


# ═══════════════════════════════════════════════════════════════════════════════
# status
# ═══════════════════════════════════════════════════════════════════════════════


class TestStatusCommand:
    """Tests for vcsstate status."""

    def test_table_output(self, fake_git):
        _clean_clone(fake_git)
        result = runner.invoke(app, ["status", REPO])
        assert result.exit_code == 0, result.output
        assert "Repository State" in result.output
        assert "main" in result.output
        assert URL in result.output

    def test_json_output(self, fake_git):
        _clean_clone(fake_git)
        result = runner.invoke(app, ["status", REPO, "--json"])
        assert result.exit_code == 0, result.output

        envelope = json.loads(result.stdout)
        assert envelope["kind"] == "RepoState"
        assert envelope["ok"] is True
        data = envelope["data"]
        assert data["branch"] == "main"
        assert data["default_branch"] == "main"
        assert data["in_sync"] is True
        assert data["strategy"] == "modern"

    def test_no_remote_option_skips_network(self, fake_git):
        _clean_clone(fake_git)
        fake_git.on("symbolic-ref", "-q", "refs/remotes/origin/HEAD", stdout="refs/remotes/origin/main\n")

        result = runner.invoke(app, ["status", REPO, "--no-remote", "--json"])

        assert result.exit_code == 0, result.output
        assert not any(c.remote for c in fake_git.calls)
        assert json.loads(result.stdout)["data"]["remote_revision"] is None

    def test_repository_not_found(self, fake_git):
        fake_git.on("remote", "get-url", "origin", stdout=f"{URL}\n")
        fake_git.fail("ls-remote", "--symref", "origin", "HEAD", "refs/heads/*", stderr="remote: Repository not found.\n")

        result = runner.invoke(app, ["status", REPO, "--json"])

        assert result.exit_code == EXIT_NOT_FOUND
        envelope = json.loads(result.stdout)
        assert envelope["ok"] is False
        assert envelope["kind"] == "Error"
        assert envelope["errors"][0]["type"] == "RepositoryNotFoundError"

    def test_git_failure(self, fake_git):
        fake_git.fail("remote", "get-url", "origin", stderr="fatal: not a git repository\n")
        result = runner.invoke(app, ["status", REPO])
        assert result.exit_code == EXIT_TOOL

    def test_git_missing(self):
        with patch("vcsstate.cli.get_default_strategies", side_effect=GitNotFoundError()):
            result = runner.invoke(app, ["status", REPO])
        assert result.exit_code == EXIT_PREREQ


# ═══════════════════════════════════════════════════════════════════════════════
# remote
# ═══════════════════════════════════════════════════════════════════════════════


class TestRemoteCommand:
    """Tests for vcsstate remote."""

    def test_json_output(self, fake_git):
        fake_git.on(
            "ls-remote", "--symref", URL, "HEAD", "refs/heads/*",
            stdout=f"ref: refs/heads/develop\tHEAD\n{REV_B}\tHEAD\n",
        )
        result = runner.invoke(app, ["remote", URL, "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data == {"url": URL, "branch": "develop", "revision": REV_B}

    def test_table_output(self, fake_git):
        fake_git.on(
            "ls-remote", "--symref", URL, "HEAD", "refs/heads/*",
            stdout=f"ref: refs/heads/develop\tHEAD\n{REV_B}\tHEAD\n",
        )
        result = runner.invoke(app, ["remote", URL])
        assert result.exit_code == 0, result.output
        assert "develop" in result.output


# ═══════════════════════════════════════════════════════════════════════════════
# contains
# ═══════════════════════════════════════════════════════════════════════════════


class TestContainsCommand:
    """Tests for vcsstate contains."""

    def _args(self, revision, ref):
        return ("for-each-ref", "--format=contains", "--count=1", "--contains", revision, ref)

    def test_contained_exits_zero(self, fake_git):
        fake_git.on(*self._args(REV_A, "refs/heads/develop"), stdout="contains\n")
        result = runner.invoke(app, ["contains", REV_A, REPO, "--branch", "develop"])
        assert result.exit_code == 0, result.output
        assert "is in develop" in result.output

    def test_not_contained_exits_not_contained(self, fake_git):
        fake_git.on(*self._args(REV_A, "refs/heads/develop"), stdout="")
        result = runner.invoke(app, ["contains", REV_A, REPO, "-b", "develop"])
        assert result.exit_code == EXIT_NOT_CONTAINED

    def test_uses_cached_default_branch(self, fake_git):
        fake_git.on("symbolic-ref", "-q", "refs/remotes/origin/HEAD", stdout="refs/remotes/origin/main\n")
        fake_git.on(*self._args(REV_A, "refs/heads/main"), stdout="contains\n")

        result = runner.invoke(app, ["contains", REV_A, REPO, "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data == {"revision": REV_A, "branch": "main", "remote": False, "contains": True}

    def test_falls_back_to_master(self, fake_git):
        fake_git.fail("symbolic-ref", "-q", "refs/remotes/origin/HEAD", stderr="", returncode=1)
        fake_git.on(*self._args(REV_A, "refs/heads/master"), stdout="contains\n")
        result = runner.invoke(app, ["contains", REV_A, REPO])
        assert result.exit_code == 0, result.output

    def test_remote_branch(self, fake_git):
        fake_git.on(*self._args(REV_A, "refs/remotes/origin/main"), stdout="")
        result = runner.invoke(app, ["contains", REV_A, REPO, "-b", "main", "--remote"])
        assert result.exit_code == EXIT_NOT_CONTAINED
        assert "origin/main" in result.output

    def test_unknown_commit_is_not_contained(self, fake_git):
        fake_git.fail(
            *self._args(REV_B, "refs/heads/main"),
            stderr=f"error: no such commit {REV_B}\n",
            returncode=129,
        )
        result = runner.invoke(app, ["contains", REV_B, REPO, "-b", "main"])
        assert result.exit_code == EXIT_NOT_CONTAINED


# ═══════════════════════════════════════════════════════════════════════════════
# doctor
# ═══════════════════════════════════════════════════════════════════════════════


class TestDoctorCommand:
    """Tests for vcsstate doctor."""

    def test_all_ok(self):
        report = DoctorResult(
            git_ok=True,
            git_version="git version 2.43.0",
            strategy="modern",
            checks=[CheckResult(name="Git", passed=True, message="ok", version="git version 2.43.0")],
        )
        with patch("vcsstate.cli.doctor.run_doctor", return_value=report):
            result = runner.invoke(app, ["doctor", "--json"])

        assert result.exit_code == 0, result.output
        envelope = json.loads(result.stdout)
        assert envelope["kind"] == "DoctorReport"
        assert envelope["data"]["strategy"] == "modern"

    def test_failure_exits_prereq(self):
        report = DoctorResult(checks=[CheckResult(name="Git", passed=False, message="missing")])
        with patch("vcsstate.cli.doctor.run_doctor", return_value=report):
            result = runner.invoke(app, ["doctor"])
        assert result.exit_code == EXIT_PREREQ
        assert "Issues Found" in result.output


# ═══════════════════════════════════════════════════════════════════════════════
# config
# ═══════════════════════════════════════════════════════════════════════════════


class TestConfigCommand:
    """Tests for vcsstate config show/set."""

    def test_show_defaults(self):
        result = runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["git"]["strategy"] == "auto"
        assert data["git"]["timeout"] is None

    def test_set_strategy(self):
        result = runner.invoke(app, ["config", "set", "git.strategy", "legacy"])
        assert result.exit_code == 0, result.output
        assert config.load_config()["git"]["strategy"] == "legacy"

    def test_set_timeout(self):
        result = runner.invoke(app, ["config", "set", "git.timeout", "15"])
        assert result.exit_code == 0, result.output
        assert config.load_config()["git"]["timeout"] == 15.0

    def test_clear_timeout(self):
        config.save_config({"git": {"timeout": 15.0}})
        result = runner.invoke(app, ["config", "set", "git.timeout", "null"])
        assert result.exit_code == 0, result.output
        assert config.load_config()["git"]["timeout"] is None

    def test_invalid_value_not_saved(self):
        result = runner.invoke(app, ["config", "set", "git.strategy", "newest"])
        assert result.exit_code == EXIT_CONFIG
        assert not config.get_config_file().exists()

    def test_env_override_does_not_hide_invalid_value(self, monkeypatch):
        """A valid VCSSTATE_STRATEGY must not let a bad stored strategy through."""
        monkeypatch.setenv("VCSSTATE_STRATEGY", "modern")
        result = runner.invoke(app, ["config", "set", "git.strategy", "bogus"])
        assert result.exit_code == EXIT_CONFIG
        assert not config.get_config_file().exists()

    def test_non_finite_timeout_rejected(self):
        result = runner.invoke(app, ["config", "set", "git.timeout", "nan"])
        assert result.exit_code == EXIT_CONFIG
        assert not config.get_config_file().exists()

    def test_unknown_key(self):
        result = runner.invoke(app, ["config", "set", "ui.color", "red"])
        assert result.exit_code == EXIT_CONFIG
