"""
Health checks for the git toolchain vcsstate depends on.

Checks that git runs, that its version can be identified, which strategy
that selects, and that the configuration file is usable.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, field

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__, config
from .bootstrap import select_strategy_name
from .config import GitSettings
from .core.errors import ConfigError, VcsStateError
from .version import MODERN_MIN_VERSION, GitVersion, detect_git_version

# ═══════════════════════════════════════════════════════════════════════════════
# Data Classes
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class CheckResult:
    """Result of a single health check."""

    name: str
    passed: bool
    message: str
    version: str | None = None
    fix_hint: str | None = None
    severity: str = "error"  # "error", "warning", "info"


@dataclass
class DoctorResult:
    """Complete health check results."""

    git_ok: bool = False
    git_version: str | None = None
    strategy: str | None = None
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def all_ok(self) -> bool:
        return self.git_ok and self.error_count == 0

    @property
    def error_count(self) -> int:
        return sum(1 for c in self.checks if not c.passed and c.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for c in self.checks if not c.passed and c.severity == "warning")

    def to_dict(self) -> dict:
        return {
            "all_ok": self.all_ok,
            "git_version": self.git_version,
            "strategy": self.strategy,
            "checks": [c.__dict__ for c in self.checks],
        }


# ═══════════════════════════════════════════════════════════════════════════════
# Health Checks
# ═══════════════════════════════════════════════════════════════════════════════


def check_config() -> tuple[CheckResult, GitSettings | None]:
    """Check that the config file parses and holds valid values."""
    config_file = config.get_config_file()
    if config_file.exists():
        try:
            json.loads(config_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            return (
                CheckResult(
                    name="Config",
                    passed=False,
                    message=f"{config_file} is not valid JSON (line {e.lineno}); defaults are used",
                    fix_hint="Fix or delete the config file",
                    severity="warning",
                ),
                GitSettings(),
            )

    try:
        settings = config.get_git_settings()
    except ConfigError as e:
        return (
            CheckResult(
                name="Config",
                passed=False,
                message=e.user_message,
                fix_hint=e.suggested_action,
            ),
            None,
        )

    location = str(config_file) if config_file.exists() else "defaults"
    return CheckResult(name="Config", passed=True, message=f"Loaded from {location}"), settings


def check_git(settings: GitSettings) -> tuple[CheckResult, GitVersion | None]:
    """Check that git is installed and reports a version."""
    if shutil.which(settings.binary) is None:
        return (
            CheckResult(
                name="Git",
                passed=False,
                message=f"'{settings.binary}' is not installed or not in PATH",
                fix_hint="Install Git from https://git-scm.com/downloads",
            ),
            None,
        )

    try:
        version = detect_git_version(settings)
    except VcsStateError as e:
        return (
            CheckResult(
                name="Git",
                passed=False,
                message=e.user_message,
                fix_hint=e.suggested_action,
            ),
            None,
        )

    return (
        CheckResult(
            name="Git",
            passed=True,
            message="Git is installed and accessible",
            version=version.raw,
        ),
        version,
    )


def check_strategy(settings: GitSettings, version: GitVersion | None) -> CheckResult:
    """Report which strategy the installed git selects."""
    name = select_strategy_name(version, settings.strategy)
    minimum = ".".join(map(str, MODERN_MIN_VERSION))

    if settings.strategy != config.STRATEGY_AUTO:
        return CheckResult(
            name="Strategy",
            passed=True,
            message=f"{name} (forced by configuration)",
            severity="info",
        )
    if name == config.STRATEGY_LEGACY:
        return CheckResult(
            name="Strategy",
            passed=False,
            message=f"legacy: git older than {minimum}, remote default branch needs `git remote show`",
            fix_hint=f"Upgrade git to {minimum} or newer",
            severity="warning",
        )
    return CheckResult(name="Strategy", passed=True, message=f"modern (git {minimum}+)")


def run_doctor() -> DoctorResult:
    """Run all health checks."""
    result = DoctorResult()

    config_check, settings = check_config()
    result.checks.append(config_check)
    if settings is None:
        return result

    git_check, version = check_git(settings)
    result.checks.append(git_check)
    result.git_ok = git_check.passed
    result.git_version = git_check.version

    if version is not None or settings.strategy != config.STRATEGY_AUTO:
        strategy_check = check_strategy(settings, version)
        result.checks.append(strategy_check)
        result.strategy = select_strategy_name(version, settings.strategy)

    return result


# ═══════════════════════════════════════════════════════════════════════════════
# Rich UI Rendering
# ═══════════════════════════════════════════════════════════════════════════════


def render_doctor_results(console: Console, result: DoctorResult) -> None:
    """Render doctor results as a table inside a status-colored panel."""
    console.print()

    table = Table(
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
        padding=(0, 1),
    )

    table.add_column("Status", width=8, justify="center")
    table.add_column("Check", min_width=12)
    table.add_column("Details", min_width=30)

    for check in result.checks:
        if check.passed:
            status = Text("ok", style="bold green")
        elif check.severity == "warning":
            status = Text("warn", style="bold yellow")
        else:
            status = Text("fail", style="bold red")

        details = Text()
        if check.version:
            details.append(f"{check.version}\n", style="cyan")
        details.append(check.message, style="dim" if check.passed else "white")
        if not check.passed and check.fix_hint:
            details.append(f"\n{check.fix_hint}", style="yellow")

        table.add_row(status, Text(check.name, style="white"), details)

    title_style = "bold green" if result.all_ok else "bold red"
    title_text = f"vcsstate Health Check (v{__version__})"
    if not result.all_ok:
        title_text = f"vcsstate Health Check - Issues Found (v{__version__})"

    console.print(
        Panel(
            table,
            title=f"[{title_style}]{title_text}[/{title_style}]",
            border_style="green" if result.all_ok else "red",
            padding=(1, 1),
        )
    )

    console.print()
    if result.all_ok:
        console.print("  [bold green]All checks passed.[/bold green]")
    else:
        parts = []
        if result.error_count:
            parts.append(f"[bold red]{result.error_count} error(s)[/bold red]")
        if result.warning_count:
            parts.append(f"[bold yellow]{result.warning_count} warning(s)[/bold yellow]")
        console.print(f"  Found {' and '.join(parts)}.")
    console.print()
