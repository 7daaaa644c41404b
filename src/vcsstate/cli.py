#!/usr/bin/env python3
"""
vcsstate - query git working copy state from the command line.

Commands:
- status: branch, dirty state, stash and remote sync for a working copy
- remote: default branch and revision of a remote URL
- contains: whether a revision is in the (remote) default branch
- doctor: git availability, version and selected strategy
- config: show or change settings
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import typer
from rich.panel import Panel

from . import __version__, config, doctor, ui
from .bootstrap import get_default_strategies
from .cli_common import configure_logging, console, handle_errors, state
from .core.errors import ConfigError, NoCachedDefaultBranchError
from .core.exit_codes import EXIT_NOT_CONTAINED, EXIT_PREREQ, EXIT_SUCCESS
from .kinds import Kind
from .output import build_envelope, print_json
from .state import collect_repo_state, find_repo_root

# ─────────────────────────────────────────────────────────────────────────────
# App Configuration
# ─────────────────────────────────────────────────────────────────────────────

app = typer.Typer(
    name="vcsstate",
    help="Query git working copy state: branch, dirty status, stash and remote default branch.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

config_app = typer.Typer(
    name="config",
    help="Show or change vcsstate settings.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

JSON_OPTION = typer.Option(False, "--json", help="Print a JSON envelope instead of a table.")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log every git invocation and show error details.",
        is_eager=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        is_eager=True,
    ),
) -> None:
    """
    [bold cyan]vcsstate[/bold cyan] - git working copy state
    """
    state.debug = debug
    state.json_output = False
    configure_logging(debug)

    if version:
        console.print(
            Panel(
                f"[cyan]vcsstate[/cyan] [dim]v{__version__}[/dim]",
                border_style="cyan",
            )
        )
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


# ─────────────────────────────────────────────────────────────────────────────
# Repository commands
# ─────────────────────────────────────────────────────────────────────────────


@app.command("status")
@handle_errors
def status_cmd(
    directory: Path = typer.Argument(Path("."), help="Directory inside a git working copy."),
    remote: bool = typer.Option(
        True,
        "--remote/--no-remote",
        help="Ask origin for its default branch (network access).",
    ),
    json_output: bool = JSON_OPTION,
) -> None:
    """Show the state of the working copy containing DIRECTORY."""
    state.json_output = json_output
    strategies = get_default_strategies()
    repo = collect_repo_state(strategies.local, directory, include_remote=remote)

    if json_output:
        print_json(build_envelope(Kind.REPO_STATE, repo.to_dict()))
        return
    ui.render_repo_state(console, repo)


@app.command("remote")
@handle_errors
def remote_cmd(
    url: str = typer.Argument(..., help="Remote repository URL."),
    json_output: bool = JSON_OPTION,
) -> None:
    """Show the default branch and its revision for a remote URL."""
    state.json_output = json_output
    descriptor = get_default_strategies().remote.remote_branch_and_revision(url)

    if json_output:
        print_json(
            build_envelope(
                Kind.REMOTE_STATE,
                {"url": descriptor.url, "branch": descriptor.branch, "revision": descriptor.revision},
            )
        )
        return
    ui.render_remote(console, descriptor)


@app.command("contains")
@handle_errors
def contains_cmd(
    revision: str = typer.Argument(..., help="Full revision hash to look for."),
    directory: Path = typer.Argument(Path("."), help="Directory inside a git working copy."),
    branch: str | None = typer.Option(
        None,
        "--branch",
        "-b",
        help="Branch to check (default: cached remote default branch).",
    ),
    remote: bool = typer.Option(False, "--remote", help="Check origin/<branch> instead."),
    json_output: bool = JSON_OPTION,
) -> None:
    """Check whether REVISION is an ancestor of the default branch.

    Exits 0 when contained and 6 when not; 1 still means origin or the
    remote repository is missing.
    """
    state.json_output = json_output
    git = get_default_strategies().local
    root = find_repo_root(directory)

    if branch is None:
        try:
            branch = git.cached_remote_default_branch(root)
        except NoCachedDefaultBranchError:
            branch = git.no_remote_default_branch()

    if remote:
        contained = git.remote_contains(root, revision, branch)
    else:
        contained = git.contains(root, revision, branch)

    if json_output:
        print_json(
            build_envelope(
                Kind.CONTAINS,
                {"revision": revision, "branch": branch, "remote": remote, "contains": contained},
            )
        )
    else:
        target = f"origin/{branch}" if remote else branch
        if contained:
            console.print(f"[green]{revision[:12]} is in {target}[/green]")
        else:
            console.print(f"[yellow]{revision[:12]} is not in {target}[/yellow]")

    raise typer.Exit(EXIT_SUCCESS if contained else EXIT_NOT_CONTAINED)


# ─────────────────────────────────────────────────────────────────────────────
# Admin commands
# ─────────────────────────────────────────────────────────────────────────────


@app.command("doctor")
@handle_errors
def doctor_cmd(json_output: bool = JSON_OPTION) -> None:
    """Check git installation, version and strategy selection."""
    state.json_output = json_output
    result = doctor.run_doctor()

    if json_output:
        print_json(build_envelope(Kind.DOCTOR_REPORT, result.to_dict(), ok=result.all_ok))
    else:
        doctor.render_doctor_results(console, result)

    if not result.all_ok:
        raise typer.Exit(EXIT_PREREQ)


@config_app.command("show")
@handle_errors
def config_show_cmd(json_output: bool = JSON_OPTION) -> None:
    """Show effective settings."""
    state.json_output = json_output
    settings = config.get_git_settings()
    data = {"config_file": str(config.get_config_file()), "git": asdict(settings)}

    if json_output:
        print_json(build_envelope(Kind.CONFIG, data))
        return
    console.print(f"[dim]Config file:[/dim] {data['config_file']}")
    for key, value in asdict(settings).items():
        console.print(f"  [cyan]git.{key}[/cyan] = {value!r}")


@config_app.command("set")
@handle_errors
def config_set_cmd(
    key: str = typer.Argument(..., help="Setting name, e.g. git.strategy."),
    value: str = typer.Argument(..., help="New value; 'null' clears it."),
) -> None:
    """Change a setting in the config file."""
    section, _, name = key.partition(".")
    if section != "git" or name not in config.DEFAULT_CONFIG["git"]:
        raise ConfigError(
            user_message=f"Unknown setting '{key}'",
            suggested_action=f"Use one of: {', '.join('git.' + k for k in config.DEFAULT_CONFIG['git'])}",
        )

    parsed: object = None if value == "null" else value
    if name == "timeout" and parsed is not None:
        try:
            parsed = float(value)
        except ValueError:
            parsed = value

    cfg = config.load_config()
    cfg.setdefault("git", {})[name] = parsed
    # Environment overrides must not mask an invalid stored value.
    config.validate_git_config(cfg["git"])
    config.save_config(cfg)
    console.print(f"[green]Set {key} = {parsed!r}[/green]")


# ─────────────────────────────────────────────────────────────────────────────
# Entry Point
# ─────────────────────────────────────────────────────────────────────────────


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
