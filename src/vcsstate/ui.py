"""
Rich rendering for CLI output.

UI Philosophy:
- Semantic colors: cyan info, green success, yellow warning, red error
- Errors show what happened, then how to fix it
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.errors import VcsStateError
from .ports.vcs import RemoteDescriptor
from .state import RepoState

# ═══════════════════════════════════════════════════════════════════════════════
# Panels
# ═══════════════════════════════════════════════════════════════════════════════


def create_warning_panel(title: str, message: str, hint: str = "") -> Panel:
    """Create a warning panel with yellow styling."""
    body = Text()
    body.append(message, style="bold")
    if hint:
        body.append("\n\n")
        body.append("→ ", style="dim")
        body.append(hint, style="yellow")
    return Panel(
        body,
        title=f"[bold yellow]{title}[/bold yellow]",
        border_style="yellow",
        padding=(0, 1),
    )


def create_error_panel(title: str, message: str, hint: str = "", detail: str = "") -> Panel:
    """Create an error panel with red styling."""
    body = Text()
    body.append(message, style="bold")
    if detail:
        body.append("\n\n")
        body.append(detail, style="dim")
    if hint:
        body.append("\n\n")
        body.append("→ Fix: ", style="green")
        body.append(hint)
    return Panel(
        body,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
        padding=(0, 1),
    )


def render_error(console: Console, error: VcsStateError, debug: bool = False) -> None:
    """Render a VcsStateError; debug adds git's stderr."""
    console.print(
        create_error_panel(
            type(error).__name__,
            error.user_message,
            hint=error.suggested_action or "",
            detail=(error.debug_context or "") if debug else "",
        )
    )


# ═══════════════════════════════════════════════════════════════════════════════
# State rendering
# ═══════════════════════════════════════════════════════════════════════════════


def _yes_no(value: bool | None, yes: str = "yes", no: str = "no") -> Text:
    if value is None:
        return Text("unknown", style="dim")
    return Text(yes, style="green") if value else Text(no, style="yellow")


def _short(revision: str | None) -> Text:
    if not revision:
        return Text("-", style="dim")
    return Text(revision[:12], style="cyan")


def render_repo_state(console: Console, state: RepoState) -> None:
    """Render a RepoState as a key/value panel."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim", no_wrap=True)
    grid.add_column()

    branch = Text(state.branch, style="cyan")
    if not state.on_default_branch:
        branch.append(f"  (default: {state.default_branch})", style="dim")

    grid.add_row("Root", state.root)
    grid.add_row("Branch", branch)
    grid.add_row("Working tree", _yes_no(not state.is_dirty, "clean", "dirty"))
    grid.add_row("Stash", _yes_no(not state.has_stash, "empty", "has entries"))
    grid.add_row("Local revision", _short(state.local_revision))
    grid.add_row("Remote", state.remote_url or Text("none", style="dim"))
    if state.remote_revision is not None:
        grid.add_row("Remote revision", _short(state.remote_revision))
        grid.add_row("In sync", _yes_no(state.in_sync))
        grid.add_row("Local has remote", _yes_no(state.local_contains_remote))
        grid.add_row("Remote has local", _yes_no(state.remote_contains_local))

    border = "yellow" if state.is_dirty or state.in_sync is False else "green"
    console.print(
        Panel(
            grid,
            title=f"[bold cyan]Repository State[/bold cyan] [dim]({state.strategy} git)[/dim]",
            border_style=border,
            box=box.ROUNDED,
            padding=(0, 1),
        )
    )
    if state.is_dirty:
        console.print(Text(state.status.rstrip("\n"), style="yellow"))


def render_remote(console: Console, remote: RemoteDescriptor) -> None:
    """Render a remote's default branch and revision."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim", no_wrap=True)
    grid.add_column()
    grid.add_row("URL", remote.url)
    grid.add_row("Default branch", Text(remote.branch, style="cyan"))
    grid.add_row("Revision", Text(remote.revision, style="cyan"))
    console.print(
        Panel(grid, title="[bold cyan]Remote[/bold cyan]", border_style="cyan", padding=(0, 1))
    )
