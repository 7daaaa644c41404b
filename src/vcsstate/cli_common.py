"""
CLI Common Utilities.

Shared console, global flags and the error boundary decorator used by
every command.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import ui
from .core.errors import VcsStateError
from .core.exit_codes import EXIT_CANCELLED, EXIT_PREREQ
from .output import build_error_envelope, print_json

F = TypeVar("F", bound=Callable[..., Any])

# ─────────────────────────────────────────────────────────────────────────────
# Shared Console and State
# ─────────────────────────────────────────────────────────────────────────────

console = Console()
err_console = Console(stderr=True)


class AppState:
    """Global application state for CLI flags."""

    debug: bool = False
    json_output: bool = False


state = AppState()


def configure_logging(debug: bool) -> None:
    """Send library logging to stderr through Rich."""
    root = logging.getLogger("vcsstate")
    root.handlers.clear()
    handler = RichHandler(console=err_console, show_path=debug, rich_tracebacks=debug)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.propagate = False


# ─────────────────────────────────────────────────────────────────────────────
# Error Boundary Decorator
# ─────────────────────────────────────────────────────────────────────────────


def handle_errors(func: F) -> F:
    """Decorator to catch VcsStateError and render it."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except VcsStateError as e:
            if state.json_output:
                print_json(build_error_envelope(e))
            else:
                ui.render_error(err_console, e, debug=state.debug)
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            err_console.print("\n[dim]Operation cancelled.[/dim]")
            raise typer.Exit(EXIT_CANCELLED)
        except (typer.Exit, SystemExit):
            raise
        except Exception as e:
            if state.debug:
                err_console.print_exception()
            else:
                err_console.print(
                    ui.create_warning_panel(
                        "Unexpected Error",
                        str(e),
                        "Run with --debug for full traceback",
                    )
                )
            raise typer.Exit(EXIT_PREREQ)

    return cast(F, wrapper)
