"""Shared helpers for sortcheck CLI commands.

Exit codes, console output helpers and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_USAGE_ERROR = 3

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure root logging for a CLI run.

    Args:
        verbose: Show debug messages.
        quiet: Show only errors. Ignored when verbose is set.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def _error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def _warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def _validate_paths(paths: list[Path]) -> list[Path]:
    """Ensure every given path exists.

    Raises:
        typer.Exit: If any path is missing.

    """
    missing = [p for p in paths if not p.exists()]
    if missing:
        for path in missing:
            _error(f"Path does not exist: {path}")
        raise typer.Exit(code=EXIT_ERROR)
    return paths
