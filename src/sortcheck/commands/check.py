"""Check command for sortcheck CLI.

Reports enums and match statements whose cases are out of order.
"""

import json
from pathlib import Path

import typer
from rich.markup import escape

from sortcheck.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_USAGE_ERROR,
    _error,
    _setup_logging,
    _success,
    _validate_paths,
    _warning,
    console,
)
from sortcheck.config import load_config
from sortcheck.core.exceptions import ConfigError, UsageError


def check_command(
    paths: list[Path] = typer.Argument(
        ...,
        help="Python files or directories to check",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ./.sortcheck.yaml)",
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Report format: text or json (overrides config)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print problems",
    ),
) -> None:
    """Check that marked enums and match statements are sorted.

    Mark an enum with a "# @sorted" comment, a function with
    "# @sorted.check", and match statements inside it with "# @sorted".

    Examples:
        sortcheck check src/                 # Check a source tree
        sortcheck check shapes.py -f json    # Machine-readable report

    """
    from sortcheck.runner import check_paths

    _setup_logging(verbose=verbose, quiet=quiet)
    _validate_paths(paths)

    try:
        loaded_config = load_config(config_path=config)
    except ConfigError as e:
        _error(f"Config error: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    fmt = output_format or loaded_config.output_format
    if fmt not in ("text", "json"):
        _error(f"Unknown format: {fmt} (expected text or json)")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        reports = check_paths(paths, loaded_config)
    except UsageError as e:
        _error(f"Usage error: {e}")
        raise typer.Exit(code=EXIT_USAGE_ERROR) from None

    failed = [r for r in reports if not r.ok]
    if not reports:
        _warning("No Python files found")

    if fmt == "json":
        typer.echo(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in failed:
            if report.error is not None:
                console.print(f"{escape(str(report.path))}: {escape(report.error)}", soft_wrap=True)
            for diagnostic in report.diagnostics:
                console.print(f"{escape(str(report.path))}:{escape(str(diagnostic))}", soft_wrap=True)
        if not failed and not quiet:
            checked = sum(r.checked for r in reports)
            _success(f"All sorted: {checked} marked items in {len(reports)} files")

    raise typer.Exit(code=EXIT_ERROR if failed else EXIT_SUCCESS)
