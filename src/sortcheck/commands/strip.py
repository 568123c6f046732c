"""Strip command for sortcheck CLI.

Checks a file and emits it with the match-statement markers of checked
functions removed.
"""

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
    _validate_paths,
    err_console,
)
from sortcheck.config import load_config
from sortcheck.core.exceptions import ConfigError, SourceParseError, UsageError


def strip_command(
    path: Path = typer.Argument(
        ...,
        help="Python file to check and strip",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ./.sortcheck.yaml)",
    ),
    in_place: bool = typer.Option(
        False,
        "--in-place",
        "-i",
        help="Rewrite the file instead of printing to stdout",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Emit a file with match-statement markers removed.

    The output is produced even when the check fails; diagnostics go to
    stderr and the exit code is 1.

    Examples:
        sortcheck strip shapes.py             # Print stripped source
        sortcheck strip shapes.py --in-place  # Rewrite the file

    """
    from sortcheck.runner import check_source

    _setup_logging(verbose=verbose, quiet=False)
    _validate_paths([path])

    try:
        loaded_config = load_config(config_path=config)
    except ConfigError as e:
        _error(f"Config error: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    try:
        source = path.read_text(encoding=loaded_config.encoding)
        report = check_source(source, str(path))
    except (OSError, UnicodeDecodeError) as e:
        _error(f"Cannot read {path}: {e}")
        raise typer.Exit(code=EXIT_ERROR) from None
    except SourceParseError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None
    except UsageError as e:
        _error(f"Usage error: {e}")
        raise typer.Exit(code=EXIT_USAGE_ERROR) from None

    if in_place:
        if report.output != source:
            path.write_text(report.output, encoding=loaded_config.encoding)
    else:
        typer.echo(report.output, nl=False)

    for diagnostic in report.diagnostics:
        err_console.print(f"{escape(str(path))}:{escape(str(diagnostic))}", soft_wrap=True)

    raise typer.Exit(code=EXIT_ERROR if report.diagnostics else EXIT_SUCCESS)
