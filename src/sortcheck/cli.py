"""sortcheck command line interface."""

import typer

from sortcheck import __version__
from sortcheck.commands.check import check_command
from sortcheck.commands.strip import strip_command

app = typer.Typer(
    name="sortcheck",
    help="Check that enum members and match arms are written in sorted order",
    no_args_is_help=True,
)

app.command("check")(check_command)
app.command("strip")(strip_command)


@app.command("version")
def version_command() -> None:
    """Print the installed version."""
    typer.echo(__version__)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
