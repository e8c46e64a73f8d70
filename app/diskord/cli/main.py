"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from diskord import __version__
from diskord.cli.commands import config, disks, junk, rm, scan, tui
from diskord.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="diskord",
    help="Find what fills your disk and reclaim the space safely.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"diskord version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    """Route debug logging to stderr through Rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """diskord - Storage manager for Linux.

    Browse directory sizes, clean package and developer caches, and
    move files to a trash you can restore from.
    """
    _setup_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.command(name="tui")(tui.tui)
app.command(name="scan")(scan.scan)
app.command(name="rm")(rm.rm)
app.command(name="disks")(disks.disks)
app.add_typer(junk.app, name="junk")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
