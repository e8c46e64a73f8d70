"""CLI package for diskord.

This package contains the Typer application and all subcommands.
"""

from diskord.cli.main import app

__all__ = ["app"]
