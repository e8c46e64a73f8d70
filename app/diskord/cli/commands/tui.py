"""Dashboard command implementation."""

from pathlib import Path
from typing import Annotated

import typer

from diskord.core.config import require_config
from diskord.core.controller import build_controller
from diskord.utils.formatting import print_error


def tui(
    path: Annotated[
        Path | None,
        typer.Argument(help="Directory the deep scanner opens in."),
    ] = None,
) -> None:
    """Launch the interactive dashboard.

    Examples:
        diskord tui              # Browse from the configured start path
        diskord tui /var         # Browse /var
    """
    from diskord.tui.app import run_dashboard

    config = require_config()
    if path is not None and not path.is_dir():
        print_error(f"Not a directory: {path}")
        raise typer.Exit(code=1)

    controller = build_controller(config, start_path=path)
    run_dashboard(controller)
