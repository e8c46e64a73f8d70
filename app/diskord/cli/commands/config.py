"""Configuration commands.

Shows, creates and locates the diskord configuration file.
"""

from typing import Annotated

import typer
from rich.table import Table

from diskord.core.config import ConfigError, DiskordConfig, require_config, save_config
from diskord.core.paths import ensure_config_dir, get_config_path
from diskord.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Show and manage diskord settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    config = require_config()
    config_path = get_config_path()

    table = Table(title="diskord Settings", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("start_path", str(config.effective_start_path))
    table.add_row("result_limit", str(config.result_limit))
    table.add_row("privilege_helper", config.privilege_helper)
    table.add_row("trash_dir", str(config.effective_trash_dir))
    table.add_row("settle_attempts", str(config.settle_attempts))
    table.add_row("settle_interval", f"{config.settle_interval}s")

    console.print(table)
    if not config_path.exists():
        console.print(f"\n[dim]No config file at {config_path}, showing defaults[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with default settings.

    Examples:
        diskord config init            # Create ~/.config/diskord/config.toml
        diskord config init --force    # Reset to defaults
    """
    config_path = get_config_path()

    if config_path.exists():
        if not force:
            print_error(f"Config already exists: {config_path}")
            print_info("Use --force to overwrite.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing config: {config_path}")

    try:
        ensure_config_dir()
        saved_path = save_config(DiskordConfig(), config_path)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved_path}")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_config_path()))
