"""Scan command implementation.

Aggregates the direct children of a directory by total size.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from diskord.core.config import require_config
from diskord.scanner.aggregator import SizeAggregator
from diskord.scanner.models import ScanEntry
from diskord.utils.formatting import console, format_bytes, print_error, print_info


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def scan(
    path: Annotated[
        Path | None,
        typer.Argument(help="Directory to aggregate (default: configured start path)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of entries (default: configured result limit).",
        ),
    ] = None,
) -> None:
    """Show the largest entries of a directory.

    Each directory is sized by the files below it; symlinks are never
    followed and count as nothing.

    Examples:
        diskord scan                    # Scan the configured start path
        diskord scan /var --limit 10    # Top 10 entries of /var
        diskord scan ~ --format json    # Output as JSON
    """
    config = require_config()
    root = path if path is not None else config.effective_start_path

    if not root.exists():
        print_error(f"Path not found: {escape(str(root))}")
        raise typer.Exit(code=1)

    aggregator = SizeAggregator(limit or config.result_limit)
    entries = aggregator.aggregate(root)

    if output_format == OutputFormat.JSON:
        _print_json(entries)
        return

    if not entries:
        print_info(f"{root} is empty.")
        return

    _print_table(root, entries)
    total = sum(e.size for e in entries)
    console.print(f"\n[dim]{len(entries)} entries, {format_bytes(total)} total[/dim]")


# === Private helper functions ===


def _print_table(root: Path, entries: list[ScanEntry]) -> None:
    """Display entries as a Rich table."""
    table = Table(title=f"Disk usage of {escape(str(root))}", show_lines=False)
    table.add_column("Type", width=6)
    table.add_column("Name", style="bold")
    table.add_column("Size", style="size", justify="right", width=10)

    for entry in entries:
        kind = "[directory]dir[/]" if entry.is_dir else "file"
        table.add_row(kind, escape(entry.name), format_bytes(entry.size))

    console.print(table)


def _print_json(entries: list[ScanEntry]) -> None:
    """Display entries as JSON."""
    data = [
        {
            "path": str(e.path),
            "name": e.name,
            "size": e.size,
            "is_dir": e.is_dir,
        }
        for e in entries
    ]
    console.print_json(json.dumps(data))
