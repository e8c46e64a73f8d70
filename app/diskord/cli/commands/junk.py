"""Junk cleaning commands.

Lists the package and developer caches diskord knows how to clean, and
cleans the ones named on the command line.
"""

from typing import Annotated

import typer
from rich.table import Table

from diskord.cleaners.base import CleanResult, JunkTarget, clean_target
from diskord.cleaners.targets import default_targets
from diskord.core.config import DiskordConfig, require_config
from diskord.core.privileges import PkexecRunner
from diskord.utils.formatting import (
    console,
    format_bytes,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="List and clean package and developer caches.",
    no_args_is_help=True,
)


def _load_targets(config: DiskordConfig) -> list[JunkTarget]:
    return default_targets(PkexecRunner(config.privilege_helper), config.effective_trash_dir)


@app.command("list")
def list_targets() -> None:
    """Show every cleanup target with its current size."""
    config = require_config()
    targets = _load_targets(config)

    table = Table(title="Cleanup Targets", show_lines=False)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Category", width=10)
    table.add_column("Size", style="size", justify="right", width=10)
    table.add_column("Notes", style="dim")

    total = 0
    for target in targets:
        size = target.measure()
        total += size
        notes: list[str] = []
        if target.requires_privilege:
            notes.append("requires elevation")
        if not target.is_available():
            notes.append("not installed")
        table.add_row(
            target.id,
            target.name,
            target.category,
            format_bytes(size),
            ", ".join(notes) or "-",
        )

    console.print(table)
    console.print(f"\n[dim]{format_bytes(total)} reclaimable[/dim]")


@app.command()
def clean(
    target_ids: Annotated[
        list[str],
        typer.Argument(help="IDs of the targets to clean (see 'diskord junk list')."),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Clean the given targets.

    Examples:
        diskord junk clean yay npm        # Clean two user caches
        diskord junk clean pacman -y      # Clean the pacman cache, no prompt
    """
    config = require_config()
    by_id = {t.id: t for t in _load_targets(config)}

    unknown = [tid for tid in target_ids if tid not in by_id]
    if unknown:
        print_error(f"Unknown target(s): {', '.join(unknown)}")
        print_info(f"Available: {', '.join(by_id)}")
        raise typer.Exit(code=1)

    selected = [by_id[tid] for tid in dict.fromkeys(target_ids)]
    unavailable = [t for t in selected if not t.is_available()]
    for target in unavailable:
        print_warning(f"Skipping {target.name}: not installed")
    selected = [t for t in selected if t.is_available()]
    if not selected:
        print_info("Nothing to clean.")
        return

    if not yes:
        names = ", ".join(t.name for t in selected)
        if not typer.confirm(f"Clean {names}?", default=False):
            print_info("Aborted.")
            raise typer.Exit(code=0)

    results = [
        clean_target(
            target,
            attempts=config.settle_attempts,
            interval=config.settle_interval,
        )
        for target in selected
    ]
    _print_results(results, {t.id: t for t in selected})

    if any(not r.success for r in results):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_results(results: list[CleanResult], targets: dict[str, JunkTarget]) -> None:
    """Display cleaning results."""
    table = Table(title="Cleaning Results", show_lines=False)
    table.add_column("Target", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Freed", justify="right", width=10)

    for r in results:
        status = "[success]cleaned[/]" if r.success else "[error]failed[/]"
        table.add_row(targets[r.target_id].name, status, format_bytes(r.freed_bytes))

    console.print(table)

    freed = sum(r.freed_bytes for r in results)
    fail_count = sum(1 for r in results if not r.success)
    if fail_count:
        print_warning(f"{fail_count} target(s) failed, {format_bytes(freed)} freed")
    else:
        print_success(f"Freed {format_bytes(freed)}")
