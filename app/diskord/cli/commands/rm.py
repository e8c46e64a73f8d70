"""Rm command implementation.

Moves paths to the trash through the same confirmation gate the
dashboard uses. Paths outside the home directory cannot be trashed and
are removed permanently after an explicit confirmation.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from diskord.core.config import require_config
from diskord.core.gate import CommitOutcome, CommitStatus, SelectionConfirmationGate
from diskord.core.paths import canonical_path, get_home_boundary
from diskord.core.privileges import PkexecRunner
from diskord.trash.router import DeletionRouter
from diskord.trash.session import SessionTrash
from diskord.trash.store import TrashStore
from diskord.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


class PathSelection:
    """Fixed set of command-line paths committed through the gate."""

    def __init__(self, paths: list[Path]) -> None:
        self._paths = {canonical_path(p) for p in paths}

    @property
    def selection(self) -> frozenset[Path]:
        return frozenset(self._paths)

    def clear_selection(self) -> None:
        self._paths.clear()

    def rescan(self) -> None:
        pass


def rm(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to delete."),
    ],
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip the confirmation for permanent deletions.",
        ),
    ] = False,
) -> None:
    """Move paths to the trash.

    Paths inside your home directory are staged in the trash and can be
    restored. Anything else is deleted permanently with elevated
    privileges, after confirmation.

    Examples:
        diskord rm ~/Downloads/big.iso       # Move to trash
        diskord rm /opt/old-sdk              # Asks before deleting permanently
        diskord rm /opt/old-sdk --yes        # No confirmation
    """
    missing = [p for p in paths if not os.path.lexists(p)]
    for path in missing:
        print_error(f"Path not found: {escape(str(path))}")
    if missing:
        raise typer.Exit(code=1)

    config = require_config()
    runner = PkexecRunner(config.privilege_helper)
    router = DeletionRouter(get_home_boundary())
    store = TrashStore(config.effective_trash_dir, router, runner)
    gate = SelectionConfirmationGate(router, store, SessionTrash(store))

    selection = PathSelection(paths)
    outcome = gate.request_commit(selection)

    if outcome.status is CommitStatus.CONFIRMATION_REQUIRED:
        _print_irreversible(outcome.irreversible)
        if not yes:
            confirmed = typer.confirm(
                f"\nPermanently delete {len(outcome.irreversible)} path(s)?",
                default=False,
            )
            if not confirmed:
                gate.cancel()
                print_info("Aborted.")
                raise typer.Exit(code=0)
        outcome = gate.request_commit(selection)

    _print_results(outcome)

    if outcome.failed:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_irreversible(paths: tuple[Path, ...]) -> None:
    """List the paths that cannot be restored."""
    print_warning("Trashing outside your home directory is not supported.")
    console.print("These paths will be [irreversible]permanently deleted[/]:")
    for path in paths:
        console.print(f"  {escape(str(path))}")


def _print_results(outcome: CommitOutcome) -> None:
    """Display per-path deletion results."""
    table = Table(title="Deletion Results", show_lines=False)
    table.add_column("Path", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Location", style="dim")

    for r in outcome.results:
        if not r.success:
            status = "[error]failed[/]"
            location = r.error or "Unknown error"
        elif r.item is not None and r.item.restorable:
            status = "[success]trashed[/]"
            location = str(r.item.trash_file_path)
        else:
            status = "[irreversible]removed[/]"
            location = "-"
        table.add_row(escape(str(r.path)), status, escape(location))

    console.print(table)

    fail_count = len(outcome.failed)
    success_count = len(outcome.results) - fail_count
    if fail_count:
        print_warning(f"{success_count} succeeded, {fail_count} failed")
    else:
        print_success(f"All {success_count} path(s) deleted.")
