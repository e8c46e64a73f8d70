"""Disks command implementation."""

from rich.table import Table

from diskord.cleaners.disks import get_disks
from diskord.utils.formatting import console, format_bytes, print_warning


def disks() -> None:
    """Show usage of the root filesystem and a separate /home."""
    usages = get_disks()
    if not usages:
        print_warning("No disk usage could be read.")
        return

    table = Table(title="Disk Usage", show_lines=False)
    table.add_column("Mount", style="bold")
    table.add_column("Used", justify="right", width=10)
    table.add_column("Free", justify="right", width=10)
    table.add_column("Total", justify="right", width=10)
    table.add_column("Use%", justify="right", width=6)

    for disk in usages:
        pct = disk.percent_used
        style = "error" if pct >= 90 else "warning" if pct >= 75 else "success"
        table.add_row(
            disk.mount_point,
            format_bytes(disk.used_space),
            format_bytes(disk.available_space),
            format_bytes(disk.total_space),
            f"[{style}]{pct:.0f}%[/]",
        )

    console.print(table)
