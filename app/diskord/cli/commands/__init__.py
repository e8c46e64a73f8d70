"""CLI commands for diskord.

This package contains all subcommand implementations.
"""

from diskord.cli.commands import config, disks, junk, rm, scan, tui

__all__ = ["config", "disks", "junk", "rm", "scan", "tui"]
