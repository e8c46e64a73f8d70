"""Terminal dashboard for diskord."""

from diskord.tui.app import DiskordApp, run_dashboard
from diskord.tui.screens import ConfirmDeleteScreen

__all__ = ["ConfirmDeleteScreen", "DiskordApp", "run_dashboard"]
