"""Modal screens for the dashboard."""

from pathlib import Path

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

# Longest list of paths shown before summarizing the rest
_MAX_LISTED = 8


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Warns that some selected paths will be deleted permanently.

    Dismisses with True when the user confirms, False when they cancel.

    Args:
        paths: Selected paths outside the home directory.
    """

    DEFAULT_CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }

    #dialog {
        width: 80%;
        height: auto;
        max-height: 80%;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }

    #dialog-title {
        color: $error;
        text-style: bold;
        margin-bottom: 1;
    }

    #dialog-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("enter", "confirm", "Delete permanently"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, paths: tuple[Path, ...]) -> None:
        super().__init__()
        self._paths = paths

    def compose(self) -> ComposeResult:
        listing = Text()
        for path in self._paths[:_MAX_LISTED]:
            listing.append(f"  {path}\n")
        hidden = len(self._paths) - _MAX_LISTED
        if hidden > 0:
            listing.append(f"  ... and {hidden} more\n")

        with Vertical(id="dialog"):
            yield Static("Warning: system files selected.", id="dialog-title")
            yield Static(
                "Trashing outside your home directory is not supported.\n"
                "These items will be PERMANENTLY DELETED:"
            )
            yield Static(listing)
            yield Static(
                "Press [b]Enter[/b] to confirm permanent deletion, or [b]Esc[/b] to cancel.",
                id="dialog-help",
            )

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
