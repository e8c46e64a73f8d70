"""Textual dashboard for browsing and reclaiming disk space.

Five tabs: two lists of junk cleaners, read-only application sizes, the
deep scanner and the session trash. Every state change goes through
DashboardController; this module only renders its state and maps keys to
controller calls.
"""

import logging
from typing import ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static, TabbedContent, TabPane

from diskord import __version__
from diskord.cleaners.disks import get_disks
from diskord.core.controller import DashboardController, UiEvent
from diskord.core.gate import CommitOutcome, CommitStatus
from diskord.core.theme import ThemeColors, load_theme
from diskord.trash.models import TrashActionResult
from diskord.tui.screens import ConfirmDeleteScreen
from diskord.utils.formatting import format_bytes

logger = logging.getLogger(__name__)

TAB_SYSTEM = "system"
TAB_DEVELOPER = "developer"
TAB_APPS = "apps"
TAB_SCANNER = "scanner"
TAB_TRASH = "trash"
TAB_ORDER: tuple[str, ...] = (TAB_SYSTEM, TAB_DEVELOPER, TAB_APPS, TAB_SCANNER, TAB_TRASH)

_FOOTER_HELP = {
    TAB_SYSTEM: "[Space] Select  [Enter] Clean  [h/l, Tab] Switch tabs  [q] Quit",
    TAB_DEVELOPER: "[Space] Select  [Enter] Clean  [h/l, Tab] Switch tabs  [q] Quit",
    TAB_APPS: "Read-only sizes  [h/l, Tab] Switch tabs  [q] Quit",
    TAB_SCANNER: "[Space] Select  [Enter] Move selected to trash  [h/l] Navigate  [u] Undo",
    TAB_TRASH: "[u] Restore  [Enter] Permanently delete  [Tab] Switch tabs",
}

_BAR_WIDTH = 30


def _checkbox(marked: bool) -> str:
    return "[X]" if marked else "[ ]"


class DiskordApp(App[None]):
    """Interactive storage manager.

    Args:
        controller: Controller owning all dashboard state.
        colors: Colour scheme, defaults to the user theme.
    """

    TITLE = "Diskord: Storage Manager"
    SUB_TITLE = f"v{__version__}"

    # Tables are not focusable so every key reaches the app bindings
    AUTO_FOCUS = None

    CSS = """
    #disks {
        height: auto;
        padding: 0 1;
        border: solid $primary;
    }

    #scan-path {
        padding: 0 1;
        color: $accent;
    }

    DataTable {
        height: 1fr;
    }

    #status {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit"),
        Binding("j,down", "cursor(1)", "Down", show=False),
        Binding("k,up", "cursor(-1)", "Up", show=False),
        Binding("l,right", "forward", "Open", show=False),
        Binding("h,left", "back", "Parent", show=False),
        Binding("tab", "switch_tab(1)", "Next tab", show=False, priority=True),
        Binding("shift+tab", "switch_tab(-1)", "Previous tab", show=False, priority=True),
        Binding("space", "toggle", "Select"),
        Binding("enter", "commit", "Execute"),
        Binding("u", "undo", "Undo"),
    ]

    def __init__(
        self, controller: DashboardController, colors: ThemeColors | None = None
    ) -> None:
        super().__init__()
        self._controller = controller
        self._colors = colors or load_theme()
        self._junk_cursor = {TAB_SYSTEM: 0, TAB_DEVELOPER: 0}
        self._apps_cursor = 0
        self._trash_cursor = 0

    @property
    def controller(self) -> DashboardController:
        return self._controller

    @property
    def _main(self) -> Screen:
        # Widgets live on the default screen, below any modal
        return self.screen_stack[0]

    @property
    def active_tab(self) -> str:
        """Identifier of the visible tab."""
        return self._main.query_one(TabbedContent).active or TAB_SCANNER

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="disks")
        with TabbedContent(initial=TAB_SCANNER):
            with TabPane("System Junk", id=TAB_SYSTEM):
                yield DataTable(id="table-system")
            with TabPane("Developer Tools", id=TAB_DEVELOPER):
                yield DataTable(id="table-developer")
            with TabPane("Apps & Games", id=TAB_APPS):
                yield DataTable(id="table-apps")
            with TabPane("Deep Scanner", id=TAB_SCANNER):
                yield Static(id="scan-path")
                yield DataTable(id="table-scanner")
            with TabPane("Session Trash", id=TAB_TRASH):
                yield DataTable(id="table-trash")
        yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        for table in self.query(DataTable):
            table.cursor_type = "row"
            table.zebra_stripes = True
            table.can_focus = False
        main = self._main
        main.query_one("#table-system", DataTable).add_columns("", "Target", "Size")
        main.query_one("#table-developer", DataTable).add_columns("", "Target", "Size")
        main.query_one("#table-apps", DataTable).add_columns("Application", "Location", "Size")
        main.query_one("#table-scanner", DataTable).add_columns("", "Type", "Name", "Size", "Usage")
        main.query_one("#table-trash", DataTable).add_columns("Original path", "Deleted", "Kind")

        self._controller.measure_junk()
        self._controller.measure_apps()
        self._render_disks()
        self._render_all()

    # === Actions ===

    def action_cursor(self, delta: int) -> None:
        tab = self.active_tab
        if tab == TAB_SCANNER:
            self._controller.dispatch(UiEvent.MOVE_DOWN if delta > 0 else UiEvent.MOVE_UP)
            self._render_scanner()
        elif tab == TAB_TRASH:
            count = len(self._controller.trash)
            if count:
                self._trash_cursor = (self._trash_cursor + delta) % count
            self._render_trash()
        elif tab == TAB_APPS:
            count = len(self._controller.apps)
            if count:
                self._apps_cursor = (self._apps_cursor + delta) % count
            self._render_apps()
        else:
            count = len(self._junk_targets(tab))
            if count:
                self._junk_cursor[tab] = (self._junk_cursor[tab] + delta) % count
            self._render_junk(tab)

    def action_forward(self) -> None:
        if self.active_tab == TAB_SCANNER:
            self._controller.dispatch(UiEvent.DRILL_DOWN)
            self._render_scanner()
        else:
            self.action_switch_tab(1)

    def action_back(self) -> None:
        if self.active_tab == TAB_SCANNER:
            self._controller.dispatch(UiEvent.DRILL_UP)
            self._render_scanner()
        else:
            self.action_switch_tab(-1)

    def action_switch_tab(self, delta: int) -> None:
        if self.screen is not self._main:
            return
        index = TAB_ORDER.index(self.active_tab)
        self._main.query_one(TabbedContent).active = TAB_ORDER[(index + delta) % len(TAB_ORDER)]

    def action_toggle(self) -> None:
        tab = self.active_tab
        if tab == TAB_SCANNER:
            self._controller.dispatch(UiEvent.TOGGLE_MARK)
            self._render_scanner()
        elif tab in self._junk_cursor:
            targets = self._junk_targets(tab)
            if targets:
                self._controller.toggle_junk(targets[self._junk_cursor[tab]].id)
            self._render_junk(tab)

    def action_commit(self) -> None:
        tab = self.active_tab
        if tab == TAB_SCANNER:
            outcome = self._controller.dispatch(UiEvent.COMMIT)
            if isinstance(outcome, CommitOutcome):
                self._handle_outcome(outcome)
        elif tab == TAB_TRASH:
            self._erase_highlighted()
        elif tab in self._junk_cursor:
            self._clean_junk(tab)

    def action_undo(self) -> None:
        if self.active_tab == TAB_TRASH:
            if not len(self._controller.trash):
                return
            result = self._controller.restore_item(self._trash_cursor)
        else:
            result = self._controller.dispatch(UiEvent.UNDO_LAST)
            if result is None:
                self.notify("Nothing to restore")
                return
        if isinstance(result, TrashActionResult):
            self._report_restore(result)
        self._clamp_trash_cursor()
        self._render_all()

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        if self._controller.refresh_if_stale():
            self._render_scanner()
        self._render_status()

    # === Controller interaction ===

    def _handle_outcome(self, outcome: CommitOutcome) -> None:
        if outcome.status is CommitStatus.NOTHING_SELECTED:
            self.notify("Nothing selected")
        elif outcome.status is CommitStatus.CONFIRMATION_REQUIRED:
            self.push_screen(ConfirmDeleteScreen(outcome.irreversible), self._on_confirm)
            return
        else:
            failed = outcome.failed
            done = len(outcome.results) - len(failed)
            if failed:
                self.notify(
                    f"{done} deleted, {len(failed)} failed: {failed[0].error}",
                    severity="error",
                )
            else:
                self.notify(f"{done} item(s) deleted")
        self._render_all()

    def _on_confirm(self, confirmed: bool | None) -> None:
        if confirmed:
            outcome = self._controller.dispatch(UiEvent.COMMIT)
            if isinstance(outcome, CommitOutcome):
                self._handle_outcome(outcome)
        else:
            self._controller.dispatch(UiEvent.CANCEL)
            self.notify("Deletion cancelled")
            self._render_all()

    def _erase_highlighted(self) -> None:
        if not len(self._controller.trash):
            return
        result = self._controller.erase_item(self._trash_cursor)
        if result.success:
            self.notify(f"Permanently deleted {result.path.name}")
        else:
            self.notify(f"Some content remains in the trash: {result.error}", severity="warning")
        self._clamp_trash_cursor()
        self._render_trash()

    def _clean_junk(self, tab: str) -> None:
        results = self._controller.clean_selected_junk(tab)
        if not results:
            self.notify("Nothing selected")
            return
        freed = sum(r.freed_bytes for r in results)
        failed = [r.target_id for r in results if not r.success]
        if failed:
            self.notify(f"Cleaning failed for: {', '.join(failed)}", severity="error")
        else:
            self.notify(f"Freed {format_bytes(freed)}")
        self._render_disks()
        self._render_junk(tab)

    def _report_restore(self, result: TrashActionResult) -> None:
        if result.success:
            self.notify(f"Restored {result.path}")
        else:
            self.notify(f"Cannot restore: {result.error}", severity="error")

    # === Rendering ===

    def _junk_targets(self, tab: str) -> list:
        return [t for t in self._controller.targets if t.category == tab]

    def _clamp_trash_cursor(self) -> None:
        count = len(self._controller.trash)
        self._trash_cursor = min(self._trash_cursor, max(count - 1, 0))

    def _render_all(self) -> None:
        self._render_junk(TAB_SYSTEM)
        self._render_junk(TAB_DEVELOPER)
        self._render_apps()
        self._render_scanner()
        self._render_trash()

    def _render_disks(self) -> None:
        lines: list[str] = []
        for disk in get_disks():
            filled = int(disk.percent_used / 100 * _BAR_WIDTH)
            bar = "#" * filled + "-" * (_BAR_WIDTH - filled)
            lines.append(
                f"{disk.mount_point:<6} [{bar}] {disk.percent_used:5.1f}%  "
                f"{format_bytes(disk.used_space)} / {format_bytes(disk.total_space)}"
            )
        self._main.query_one("#disks", Static).update(Text("\n".join(lines) or "No disks found"))

    def _mark_cell(self, marked: bool) -> Text:
        return Text(_checkbox(marked), style=f"bold {self._colors.marked}" if marked else "")

    def _size_cell(self, size: int | None) -> Text:
        return Text(format_bytes(size) if size is not None else "-", style=self._colors.size)

    def _render_junk(self, tab: str) -> None:
        table = self._main.query_one(f"#table-{tab}", DataTable)
        table.clear()
        selection = self._controller.junk_selection
        for target in self._junk_targets(tab):
            label = target.name
            if target.requires_privilege:
                label += " (requires elevation)"
            if not target.is_available():
                label += " (not installed)"
            table.add_row(
                self._mark_cell(target.id in selection),
                Text(label, style=self._colors.text),
                self._size_cell(self._controller.junk_size(target.id)),
                key=target.id,
            )
        if table.row_count:
            table.move_cursor(row=self._junk_cursor[tab])

    def _render_apps(self) -> None:
        table = self._main.query_one("#table-apps", DataTable)
        table.clear()
        for footprint in self._controller.apps:
            name = footprint.name if footprint.installed else f"{footprint.name} (not installed)"
            table.add_row(
                Text(name, style=self._colors.text),
                Text(str(footprint.path), style=self._colors.muted),
                self._size_cell(footprint.size),
                key=footprint.id,
            )
        if table.row_count:
            table.move_cursor(row=self._apps_cursor)

    def _render_scanner(self) -> None:
        session = self._controller.session
        self._main.query_one("#scan-path", Static).update(
            Text(f"Path: {session.current_root}  ({format_bytes(session.total_size)})")
        )
        table = self._main.query_one("#table-scanner", DataTable)
        table.clear()
        largest = max((e.size for e in session.entries), default=0)
        for entry in session.entries:
            filled = int(entry.size / largest * 20) if largest else 0
            table.add_row(
                self._mark_cell(entry.path in session.selection),
                Text("[DIR]" if entry.is_dir else "[FILE]"),
                Text(
                    entry.name,
                    style=f"bold {self._colors.directory}" if entry.is_dir else self._colors.text,
                ),
                self._size_cell(entry.size),
                Text("█" * filled, style=self._colors.success),
                key=str(entry.path),
            )
        if table.row_count:
            table.move_cursor(row=session.cursor)
        self._render_status()

    def _render_trash(self) -> None:
        table = self._main.query_one("#table-trash", DataTable)
        table.clear()
        for item in self._controller.trash.items:
            style = f"strike {self._colors.irreversible}" if item.is_root else self._colors.text
            table.add_row(
                Text(str(item.original_path), style=style),
                item.deleted_at.strftime("%H:%M:%S"),
                "permanent" if item.is_root else "restorable",
            )
        if table.row_count:
            table.move_cursor(row=self._trash_cursor)
        self._render_status()

    def _render_status(self) -> None:
        tab = self.active_tab
        text = _FOOTER_HELP.get(tab, "")
        if tab == TAB_SCANNER and self._controller.session.selection:
            text = f"{len(self._controller.session.selection)} selected  " + text
        self._main.query_one("#status", Static).update(Text(text))


def run_dashboard(controller: DashboardController) -> None:
    """Run the dashboard until the user quits."""
    DiskordApp(controller).run()
