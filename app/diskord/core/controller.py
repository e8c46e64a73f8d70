"""Dispatch of dashboard input events.

The terminal UI translates key presses into UiEvent values and hands them
to DashboardController, which owns the scan session, the confirmation gate
and the session trash. Rendering code only reads their state.
"""

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from pathlib import Path

from diskord.cleaners.apps import AppFootprint, get_app_footprints
from diskord.cleaners.base import CleanResult, JunkTarget, clean_target
from diskord.cleaners.targets import default_targets
from diskord.core.config import DiskordConfig
from diskord.core.gate import CommitOutcome, CommitStatus, SelectionConfirmationGate
from diskord.core.paths import get_home_boundary
from diskord.core.privileges import PkexecRunner, PrivilegedRunner
from diskord.core.session import ScanSession
from diskord.scanner.aggregator import SizeAggregator
from diskord.trash.models import TrashActionResult
from diskord.trash.router import DeletionRouter
from diskord.trash.session import SessionTrash
from diskord.trash.store import TrashStore

logger = logging.getLogger(__name__)


class UiEvent(str, Enum):
    """Input events emitted by the UI layer."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    TOGGLE_MARK = "toggle_mark"
    DRILL_DOWN = "drill_down"
    DRILL_UP = "drill_up"
    COMMIT = "commit"
    CANCEL = "cancel"
    UNDO_LAST = "undo_last"


# Events still accepted while a confirmation is pending
_MODAL_EVENTS = frozenset({UiEvent.COMMIT, UiEvent.CANCEL})


class DashboardController:
    """Applies UI events to the deep scanner and session trash.

    Args:
        session: Deep scanner browse state.
        gate: Confirmation gate guarding deletions.
        trash: Session trash receiving deletion records.
        targets: Junk cleanup targets shown next to the scanner.
        app_source: Measures the read-only application stores.
        settle_attempts: Maximum number of measurements after a cleaner runs.
        settle_interval: Initial re-measure delay after a cleaner runs.
        sleep: Sleep function used while re-measuring.
    """

    def __init__(
        self,
        session: ScanSession,
        gate: SelectionConfirmationGate,
        trash: SessionTrash,
        targets: Sequence[JunkTarget] = (),
        *,
        app_source: Callable[[], Sequence[AppFootprint]] = get_app_footprints,
        settle_attempts: int = 5,
        settle_interval: float = 0.05,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session = session
        self._gate = gate
        self._trash = trash
        self._targets = list(targets)
        self._settle_attempts = settle_attempts
        self._settle_interval = settle_interval
        self._sleep = sleep
        self._last_outcome: CommitOutcome | None = None
        self._junk_selection: set[str] = set()
        self._junk_sizes: dict[str, int] = {}
        self._app_source = app_source
        self._apps: tuple[AppFootprint, ...] = ()

    @property
    def session(self) -> ScanSession:
        return self._session

    @property
    def gate(self) -> SelectionConfirmationGate:
        return self._gate

    @property
    def trash(self) -> SessionTrash:
        return self._trash

    @property
    def targets(self) -> tuple[JunkTarget, ...]:
        return tuple(self._targets)

    @property
    def junk_selection(self) -> frozenset[str]:
        """Identifiers of junk targets marked for cleaning."""
        return frozenset(self._junk_selection)

    @property
    def last_outcome(self) -> CommitOutcome | None:
        """Outcome of the most recent commit request."""
        return self._last_outcome

    def dispatch(self, event: UiEvent) -> CommitOutcome | TrashActionResult | None:
        """Apply one UI event.

        While a confirmation is pending only COMMIT and CANCEL are
        accepted; everything else is ignored.

        Args:
            event: Event to apply.

        Returns:
            The commit outcome for COMMIT, the restore result for UNDO_LAST,
            None otherwise.
        """
        if self._gate.awaiting_confirmation and event not in _MODAL_EVENTS:
            logger.debug("Ignoring %s while awaiting confirmation", event.value)
            return None

        if event == UiEvent.COMMIT:
            return self.commit()
        if event == UiEvent.UNDO_LAST:
            return self.undo_last()

        if event == UiEvent.MOVE_UP:
            self._session.move_cursor(-1)
        elif event == UiEvent.MOVE_DOWN:
            self._session.move_cursor(1)
        elif event == UiEvent.TOGGLE_MARK:
            self._session.toggle_highlighted()
        elif event == UiEvent.DRILL_DOWN:
            self._session.drill_down()
        elif event == UiEvent.DRILL_UP:
            self._session.drill_up()
        elif event == UiEvent.CANCEL:
            self._gate.cancel()
        return None

    def commit(self) -> CommitOutcome:
        """Request deletion of the marked paths."""
        outcome = self._gate.request_commit(self._session)
        self._last_outcome = outcome
        if outcome.status is CommitStatus.EXECUTED:
            ok = len(outcome.results) - len(outcome.failed)
            logger.info("Deleted %d of %d selected path(s)", ok, len(outcome.results))
        return outcome

    def undo_last(self) -> TrashActionResult | None:
        """Restore the most recent restorable deletion and rescan."""
        result = self._trash.undo_last()
        if result is not None and result.success:
            self._session.rescan()
        return result

    def restore_item(self, index: int) -> TrashActionResult:
        """Restore a specific session trash record and rescan."""
        result = self._trash.restore(index)
        if result.success:
            self._session.rescan()
        return result

    def erase_item(self, index: int) -> TrashActionResult:
        """Permanently erase a specific session trash record."""
        return self._trash.erase(index)

    def clean_junk(self, target_ids: Iterable[str]) -> list[CleanResult]:
        """Run the cleaners for the given targets.

        The scan session is flagged stale since a cleaner may have removed
        files below the current browse root.

        Args:
            target_ids: Identifiers of targets to clean. Unknown ids are skipped.

        Returns:
            One CleanResult per cleaned target.
        """
        wanted = set(target_ids)
        results = [
            clean_target(
                target,
                attempts=self._settle_attempts,
                interval=self._settle_interval,
                sleep=self._sleep,
            )
            for target in self._targets
            if target.id in wanted
        ]
        for result in results:
            self._junk_sizes[result.target_id] = result.size_after
        if results:
            self._session.mark_stale()
        return results

    def toggle_junk(self, target_id: str) -> bool:
        """Mark a junk target for cleaning, or unmark it.

        Returns:
            True if the target is marked afterwards.
        """
        if target_id in self._junk_selection:
            self._junk_selection.remove(target_id)
            return False
        self._junk_selection.add(target_id)
        return True

    def clean_selected_junk(self, category: str | None = None) -> list[CleanResult]:
        """Clean the marked junk targets.

        Targets that cleaned successfully are unmarked; failed ones stay
        marked so the user can retry.

        Args:
            category: Restrict cleaning to one dashboard tab.

        Returns:
            One CleanResult per cleaned target.
        """
        ids = [
            t.id
            for t in self._targets
            if t.id in self._junk_selection and (category is None or t.category == category)
        ]
        results = self.clean_junk(ids)
        for result in results:
            if result.success:
                self._junk_selection.discard(result.target_id)
        return results

    def junk_size(self, target_id: str) -> int | None:
        """Last measured size of a junk target, None if never measured."""
        return self._junk_sizes.get(target_id)

    def measure_junk(self) -> None:
        """Measure every junk target."""
        for target in self._targets:
            self._junk_sizes[target.id] = target.measure()

    @property
    def apps(self) -> tuple[AppFootprint, ...]:
        """Application store sizes from the last measure_apps() call."""
        return self._apps

    def measure_apps(self) -> None:
        """Re-measure the application stores."""
        self._apps = tuple(self._app_source())

    def refresh_if_stale(self) -> bool:
        """Rescan if the session was flagged stale.

        Returns:
            True if a rescan happened.
        """
        if not self._session.stale:
            return False
        self._session.rescan()
        return True


def build_controller(
    config: DiskordConfig,
    *,
    runner: PrivilegedRunner | None = None,
    start_path: Path | None = None,
) -> DashboardController:
    """Wire up a controller from configuration.

    Args:
        config: User configuration.
        runner: Privileged runner, defaults to the configured helper.
        start_path: Browse root overriding the configured one.

    Returns:
        Ready-to-use DashboardController with the initial scan done.
    """
    runner = runner or PkexecRunner(config.privilege_helper)
    router = DeletionRouter(get_home_boundary())
    trash_dir = config.effective_trash_dir
    store = TrashStore(trash_dir, router, runner)
    trash = SessionTrash(store)
    session = ScanSession(
        start_path or config.effective_start_path,
        SizeAggregator(config.result_limit),
    )
    gate = SelectionConfirmationGate(router, store, trash)
    return DashboardController(
        session,
        gate,
        trash,
        default_targets(runner, trash_dir),
        settle_attempts=config.settle_attempts,
        settle_interval=config.settle_interval,
    )
