"""Two-step confirmation before irreversible deletions.

A commit containing any path outside the home boundary is held back the
first time; the user has to commit again to confirm. Commits that only
touch reversible paths go straight through.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from diskord.trash.errors import TrashError
from diskord.trash.models import TrashActionResult
from diskord.trash.router import DeletionRouter
from diskord.trash.session import SessionTrash
from diskord.trash.store import TrashStore

logger = logging.getLogger(__name__)


class Selection(Protocol):
    """Marked paths a commit operates on, such as a ScanSession."""

    @property
    def selection(self) -> frozenset[Path]: ...

    def clear_selection(self) -> None: ...

    def rescan(self) -> None: ...


class GateState(str, Enum):
    """Confirmation gate states."""

    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class CommitStatus(str, Enum):
    """Outcome of a commit request.

    Attributes:
        NOTHING_SELECTED: The selection was empty.
        CONFIRMATION_REQUIRED: Irreversible paths need a second commit.
        EXECUTED: Deletions were attempted for every selected path.
    """

    NOTHING_SELECTED = "nothing_selected"
    CONFIRMATION_REQUIRED = "confirmation_required"
    EXECUTED = "executed"


@dataclass(frozen=True, slots=True)
class CommitOutcome:
    """Result of SelectionConfirmationGate.request_commit().

    Attributes:
        status: What the gate did.
        results: Per-path results, empty unless status is EXECUTED.
        irreversible: Selected paths that will be deleted permanently.
    """

    status: CommitStatus
    results: tuple[TrashActionResult, ...] = ()
    irreversible: tuple[Path, ...] = ()

    @property
    def failed(self) -> tuple[TrashActionResult, ...]:
        """Results of deletions that failed."""
        return tuple(r for r in self.results if not r.success)


class SelectionConfirmationGate:
    """Guards the deletion of a scan session's selection.

    Args:
        router: Classifies each selected path.
        store: Performs the deletions.
        trash: Receives a record for every successful deletion.
    """

    def __init__(self, router: DeletionRouter, store: TrashStore, trash: SessionTrash) -> None:
        self._router = router
        self._store = store
        self._trash = trash
        self._state = GateState.IDLE

    @property
    def state(self) -> GateState:
        """Current gate state."""
        return self._state

    @property
    def awaiting_confirmation(self) -> bool:
        """Whether the user has been warned and must confirm or cancel."""
        return self._state is GateState.AWAITING_CONFIRMATION

    def irreversible_paths(self, selection: Iterable[Path]) -> tuple[Path, ...]:
        """Selected paths that would be deleted permanently, sorted."""
        return tuple(sorted(p for p in selection if self._router.is_irreversible(p)))

    def request_commit(self, session: Selection) -> CommitOutcome:
        """Delete the session's selection, asking for confirmation first if needed.

        Args:
            session: Holder of the marked paths. On execution its selection
                is cleared and it is asked to rescan.

        Returns:
            CommitOutcome describing what happened.
        """
        selection = sorted(session.selection)
        if not selection:
            self._state = GateState.IDLE
            return CommitOutcome(status=CommitStatus.NOTHING_SELECTED)

        irreversible = self.irreversible_paths(selection)
        if irreversible and self._state is GateState.IDLE:
            logger.debug("Confirmation required for %d permanent deletion(s)", len(irreversible))
            self._state = GateState.AWAITING_CONFIRMATION
            return CommitOutcome(
                status=CommitStatus.CONFIRMATION_REQUIRED,
                irreversible=irreversible,
            )

        results = tuple(self._delete(path) for path in selection)

        session.clear_selection()
        self._state = GateState.IDLE
        session.rescan()

        return CommitOutcome(
            status=CommitStatus.EXECUTED,
            results=results,
            irreversible=irreversible,
        )

    def cancel(self) -> None:
        """Abandon a pending confirmation, keeping the selection."""
        self._state = GateState.IDLE

    def _delete(self, path: Path) -> TrashActionResult:
        """Delete one path, isolating its failure from the rest."""
        try:
            item = self._store.put(path)
        except TrashError as e:
            logger.warning("Could not delete %s: %s", path, e)
            return TrashActionResult(path=path, success=False, error=str(e))

        self._trash.add(item)
        return TrashActionResult(path=path, success=True, item=item)
