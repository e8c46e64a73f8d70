"""In-memory list of deletions made during the current session.

Records live only for the lifetime of the process. Staged bytes stay in
the trash directory regardless.
"""

import logging

from diskord.trash.errors import TrashError
from diskord.trash.models import TrashActionResult, TrashedItem
from diskord.trash.store import TrashStore

logger = logging.getLogger(__name__)


class SessionTrash:
    """Ordered record of this session's deletions.

    A record leaves the list only when it is restored or erased
    successfully; failed attempts keep it so the user can try again.

    Args:
        store: Trash store that performs restore and erase.
    """

    def __init__(self, store: TrashStore) -> None:
        self._store = store
        self._items: list[TrashedItem] = []

    @property
    def items(self) -> tuple[TrashedItem, ...]:
        """Read-only view of the records, oldest first."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: TrashedItem) -> None:
        """Append a new deletion record."""
        self._items.append(item)

    def restore(self, index: int) -> TrashActionResult:
        """Restore the record at ``index``.

        Args:
            index: Position in items.

        Returns:
            Result of the restore. Permanently deleted records always fail.
        """
        item = self._items[index]
        try:
            self._store.restore(item)
        except TrashError as e:
            logger.warning("Restore failed for %s: %s", item.original_path, e)
            return TrashActionResult(
                path=item.original_path, success=False, error=str(e), item=item
            )

        del self._items[index]
        return TrashActionResult(path=item.original_path, success=True, item=item)

    def erase(self, index: int) -> TrashActionResult:
        """Permanently erase the record at ``index``.

        Args:
            index: Position in items.

        Returns:
            Result of the erase. Residual staged bytes are reported as a
            failure and the record is kept.
        """
        item = self._items[index]
        try:
            self._store.erase(item)
        except TrashError as e:
            logger.warning("Residual trash content for %s: %s", item.original_path, e)
            return TrashActionResult(
                path=item.original_path, success=False, error=str(e), item=item
            )

        del self._items[index]
        return TrashActionResult(path=item.original_path, success=True, item=item)

    def undo_last(self) -> TrashActionResult | None:
        """Restore the most recent restorable record.

        Returns:
            Result of the restore, or None if nothing can be restored.
        """
        for index in range(len(self._items) - 1, -1, -1):
            if self._items[index].restorable:
                return self.restore(index)
        return None
