"""Deep scanner browsing state.

ScanSession owns the browse root, the latest aggregation, the cursor and
the set of marked paths. The UI reads them through read-only views and
changes them only through the methods below.
"""

import logging
from pathlib import Path

from diskord.scanner.aggregator import SizeAggregator, canonical_root
from diskord.scanner.models import ScanEntry

logger = logging.getLogger(__name__)


class ScanSession:
    """Browse state for one directory at a time.

    The initial aggregation runs on construction.

    Args:
        root: Initial browse root.
        aggregator: Aggregator used for every rescan.
    """

    def __init__(self, root: Path, aggregator: SizeAggregator) -> None:
        self._aggregator = aggregator
        self._root = canonical_root(root)
        self._entries: list[ScanEntry] = []
        self._cursor = 0
        self._selection: set[Path] = set()
        self._stale = False
        self.rescan()

    @property
    def current_root(self) -> Path:
        """Directory currently being browsed."""
        return self._root

    @property
    def entries(self) -> tuple[ScanEntry, ...]:
        """Latest aggregation result."""
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        """Index of the highlighted entry."""
        return self._cursor

    @property
    def highlighted(self) -> ScanEntry | None:
        """The highlighted entry, None when the directory is empty."""
        if not self._entries:
            return None
        return self._entries[self._cursor]

    @property
    def selection(self) -> frozenset[Path]:
        """Paths marked for deletion."""
        return frozenset(self._selection)

    @property
    def stale(self) -> bool:
        """Whether the filesystem may have changed since the last rescan."""
        return self._stale

    @property
    def total_size(self) -> int:
        """Sum of the sizes of the shown entries."""
        return sum(entry.size for entry in self._entries)

    def rescan(self) -> None:
        """Re-aggregate the current root and reset the cursor."""
        logger.debug("Aggregating %s", self._root)
        self._entries = self._aggregator.aggregate(self._root)
        self._cursor = 0
        self._stale = False

    def mark_stale(self) -> None:
        """Flag the shown sizes as possibly outdated."""
        self._stale = True

    def move_cursor(self, delta: int) -> None:
        """Move the cursor by ``delta``, wrapping around at either end."""
        if not self._entries:
            return
        self._cursor = (self._cursor + delta) % len(self._entries)

    def drill_down(self) -> bool:
        """Descend into the highlighted entry if it is a directory.

        Returns:
            True if the browse root changed.
        """
        entry = self.highlighted
        if entry is None or not entry.is_dir:
            return False
        self._root = canonical_root(entry.path)
        self.rescan()
        return True

    def drill_up(self) -> bool:
        """Move to the parent of the current root.

        Returns:
            True if the browse root changed, False at the filesystem root.
        """
        parent = self._root.parent
        if parent == self._root:
            return False
        self._root = parent
        self.rescan()
        return True

    def toggle_mark(self, path: Path) -> bool:
        """Mark ``path`` if unmarked, unmark it otherwise.

        Returns:
            True if the path is marked afterwards.
        """
        if path in self._selection:
            self._selection.remove(path)
            return False
        self._selection.add(path)
        return True

    def toggle_highlighted(self) -> bool | None:
        """Toggle the mark on the highlighted entry.

        Returns:
            Mark state afterwards, None when nothing is highlighted.
        """
        entry = self.highlighted
        if entry is None:
            return None
        return self.toggle_mark(entry.path)

    def clear_selection(self) -> None:
        """Unmark every path."""
        self._selection.clear()
