"""Directory size aggregation.

Walks a directory tree and totals the size of regular files under each
direct child of the root, the way ``du`` summarizes one level deep.
"""

import logging
import os
from pathlib import Path

from diskord.core.config import DEFAULT_RESULT_LIMIT
from diskord.scanner.models import ScanEntry

logger = logging.getLogger(__name__)


def canonical_root(root: Path) -> Path:
    """Resolve a browse root to the base its entry paths are built on.

    Falls back to ``root`` unmodified if it cannot be resolved.
    """
    try:
        return Path(root).resolve(strict=True)
    except (OSError, RuntimeError):
        return Path(root)


class SizeAggregator:
    """Computes per-child size totals for a browse root.

    Hidden entries are included. Symlinks are never followed or counted,
    and only regular files contribute bytes. Directories that cannot be
    read are skipped, so their bytes are simply missing from the totals.

    Args:
        limit: Maximum number of entries returned, largest first.
    """

    def __init__(self, limit: int = DEFAULT_RESULT_LIMIT) -> None:
        if limit < 1:
            msg = f"Limit must be at least 1, got {limit}"
            raise ValueError(msg)
        self._limit = limit

    def aggregate(self, root: Path) -> list[ScanEntry]:
        """Aggregate sizes for every direct child of ``root``.

        Args:
            root: Directory to summarize.

        Returns:
            Entries sorted by size descending (ties by path), truncated to
            the configured limit. Empty if ``root`` does not exist.
        """
        if not os.path.lexists(root):
            return []

        base = canonical_root(root)
        totals: dict[Path, int] = {}

        if base.is_file() and not base.is_symlink():
            totals[base] = self._file_size(base)
        else:
            self._walk_root(base, totals)

        entries = [
            ScanEntry(path=path, name=path.name, size=size, is_dir=path.is_dir())
            for path, size in totals.items()
        ]
        entries.sort(key=lambda e: (-e.size, e.path))
        return entries[: self._limit]

    def _walk_root(self, base: Path, totals: dict[Path, int]) -> None:
        """Attribute every file below ``base`` to its direct child."""
        try:
            with os.scandir(base) as it:
                children = list(it)
        except OSError as e:
            logger.debug("Cannot read directory %s: %s", base, e)
            return

        for child in children:
            child_path = base / child.name
            try:
                if child.is_file(follow_symlinks=False):
                    totals[child_path] = totals.get(child_path, 0) + child.stat(
                        follow_symlinks=False
                    ).st_size
                elif child.is_dir(follow_symlinks=False):
                    totals[child_path] = totals.get(child_path, 0) + self._tree_size(child.path)
            except OSError as e:
                logger.debug("Cannot stat %s: %s", child_path, e)

    def _tree_size(self, top: str) -> int:
        """Total bytes of regular files below ``top``.

        Uses an explicit stack so deep trees cannot hit the recursion limit.
        """
        total = 0
        stack = [top]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", current, e)
                continue

            for entry in entries:
                try:
                    if entry.is_file(follow_symlinks=False):
                        total += entry.stat(follow_symlinks=False).st_size
                    elif entry.is_dir(follow_symlinks=False):
                        stack.append(entry.path)
                except OSError as e:
                    logger.debug("Cannot stat %s: %s", entry.path, e)
        return total

    @staticmethod
    def _file_size(path: Path) -> int:
        try:
            return path.lstat().st_size
        except OSError:
            return 0
