"""Trash staging area.

Moves items into a ``files``/``info`` staging directory with a sidecar
record of where they came from, so they can later be restored or
erased. Items outside the home boundary bypass the staging area and
are removed permanently through the privileged runner.
"""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path

from diskord.core.paths import canonical_path
from diskord.core.privileges import PrivilegedRunner
from diskord.trash.errors import (
    IrrecoverableRestoreError,
    PrivilegedCommandError,
    TrashIOError,
)
from diskord.trash.models import Reversibility, TrashedItem
from diskord.trash.router import DeletionRouter

logger = logging.getLogger(__name__)

INFO_SUFFIX = ".trashinfo"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def format_trash_info(original_path: Path, deleted_at: datetime) -> str:
    """Render the sidecar record for a trashed item.

    Args:
        original_path: Absolute path the item was removed from.
        deleted_at: Local deletion time.

    Returns:
        Sidecar file content.
    """
    return (
        "[Trash Info]\n"
        f"Path={original_path}\n"
        f"DeletionDate={deleted_at.strftime(DATE_FORMAT)}\n"
    )


class TrashStore:
    """Puts, restores and erases items in the trash staging area.

    Args:
        trash_dir: Staging area root holding ``files`` and ``info``.
        router: Decides whether a path may be trashed or must be removed.
        runner: Runs the permanent removal for out-of-home paths.
    """

    def __init__(self, trash_dir: Path, router: DeletionRouter, runner: PrivilegedRunner) -> None:
        self._trash_dir = trash_dir
        self._router = router
        self._runner = runner

    @property
    def files_dir(self) -> Path:
        """Directory holding staged content."""
        return self._trash_dir / "files"

    @property
    def info_dir(self) -> Path:
        """Directory holding sidecar records."""
        return self._trash_dir / "info"

    def put(self, original_path: Path) -> TrashedItem:
        """Delete a path, through the trash when possible.

        Args:
            original_path: Path to delete.

        Returns:
            Record of the deletion.

        Raises:
            TrashIOError: If staging fails. No sidecar is left behind.
            PrivilegedCommandError: If a permanent removal fails.
        """
        path = canonical_path(original_path)

        if self._router.classify(path) is Reversibility.IRREVERSIBLE:
            return self._remove_permanently(path)
        return self._stage(path)

    def restore(self, item: TrashedItem) -> None:
        """Move a trashed item back to its original location.

        Missing parent directories are recreated. The sidecar is removed
        afterwards on a best-effort basis.

        Args:
            item: Record returned by put().

        Raises:
            IrrecoverableRestoreError: If the item was removed permanently.
            TrashIOError: If the original location is occupied or the move fails.
        """
        if item.is_root or item.trash_file_path is None:
            msg = f"Cannot restore permanently deleted path: {item.original_path}"
            raise IrrecoverableRestoreError(msg)

        target = item.original_path
        if os.path.lexists(target):
            msg = f"Cannot restore {target}: destination already exists"
            raise TrashIOError(msg)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            os.rename(item.trash_file_path, target)
        except OSError as e:
            msg = f"Cannot restore {target}: {e}"
            raise TrashIOError(msg) from e

        self._discard_info(item.trash_info_path)
        logger.info("Restored %s", target)

    def erase(self, item: TrashedItem) -> None:
        """Permanently remove a trashed item's staged content.

        Permanently deleted items are already gone, so this is a no-op for
        them. The sidecar is removed on a best-effort basis.

        Args:
            item: Record returned by put().

        Raises:
            TrashIOError: If the staged content could not be removed.
        """
        if item.is_root or item.trash_file_path is None:
            return

        staged = item.trash_file_path
        try:
            if staged.is_dir() and not staged.is_symlink():
                shutil.rmtree(staged)
            elif os.path.lexists(staged):
                staged.unlink()
        except OSError as e:
            msg = f"Cannot erase {staged}: {e}"
            raise TrashIOError(msg) from e
        finally:
            self._discard_info(item.trash_info_path)

        logger.info("Erased %s", item.original_path)

    def _stage(self, path: Path) -> TrashedItem:
        """Move ``path`` into the staging area."""
        try:
            self.files_dir.mkdir(parents=True, exist_ok=True)
            self.info_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create trash directories in {self._trash_dir}: {e}"
            raise TrashIOError(msg) from e

        staged_name = self._free_name(path.name)
        file_path = self.files_dir / staged_name
        info_path = self.info_dir / f"{staged_name}{INFO_SUFFIX}"
        deleted_at = datetime.now().replace(microsecond=0)

        try:
            info_path.write_text(format_trash_info(path, deleted_at), encoding="utf-8")
        except OSError as e:
            msg = f"Cannot write trash info {info_path}: {e}"
            raise TrashIOError(msg) from e

        try:
            os.rename(path, file_path)
        except OSError as e:
            info_path.unlink(missing_ok=True)
            msg = f"Cannot move {path} to trash: {e}"
            raise TrashIOError(msg) from e

        logger.info("Trashed %s as %s", path, staged_name)
        return TrashedItem(
            original_path=path,
            trash_file_path=file_path,
            trash_info_path=info_path,
            is_root=False,
            deleted_at=deleted_at,
        )

    def _remove_permanently(self, path: Path) -> TrashedItem:
        """Remove an out-of-home path with elevated privileges."""
        if not self._runner.run_privileged(["rm", "-rf", "--", str(path)]):
            msg = f"Privileged removal failed or was cancelled: {path}"
            raise PrivilegedCommandError(msg)

        logger.info("Permanently deleted %s", path)
        return TrashedItem(
            original_path=path,
            trash_file_path=None,
            trash_info_path=None,
            is_root=True,
            deleted_at=datetime.now().replace(microsecond=0),
        )

    def _free_name(self, name: str) -> str:
        """Find a staged name free in both ``files`` and ``info``.

        Tries ``name``, then ``name_1``, ``name_2`` and so on.
        """
        candidate = name
        counter = 0
        while os.path.lexists(self.files_dir / candidate) or os.path.lexists(
            self.info_dir / f"{candidate}{INFO_SUFFIX}"
        ):
            counter += 1
            candidate = f"{name}_{counter}"
        return candidate

    @staticmethod
    def _discard_info(info_path: Path | None) -> None:
        if info_path is None:
            return
        try:
            info_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove trash info %s: %s", info_path, e)
