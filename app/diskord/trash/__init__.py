"""Reversible deletion for diskord.

This module provides reversibility routing, the trash staging area and
the in-memory record of a session's deletions.
"""

from diskord.trash.errors import (
    IrrecoverableRestoreError,
    PrivilegedCommandError,
    TrashError,
    TrashIOError,
)
from diskord.trash.models import Reversibility, TrashActionResult, TrashedItem
from diskord.trash.router import DeletionRouter
from diskord.trash.session import SessionTrash
from diskord.trash.store import TrashStore

__all__ = [
    "DeletionRouter",
    "IrrecoverableRestoreError",
    "PrivilegedCommandError",
    "Reversibility",
    "SessionTrash",
    "TrashActionResult",
    "TrashError",
    "TrashIOError",
    "TrashStore",
    "TrashedItem",
]
