"""Trash domain models.

Records of deletions performed during a session, the reversibility
classification that decides how a path is deleted, and per-path
operation results.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class Reversibility(str, Enum):
    """How a path will be deleted.

    Attributes:
        REVERSIBLE: Moved into the trash staging area, can be restored.
        IRREVERSIBLE: Removed permanently through the privileged runner.
    """

    REVERSIBLE = "reversible"
    IRREVERSIBLE = "irreversible"


@dataclass(frozen=True, slots=True)
class TrashedItem:
    """Record of one deletion performed during this session.

    Attributes:
        original_path: Absolute path before removal (restore target).
        trash_file_path: Staged location in the trash, None if irreversible.
        trash_info_path: Sidecar metadata file, None if irreversible.
        is_root: True if the item lay outside the home boundary and was
            removed permanently.
        deleted_at: Local time the deletion happened.
    """

    original_path: Path
    trash_file_path: Path | None
    trash_info_path: Path | None
    is_root: bool
    deleted_at: datetime

    def __post_init__(self) -> None:
        """Validate that staging paths match the deletion kind."""
        if self.is_root and (self.trash_file_path or self.trash_info_path):
            msg = "Irreversible items cannot have staging paths"
            raise ValueError(msg)
        if not self.is_root and (self.trash_file_path is None or self.trash_info_path is None):
            msg = "Reversible items require staging paths"
            raise ValueError(msg)

    @property
    def restorable(self) -> bool:
        """Whether the item can be put back."""
        return not self.is_root

    @property
    def staged_name(self) -> str | None:
        """Collision-free name inside the trash, None if irreversible."""
        return self.trash_file_path.name if self.trash_file_path else None


@dataclass(frozen=True, slots=True)
class TrashActionResult:
    """Result of a single delete, restore or erase operation.

    Attributes:
        path: Path that was operated on (original location).
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        item: The trash record produced or consumed, if any.
    """

    path: Path
    success: bool
    error: str | None = None
    item: TrashedItem | None = None
