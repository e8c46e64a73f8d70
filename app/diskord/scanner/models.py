"""Data models for directory aggregation."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanEntry:
    """One direct child of the directory being browsed.

    Attributes:
        path: Absolute, canonical path of the child. Identity key.
        name: Final path component, for display.
        size: Total bytes of all regular files beneath the child.
        is_dir: Whether the path was a directory when the entry was emitted.
    """

    path: Path
    name: str
    size: int
    is_dir: bool

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if self.size < 0:
            msg = f"Size cannot be negative, got {self.size}"
            raise ValueError(msg)
