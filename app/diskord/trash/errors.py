"""Exceptions raised by the trash subsystem."""


class TrashError(Exception):
    """Base exception for trash operations."""


class TrashIOError(TrashError):
    """Raised when staging, restoring or erasing fails on the filesystem."""


class PrivilegedCommandError(TrashError):
    """Raised when the elevation helper fails or the user cancels it."""


class IrrecoverableRestoreError(TrashError):
    """Raised when restoring an item that was deleted permanently."""
