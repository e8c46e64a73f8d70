"""Disk usage reporting for the dashboard header."""

import logging
import os
import shutil
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_MOUNT_POINTS: tuple[str, ...] = ("/", "/home")


@dataclass(frozen=True, slots=True)
class DiskUsage:
    """Usage of one mounted filesystem.

    Attributes:
        mount_point: Where the filesystem is mounted.
        total_space: Capacity in bytes.
        available_space: Free bytes available to unprivileged users.
    """

    mount_point: str
    total_space: int
    available_space: int

    @property
    def used_space(self) -> int:
        """Bytes in use, never negative."""
        return max(self.total_space - self.available_space, 0)

    @property
    def percent_used(self) -> float:
        """Used space as a percentage of capacity."""
        if self.total_space == 0:
            return 0.0
        return self.used_space / self.total_space * 100


def get_disks() -> list[DiskUsage]:
    """Report usage of the root filesystem and a separate /home.

    ``/home`` is only listed when it is its own mount point.

    Returns:
        Disk usage sorted by mount point.
    """
    disks: list[DiskUsage] = []
    for mount in _MOUNT_POINTS:
        if mount != "/" and not os.path.ismount(mount):
            continue
        try:
            usage = shutil.disk_usage(mount)
        except OSError as e:
            logger.warning("Cannot read disk usage for %s: %s", mount, e)
            continue
        disks.append(
            DiskUsage(mount_point=mount, total_space=usage.total, available_space=usage.free)
        )

    disks.sort(key=lambda d: d.mount_point)
    return disks
