"""Junk cleanup targets and disk usage reporting.

These are the simple "shell out and re-measure" cleaners shown next to
the deep scanner.
"""

from diskord.cleaners.apps import AppFootprint, get_app_footprints
from diskord.cleaners.base import CleanResult, JunkTarget, clean_target, measure_until_stable
from diskord.cleaners.disks import DiskUsage, get_disks
from diskord.cleaners.targets import (
    DirectoryTarget,
    OrphanedPackagesTarget,
    PrivilegedCommandTarget,
    default_targets,
)

__all__ = [
    "AppFootprint",
    "CleanResult",
    "DirectoryTarget",
    "DiskUsage",
    "JunkTarget",
    "OrphanedPackagesTarget",
    "PrivilegedCommandTarget",
    "clean_target",
    "default_targets",
    "get_app_footprints",
    "get_disks",
    "measure_until_stable",
]
