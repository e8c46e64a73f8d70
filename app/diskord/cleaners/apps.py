"""Disk footprint of large application stores.

These are shown for information only. Nothing here deletes anything;
games and Flatpak runtimes are removed through their own tools.
"""

from dataclasses import dataclass
from pathlib import Path

from diskord.core.paths import get_data_home
from diskord.utils.shell import du_bytes

_FLATPAK_SYSTEM_DIR = Path("/var/lib/flatpak")


@dataclass(frozen=True, slots=True)
class AppFootprint:
    """Measured size of one application store.

    Attributes:
        id: Short stable identifier.
        name: Human-readable label.
        path: Directory that was measured.
        size: Size in bytes, 0 when absent or unreadable.
    """

    id: str
    name: str
    path: Path
    size: int

    @property
    def installed(self) -> bool:
        """Whether the store directory exists."""
        return self.path.is_dir()


def app_locations() -> list[tuple[str, str, Path]]:
    """Identifier, label and directory of every tracked application store."""
    return [
        ("steam", "Steam Library", get_data_home() / "Steam"),
        ("flatpak", "Flatpak Apps", _FLATPAK_SYSTEM_DIR),
    ]


def get_app_footprints() -> list[AppFootprint]:
    """Measure every tracked application store."""
    return [
        AppFootprint(app_id, name, path, du_bytes(str(path)) if path.exists() else 0)
        for app_id, name, path in app_locations()
    ]
