"""Concrete junk cleanup targets.

System-owned caches are cleaned through the privileged runner; caches in
the user's home are emptied directly.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path

from diskord.cleaners.base import JunkTarget
from diskord.core.paths import get_cache_home, get_home_boundary
from diskord.core.privileges import PrivilegedRunner
from diskord.utils.shell import command_exists, du_bytes, run_command

logger = logging.getLogger(__name__)

_PACMAN_CACHE_DIR = Path("/var/cache/pacman/pkg")
_JOURNAL_DIR = Path("/var/log/journal")
_DOCKER_DIR = Path("/var/lib/docker")
_JOURNAL_KEEP = "14d"


def _reset_dir(path: Path) -> bool:
    """Remove a directory tree and recreate it empty.

    Returns:
        True if the directory is empty (or absent) afterwards.
    """
    if not path.exists():
        return True
    try:
        shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not empty %s: %s", path, e)
        return False
    return True


class DirectoryTarget(JunkTarget):
    """A cache directory in the user's home, emptied in place.

    Args:
        target_id: Short identifier.
        name: Human-readable label.
        path: Directory to measure and empty.
        category: Dashboard tab ("system" or "developer").
    """

    def __init__(self, target_id: str, name: str, path: Path, category: str = "system") -> None:
        self._id = target_id
        self._name = name
        self._path = path
        self._category = category

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> str:
        return self._category

    @property
    def path(self) -> Path:
        """Directory this target empties."""
        return self._path

    def measure(self) -> int:
        return du_bytes(str(self._path)) if self._path.exists() else 0

    def clean(self) -> bool:
        return _reset_dir(self._path)

    def is_available(self) -> bool:
        return self._path.is_dir()


class PrivilegedCommandTarget(JunkTarget):
    """A system location cleaned by an elevated command.

    Args:
        target_id: Short identifier.
        name: Human-readable label.
        path: Location used for measuring.
        argv: Command run through the privileged runner.
        runner: Privileged command runner.
        requires: Executable that must be on PATH for the target to apply.
        category: Dashboard tab ("system" or "developer").
    """

    def __init__(
        self,
        target_id: str,
        name: str,
        path: Path,
        argv: list[str],
        runner: PrivilegedRunner,
        requires: str,
        category: str = "system",
    ) -> None:
        self._id = target_id
        self._name = name
        self._path = path
        self._argv = argv
        self._runner = runner
        self._requires = requires
        self._category = category

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> str:
        return self._category

    @property
    def requires_privilege(self) -> bool:
        return True

    @property
    def argv(self) -> list[str]:
        """Command run to clean the target."""
        return list(self._argv)

    def measure(self) -> int:
        # Unreadable system directories measure as 0 until cleaned elevated
        return du_bytes(str(self._path)) if self._path.exists() else 0

    def clean(self) -> bool:
        return self._runner.run_privileged(self._argv)

    def is_available(self) -> bool:
        return command_exists(self._requires)


_SIZE_UNITS = {"B": 1, "KiB": 1024, "MiB": 1024**2, "GiB": 1024**3, "TiB": 1024**4}


def _parse_installed_sizes(qi_output: str) -> int:
    """Sum the ``Installed Size`` fields of ``pacman -Qi`` output."""
    total = 0
    for line in qi_output.splitlines():
        key, sep, value = line.partition(":")
        if not sep or key.strip() != "Installed Size":
            continue
        parts = value.split()
        if len(parts) != 2 or parts[1] not in _SIZE_UNITS:
            continue
        try:
            total += int(float(parts[0].replace(",", ".")) * _SIZE_UNITS[parts[1]])
        except ValueError:
            continue
    return total


class OrphanedPackagesTarget(JunkTarget):
    """Packages installed as dependencies that nothing requires anymore.

    Args:
        runner: Privileged runner used to remove the packages.
    """

    def __init__(self, runner: PrivilegedRunner) -> None:
        self._runner = runner

    @property
    def id(self) -> str:
        return "orphans"

    @property
    def name(self) -> str:
        return "Orphaned Packages"

    @property
    def requires_privilege(self) -> bool:
        return True

    def packages(self) -> list[str]:
        """Names reported by ``pacman -Qdtq``, empty when there are none."""
        try:
            result = run_command(["pacman", "-Qdtq"], timeout=30.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Cannot list orphaned packages: %s", e)
            return []
        # pacman exits 1 when nothing matches
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def measure(self) -> int:
        packages = self.packages()
        if not packages:
            return 0
        try:
            result = run_command(["pacman", "-Qi", *packages], timeout=30.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Cannot query orphaned package sizes: %s", e)
            return 0
        return _parse_installed_sizes(result.stdout)

    def clean(self) -> bool:
        packages = self.packages()
        if not packages:
            return True
        return self._runner.run_privileged(["pacman", "-Rns", "--noconfirm", *packages])

    def is_available(self) -> bool:
        return command_exists("pacman")


def default_targets(runner: PrivilegedRunner, trash_dir: Path) -> list[JunkTarget]:
    """Build the standard set of junk targets.

    Args:
        runner: Runner for targets that need elevated privileges.
        trash_dir: User trash directory.

    Returns:
        Targets in dashboard order, system targets first.
    """
    home = get_home_boundary()
    cargo_home = Path(os.environ.get("CARGO_HOME", home / ".cargo"))

    return [
        PrivilegedCommandTarget(
            "pacman",
            "Pacman Cache",
            _PACMAN_CACHE_DIR,
            # pacman -Scc asks twice; answer every prompt
            ["bash", "-c", "yes | pacman -Scc"],
            runner,
            requires="pacman",
        ),
        DirectoryTarget("yay", "Yay Cache", get_cache_home() / "yay"),
        PrivilegedCommandTarget(
            "journal",
            "Systemd Journals",
            _JOURNAL_DIR,
            ["journalctl", f"--vacuum-time={_JOURNAL_KEEP}"],
            runner,
            requires="journalctl",
        ),
        DirectoryTarget("trash", "User Trash", trash_dir),
        OrphanedPackagesTarget(runner),
        PrivilegedCommandTarget(
            "docker",
            "Docker System Caches",
            _DOCKER_DIR,
            ["docker", "system", "prune", "-af"],
            runner,
            requires="docker",
            category="developer",
        ),
        DirectoryTarget("cargo", "Cargo Registry", cargo_home / "registry", category="developer"),
        DirectoryTarget("npm", "NPM Cache", home / ".npm" / "_cacache", category="developer"),
    ]
