"""Subprocess helpers for the cleaners and privilege elevation.

Every command runs with captured output and a timeout so a hung helper
(``pkexec`` waiting on an agent, ``du`` on a network mount) cannot block
the dashboard forever.
"""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of an external command.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Run a command to completion and capture what it prints.

    Args:
        args: Executable followed by its arguments.
        check: Raise CalledProcessError instead of returning a failed result.
        timeout: Seconds to wait before giving up, None to wait forever.

    Returns:
        The captured CommandResult.

    Raises:
        subprocess.CalledProcessError: If check is set and the exit status is non-zero.
        subprocess.TimeoutExpired: If the command outlives the timeout.
        FileNotFoundError: If the executable is not on PATH.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """True if ``name`` resolves to an executable on PATH."""
    return shutil.which(name) is not None


def du_bytes(path: str) -> int:
    """Measure a directory tree with ``du -sb``.

    ``du`` is used instead of a Python walk because it copes better with
    large system caches. Missing paths, unreadable paths and a missing
    ``du`` binary all measure as 0.

    Args:
        path: Path to measure.

    Returns:
        Apparent size in bytes.
    """
    try:
        result = run_command(["du", "-sb", path], timeout=120.0)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired):
        return 0

    first = result.stdout.split(maxsplit=1)
    if not first:
        return 0
    try:
        return int(first[0])
    except ValueError:
        return 0
