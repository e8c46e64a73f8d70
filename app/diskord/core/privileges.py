"""Privilege escalation for irreversible deletions and system cleaners.

The core only depends on the PrivilegedRunner protocol, so tests can
substitute a fake that simulates success, failure or a cancelled
authentication prompt.
"""

import logging
import subprocess
from typing import Protocol

from diskord.utils.shell import run_command

logger = logging.getLogger(__name__)

# pkexec exit codes
_EXIT_DISMISSED = 126
_EXIT_DENIED = 127

# Authentication prompts wait on the user, so no timeout by default.
_DEFAULT_TIMEOUT: float | None = None


class PrivilegedRunner(Protocol):
    """Capability to run a command with elevated privileges."""

    def run_privileged(self, argv: list[str]) -> bool:
        """Run ``argv`` elevated and report whether it succeeded."""
        ...


class PkexecRunner:
    """Runs commands through an elevation helper such as ``pkexec``.

    Output of the elevated command is captured and discarded.

    Args:
        helper: Elevation helper executable.
        timeout: Maximum time in seconds to wait, None to wait forever.
    """

    def __init__(self, helper: str = "pkexec", timeout: float | None = _DEFAULT_TIMEOUT) -> None:
        self._helper = helper
        self._timeout = timeout

    def run_privileged(self, argv: list[str]) -> bool:
        """Run a command through the elevation helper.

        Args:
            argv: Command and arguments to run elevated.

        Returns:
            True if the helper and the command exited successfully.
        """
        try:
            result = run_command([self._helper, *argv], timeout=self._timeout)
        except FileNotFoundError:
            logger.warning("Elevation helper not found: %s", self._helper)
            return False
        except subprocess.TimeoutExpired:
            logger.warning("Privileged command timed out: %s", " ".join(argv))
            return False
        except OSError as e:
            logger.warning("Cannot run elevation helper %s: %s", self._helper, e)
            return False

        if result.returncode == _EXIT_DISMISSED:
            logger.warning("Authentication dismissed by user: %s", " ".join(argv))
        elif result.returncode == _EXIT_DENIED:
            logger.warning("Authentication denied: %s", " ".join(argv))
        elif not result.success:
            logger.warning(
                "Privileged command failed (exit %d): %s",
                result.returncode,
                " ".join(argv),
            )
        return result.success
