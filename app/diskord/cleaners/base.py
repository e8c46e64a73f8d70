"""Abstract base class for junk cleanup targets.

A junk target is a well-known location (package cache, journal, trash)
that can be measured and emptied in one step, usually by shelling out.
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanResult:
    """Result of cleaning one junk target.

    Attributes:
        target_id: Identifier of the cleaned target.
        success: Whether the cleaner reported success.
        size_before: Measured size before cleaning.
        size_after: Measured size once readings settled.
    """

    target_id: str
    success: bool
    size_before: int
    size_after: int

    @property
    def freed_bytes(self) -> int:
        """Bytes reclaimed, never negative."""
        return max(self.size_before - self.size_after, 0)


class JunkTarget(ABC):
    """Abstract base class for all junk cleanup targets.

    Example:
        >>> target = DirectoryTarget("npm", "NPM Cache", Path.home() / ".npm" / "_cacache")
        >>> if target.is_available():
        ...     print(f"{target.name}: {target.measure()} bytes")
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Short stable identifier used on the command line."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable label."""

    @property
    def category(self) -> str:
        """Dashboard tab the target belongs to ("system" or "developer")."""
        return "system"

    @property
    def requires_privilege(self) -> bool:
        """Whether cleaning prompts for elevated privileges."""
        return False

    @abstractmethod
    def measure(self) -> int:
        """Return the current size in bytes (0 if absent or unreadable)."""

    @abstractmethod
    def clean(self) -> bool:
        """Empty the target.

        Returns:
            True if the cleaner reported success.
        """

    def is_available(self) -> bool:
        """Check if this target exists on the system."""
        return True


def measure_until_stable(
    measure: Callable[[], int],
    *,
    attempts: int = 5,
    interval: float = 0.05,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Re-measure until two consecutive readings agree.

    Filesystem metadata can lag behind a command that just deleted files.
    The delay doubles after every disagreeing reading.

    Args:
        measure: Function returning the current size.
        attempts: Maximum number of readings.
        interval: Delay before the second reading, in seconds.
        sleep: Sleep function (injectable for tests).

    Returns:
        The last reading taken.
    """
    previous = measure()
    delay = interval
    for _ in range(attempts - 1):
        sleep(delay)
        current = measure()
        if current == previous:
            return current
        previous = current
        delay *= 2
    logger.debug("Size readings did not settle after %d attempts", attempts)
    return previous


def clean_target(
    target: JunkTarget,
    *,
    attempts: int = 5,
    interval: float = 0.05,
    sleep: Callable[[float], None] = time.sleep,
) -> CleanResult:
    """Clean a target and measure what it freed.

    Args:
        target: Target to clean.
        attempts: Maximum number of measurements passed to measure_until_stable().
        interval: Initial re-measure delay passed to measure_until_stable().
        sleep: Sleep function (injectable for tests).

    Returns:
        CleanResult with sizes before and after.
    """
    before = target.measure()
    success = target.clean()
    if not success:
        logger.warning("Cleaning %s failed", target.name)
    after = measure_until_stable(target.measure, attempts=attempts, interval=interval, sleep=sleep)
    return CleanResult(target_id=target.id, success=success, size_before=before, size_after=after)
