"""Reversibility routing for deletions.

Paths inside the home boundary go to the trash; everything else is
removed permanently with elevated privileges.
"""

from pathlib import Path, PurePath

from diskord.trash.models import Reversibility


class DeletionRouter:
    """Classifies paths as reversible or irreversible.

    Classification is a pure, component-wise prefix test. It performs
    no existence check and resolves no symlinks.

    Args:
        home_boundary: The user's home directory.
    """

    def __init__(self, home_boundary: Path) -> None:
        self._home = home_boundary

    @property
    def home_boundary(self) -> Path:
        """Directory inside which deletions are reversible."""
        return self._home

    def classify(self, path: PurePath) -> Reversibility:
        """Decide how ``path`` would be deleted.

        Args:
            path: Absolute path to classify.

        Returns:
            REVERSIBLE if ``path`` lies within the home boundary,
            IRREVERSIBLE otherwise.
        """
        if PurePath(path).is_relative_to(self._home):
            return Reversibility.REVERSIBLE
        return Reversibility.IRREVERSIBLE

    def is_irreversible(self, path: PurePath) -> bool:
        """Check if deleting ``path`` cannot be undone."""
        return self.classify(path) is Reversibility.IRREVERSIBLE
