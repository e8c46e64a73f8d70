"""Test doubles and filesystem builders shared by the unit tests."""

from pathlib import Path

from diskord.cleaners.base import JunkTarget


class FakeRunner:
    """PrivilegedRunner double that records calls instead of elevating."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.calls: list[list[str]] = []

    def run_privileged(self, argv: list[str]) -> bool:
        self.calls.append(list(argv))
        return self.succeed


def make_tree(root: Path, files: dict[str, int]) -> None:
    """Create files of the given sizes below ``root``.

    Keys are relative paths; a key ending in "/" creates an empty directory.
    """
    for rel, size in files.items():
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)


class FakeTarget(JunkTarget):
    """Junk target whose size drops to zero when cleaned."""

    def __init__(
        self, target_id: str, size: int, category: str = "system", ok: bool = True
    ) -> None:
        self._id = target_id
        self._size = size
        self._category = category
        self._ok = ok
        self.cleaned = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._id.title()

    @property
    def category(self) -> str:
        return self._category

    def measure(self) -> int:
        return self._size

    def clean(self) -> bool:
        self.cleaned += 1
        if self._ok:
            self._size = 0
        return self._ok
