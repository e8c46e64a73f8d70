"""Unit tests for directory size aggregation."""

import os
from pathlib import Path

import pytest
from diskord.scanner.aggregator import SizeAggregator, canonical_root
from diskord.scanner.models import ScanEntry

from tests.helpers import make_tree


def _sizes(entries: list[ScanEntry]) -> dict[str, int]:
    return {e.name: e.size for e in entries}


class TestScanEntry:
    """Tests for the ScanEntry dataclass."""

    def test_rejects_negative_size(self, tmp_path: Path) -> None:
        """ScanEntry refuses negative sizes."""
        with pytest.raises(ValueError, match="negative"):
            ScanEntry(path=tmp_path / "x", name="x", size=-1, is_dir=False)

    def test_is_immutable(self, tmp_path: Path) -> None:
        """ScanEntry is frozen."""
        entry = ScanEntry(path=tmp_path / "x", name="x", size=1, is_dir=False)
        with pytest.raises(AttributeError):
            entry.size = 2  # type: ignore[misc]


class TestSizeAggregator:
    """Tests for SizeAggregator.aggregate."""

    def test_direct_children_with_totals(self, tmp_path: Path) -> None:
        """Files count their own size; directories sum everything below them."""
        make_tree(tmp_path, {"a/x": 100, "a/sub/y": 50, "b/": 0, "c": 10})

        entries = SizeAggregator().aggregate(tmp_path)

        assert [(e.name, e.size) for e in entries] == [("a", 150), ("c", 10), ("b", 0)]

    def test_entry_kinds(self, tmp_path: Path) -> None:
        """is_dir reflects the kind of each child."""
        make_tree(tmp_path, {"dir/f": 1, "file": 1})

        kinds = {e.name: e.is_dir for e in SizeAggregator().aggregate(tmp_path)}

        assert kinds == {"dir": True, "file": False}

    def test_paths_are_absolute_children_of_root(self, tmp_path: Path) -> None:
        """Entry paths are absolute and located directly under the root."""
        make_tree(tmp_path, {"a/x": 1, "b": 1})

        entries = SizeAggregator().aggregate(tmp_path)

        root = tmp_path.resolve()
        assert all(e.path.is_absolute() and e.path.parent == root for e in entries)

    def test_sum_matches_regular_file_total(self, tmp_path: Path) -> None:
        """Entry sizes add up to the bytes of every regular file in the tree."""
        make_tree(tmp_path, {"a/1": 7, "a/b/2": 11, "a/b/c/3": 13, "d": 17, ".hidden/e": 19})

        entries = SizeAggregator().aggregate(tmp_path)

        assert sum(e.size for e in entries) == 7 + 11 + 13 + 17 + 19

    def test_hidden_entries_included(self, tmp_path: Path) -> None:
        """Dot files and dot directories are listed."""
        make_tree(tmp_path, {".cache/blob": 30, ".bashrc": 5})

        assert _sizes(SizeAggregator().aggregate(tmp_path)) == {".cache": 30, ".bashrc": 5}

    def test_sorted_by_size_then_path(self, tmp_path: Path) -> None:
        """Entries are ordered largest first with ties broken by path."""
        make_tree(tmp_path, {"b": 5, "a": 5, "c": 9})

        names = [e.name for e in SizeAggregator().aggregate(tmp_path)]

        assert names == ["c", "a", "b"]

    def test_truncates_to_limit(self, tmp_path: Path) -> None:
        """At most ``limit`` entries are returned, keeping the largest."""
        for i in range(60):
            (tmp_path / f"f{i:02d}").write_bytes(b"x" * (i + 1))

        entries = SizeAggregator().aggregate(tmp_path)

        assert len(entries) == 50
        assert entries[0].name == "f59"
        assert entries[-1].name == "f10"

    def test_custom_limit(self, tmp_path: Path) -> None:
        """A custom limit is honored."""
        make_tree(tmp_path, {"a": 1, "b": 2, "c": 3})

        entries = SizeAggregator(limit=2).aggregate(tmp_path)

        assert [e.name for e in entries] == ["c", "b"]

    def test_invalid_limit(self) -> None:
        """A limit below 1 is rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            SizeAggregator(limit=0)

    def test_missing_root(self, tmp_path: Path) -> None:
        """A root that does not exist yields no entries."""
        assert SizeAggregator().aggregate(tmp_path / "gone") == []

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty directory yields no entries."""
        assert SizeAggregator().aggregate(tmp_path) == []

    def test_file_root_yields_itself(self, tmp_path: Path) -> None:
        """A regular file given as root is reported as its own entry."""
        target = tmp_path / "big.iso"
        target.write_bytes(b"x" * 42)

        entries = SizeAggregator().aggregate(target)

        assert [(e.name, e.size, e.is_dir) for e in entries] == [("big.iso", 42, False)]

    def test_symlinks_not_followed(self, tmp_path: Path) -> None:
        """Symlinked files and directories contribute no bytes."""
        outside = tmp_path / "outside"
        make_tree(outside, {"huge": 1000})
        root = tmp_path / "root"
        make_tree(root, {"real/f": 10})
        (root / "real" / "link-to-dir").symlink_to(outside)
        (root / "real" / "link-to-file").symlink_to(outside / "huge")
        (root / "top-link").symlink_to(outside)

        sizes = _sizes(SizeAggregator().aggregate(root))

        assert sizes["real"] == 10
        assert "top-link" not in sizes

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read any directory")
    def test_unreadable_directory_skipped(self, tmp_path: Path) -> None:
        """Unreadable subtrees are skipped without aborting the scan."""
        make_tree(tmp_path, {"ok/f": 10, "locked/inner/f": 99, "other": 3})
        locked = tmp_path / "locked" / "inner"
        locked.chmod(0)
        try:
            sizes = _sizes(SizeAggregator().aggregate(tmp_path))
        finally:
            locked.chmod(0o755)

        assert sizes == {"ok": 10, "other": 3, "locked": 0}

    def test_rescan_reflects_changes(self, tmp_path: Path) -> None:
        """Aggregation reads the filesystem fresh every time."""
        make_tree(tmp_path, {"a/x": 10})
        aggregator = SizeAggregator()
        assert _sizes(aggregator.aggregate(tmp_path)) == {"a": 10}

        (tmp_path / "a" / "y").write_bytes(b"x" * 5)

        assert _sizes(aggregator.aggregate(tmp_path)) == {"a": 15}


class TestCanonicalRoot:
    """Tests for canonical_root."""

    def test_resolves_symlinked_root(self, tmp_path: Path) -> None:
        """A symlinked directory maps to its real location."""
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real)

        assert canonical_root(link) == real.resolve()

    def test_missing_root_returned_unmodified(self) -> None:
        """A root that cannot be resolved is kept exactly as given."""
        assert canonical_root("relative/does-not-exist") == Path("relative/does-not-exist")

    def test_symlinked_root_entries_under_real_path(self, tmp_path: Path) -> None:
        """Entries of a symlinked root carry the resolved parent."""
        make_tree(tmp_path / "real", {"a": 5})
        (tmp_path / "link").symlink_to(tmp_path / "real")

        entries = SizeAggregator().aggregate(tmp_path / "link")

        assert [e.path for e in entries] == [(tmp_path / "real").resolve() / "a"]
