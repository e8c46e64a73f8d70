"""Unit tests for formatting utilities."""

import pytest
from diskord.utils.formatting import format_bytes


class TestFormatBytes:
    """Tests for format_bytes function."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (int(2.5 * 1024**3), "2.5 GB"),
            (3 * 1024**4, "3072.0 GB"),
        ],
    )
    def test_units(self, size: int, expected: str) -> None:
        """Sizes use the largest unit up to GB with one decimal."""
        assert format_bytes(size) == expected
