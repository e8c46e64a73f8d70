"""Fixtures for CLI command tests."""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def cli_env(home: Path, tmp_path: Path) -> Iterator[Path]:
    """Point HOME and the XDG directories at a temporary home.

    Yields:
        The temporary home directory.
    """
    env = {
        "HOME": str(home),
        "XDG_CONFIG_HOME": str(tmp_path / "config"),
        "XDG_DATA_HOME": str(home / ".local" / "share"),
        "XDG_CACHE_HOME": str(home / ".cache"),
    }
    with patch.dict(os.environ, env):
        yield home
