"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from datetime import datetime
from pathlib import Path

import pytest
from diskord.trash.router import DeletionRouter
from diskord.trash.session import SessionTrash
from diskord.trash.store import TrashStore

from tests.helpers import FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Privileged runner that always succeeds."""
    return FakeRunner()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Directory standing in for the user's home."""
    path = tmp_path.resolve() / "home"
    path.mkdir()
    return path


@pytest.fixture
def router(home: Path) -> DeletionRouter:
    """Router whose home boundary is the ``home`` fixture."""
    return DeletionRouter(home)


@pytest.fixture
def store(home: Path, router: DeletionRouter, fake_runner: FakeRunner) -> TrashStore:
    """Trash store staging into the fake home's trash."""
    return TrashStore(home / ".local" / "share" / "Trash", router, fake_runner)


@pytest.fixture
def session_trash(store: TrashStore) -> SessionTrash:
    """Empty session trash on top of the store fixture."""
    return SessionTrash(store)


@pytest.fixture
def deletion_time() -> datetime:
    """Fixed deletion timestamp."""
    return datetime(2024, 3, 5, 14, 7, 9)
