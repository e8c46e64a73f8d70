"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from diskord.core.paths import (
    APP_NAME,
    HOME_FALLBACK,
    canonical_path,
    ensure_config_dir,
    ensure_dir,
    get_cache_home,
    get_config_dir,
    get_config_path,
    get_data_home,
    get_home_boundary,
    get_theme_path,
    get_trash_dir,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_xdg_value_ignored(self) -> None:
        """An empty XDG_CONFIG_HOME falls back to the default."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_config_files(self, tmp_path: Path) -> None:
        """config.toml and theme.toml live in the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"
            assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestDataAndCacheHome:
    """Tests for the XDG data and cache bases."""

    def test_default_data_home(self) -> None:
        """get_data_home defaults to ~/.local/share."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_data_home()

        assert result == Path.home() / ".local" / "share"

    def test_trash_dir_under_data_home(self, tmp_path: Path) -> None:
        """The trash staging area is XDG_DATA_HOME/Trash."""
        with patch.dict(os.environ, {"XDG_DATA_HOME": str(tmp_path)}):
            assert get_trash_dir() == tmp_path / "Trash"

    def test_cache_home(self, tmp_path: Path) -> None:
        """get_cache_home respects XDG_CACHE_HOME."""
        with patch.dict(os.environ, {"XDG_CACHE_HOME": str(tmp_path)}):
            assert get_cache_home() == tmp_path


class TestGetHomeBoundary:
    """Tests for get_home_boundary function."""

    def test_returns_home(self, tmp_path: Path) -> None:
        """The boundary is the user's home directory."""
        with patch.dict(os.environ, {"HOME": str(tmp_path)}):
            assert get_home_boundary() == tmp_path.resolve()

    def test_symlinked_home_resolved(self, tmp_path: Path) -> None:
        """A home reached through a symlink yields its real location."""
        real = tmp_path / "var" / "home" / "user"
        real.mkdir(parents=True)
        (tmp_path / "home").symlink_to(real.parent)

        with patch.dict(os.environ, {"HOME": str(tmp_path / "home" / "user")}):
            assert get_home_boundary() == real.resolve()

    def test_fallback_when_unknown(self) -> None:
        """An undeterminable home yields the fallback."""
        with patch("diskord.core.paths.Path.home", side_effect=RuntimeError("no home")):
            assert get_home_boundary() == HOME_FALLBACK


class TestCanonicalPath:
    """Tests for canonical_path function."""

    def test_relative_made_absolute(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative paths are anchored at the working directory."""
        monkeypatch.chdir(tmp_path)

        assert canonical_path("a/b") == tmp_path.resolve() / "a" / "b"

    def test_parent_symlink_resolved(self, tmp_path: Path) -> None:
        """Symlinks above the last component are resolved."""
        real = tmp_path / "real"
        real.mkdir()
        (tmp_path / "link").symlink_to(real)

        assert canonical_path(tmp_path / "link" / "f") == real.resolve() / "f"

    def test_last_component_kept(self, tmp_path: Path) -> None:
        """A symlink named directly is not followed."""
        (tmp_path / "target").mkdir()
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "target")

        assert canonical_path(link) == tmp_path.resolve() / "link"

    def test_filesystem_root(self) -> None:
        """The filesystem root maps to itself."""
        assert canonical_path("/") == Path("/")


class TestEnsureDir:
    """Tests for directory creation helpers."""

    def test_creates_nested(self, tmp_path: Path) -> None:
        """ensure_dir creates missing parents."""
        target = tmp_path / "a" / "b"

        assert ensure_dir(target, "test") == target
        assert target.is_dir()

    def test_existing_is_fine(self, tmp_path: Path) -> None:
        """ensure_dir accepts an existing directory."""
        assert ensure_dir(tmp_path, "test") == tmp_path

    def test_failure_raises_runtime_error(self, tmp_path: Path) -> None:
        """Creation failures are reported as RuntimeError."""
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(RuntimeError, match="Cannot create test directory"):
            ensure_dir(blocker / "sub", "test")

    def test_ensure_config_dir(self, tmp_path: Path) -> None:
        """ensure_config_dir creates the diskord config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = ensure_config_dir()

        assert result == tmp_path / APP_NAME
        assert result.is_dir()
