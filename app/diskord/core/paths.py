"""XDG-compliant path management for diskord.

This module provides standardized paths following the XDG Base Directory
Specification, plus the home boundary used to decide whether a deletion
can go through the trash.

XDG defaults:
- Config: ~/.config/diskord/
- Trash: ~/.local/share/Trash/
- Cache: ~/.cache/
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Application identifier for directory naming
APP_NAME = "diskord"

# Used when the home directory cannot be determined. No absolute path lies
# within it, so every deletion is treated as irreversible.
HOME_FALLBACK = Path("~")


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the base directory (not application-specific).
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_home_boundary() -> Path:
    """Resolve the user's home directory.

    Symlinks are resolved so the boundary compares equal to the canonical
    paths the scanner produces (``/home`` is often a link to ``/var/home``).

    Returns:
        The canonical home directory, or HOME_FALLBACK if it cannot be
        determined.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        logger.warning("Cannot determine home directory, using %s: %s", HOME_FALLBACK, e)
        return HOME_FALLBACK
    try:
        return home.resolve()
    except (OSError, RuntimeError) as e:
        logger.debug("Cannot resolve home directory %s: %s", home, e)
        return home


def canonical_path(path: Path) -> Path:
    """Make ``path`` absolute with symlinks resolved in its parent chain.

    The last component is kept as is, so a symlink names itself rather
    than its target. This matches the entry paths the scanner reports.
    """
    absolute = Path(os.path.abspath(path))
    if absolute.parent == absolute:
        return absolute
    try:
        return absolute.parent.resolve() / absolute.name
    except (OSError, RuntimeError):
        return absolute


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/diskord/ (or XDG_CONFIG_HOME/diskord/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_config_path() -> Path:
    """Get the main configuration file path.

    Returns:
        Path to ~/.config/diskord/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/diskord/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_data_home() -> Path:
    """Get the XDG data home.

    Returns:
        Path to ~/.local/share (or XDG_DATA_HOME).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share")


def get_cache_home() -> Path:
    """Get the XDG cache home.

    Returns:
        Path to ~/.cache (or XDG_CACHE_HOME).
    """
    return _get_xdg_base("XDG_CACHE_HOME", ".cache")


def get_trash_dir() -> Path:
    """Get the trash staging directory.

    The staging area holds a ``files`` and an ``info`` subdirectory.

    Returns:
        Path to ~/.local/share/Trash (or XDG_DATA_HOME/Trash).
    """
    return get_data_home() / "Trash"


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return ensure_dir(get_config_dir(), "config")
