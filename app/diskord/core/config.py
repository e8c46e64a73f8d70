"""diskord configuration and settings.

Configuration is stored in ~/.config/diskord/config.toml. Every key is
optional; a missing file means all defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from diskord.core.paths import get_config_path, get_home_boundary, get_trash_dir

logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 50


class DiskordConfig(BaseModel):
    """User configuration for diskord.

    Attributes:
        start_path: Directory the deep scanner opens in (None = home).
        result_limit: Maximum number of entries per aggregation.
        privilege_helper: Elevation helper used for irreversible deletions.
        trash_dir: Trash staging directory (None = XDG data home Trash).
        settle_attempts: Re-measurements allowed after a cleaner runs.
        settle_interval: Initial delay in seconds between re-measurements.
    """

    model_config = ConfigDict(extra="forbid")

    start_path: Annotated[
        Path | None,
        Field(description="Initial browse root (None = home directory)"),
    ] = None
    result_limit: Annotated[
        int,
        Field(ge=1, le=1000, description="Entries shown per directory (1-1000)"),
    ] = DEFAULT_RESULT_LIMIT
    privilege_helper: Annotated[
        str,
        Field(min_length=1, description="Command used to elevate privileges"),
    ] = "pkexec"
    trash_dir: Annotated[
        Path | None,
        Field(description="Trash staging directory (None = XDG default)"),
    ] = None
    settle_attempts: Annotated[
        int,
        Field(ge=1, le=50, description="Size re-measurements after cleaning"),
    ] = 5
    settle_interval: Annotated[
        float,
        Field(ge=0.0, le=5.0, description="Initial re-measure delay in seconds"),
    ] = 0.05

    @property
    def effective_start_path(self) -> Path:
        """Get the browse root to open, expanding ``~``."""
        if self.start_path is not None:
            return self.start_path.expanduser()
        return get_home_boundary()

    @property
    def effective_trash_dir(self) -> Path:
        """Get the trash staging directory, expanding ``~``."""
        if self.trash_dir is not None:
            return self.trash_dir.expanduser()
        return get_trash_dir()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> DiskordConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated DiskordConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DiskordConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> DiskordConfig:
    """Load configuration, falling back to defaults when no file exists.

    Parse and validation errors still propagate.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return DiskordConfig()


def save_config(config: DiskordConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The DiskordConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: DiskordConfig) -> dict[str, object]:
    """Convert DiskordConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional paths are left out.
    """
    result: dict[str, object] = {
        "result_limit": config.result_limit,
        "privilege_helper": config.privilege_helper,
        "settle_attempts": config.settle_attempts,
        "settle_interval": config.settle_interval,
    }
    if config.start_path is not None:
        result["start_path"] = str(config.start_path)
    if config.trash_dir is not None:
        result["trash_dir"] = str(config.trash_dir)
    return result


def require_config(path: Path | None = None) -> DiskordConfig:
    """Load configuration or exit with a helpful error message.

    A missing file is not an error; defaults are used instead.

    Args:
        path: Optional custom config path.

    Returns:
        Loaded and validated DiskordConfig.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer
    from rich.markup import escape

    from diskord.utils.formatting import print_error, print_info

    try:
        return load_config_or_default(path)
    except ConfigError as e:
        print_error(escape(str(e)))
        print_info(f"Fix or remove {path or get_config_path()} and try again.")
        raise typer.Exit(code=1) from e
