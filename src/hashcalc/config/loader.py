"""Settings loader and singleton manager.

This module handles:
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
- Mapping configuration failures to structured errors
"""

from __future__ import annotations

import threading
from pathlib import Path

import toml
from pydantic import ValidationError

from hashcalc.config.models.settings import Settings
from hashcalc.shared.errors import ApplicationError, ErrorCode, ErrorContext


def default_config_paths() -> list[Path]:
    """Locations searched for a configuration file, in order."""
    return [
        Path("hashcalc.toml"),
        Path.home() / ".config" / "hashcalc" / "config.toml",
    ]


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance.

        Args:
            config_path: Optional TOML file to load instead of the defaults.

        Returns:
            The reloaded Settings instance.
        """
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance

    def reset(self) -> None:
        """Drop the cached instance; the next get_config() loads again."""
        with self._lock:
            self._instance = None


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
            locations are tried before falling back to environment
            variables and defaults.

    Returns:
        A new Settings instance.

    Raises:
        ApplicationError: If the file is missing, unreadable or invalid.
    """
    if config_path is None:
        config_path = next((path for path in default_config_paths() if path.exists()), None)
        if config_path is None:
            return _build(None)

    return _build(Path(config_path))


def _build(config_path: Path | None) -> Settings:
    context = ErrorContext(
        file_path=str(config_path) if config_path else None,
        operation="load_settings",
    )
    try:
        if config_path is None:
            return Settings()
        return Settings.from_toml_file(config_path)
    except FileNotFoundError as e:
        raise ApplicationError(
            ErrorCode.CONFIG_MISSING,
            str(e),
            context,
            original_error=e,
        ) from e
    except (ValidationError, toml.TomlDecodeError) as e:
        raise ApplicationError(
            ErrorCode.INVALID_CONFIG,
            f"Invalid configuration: {e}",
            context,
            original_error=e,
        ) from e
    except OSError as e:
        raise ApplicationError(
            ErrorCode.CONFIGURATION_ERROR,
            f"Cannot read configuration: {e}",
            context,
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance."""
    return _loader.reload_config(config_path)


def reset_config() -> None:
    """Forget the global settings instance."""
    _loader.reset()


__all__ = [
    "SettingsLoader",
    "default_config_paths",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
