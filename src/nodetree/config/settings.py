"""
Application settings and configuration.

Settings are stored as JSON in a platform-specific location:

- Windows: %APPDATA%/LocalLow/nodetree/settings.json
- macOS: ~/Library/Application Support/nodetree/settings.json
- Linux: ~/.config/nodetree/settings.json

Example:
    from nodetree.config.settings import get_settings, get_settings_manager

    settings = get_settings()
    print(settings.storage_key)

    # Update settings (auto-saves)
    get_settings_manager().update(export_name="groceries", merge_on_import=True)
"""

import json
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Optional
import logging

from ..infrastructure.logging_config import get_logger
from ..infrastructure.paths import (
    ensure_directory,
    get_log_file_path,
    get_persistent_data_directory,
    get_store_file_path,
)


logger = get_logger(__name__)

PATH_SETTINGS = ("log_file_path", "store_file_path", "export_directory")
"""Settings holding paths, stored as strings with forward slashes."""


@dataclass
class AppSettings:
    """Application-wide settings."""

    # Logging settings
    log_level: int = logging.INFO
    log_to_file: bool = True
    log_file_path: Optional[Path] = field(default_factory=get_log_file_path)

    # Storage settings
    store_file_path: Optional[Path] = field(default_factory=get_store_file_path)
    storage_key: str = "nodes"

    # Export / import settings
    export_directory: Optional[Path] = field(default_factory=Path.cwd)
    export_name: str = "nodes"
    required_fields: list[str] = field(default_factory=lambda: ["type", "visible"])
    tolerant_validation: bool = True
    merge_on_import: bool = False


SETTING_NAMES = frozenset(f.name for f in fields(AppSettings))


def settings_to_data(settings: AppSettings) -> dict[str, Any]:
    """
    Convert settings to JSON-ready data.

    Args:
        settings: Settings to convert.

    Returns:
        Dictionary of setting values, with paths as forward-slash strings.
    """
    data = asdict(settings)
    for key in PATH_SETTINGS:
        if data.get(key):
            data[key] = str(data[key]).replace("\\", "/")
    return data


def apply_settings_data(settings: AppSettings, data: dict[str, Any], strict: bool = False) -> AppSettings:
    """
    Copy setting values from parsed data onto a settings object.

    Path settings are converted to Path objects.

    Args:
        settings: Settings to modify in place.
        data: Setting names and values.
        strict: Raise on unknown names instead of skipping them.

    Returns:
        The modified settings.

    Raises:
        ValueError: If strict and data holds an unknown name; nothing is
            changed in that case.
    """
    unknown = [key for key in data if key not in SETTING_NAMES]
    if unknown and strict:
        raise ValueError(f"Unknown setting: {', '.join(unknown)}")
    for key in unknown:
        logger.warning(f"Ignoring unknown setting: {key}")

    for key, value in data.items():
        if key not in SETTING_NAMES:
            continue
        if key in PATH_SETTINGS and value:
            value = Path(value)
        setattr(settings, key, value)
    return settings


class SettingsManager:
    """
    Loads and saves application settings as a JSON file.
    """

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize the settings manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        if config_file is None:
            config_file = get_persistent_data_directory() / "settings.json"

        self.config_file = config_file
        self._settings = AppSettings()

    def load(self) -> AppSettings:
        """
        Load settings from the configuration file.

        A missing, unreadable or corrupt file leaves the current values.

        Returns:
            The loaded settings object.
        """
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info(f"Settings file not found at {self.config_file}, using defaults")
            return self._settings
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load settings: {e}. Using defaults.")
            return self._settings

        if not isinstance(data, dict):
            logger.error(f"Settings file {self.config_file} does not hold an object. Using defaults.")
            return self._settings

        apply_settings_data(self._settings, data)
        logger.info(f"Settings loaded from {self.config_file}")
        return self._settings

    def save(self) -> None:
        """Write the current settings to the configuration file."""
        text = json.dumps(settings_to_data(self._settings), indent=2, ensure_ascii=False)
        temp_file = self.config_file.with_suffix(".tmp")
        try:
            ensure_directory(self.config_file.parent)
            temp_file.write_text(text, encoding="utf-8")
            temp_file.replace(self.config_file)
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            return
        logger.info(f"Settings saved to {self.config_file}")

    def get(self) -> AppSettings:
        """Get the current settings."""
        return self._settings

    def update(self, **changes: Any) -> AppSettings:
        """
        Update specific settings and save them.

        Args:
            **changes: Setting names and values to update.

        Returns:
            The updated settings.

        Raises:
            ValueError: If a name is not a known setting.
        """
        apply_settings_data(self._settings, changes, strict=True)
        self.save()
        return self._settings


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """
    Get the global settings manager instance, loading it on first use.

    Returns:
        The global SettingsManager.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
        _settings_manager.load()
    return _settings_manager


def get_settings() -> AppSettings:
    """Get the current application settings."""
    return get_settings_manager().get()
