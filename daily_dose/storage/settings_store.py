"""
Manages loading and saving of the JSON settings file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from daily_dose.exceptions import ConfigurationError
from daily_dose.models import AppSettings

log = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"


def get_config_dir() -> Path:
    """Returns the per-user application data directory."""
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "daily-dose"


class SettingsStore:
    """Handles all operations related to the application's settings file."""

    def __init__(self, settings_file_path: Path):
        self.settings_file_path = settings_file_path

    @property
    def exists(self) -> bool:
        return self.settings_file_path.is_file()

    def load(self) -> AppSettings:
        """
        Loads the settings file. A missing file yields default settings.

        Raises:
            ConfigurationError: If the file cannot be read, is not JSON, or
            fails validation.
        """
        if not self.exists:
            return AppSettings()

        try:
            with open(self.settings_file_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Settings file '{self.settings_file_path}' is not valid JSON: {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read settings file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file '{self.settings_file_path}' must contain a JSON object."
            )

        try:
            return AppSettings(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Settings validation failed:\n{e}") from e

    def save(self, settings: AppSettings) -> None:
        """Writes the settings file, creating its directory if needed."""
        payload = settings.model_dump(mode="json", exclude_defaults=False)
        if not settings.artists:
            payload.pop("artists", None)

        try:
            self.settings_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to save settings file: {e}") from e

    def update(self, **changes: Any) -> AppSettings:
        """Loads the settings, applies the changes and saves them back."""
        settings = self.load()
        for key, value in changes.items():
            setattr(settings, key, value)
        self.save(settings)
        log.debug(f"Saved settings: {', '.join(changes)}")
        return settings

    def set_api_key(self, api_key: str) -> AppSettings:
        return self.update(setlist_api_key=api_key or "")

    def remember_selection(self, artist_name: str, show_identifier: str) -> AppSettings:
        """Records the last loaded artist and show."""
        return self.update(
            last_artist_name=artist_name, last_show_identifier=show_identifier
        )
