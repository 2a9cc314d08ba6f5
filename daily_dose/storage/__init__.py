"""
Storage Layer.

This package handles the small amount of local state the application keeps:
the JSON settings file.
"""

from .settings_store import SettingsStore, get_config_dir

__all__ = ["SettingsStore", "get_config_dir"]
