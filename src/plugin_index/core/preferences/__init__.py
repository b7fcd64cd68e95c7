"""Preference port: durable key/value settings storage."""

from plugin_index.core.preferences.abc import Preferences
from plugin_index.core.preferences.fake import InMemoryPreferences
from plugin_index.core.preferences.real import TomlPreferences, default_preferences_dir

__all__ = [
    "InMemoryPreferences",
    "Preferences",
    "TomlPreferences",
    "default_preferences_dir",
]
