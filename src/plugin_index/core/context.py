"""Application context with dependency injection."""

import os
from dataclasses import dataclass
from pathlib import Path

from plugin_index.core.constants import PLUGIN_INDEX_HOME_ENV
from plugin_index.core.fetcher.abc import UriDataFetcher
from plugin_index.core.fetcher.real import RealUriDataFetcher
from plugin_index.core.module_resolver import ModuleResolver
from plugin_index.core.preferences.abc import Preferences
from plugin_index.core.preferences.real import (
    PREFERENCES_FILE_NAME,
    TomlPreferences,
    default_preferences_dir,
)
from plugin_index.core.registry_catalogue import RegistryCatalogue
from plugin_index.core.settings import Settings


@dataclass(frozen=True)
class PluginIndexContext:
    """Immutable context holding all dependencies for plugin-index operations.

    Created at CLI entry point and threaded through the application. The
    catalogue and resolver share the same fetcher and preference store.
    """

    fetcher: UriDataFetcher
    preferences: Preferences
    settings: Settings
    catalogue: RegistryCatalogue
    resolver: ModuleResolver

    @staticmethod
    def build(
        fetcher: UriDataFetcher,
        preferences: Preferences,
        *,
        default_location: str | None = None,
    ) -> "PluginIndexContext":
        """Wire a context around a fetcher and preference store.

        Args:
            fetcher: Fetch port implementation
            preferences: Preference port implementation
            default_location: Registry seeded into an empty catalogue. If None,
                uses the default_registry setting.
        """
        settings = Settings(preferences)
        catalogue = RegistryCatalogue(
            fetcher,
            preferences,
            default_location=default_location or settings.default_registry,
        )
        return PluginIndexContext(
            fetcher=fetcher,
            preferences=preferences,
            settings=settings,
            catalogue=catalogue,
            resolver=ModuleResolver(fetcher, catalogue),
        )

    @staticmethod
    def for_test(
        fetcher: UriDataFetcher | None = None,
        preferences: Preferences | None = None,
        default_location: str | None = None,
    ) -> "PluginIndexContext":
        """Create test context with in-memory defaults.

        Args:
            fetcher: Optional fetcher. If None, creates empty FakeUriDataFetcher
                (every fetch fails).
            preferences: Optional preferences. If None, creates empty
                InMemoryPreferences.
            default_location: Optional default registry. If None, uses
                "https://registry.test/registry.xml".
        """
        from plugin_index.core.fetcher.fake import FakeUriDataFetcher
        from plugin_index.core.preferences.fake import InMemoryPreferences

        return PluginIndexContext.build(
            fetcher if fetcher is not None else FakeUriDataFetcher(),
            preferences if preferences is not None else InMemoryPreferences(),
            default_location=default_location or "https://registry.test/registry.xml",
        )


def preferences_path() -> Path:
    """Get the preferences file, honoring PLUGIN_INDEX_HOME."""
    home = os.environ.get(PLUGIN_INDEX_HOME_ENV)
    base = Path(home).expanduser() if home else default_preferences_dir()
    return base / PREFERENCES_FILE_NAME


def create_context() -> PluginIndexContext:
    """Create production context with the real fetcher and TOML preferences.

    This is the canonical factory for CLI usage.
    """
    return PluginIndexContext.build(
        RealUriDataFetcher(),
        TomlPreferences(preferences_path()),
    )
