"""User settings stored through the preference port."""

from pathlib import Path

from plugin_index.core.constants import (
    DEFAULT_REGISTRY_KEY,
    DEFAULT_REGISTRY_LOCATION,
    DOWNLOAD_CACHE_PATH_KEY,
    SHOW_INSTALL_FILES_KEY,
    VERBOSE_LOGGING_KEY,
)
from plugin_index.core.preferences.abc import Preferences


def default_download_cache_path() -> Path:
    return Path.home() / ".cache" / "plugin-index"


class Settings:
    """Typed accessors over Preferences.

    Values are read through on every access, so a setting changed by another
    Settings instance sharing the same store is seen immediately.
    """

    def __init__(self, preferences: Preferences) -> None:
        self._preferences = preferences

    @property
    def download_cache_path(self) -> str:
        """Absolute path of the download cache directory."""
        value = self._preferences.get_string(DOWNLOAD_CACHE_PATH_KEY, "")
        if not value:
            return str(default_download_cache_path())
        return str(Path(value).expanduser().absolute())

    @download_cache_path.setter
    def download_cache_path(self, value: str) -> None:
        absolute = Path(value).expanduser().absolute()
        self._preferences.set_string(DOWNLOAD_CACHE_PATH_KEY, str(absolute))

    @property
    def verbose_logging(self) -> bool:
        return self._preferences.get_bool(VERBOSE_LOGGING_KEY, True)

    @verbose_logging.setter
    def verbose_logging(self, value: bool) -> None:
        self._preferences.set_bool(VERBOSE_LOGGING_KEY, value)

    @property
    def show_install_files(self) -> bool:
        return self._preferences.get_bool(SHOW_INSTALL_FILES_KEY, True)

    @show_install_files.setter
    def show_install_files(self, value: bool) -> None:
        self._preferences.set_bool(SHOW_INSTALL_FILES_KEY, value)

    @property
    def default_registry(self) -> str:
        """Registry location seeded into an empty catalogue."""
        return self._preferences.get_string(DEFAULT_REGISTRY_KEY, DEFAULT_REGISTRY_LOCATION)

    @default_registry.setter
    def default_registry(self, value: str) -> None:
        self._preferences.set_string(DEFAULT_REGISTRY_KEY, value)

    def as_dict(self) -> dict[str, str | bool]:
        """Snapshot of all settings, keyed by their CLI names."""
        return {
            "download_cache_path": self.download_cache_path,
            "verbose_logging": self.verbose_logging,
            "show_install_files": self.show_install_files,
            "default_registry": self.default_registry,
        }
