"""Production implementation of Preferences backed by a TOML file."""

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit import TOMLDocument

from plugin_index.core.preferences import coerce
from plugin_index.core.preferences.abc import Preferences

PREFERENCES_FILE_NAME = "preferences.toml"


def default_preferences_dir() -> Path:
    """Get the default preferences directory (~/.plugin-index)."""
    return Path.home() / ".plugin-index"


class TomlPreferences(Preferences):
    """Production implementation that reads/writes a TOML preferences file.

    Every read goes to disk, so edits made by other processes are visible.
    Writes preserve existing formatting and comments using tomlkit.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Create TomlPreferences.

        Args:
            path: Preferences file. Defaults to ~/.plugin-index/preferences.toml
        """
        self._path = path if path is not None else default_preferences_dir() / PREFERENCES_FILE_NAME

    @property
    def path(self) -> Path:
        """Path to the preferences file (for error messages and debugging)."""
        return self._path

    def _load(self) -> TOMLDocument:
        if not self._path.exists():
            return tomlkit.document()
        with self._path.open("r", encoding="utf-8") as f:
            return tomlkit.load(f)

    def _save(self, doc: TOMLDocument) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as f:
            tomlkit.dump(doc, f)

    def _get(self, key: str) -> Any:
        return self._load().unwrap().get(key)

    def _set(self, key: str, value: Any) -> None:
        doc = self._load()
        doc[key] = value
        self._save(doc)

    def get_string(self, key: str, default: str = "") -> str:
        return coerce.as_string(self._get(key), default)

    def get_int(self, key: str, default: int = 0) -> int:
        return coerce.as_int(self._get(key), default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return coerce.as_bool(self._get(key), default)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return coerce.as_float(self._get(key), default)

    def set_string(self, key: str, value: str) -> None:
        self._set(key, value)

    def set_int(self, key: str, value: int) -> None:
        self._set(key, value)

    def set_bool(self, key: str, value: bool) -> None:
        self._set(key, value)

    def set_float(self, key: str, value: float) -> None:
        self._set(key, value)

    def has_key(self, key: str) -> bool:
        return key in self._load()

    def delete_key(self, key: str) -> None:
        doc = self._load()
        if key not in doc:
            return
        del doc[key]
        self._save(doc)

    def delete_all(self) -> None:
        if self._path.exists():
            self._save(tomlkit.document())
