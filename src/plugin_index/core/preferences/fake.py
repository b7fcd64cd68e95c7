"""In-memory fake implementation of Preferences for testing."""

from typing import Any

from plugin_index.core.preferences import coerce
from plugin_index.core.preferences.abc import Preferences


class InMemoryPreferences(Preferences):
    """Test implementation that stores preferences in a dict.

    All state is provided via constructor or captured during execution.
    """

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        """Create InMemoryPreferences.

        Args:
            values: Initial key/value state (copied)
        """
        self._values: dict[str, Any] = dict(values or {})

    @property
    def values(self) -> dict[str, Any]:
        """Read-only snapshot of stored values for test assertions."""
        return dict(self._values)

    def get_string(self, key: str, default: str = "") -> str:
        return coerce.as_string(self._values.get(key), default)

    def get_int(self, key: str, default: int = 0) -> int:
        return coerce.as_int(self._values.get(key), default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return coerce.as_bool(self._values.get(key), default)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return coerce.as_float(self._values.get(key), default)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value

    def set_int(self, key: str, value: int) -> None:
        self._values[key] = value

    def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = value

    def set_float(self, key: str, value: float) -> None:
        self._values[key] = value

    def has_key(self, key: str) -> bool:
        return key in self._values

    def delete_key(self, key: str) -> None:
        self._values.pop(key, None)

    def delete_all(self) -> None:
        self._values.clear()
