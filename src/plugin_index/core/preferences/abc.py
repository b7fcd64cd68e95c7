"""Abstract base class for durable key/value preferences."""

from abc import ABC, abstractmethod


class Preferences(ABC):
    """Abstract interface for a persisted key/value store.

    Provides dependency injection for preference access, enabling in-memory
    implementations for tests without touching the filesystem. Getters return
    the default when the key is absent or its value cannot be read as the
    requested type.
    """

    @abstractmethod
    def get_string(self, key: str, default: str = "") -> str: ...

    @abstractmethod
    def get_int(self, key: str, default: int = 0) -> int: ...

    @abstractmethod
    def get_bool(self, key: str, default: bool = False) -> bool: ...

    @abstractmethod
    def get_float(self, key: str, default: float = 0.0) -> float: ...

    @abstractmethod
    def set_string(self, key: str, value: str) -> None: ...

    @abstractmethod
    def set_int(self, key: str, value: int) -> None: ...

    @abstractmethod
    def set_bool(self, key: str, value: bool) -> None: ...

    @abstractmethod
    def set_float(self, key: str, value: float) -> None: ...

    @abstractmethod
    def has_key(self, key: str) -> bool: ...

    @abstractmethod
    def delete_key(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        ...

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every key."""
        ...
