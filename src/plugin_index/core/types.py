"""Type definitions for registries and resolved plugins."""

from dataclasses import dataclass, field
from enum import Enum

from plugin_index.core.location import Location

DEFAULT_LANGUAGE = "en"


class RegistryState(Enum):
    """Lifecycle of a registry location inside the catalogue."""

    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    FETCHED = "fetched"
    FETCH_FAILED = "fetch_failed"


@dataclass(frozen=True)
class Registry:
    """Parsed registry manifest."""

    group: str
    modules: tuple[str, ...]
    version: str | None = None
    updated: int | None = None  # epoch seconds


@dataclass(frozen=True, eq=False)
class RegistryWrapper:
    """A parsed registry together with where it came from.

    Compared by identity: every fetch builds a new wrapper, which is what the
    module resolver keys its cache on.
    """

    location: Location
    registry: Registry
    raw: str = field(repr=False)

    @property
    def name(self) -> str:
        return self.registry.group


@dataclass(frozen=True)
class Versioning:
    """Versioning block of a module package manifest."""

    release: str
    versions: tuple[str, ...]
    last_updated: int | None = None


@dataclass(frozen=True)
class PluginMetadata:
    """Artifact coordinates parsed from a module package manifest."""

    artifact_id: str
    versioning: Versioning
    group_id: str | None = None


@dataclass(frozen=True)
class LanguageDescription:
    """Human-readable text for one language."""

    name: str
    short_description: str | None = None
    full_description: str | None = None


@dataclass(frozen=True)
class PluginDescription:
    """Parsed version description, keyed by language code."""

    languages: dict[str, LanguageDescription]

    def for_language(self, lang: str = DEFAULT_LANGUAGE) -> LanguageDescription:
        """Return the text for lang, falling back to English, then to any language."""
        if lang in self.languages:
            return self.languages[lang]
        if DEFAULT_LANGUAGE in self.languages:
            return self.languages[DEFAULT_LANGUAGE]
        return next(iter(self.languages.values()))


@dataclass(frozen=True)
class PackagedPlugin:
    """A resolved plugin release.

    parent_registry is the parent's Location, used as a lookup key against the
    live catalogue (see ModuleResolver.parent_registry). A plugin whose parent
    has since been removed is stale.
    """

    metadata: PluginMetadata
    description: PluginDescription
    parent_registry: Location
    module_location: Location
    description_location: Location

    @property
    def artifact_id(self) -> str:
        return self.metadata.artifact_id

    @property
    def release(self) -> str:
        return self.metadata.versioning.release
