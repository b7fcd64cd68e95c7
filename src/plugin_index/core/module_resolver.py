"""Module resolver: turns a registry into its catalogue of packaged plugins.

Locations follow a fixed layout relative to the registry manifest:

    <registry-dir>/<module-id>/package-manifest.xml
    <registry-dir>/<module-id>/<artifact-id>/<release>/description.xml

Each module costs exactly two fetches per resolution pass.
"""

import logging

from plugin_index.core.constants import DESCRIPTION_FILE_NAME, MANIFEST_FILE_NAME
from plugin_index.core.exceptions import InvalidLocationError, ManifestParseError
from plugin_index.core.fetcher.abc import UriDataFetcher
from plugin_index.core.location import Location
from plugin_index.core.parsing import parse_plugin_description, parse_plugin_metadata
from plugin_index.core.registry_catalogue import RegistryCatalogue
from plugin_index.core.types import PackagedPlugin, PluginMetadata, RegistryWrapper

logger = logging.getLogger(__name__)


def registry_location_to_module_location(registry_location: Location, module_name: str) -> Location:
    """Derive the package manifest location of a module.

    Args:
        registry_location: Location of the registry manifest
        module_name: Module identifier listed by the registry

    Returns:
        <registry-dir>/<module_name>/package-manifest.xml

    Raises:
        InvalidLocationError: If module_name is empty, "." or ".."
    """
    return registry_location.join(module_name, MANIFEST_FILE_NAME)


def description_location(module_location: Location, metadata: PluginMetadata) -> Location:
    """Derive the description location of a module's release.

    Args:
        module_location: Location of the module's package manifest
        metadata: Parsed package manifest

    Returns:
        <module-dir>/<artifact-id>/<release>/description.xml
    """
    return module_location.join(
        metadata.artifact_id, metadata.versioning.release, DESCRIPTION_FILE_NAME
    )


class ModuleResolver:
    """Resolves and caches the packaged plugins of each registry.

    The cache is keyed by registry location and remembers which wrapper it
    was built from; a wrapper produced by a later fetch of the same registry
    misses the cache. Not thread-safe.
    """

    registry_location_to_module_location = staticmethod(registry_location_to_module_location)
    description_location = staticmethod(description_location)

    def __init__(self, fetcher: UriDataFetcher, catalogue: RegistryCatalogue) -> None:
        self._fetcher = fetcher
        self._catalogue = catalogue
        self._cache: dict[Location, tuple[RegistryWrapper, list[PackagedPlugin]]] = {}

    def modules_of(self, registry: RegistryWrapper | None) -> list[PackagedPlugin] | None:
        """Get the packaged plugins of a registry, resolving on first request.

        Args:
            registry: Registry to resolve, or None

        Returns:
            None when registry is None; otherwise one PackagedPlugin per module
            that resolved. Modules that fail to fetch or parse are logged and
            left out. A registry with no modules gives an empty list.
        """
        if registry is None:
            return None

        self._prune()
        cached = self._cache.get(registry.location)
        if cached is not None and cached[0] is registry:
            return list(cached[1])

        plugins = self._resolve(registry)
        self._cache[registry.location] = (registry, plugins)
        return list(plugins)

    def refresh(self, registry: RegistryWrapper | None) -> list[PackagedPlugin] | None:
        """Discard the cached plugins of registry and resolve it again."""
        if registry is None:
            return None
        self._cache.pop(registry.location, None)
        return self.modules_of(registry)

    @property
    def cached_locations(self) -> list[Location]:
        """Registry locations that currently have resolved plugins cached."""
        return list(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def all_plugins(self) -> list[PackagedPlugin]:
        """Resolve every registry the catalogue currently lists."""
        plugins: list[PackagedPlugin] = []
        for registry in self._catalogue.list_registries():
            plugins.extend(self.modules_of(registry) or [])
        return plugins

    def parent_registry(self, plugin: PackagedPlugin) -> RegistryWrapper | None:
        """Look up the plugin's parent in the live catalogue.

        Returns None once the parent has been removed, meaning the plugin is
        stale and must be resolved again before use.
        """
        return self._catalogue.get_registry(plugin.parent_registry)

    def _prune(self) -> None:
        """Drop cached plugins of registries the catalogue no longer tracks."""
        tracked = set(self._catalogue.locations())
        for location in [loc for loc in self._cache if loc not in tracked]:
            del self._cache[location]

    def _resolve(self, registry: RegistryWrapper) -> list[PackagedPlugin]:
        plugins: list[PackagedPlugin] = []
        for module_name in registry.registry.modules:
            plugin = self._resolve_module(registry.location, module_name)
            if plugin is not None:
                plugins.append(plugin)

        logger.info(
            "Resolved %d of %d modules from %s",
            len(plugins),
            len(registry.registry.modules),
            registry.location,
        )
        return plugins

    def _resolve_module(
        self, registry_location: Location, module_name: str
    ) -> PackagedPlugin | None:
        try:
            module_location = registry_location_to_module_location(registry_location, module_name)
        except InvalidLocationError as e:
            logger.warning("Skipping module %r of %s: %s", module_name, registry_location, e)
            return None

        manifest = self._fetcher.fetch(module_location)
        if not manifest.ok or manifest.content is None:
            logger.warning(
                "Could not fetch manifest of module %s at %s", module_name, module_location
            )
            return None

        try:
            metadata = parse_plugin_metadata(manifest.content, module_location.uri)
            desc_location = description_location(module_location, metadata)
        except (ManifestParseError, InvalidLocationError) as e:
            logger.warning("Skipping module %s: %s", module_name, e)
            return None

        description_result = self._fetcher.fetch(desc_location)
        if not description_result.ok or description_result.content is None:
            logger.warning(
                "Could not fetch description of module %s at %s", module_name, desc_location
            )
            return None

        try:
            description = parse_plugin_description(description_result.content, desc_location.uri)
        except ManifestParseError as e:
            logger.warning("Skipping module %s: %s", module_name, e)
            return None

        return PackagedPlugin(
            metadata=metadata,
            description=description,
            parent_registry=registry_location,
            module_location=module_location,
            description_location=desc_location,
        )
