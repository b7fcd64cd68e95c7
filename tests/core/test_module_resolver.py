"""Tests for ModuleResolver: location derivation, resolution and caching."""

import pytest

from plugin_index.core.constants import DESCRIPTION_FILE_NAME, MANIFEST_FILE_NAME
from plugin_index.core.exceptions import InvalidLocationError
from plugin_index.core.fetcher import FakeUriDataFetcher
from plugin_index.core.location import Location
from plugin_index.core.module_resolver import (
    ModuleResolver,
    description_location,
    registry_location_to_module_location,
)
from plugin_index.core.preferences import InMemoryPreferences
from plugin_index.core.registry_catalogue import RegistryCatalogue
from plugin_index.core.response import ResponseCode
from plugin_index.core.types import PluginMetadata, RegistryWrapper, Versioning
from tests.fakes.fetchers import SequenceFetcher
from tests.test_utils.registry_data import (
    add_module,
    description_xml,
    manifest_xml,
    registry_xml,
    serve_registry,
)

REGISTRY = Location.parse("https://plugins.test/registry/registry.xml")
SECOND = Location.parse("https://mirror.test/registry.xml")


def _wire(fetcher) -> tuple[RegistryCatalogue, ModuleResolver]:
    catalogue = RegistryCatalogue(fetcher, InMemoryPreferences(), default_location=REGISTRY)
    return catalogue, ModuleResolver(fetcher, catalogue)


def _registry(catalogue: RegistryCatalogue, location: Location = REGISTRY) -> RegistryWrapper:
    wrapper = catalogue.get_registry(location)
    assert wrapper is not None
    return wrapper


def test_module_location_sits_beside_registry_manifest() -> None:
    location = registry_location_to_module_location(REGISTRY, "example")

    assert location.uri == f"https://plugins.test/registry/example/{MANIFEST_FILE_NAME}"


def test_module_location_quotes_module_name() -> None:
    location = registry_location_to_module_location(REGISTRY, "a/b c")

    assert location.uri == f"https://plugins.test/registry/a%2Fb%20c/{MANIFEST_FILE_NAME}"


def test_derived_locations_distinguish_modules_and_releases() -> None:
    a = registry_location_to_module_location(REGISTRY, "a")
    b = registry_location_to_module_location(REGISTRY, "b")
    v1 = PluginMetadata(artifact_id="p", versioning=Versioning(release="1.0", versions=("1.0",)))
    v2 = PluginMetadata(artifact_id="p", versioning=Versioning(release="2.0", versions=("2.0",)))

    assert a != b
    assert a == registry_location_to_module_location(REGISTRY, "a")
    assert description_location(a, v1) != description_location(a, v2)
    assert description_location(a, v1) != description_location(b, v1)


@pytest.mark.parametrize("module_name", ["", ".", ".."])
def test_module_location_rejects_non_names(module_name: str) -> None:
    with pytest.raises(InvalidLocationError):
        registry_location_to_module_location(REGISTRY, module_name)


def test_description_location_uses_artifact_and_release() -> None:
    module_location = registry_location_to_module_location(REGISTRY, "example")
    metadata = PluginMetadata(
        artifact_id="example-plugin",
        versioning=Versioning(release="1.0.0.0", versions=("1.0.0.0",)),
    )

    location = description_location(module_location, metadata)

    assert location.uri == (
        "https://plugins.test/registry/example/example-plugin/1.0.0.0/" + DESCRIPTION_FILE_NAME
    )
    assert ModuleResolver.description_location(module_location, metadata) == location


def test_modules_of_none_is_none() -> None:
    _, resolver = _wire(FakeUriDataFetcher())

    assert resolver.modules_of(None) is None
    assert resolver.refresh(None) is None


def test_modules_of_resolves_single_module() -> None:
    """A registry with one module yields one plugin pointing back at it."""
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {"example": ("example-plugin", "1.0.0.0")})
    catalogue, resolver = _wire(fetcher)
    registry = _registry(catalogue)

    plugins = resolver.modules_of(registry)

    assert plugins is not None
    assert len(plugins) == 1
    plugin = plugins[0]
    assert plugin.artifact_id == "example-plugin"
    assert plugin.release == "1.0.0.0"
    assert plugin.parent_registry == REGISTRY
    assert resolver.parent_registry(plugin) is registry
    assert "example" in plugin.module_location.uri
    assert MANIFEST_FILE_NAME in plugin.module_location.uri
    assert "example-plugin" in plugin.description_location.uri
    assert "1.0.0.0" in plugin.description_location.uri
    assert DESCRIPTION_FILE_NAME in plugin.description_location.uri
    assert plugin.description.for_language().name == "Example-Plugin"


def test_modules_keep_registry_order() -> None:
    fetcher = FakeUriDataFetcher()
    serve_registry(
        fetcher,
        REGISTRY,
        "com.example",
        {"zeta": ("zeta", "2.0"), "alpha": ("alpha", "1.0"), "mid": ("mid", "0.1")},
    )
    catalogue, resolver = _wire(fetcher)

    plugins = resolver.modules_of(_registry(catalogue))

    assert plugins is not None
    assert [p.artifact_id for p in plugins] == ["zeta", "alpha", "mid"]


def test_registry_without_modules_gives_empty_list() -> None:
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {})
    catalogue, resolver = _wire(fetcher)

    assert resolver.modules_of(_registry(catalogue)) == []


def test_failing_modules_are_skipped() -> None:
    """Broken modules drop out while the rest still resolve."""
    fetcher = FakeUriDataFetcher()
    fetcher.add_response(
        REGISTRY,
        registry_xml("com.example", ["good", "no-manifest", "bad-manifest", "no-description"]),
    )
    add_module(fetcher, REGISTRY, "good", "good", "1.0")
    fetcher.add_response(
        registry_location_to_module_location(REGISTRY, "bad-manifest"), "<metadata/>"
    )
    fetcher.add_response(
        registry_location_to_module_location(REGISTRY, "no-description"),
        manifest_xml("orphan", "1.0"),
    )
    catalogue, resolver = _wire(fetcher)

    plugins = resolver.modules_of(_registry(catalogue))

    assert plugins is not None
    assert [p.artifact_id for p in plugins] == ["good"]


def test_modules_of_caches_per_wrapper() -> None:
    """Asking twice for the same wrapper fetches nothing new."""
    fetcher = SequenceFetcher()
    fetcher.add_response(registry_xml("com.example", ["example"]), ResponseCode.FETCH_COMPLETE)
    fetcher.add_response(manifest_xml("example-plugin", "1.0.0.0"), ResponseCode.FETCH_COMPLETE)
    fetcher.add_response(description_xml("Example"), ResponseCode.FETCH_COMPLETE)
    catalogue, resolver = _wire(fetcher)
    registry = _registry(catalogue)

    first = resolver.modules_of(registry)
    second = resolver.modules_of(registry)

    assert fetcher.index == 3
    assert first == second
    assert first is not second


def test_refresh_fetches_every_module_again() -> None:
    fetcher = SequenceFetcher()
    fetcher.add_response(registry_xml("com.example", ["example"]), ResponseCode.FETCH_COMPLETE)
    fetcher.add_response(manifest_xml("example-plugin", "1.0.0.0"), ResponseCode.FETCH_COMPLETE)
    fetcher.add_response(description_xml("Example"), ResponseCode.FETCH_COMPLETE)
    fetcher.add_response(manifest_xml("example-plugin", "1.1.0.0"), ResponseCode.FETCH_COMPLETE)
    fetcher.add_response(description_xml("Example"), ResponseCode.FETCH_COMPLETE)
    catalogue, resolver = _wire(fetcher)
    registry = _registry(catalogue)
    resolver.modules_of(registry)

    refreshed = resolver.refresh(registry)

    assert fetcher.index == 5
    assert refreshed is not None
    assert [p.release for p in refreshed] == ["1.1.0.0"]


def test_refetched_registry_misses_the_cache() -> None:
    """A new wrapper for the same location is resolved from scratch."""
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {"example": ("example-plugin", "1.0.0.0")})
    catalogue, resolver = _wire(fetcher)
    resolver.modules_of(_registry(catalogue))

    serve_registry(
        fetcher,
        REGISTRY,
        "com.example",
        {"example": ("example-plugin", "1.0.0.0"), "extra": ("extra", "0.1")},
    )
    catalogue.fetch_registry(REGISTRY)
    plugins = resolver.modules_of(_registry(catalogue))

    assert plugins is not None
    assert [p.artifact_id for p in plugins] == ["example-plugin", "extra"]


def test_clear_cache_forces_resolution() -> None:
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {"example": ("example-plugin", "1.0")})
    catalogue, resolver = _wire(fetcher)
    registry = _registry(catalogue)
    resolver.modules_of(registry)
    fetch_count = len(fetcher.fetched_locations)

    resolver.clear_cache()
    resolver.modules_of(registry)

    assert len(fetcher.fetched_locations) == fetch_count + 2


def test_parent_registry_is_none_after_removal() -> None:
    """Plugins of a removed registry are stale."""
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {"example": ("example-plugin", "1.0")})
    catalogue, resolver = _wire(fetcher)
    plugins = resolver.modules_of(_registry(catalogue))
    assert plugins is not None

    catalogue.remove_registry(REGISTRY)

    assert resolver.parent_registry(plugins[0]) is None


def test_all_plugins_spans_listed_registries() -> None:
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {"example": ("example-plugin", "1.0")})
    serve_registry(fetcher, SECOND, "com.mirror", {"mirror": ("mirror-plugin", "2.0")})
    catalogue, resolver = _wire(fetcher)
    catalogue.add_registry(SECOND)
    catalogue.add_registry("https://down.test/registry.xml")

    plugins = resolver.all_plugins()

    assert [p.artifact_id for p in plugins] == ["example-plugin", "mirror-plugin"]
    assert [p.parent_registry for p in plugins] == [REGISTRY, SECOND]


@pytest.mark.parametrize("last_updated", ["--5", "²"])
def test_module_with_malformed_timestamp_is_skipped(last_updated: str) -> None:
    fetcher = FakeUriDataFetcher()
    fetcher.add_response(REGISTRY, registry_xml("com.example", ["broken", "good"]))
    fetcher.add_response(
        registry_location_to_module_location(REGISTRY, "broken"),
        "<metadata><artifactId>broken</artifactId><versioning><release>1.0</release>"
        f"<lastUpdated>{last_updated}</lastUpdated></versioning></metadata>",
    )
    add_module(fetcher, REGISTRY, "good", "good", "1.0")
    catalogue, resolver = _wire(fetcher)

    plugins = resolver.modules_of(_registry(catalogue))

    assert plugins is not None
    assert [p.artifact_id for p in plugins] == ["good"]


def test_cache_forgets_removed_registries() -> None:
    fetcher = FakeUriDataFetcher()
    serve_registry(fetcher, REGISTRY, "com.example", {"example": ("example-plugin", "1.0")})
    serve_registry(fetcher, SECOND, "com.mirror", {"mirror": ("mirror-plugin", "2.0")})
    catalogue, resolver = _wire(fetcher)
    catalogue.add_registry(SECOND)
    resolver.all_plugins()
    assert resolver.cached_locations == [REGISTRY, SECOND]

    catalogue.remove_registry(SECOND)
    resolver.all_plugins()

    assert resolver.cached_locations == [REGISTRY]
