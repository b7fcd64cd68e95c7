"""Registry catalogue: the set of known registries and their parsed manifests.

Registry locations are persisted through the preference port as a JSON array
under REGISTRIES_KEY. Each location moves through
UNREGISTERED -> REGISTERED -> FETCHED | FETCH_FAILED, and back to UNREGISTERED
on removal. Only FETCHED registries are listed.
"""

import json
import logging

from plugin_index.core.constants import REGISTRIES_KEY
from plugin_index.core.exceptions import InvalidLocationError, ManifestParseError
from plugin_index.core.fetcher.abc import UriDataFetcher
from plugin_index.core.location import Location, as_location
from plugin_index.core.parsing import parse_registry
from plugin_index.core.preferences.abc import Preferences
from plugin_index.core.response import ResponseCode
from plugin_index.core.types import RegistryState, RegistryWrapper

logger = logging.getLogger(__name__)


class RegistryCatalogue:
    """Tracks registry locations and the registries fetched from them.

    Not thread-safe: callers sharing one instance must serialize access.
    """

    def __init__(
        self,
        fetcher: UriDataFetcher,
        preferences: Preferences,
        *,
        default_location: Location | str,
    ) -> None:
        """Create catalogue. Nothing is loaded until first use.

        Args:
            fetcher: Fetch port used to retrieve registry manifests
            preferences: Preference port holding the persisted location list
            default_location: Registry seeded into the list the first time the
                catalogue runs against empty preferences
        """
        self._fetcher = fetcher
        self._preferences = preferences
        self._default_location = as_location(default_location)
        self._locations: list[Location] = []
        self._wrappers: dict[Location, RegistryWrapper] = {}
        self._failed: set[Location] = set()
        self._initialized = False

    def initialize(self) -> None:
        """Load persisted locations and fetch every registry.

        Safe to call again to force a full reload: all wrappers are rebuilt.
        """
        self._locations = self._load_locations()
        self._wrappers = {}
        self._failed = set()
        self._initialized = True

        for location in self._locations:
            self._fetch_and_store(location)

        logger.info(
            "Loaded %d of %d registries", len(self._wrappers), len(self._locations)
        )

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    def list_registries(self) -> list[RegistryWrapper]:
        """Get fetched and parsed registries in persisted order.

        Registries whose last fetch or parse failed are left out.
        """
        self._ensure_initialized()
        return [self._wrappers[loc] for loc in self._locations if loc in self._wrappers]

    def locations(self) -> list[Location]:
        """Get every tracked location, including ones that failed to fetch."""
        self._ensure_initialized()
        return list(self._locations)

    def get_registry(self, location: Location | str) -> RegistryWrapper | None:
        """Get the current wrapper for location, or None if not fetched."""
        self._ensure_initialized()
        return self._wrappers.get(as_location(location))

    def state_of(self, location: Location | str) -> RegistryState:
        """Get where location currently sits in the registry lifecycle."""
        self._ensure_initialized()
        loc = as_location(location)
        if loc not in self._locations:
            return RegistryState.UNREGISTERED
        if loc in self._wrappers:
            return RegistryState.FETCHED
        if loc in self._failed:
            return RegistryState.FETCH_FAILED
        return RegistryState.REGISTERED

    def add_registry(self, location: Location | str) -> ResponseCode:
        """Track a new registry location and fetch it.

        Args:
            location: Registry manifest location

        Returns:
            REGISTRY_ALREADY_PRESENT if the normalized location is already
            tracked (nothing is fetched or persisted). Otherwise
            REGISTRY_ADDED, even when the fetch fails: the location stays
            persisted for a later retry but is not listed until it fetches.

        Raises:
            InvalidLocationError: If location text cannot be parsed
        """
        self._ensure_initialized()
        loc = as_location(location)
        if loc in self._locations:
            logger.debug("Registry %s already present", loc)
            return ResponseCode.REGISTRY_ALREADY_PRESENT

        self._locations.append(loc)
        self._save_locations(self._locations)
        logger.info("Added registry %s", loc)

        self._fetch_and_store(loc)
        return ResponseCode.REGISTRY_ADDED

    def remove_registry(self, location: Location | str) -> ResponseCode:
        """Stop tracking a registry location.

        Returns:
            REGISTRY_REMOVED, or REGISTRY_NOT_FOUND if it was not tracked

        Raises:
            InvalidLocationError: If location text cannot be parsed
        """
        self._ensure_initialized()
        loc = as_location(location)
        if loc not in self._locations:
            return ResponseCode.REGISTRY_NOT_FOUND

        self._locations.remove(loc)
        self._wrappers.pop(loc, None)
        self._failed.discard(loc)
        self._save_locations(self._locations)
        logger.info("Removed registry %s", loc)
        return ResponseCode.REGISTRY_REMOVED

    def fetch_registry(self, location: Location | str) -> ResponseCode:
        """Re-fetch one tracked registry.

        Returns:
            FETCH_COMPLETE or FETCH_ERROR, or REGISTRY_NOT_FOUND if the
            location is not tracked
        """
        self._ensure_initialized()
        loc = as_location(location)
        if loc not in self._locations:
            return ResponseCode.REGISTRY_NOT_FOUND
        return self._fetch_and_store(loc)

    def _fetch_and_store(self, location: Location) -> ResponseCode:
        result = self._fetcher.fetch(location)
        if not result.ok or result.content is None:
            logger.warning("Could not fetch registry %s", location)
            self._mark_failed(location)
            return ResponseCode.FETCH_ERROR

        try:
            registry = parse_registry(result.content, location.uri)
        except ManifestParseError as e:
            logger.warning("Ignoring registry %s: %s", location, e.reason)
            self._mark_failed(location)
            return ResponseCode.FETCH_ERROR

        self._wrappers[location] = RegistryWrapper(
            location=location, registry=registry, raw=result.content
        )
        self._failed.discard(location)
        logger.debug("Registry %s lists %d modules", location, len(registry.modules))
        return ResponseCode.FETCH_COMPLETE

    def _mark_failed(self, location: Location) -> None:
        self._wrappers.pop(location, None)
        self._failed.add(location)

    def _load_locations(self) -> list[Location]:
        """Read the persisted location list, seeding the default on first use."""
        if not self._preferences.has_key(REGISTRIES_KEY):
            seeded = [self._default_location]
            self._save_locations(seeded)
            return seeded

        raw = self._preferences.get_string(REGISTRIES_KEY, "[]")
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Persisted registry list is not valid JSON, ignoring it")
            return []
        if not isinstance(entries, list):
            logger.warning("Persisted registry list is not an array, ignoring it")
            return []

        locations: list[Location] = []
        for entry in entries:
            if not isinstance(entry, str):
                logger.warning("Ignoring non-string registry entry %r", entry)
                continue
            try:
                loc = Location.parse(entry)
            except InvalidLocationError as e:
                logger.warning("Ignoring persisted registry: %s", e)
                continue
            if loc not in locations:
                locations.append(loc)
        return locations

    def _save_locations(self, locations: list[Location]) -> None:
        self._preferences.set_string(REGISTRIES_KEY, json.dumps([loc.uri for loc in locations]))
