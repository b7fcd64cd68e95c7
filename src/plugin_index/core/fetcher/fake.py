"""In-memory fake implementation of UriDataFetcher for testing."""

from plugin_index.core.fetcher.abc import FetchResult, UriDataFetcher
from plugin_index.core.location import Location, as_location
from plugin_index.core.response import ResponseCode


class FakeUriDataFetcher(UriDataFetcher):
    """Deterministic fake keyed by normalized location.

    Locations without a configured response return FETCH_ERROR, like an
    unreachable host would.
    """

    def __init__(self, *, responses: dict[str, str] | None = None) -> None:
        """Create FakeUriDataFetcher with pre-configured documents.

        Args:
            responses: Mapping of location text -> document text. Each entry
                answers with FETCH_COMPLETE.
        """
        self._responses: dict[Location, FetchResult] = {}
        self._fetched_locations: list[Location] = []
        for location, content in (responses or {}).items():
            self.add_response(location, content)

    @property
    def fetched_locations(self) -> list[Location]:
        """Read-only access to requested locations, in call order, for test assertions."""
        return self._fetched_locations

    def add_response(
        self,
        location: Location | str,
        content: str | None,
        code: ResponseCode = ResponseCode.FETCH_COMPLETE,
    ) -> None:
        """Register (or replace) the answer for a location."""
        if code == ResponseCode.FETCH_ERROR:
            content = None
        self._responses[as_location(location)] = FetchResult(content=content, code=code)

    def fetch(self, location: Location) -> FetchResult:
        self._fetched_locations.append(location)
        return self._responses.get(
            location, FetchResult(content=None, code=ResponseCode.FETCH_ERROR)
        )
