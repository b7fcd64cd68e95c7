"""Abstract base class for fetching registry documents."""

from abc import ABC, abstractmethod
from typing import NamedTuple

from plugin_index.core.location import Location
from plugin_index.core.response import ResponseCode


class FetchResult(NamedTuple):
    """Outcome of one fetch.

    code is FETCH_COMPLETE or FETCH_ERROR. content is None on error and must
    not be parsed.
    """

    content: str | None
    code: ResponseCode

    @property
    def ok(self) -> bool:
        return self.code == ResponseCode.FETCH_COMPLETE


class UriDataFetcher(ABC):
    """Abstract interface for retrieving the text at a location.

    All implementations (real and fake) must implement this interface.
    Implementations perform a single blocking round-trip per call with no
    retries; retry policy belongs to the caller.
    """

    @abstractmethod
    def fetch(self, location: Location) -> FetchResult:
        """Fetch the document at location as text.

        Args:
            location: Absolute location to retrieve

        Returns:
            FetchResult with the text and FETCH_COMPLETE, or None and
            FETCH_ERROR. Implementations never raise for transport failures.
        """
        ...
