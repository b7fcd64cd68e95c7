"""Production implementation of UriDataFetcher using httpx and the filesystem."""

import logging
from types import TracebackType

import httpx

from plugin_index.core.fetcher.abc import FetchResult, UriDataFetcher
from plugin_index.core.location import Location
from plugin_index.core.response import ResponseCode

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=5.0)

_FETCH_ERROR = FetchResult(content=None, code=ResponseCode.FETCH_ERROR)


class RealUriDataFetcher(UriDataFetcher):
    """Production implementation.

    file:// locations are read from disk; http(s) locations go through a
    synchronous httpx client. Redirects are not followed and nothing is
    retried. Every failure is logged and reported as FETCH_ERROR.
    """

    def __init__(
        self,
        *,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Create fetcher.

        Args:
            timeout: httpx timeout applied to every request
            client: Preconfigured client (e.g. with a mock transport). If None,
                one is created on first HTTP fetch.
        """
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=False)
        return self._client

    def fetch(self, location: Location) -> FetchResult:
        logger.debug("Fetching %s", location)
        if location.is_file:
            return self._fetch_file(location)
        return self._fetch_http(location)

    def _fetch_file(self, location: Location) -> FetchResult:
        path = location.to_path()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return _FETCH_ERROR
        return FetchResult(content=content, code=ResponseCode.FETCH_COMPLETE)

    def _fetch_http(self, location: Location) -> FetchResult:
        try:
            response = self._get_client().get(location.uri)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", location, e)
            return _FETCH_ERROR

        if not response.is_success:
            logger.warning("Request to %s returned HTTP %d", location, response.status_code)
            return _FETCH_ERROR

        try:
            content = response.text
        except UnicodeDecodeError as e:
            logger.warning("Response from %s is not valid text: %s", location, e)
            return _FETCH_ERROR
        return FetchResult(content=content, code=ResponseCode.FETCH_COMPLETE)

    def close(self) -> None:
        """Close the underlying HTTP client, if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "RealUriDataFetcher":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
