"""Fetch port: retrieve registry documents by location.

This subpackage provides the UriDataFetcher abstraction with a production
implementation and an in-memory fake for tests.
"""

from plugin_index.core.fetcher.abc import FetchResult, UriDataFetcher
from plugin_index.core.fetcher.fake import FakeUriDataFetcher
from plugin_index.core.fetcher.real import RealUriDataFetcher

__all__ = [
    "FakeUriDataFetcher",
    "FetchResult",
    "RealUriDataFetcher",
    "UriDataFetcher",
]
