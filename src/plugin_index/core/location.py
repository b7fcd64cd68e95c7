"""Absolute, normalized addresses of registry resources."""

import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urljoin, urlsplit, urlunsplit
from urllib.request import url2pathname

from plugin_index.core.exceptions import InvalidLocationError

SUPPORTED_SCHEMES = frozenset({"http", "https", "file"})


def _normalize_path(path: str) -> str:
    """Collapse dot segments while keeping a trailing slash."""
    if not path:
        return "/"
    trailing = path.endswith(("/", "/.", "/.."))
    normalized = posixpath.normpath(path)
    # normpath keeps exactly two leading slashes (POSIX), URIs do not need them
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if trailing and normalized != "/":
        normalized += "/"
    return normalized


def _normalize_netloc(netloc: str) -> str:
    """Lowercase the host portion, leaving any userinfo untouched."""
    userinfo, sep, host = netloc.rpartition("@")
    return f"{userinfo}{sep}{host.lower()}"


@dataclass(frozen=True)
class Location:
    """Immutable absolute URI of a registry, module manifest or description.

    Construct with Location.parse(); equality and hashing use the normalized
    URI so two spellings of the same resource compare equal.
    """

    uri: str

    @staticmethod
    def parse(text: str) -> "Location":
        """Parse and normalize a URI or filesystem path.

        Args:
            text: http(s)/file URI, or a filesystem path (relative paths are
                resolved against the current directory)

        Returns:
            Normalized Location

        Raises:
            InvalidLocationError: If the text is empty or not a valid URI, uses
                an unsupported scheme, or lacks a host for http(s)
        """
        stripped = text.strip()
        if not stripped:
            raise InvalidLocationError(text, "location is empty")

        try:
            parts = urlsplit(stripped)
        except ValueError as e:
            raise InvalidLocationError(text, str(e)) from e

        # A one-letter scheme is a Windows drive, not a URI
        if len(parts.scheme) <= 1:
            return Location(Path(stripped).expanduser().resolve().as_uri())

        scheme = parts.scheme.lower()
        if scheme not in SUPPORTED_SCHEMES:
            raise InvalidLocationError(text, f"unsupported scheme '{parts.scheme}'")

        if scheme == "file":
            netloc = "" if parts.netloc.lower() in ("", "localhost") else parts.netloc
            if netloc:
                raise InvalidLocationError(text, "remote file hosts are not supported")
            path = _normalize_path(parts.path)
        else:
            if not parts.netloc:
                raise InvalidLocationError(text, "missing host")
            netloc = _normalize_netloc(parts.netloc)
            path = _normalize_path(parts.path)

        return Location(urlunsplit((scheme, netloc, path, parts.query, "")))

    @property
    def scheme(self) -> str:
        return urlsplit(self.uri).scheme

    @property
    def is_file(self) -> bool:
        return self.scheme == "file"

    def to_path(self) -> Path:
        """Convert a file:// location to a local filesystem path.

        Raises:
            ValueError: If this is not a file:// location
        """
        if not self.is_file:
            raise ValueError(f"Not a file location: {self.uri}")
        return Path(url2pathname(unquote(urlsplit(self.uri).path)))

    def join(self, *segments: str) -> "Location":
        """Resolve path segments relative to this location.

        Follows RFC 3986 reference resolution, so joining onto a document
        location (".../registry.xml") replaces the document name while joining
        onto a directory location (".../registry/") appends. Each segment is
        percent-quoted so it can never introduce extra path levels.

        Raises:
            InvalidLocationError: If a segment is empty, "." or ".."
        """
        for segment in segments:
            if segment in ("", ".", ".."):
                raise InvalidLocationError(segment, "path segment must be a plain name")
        relative = "/".join(quote(segment, safe="") for segment in segments)
        return Location.parse(urljoin(self.uri, relative))

    def __str__(self) -> str:
        return self.uri


def as_location(value: "Location | str") -> Location:
    """Accept either a Location or its text form."""
    if isinstance(value, Location):
        return value
    return Location.parse(value)
