"""Error taxonomy for catalog and zone fetches."""

from __future__ import annotations


class ZoneError(Exception):
    """Base class for every failure surfaced by the zone catalog."""


class FetchError(ZoneError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error! status: {status_code}")


class NetworkError(ZoneError):
    """The request never produced a response (DNS, refused, timeout...)."""


class ParseError(ZoneError):
    """The response body was not the shape we expected."""


class ZoneLoadError(ZoneError):
    """A zone's content could not be loaded into the viewer.

    The message is user-facing and is shown as-is in the alert.
    """
