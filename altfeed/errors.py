"""Errors raised along the fetch, parse and cache chain."""

from typing import Optional


class FeedError(Exception):
    """Base class for every failure while producing a feed."""


class TransportError(FeedError):
    """The upstream request failed at the network level."""


class UpstreamStatusError(FeedError):
    """Upstream answered with something other than 200 OK."""

    def __init__(self, status_code: int, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"http request was not OK: status {status_code}")


class BodyReadError(FeedError):
    """The upstream response body could not be read to the end."""


class ParseError(FeedError):
    """The document is not a well-formed Atom feed."""


class SerializeError(FeedError):
    """The feed could not be written back out as XML."""


class CacheCorruptionError(FeedError):
    """A cached snapshot exists but no longer parses."""
