from __future__ import annotations

from typing import Any


class NeoIndexError(Exception):
    """Base class for every error raised by the index binding."""


class NotFound(NeoIndexError):
    """The named index does not exist on the server."""


class BadResponse(NeoIndexError):
    """The server answered with a status outside the operation's success set,
    or with a body that could not be decoded.
    """

    def __init__(self, status: int, body: Any = None, message: str | None = None):
        self.status = status
        self.body = body
        super().__init__(message or f"unexpected response status {status}")


class InvalidPath(NeoIndexError):
    """A composed location is not a valid URI, or a name would not stay one path segment."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"not a valid URI: {uri!r}")


class InvalidArgument(NeoIndexError, ValueError):
    """Caller misuse detected before any request is sent."""


class UnresolvedIndex(InvalidArgument):
    """The index has not been created or fetched, so it has no self location."""


class TransportError(NeoIndexError):
    """The request never completed. The httpx error is kept as ``__cause__``."""
