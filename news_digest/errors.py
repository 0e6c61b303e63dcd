"""Error types raised by the search and page clients.

None of these are retried: each one aborts the current run and is surfaced
to the caller as-is.
"""

from typing import Optional


class NewsDigestError(Exception):
    """Base class for every error this package raises on purpose."""


class InvalidRequest(NewsDigestError):
    """Input has the wrong shape or is out of range."""


class InvalidQuery(NewsDigestError):
    """A category sanitizes to an empty search query."""


class RemoteError(NewsDigestError):
    """A remote API answered with a non-success status.

    ``service`` names the remote system ("Naver", "Notion") so the message
    tells the caller which side failed.
    """

    def __init__(self, service: str, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.service = service
        self.status = status


class AuthError(RemoteError):
    """Credentials were rejected (HTTP 401)."""


class NotFound(RemoteError):
    """The target page or block does not exist or is not shared (HTTP 404)."""


class RateLimited(RemoteError):
    """The remote API throttled the request (HTTP 429)."""


class Unavailable(RemoteError):
    """The request never got an HTTP answer (DNS, connection, timeout)."""


def http_status(exc: NewsDigestError) -> int:
    """Status code an HTTP handler should answer with for ``exc``."""
    if isinstance(exc, (InvalidRequest, InvalidQuery)):
        return 400
    if isinstance(exc, RateLimited):
        return 429
    if isinstance(exc, Unavailable):
        return 503
    return 502
