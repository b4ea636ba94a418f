"""Exceptions raised by the Gelbooru client.

Every error derives from GelbooruError and from the builtin exception a
caller would naturally catch for that failure (ValueError for bad input or
bad data, ConnectionError for network trouble).
"""

from typing import Optional


class GelbooruError(Exception):
    """Base class for all client errors."""


class UrlConstructionError(GelbooruError, ValueError):
    """The request URL assembled from the query parameters is not usable."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not build request URL ({reason}): {url}")
        self.url = url
        self.reason = reason


class TransportError(GelbooruError, ConnectionError):
    """The HTTP round trip failed.

    Attributes:
        status_code: HTTP status returned by the server, or None when no
            response was received (DNS, TLS, timeout, connection reset).
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(GelbooruError, ValueError):
    """The response body does not match the expected envelope."""


class CredentialParseError(GelbooruError, ValueError):
    """The credential blob could not be split into a key and a user id."""


class MappingDefectError(GelbooruError, ValueError):
    """A decoded record holds a code outside the known vocabulary.

    Raised by the derived accessors (rating, tag type, creation time) so the
    caller can skip or report the record instead of crashing.
    """

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Unrecognized value for {field}: {value!r}")
        self.field = field
        self.value = value
