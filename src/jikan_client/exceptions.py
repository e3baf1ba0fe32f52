"""Exception hierarchy for jikan_client.

Errors raised by this package inherit from :class:`JikanClientError`.
Network and HTTP-status failures are *not* wrapped: they surface as the
original :mod:`httpx` exceptions so callers can inspect the request and
response that failed. :data:`TransportError` is an alias for their common
base class.

Subclass hierarchy::

    JikanClientError
    +-- ValidationError   (path parameter has no placeholder)
    +-- ConfigError       (invalid environment configuration)
"""

from __future__ import annotations

import httpx

TransportError = httpx.HTTPError
"""Base class of every transport-level failure (connection, timeout, non-2xx status)."""


class JikanClientError(Exception):
    """Base exception for all jikan_client errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JikanClientError):
    """Raised when a path parameter has no matching ``{name}`` placeholder.

    Raised before any request is built, so a failing call never reaches the
    network.

    Attributes:
        parameter: The name of the offending path parameter.
    """

    def __init__(self, parameter: str):
        super().__init__(f'Path does not contain "{parameter}" parameter.')
        self.parameter = parameter


class ConfigError(JikanClientError):
    """Raised for unparseable configuration values (e.g. a non-numeric ``JIKAN_CACHE_TTL``)."""
