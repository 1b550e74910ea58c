"""Failure types produced at the fetch boundary.

Every error carries a ``message`` that is safe to show to a user; transport
and parser details stay in the logs.
"""

from __future__ import annotations

GENERIC_FETCH_MESSAGE = "Failed to fetch past results"
INVALID_RESPONSE_MESSAGE = "Invalid response from server"
NETWORK_MESSAGE = "Unable to reach the speed test service"
MISSING_CENTER_MESSAGE = "Radius search requires your current location"
INVALID_RADIUS_MESSAGE = "Radius must be greater than zero"


class FetchError(Exception):
    kind = "fetch"

    def __init__(self, message: str = GENERIC_FETCH_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(FetchError):
    kind = "network"

    def __init__(self, message: str = NETWORK_MESSAGE) -> None:
        super().__init__(message)


class HTTPError(FetchError):
    kind = "http"

    def __init__(self, status: int, message: str = GENERIC_FETCH_MESSAGE) -> None:
        super().__init__(message)
        self.status = status


class ParseError(FetchError):
    kind = "parse"

    def __init__(self, message: str = INVALID_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class ValidationError(FetchError):
    """Raised before any request when the filter cannot be sent."""

    kind = "validation"
