# ABOUTME: Exception types raised by the validation, fetch, and geolocation stages.
# ABOUTME: Each carries a machine-readable reason plus the message shown to the user.

from enum import StrEnum


class InvalidQueryReason(StrEnum):
    EMPTY = "empty"
    TOO_SHORT = "too_short"
    INVALID_CHARACTERS = "invalid_characters"


class FetchFailure(StrEnum):
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"
    DECODE_FAILURE = "decode_failure"


class InvalidQueryError(ValueError):
    """Raised when free-text location input fails validation."""

    def __init__(self, reason: InvalidQueryReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class FetchError(RuntimeError):
    """Raised when a weather provider request cannot be turned into a result."""

    def __init__(self, reason: FetchFailure, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class GeolocationUnavailable(RuntimeError):
    """Raised by a geolocator when no position can be obtained."""
