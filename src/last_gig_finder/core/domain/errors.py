"""Domain errors.

"No match" is never an error: lookups return `None` for that. These exceptions
cover the failures a search must report to the user.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    SERVICE_ERROR = "SERVICE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    SETUP_ERROR = "SETUP_ERROR"


class LastGigError(Exception):
    """Base error with a code and a user-safe message."""

    code: ErrorCode = ErrorCode.SERVICE_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidCredential(LastGigError):
    """setlist.fm rejected the API key (HTTP 401)."""

    code = ErrorCode.INVALID_CREDENTIAL

    def __init__(self) -> None:
        super().__init__("Invalid API key. Please check your Setlist.fm API key.")


class ServiceError(LastGigError):
    """Non-success response other than an authorization failure."""

    code = ErrorCode.SERVICE_ERROR

    def __init__(self, status_code: int) -> None:
        super().__init__(f"API error: {status_code}")
        self.status_code = status_code


class NetworkError(LastGigError):
    """Transport failure (DNS, TLS, timeout, ...)."""

    code = ErrorCode.NETWORK_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"Network error: {detail}")
        self.detail = detail


class SetupError(LastGigError):
    """Settings could not be completed from the user's input."""

    code = ErrorCode.SETUP_ERROR
