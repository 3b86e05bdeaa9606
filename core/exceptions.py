"""
Custom Exception Classes for the Skin API.

This module defines the error taxonomy of the skin pipeline. Every failure the
API can report to a client has exactly one class here, and every class maps to
exactly one HTTP status and plain-text body.

Key Components:
- `SkinAPIException`: The base class. It carries a message, an error code, a
  status code and an optional `details` dictionary with request context.
- Specific Exception Classes: `InputMissingError`, `InputInvalidError`,
  `IdentityNotFoundError`, `IdentityLookupError`, `ImageFetchError` and
  `ProcessingError` describe the fail-fast outcomes of the pipeline.
- `ProfileUnavailableError`: The one fail-soft outcome. Profile stages return
  it, the skin selector absorbs it into the default skin, and it never
  reaches a client.
- `to_error_response`: Maps an exception onto the plain-text response the
  HTTP surface returns.

Architectural Design:
- Errors as Values: Pipeline stages do not raise these exceptions. They return
  them inside a `StageResult` so the orchestrator can short-circuit with an
  early return. Raising is still supported, and the error handling middleware
  maps anything that escapes a route through the same `to_error_response`.
- Fixed Bodies: The client-facing message of each class is a constant; the
  variable request context goes into `details`, which is logged but not sent.
"""

from typing import Optional, Dict, Any
from fastapi.responses import PlainTextResponse


class SkinAPIException(Exception):
    """Base exception class for Skin API"""

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: str = "SKIN_API_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InputMissingError(SkinAPIException):
    """Raised when no player query was supplied"""

    status_code = 400

    def __init__(self):
        super().__init__(
            "No valid player name/UUID or none provided",
            "INPUT_MISSING",
        )


class InputInvalidError(SkinAPIException):
    """Raised when the player query is neither a username nor a UUID"""

    status_code = 400

    def __init__(self, query: str):
        super().__init__(
            "Invalid player name/UUID format",
            "INPUT_INVALID",
            {"query": query},
        )


class IdentityNotFoundError(SkinAPIException):
    """Raised when the lookup service has no account for a username"""

    status_code = 404

    def __init__(self, username: str):
        super().__init__(
            "Player not found",
            "IDENTITY_NOT_FOUND",
            {"username": username},
        )


class IdentityLookupError(SkinAPIException):
    """Raised when the username lookup call itself fails"""

    status_code = 400

    def __init__(self, username: str, reason: str):
        super().__init__(
            "An error occurred while fetching UUID",
            "IDENTITY_LOOKUP_FAILED",
            {"username": username, "reason": reason},
        )


class ProfileUnavailableError(SkinAPIException):
    """Profile could not be fetched or parsed. Absorbed by the skin selector."""

    status_code = 502

    def __init__(self, uuid: str, reason: str):
        super().__init__(
            f"Profile unavailable for {uuid}: {reason}",
            "PROFILE_UNAVAILABLE",
            {"uuid": uuid, "reason": reason},
        )


class ImageFetchError(SkinAPIException):
    """Raised when the skin image cannot be downloaded or read"""

    status_code = 500

    def __init__(self, url: str, reason: str):
        super().__init__(
            "Failed to fetch skin image",
            "IMAGE_FETCH_FAILED",
            {"url": url, "reason": reason},
        )


class ProcessingError(SkinAPIException):
    """Raised for any unexpected failure while handling a request"""

    status_code = 400

    def __init__(self, reason: str = ""):
        super().__init__(
            "An error occurred while processing the request",
            "PROCESSING_ERROR",
            {"reason": reason} if reason else None,
        )


def to_error_response(exc: SkinAPIException) -> PlainTextResponse:
    """Convert a SkinAPIException to the plain-text response sent to clients"""
    return PlainTextResponse(exc.message, status_code=exc.status_code)
