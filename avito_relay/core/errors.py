from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """An expected failure that maps onto a JSON error response."""

    status_code: int = 500
    error: str = "Internal server error"

    def body(self) -> dict[str, Any]:
        return {"error": self.error}


class MissingFieldsError(RelayError):
    status_code = 400
    error = "Missing required fields"


class CredentialLookupError(RelayError):
    """Reading the user's credentials failed for a reason other than not-found.

    The store error is kept for logging and never rendered to the caller.
    """

    status_code = 500
    error = "Failed to get user credentials"

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__(self.error)
        self.cause = cause


class NoCredentialsError(RelayError):
    status_code = 400
    error = "No API credentials found"


class UpstreamSendError(RelayError):
    """The messaging API answered with a non-success status."""

    error = "Failed to send message to Avito"

    def __init__(self, status_code: int, details: str) -> None:
        super().__init__(self.error)
        self.status_code = status_code
        self.details = details

    def body(self) -> dict[str, Any]:
        return {"error": self.error, "details": self.details}
