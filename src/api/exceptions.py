# This file defines the typed failures raised by the storage and service layers.
# Routers never inspect message text; error handlers map each type to one HTTP status.

from __future__ import annotations


class SubscriptionServiceError(Exception):
    """Base class for expected subscription service failures."""

    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(SubscriptionServiceError):
    """Malformed client input (bad id, missing field, malformed UUID)."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(SubscriptionServiceError):
    """No row matched an id-addressed operation."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, message: str = "Subscription not found") -> None:
        super().__init__(message)


class StorageError(SubscriptionServiceError):
    """Connection or query failure; the message is safe to show clients."""

    status_code = 500
    error_code = "STORAGE_ERROR"
