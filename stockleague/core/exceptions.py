"""Custom exceptions raised at caller-facing seams.

The reconciliation core never raises for malformed input; these are for
callers that explicitly ask for an exception (``raise_for_error``) or that
misuse the prediction lifecycle.
"""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base exception with a structured error payload."""

    error_code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a problem+json style payload."""
        return {
            "error": self.error_code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }


class ValidationError(AppException):
    """Validation failed."""

    error_code = "VALIDATION_ERROR"
    message = "Validation failed"


class RateLimitError(AppException):
    """Upstream rate limit or quota exceeded."""

    error_code = "RATE_LIMIT_EXCEEDED"
    message = "Too many requests. Please try again later."


class ExternalServiceError(AppException):
    """External service error."""

    error_code = "EXTERNAL_SERVICE_ERROR"
    message = "External service temporarily unavailable"


class PredictionStateError(AppException):
    """Prediction lifecycle transition not allowed."""

    error_code = "PREDICTION_STATE_ERROR"
    message = "Prediction is already resolved"
