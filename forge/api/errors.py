"""Error types and logging for API endpoints."""

import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """JSON error body for API endpoints."""

    error: str  # User-friendly message
    code: str  # Machine-readable error code
    detail: str | None = None  # Optional technical detail


class ErrorCode:
    """Machine-readable error codes."""

    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # OAuth errors
    OAUTH_NOT_CONFIGURED = "OAUTH_NOT_CONFIGURED"
    UPSTREAM_AUTH_FAILURE = "UPSTREAM_AUTH_FAILURE"

    # Shopify Admin API errors
    UPSTREAM_API_REJECTION = "UPSTREAM_API_REJECTION"

    # Profile store errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class BridgeError(Exception):
    """Base error raised by handlers and converted to an HTTP response."""

    status_code = 500
    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, code=self.code, detail=self.detail)


class InvalidRequest(BridgeError):
    """A required query or body field is missing or malformed."""

    status_code = 400
    code = ErrorCode.INVALID_REQUEST


class OAuthNotConfigured(BridgeError):
    """Shopify client credentials are not set."""

    code = ErrorCode.OAUTH_NOT_CONFIGURED


class UpstreamAuthFailure(BridgeError):
    """Shopify rejected the code exchange or could not be reached."""

    code = ErrorCode.UPSTREAM_AUTH_FAILURE


class StoreUnavailable(BridgeError):
    """The profile store could not be written."""

    code = ErrorCode.STORE_UNAVAILABLE


class UpstreamApiRejection(BridgeError):
    """Shopify rejected an Admin API call."""

    code = ErrorCode.UPSTREAM_API_REJECTION


def log_error(
    error: BridgeError,
    user_id: str | None = None,
    endpoint: str | None = None,
    exc: Exception | None = None,
) -> None:
    """Log an API error with its context."""
    log_context = {
        "error_code": error.code,
        "user_id": user_id,
        "endpoint": endpoint,
    }

    if exc:
        logger.error(
            "API error: %s (code=%s, user=%s, endpoint=%s)",
            error.message,
            error.code,
            user_id,
            endpoint,
            exc_info=exc,
            extra=log_context,
        )
    else:
        logger.warning(
            "API error: %s (code=%s, user=%s, endpoint=%s)",
            error.message,
            error.code,
            user_id,
            endpoint,
            extra=log_context,
        )
