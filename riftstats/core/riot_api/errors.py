"""Custom error classes for Riot API client."""

from typing import Any, Dict, Optional


class RiotAPIError(Exception):
    """Base exception for Riot API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        """
        Initialize RiotAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 401, 403, 404, 429, 503, etc.)
            body: Raw response body returned by the API, if any
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.body: Any = body
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"Riot API Error {self.status_code}: {self.message}"
        return f"Riot API Error: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "body": self.body,
        }

    def user_message(self) -> str:
        """Message suitable for showing to an end user."""
        if self.is_not_found():
            return "Riot account not found. Check gameName/tagLine and region."
        if self.is_auth_error():
            return "Riot API key is invalid or expired. Update your RIOT_API_KEY."
        if self.is_rate_limit():
            return "Rate limited (429). Please wait a bit and try again."
        if self.is_server_error():
            return "Riot API server error. Please try again later."
        if self.status_code:
            return f"Riot API request failed: {self.status_code}"
        return "Riot API request failed."

    # Helper methods for error type checking
    def is_rate_limit(self) -> bool:
        """Check if this is a rate limit error (429)."""
        return self.status_code == 429

    def is_not_found(self) -> bool:
        """Check if this is a not found error (404)."""
        return self.status_code == 404

    def is_auth_error(self) -> bool:
        """Check if this is an authentication/authorization error (401, 403)."""
        return self.status_code in (401, 403)

    def is_server_error(self) -> bool:
        """Check if this is a server error (5xx)."""
        return self.status_code is not None and self.status_code >= 500


class TransportError(RiotAPIError):
    """Connection or timeout failure - the caller may retry."""

    pass


class UpstreamClientError(RiotAPIError):
    """Any 4xx response from the Riot API."""

    pass


class BadRequestError(UpstreamClientError):
    """Bad request (400) - invalid parameters."""

    pass


class AuthenticationError(UpstreamClientError):
    """Authentication error (401) - invalid or expired API key."""

    pass


class ForbiddenError(UpstreamClientError):
    """Forbidden error (403) - insufficient permissions."""

    pass


class NotFoundError(UpstreamClientError):
    """Not found error (404) - resource doesn't exist."""

    pass


class RateLimitError(UpstreamClientError):
    """Rate limit error (429) - can be retried after cooldown."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = 429,
        body: Any = None,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body)
        self.retry_after: Optional[float] = retry_after

    def __str__(self) -> str:
        if self.retry_after:
            return f"Rate Limit Error {self.status_code}: {self.message} (Retry after: {self.retry_after}s)"
        return super().__str__()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["retry_after"] = self.retry_after
        return data


class UpstreamServerError(RiotAPIError):
    """Any 5xx response from the Riot API."""

    pass


class ServiceUnavailableError(UpstreamServerError):
    """Service unavailable (503) - Riot servers down."""

    pass


class ParseError(RiotAPIError):
    """Raw document has no recognizable shape."""

    pass


class MatchFetchError(RiotAPIError):
    """A single match failed during a fan-out, failing the whole batch."""

    def __init__(self, match_id: str, cause: Exception) -> None:
        super().__init__(
            f"Failed to load match {match_id}: {cause}",
            status_code=getattr(cause, "status_code", None),
            body=getattr(cause, "body", None),
        )
        self.match_id: str = match_id
        self.cause: Exception = cause

    def user_message(self) -> str:
        if isinstance(self.cause, RiotAPIError):
            return self.cause.user_message()
        return super().user_message()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["match_id"] = self.match_id
        data["cause"] = self.cause.__class__.__name__
        return data


_CLIENT_ERRORS = {
    400: (BadRequestError, "Invalid request parameters"),
    401: (AuthenticationError, "Invalid API key"),
    403: (ForbiddenError, "Access forbidden"),
    404: (NotFoundError, "Resource not found"),
}


def error_for_status(
    status: int, body: Any = None, retry_after: Optional[float] = None
) -> RiotAPIError:
    """Build the typed error matching a non-2xx HTTP status."""
    if status == 429:
        return RateLimitError(
            "Rate limit exceeded", status_code=status, body=body, retry_after=retry_after
        )
    if status in _CLIENT_ERRORS:
        error_cls, message = _CLIENT_ERRORS[status]
        return error_cls(message, status_code=status, body=body)
    if 400 <= status < 500:
        return UpstreamClientError(f"Client error {status}", status_code=status, body=body)
    if status == 503:
        return ServiceUnavailableError("Service unavailable", status_code=status, body=body)
    if status >= 500:
        return UpstreamServerError(f"Server error {status}", status_code=status, body=body)
    return RiotAPIError(f"Unexpected status {status}", status_code=status, body=body)
