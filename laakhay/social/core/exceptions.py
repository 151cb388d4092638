"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.envelope import ApiErrorDetail, ResponseEnvelope


class SocialError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(SocialError):
    """No usable response was obtained from the server.

    Raised for connection-level failures, timeouts, and non-2xx responses
    whose body cannot be parsed. Nothing was committed server-side as far as
    the client can tell, so repeating the same logical step is safe.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiError(SocialError):
    """Structured API-level error list returned by the server.

    The decoded error payload is kept intact on ``errors``. When the failure
    came from a 2xx response (errors without any data), ``envelope`` holds
    the decoded envelope as well.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[ApiErrorDetail] | None = None,
        envelope: ResponseEnvelope | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []
        self.envelope = envelope


class RateLimitError(ApiError):
    """Rate limit exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str,
        retry_after: float = 60.0,
        errors: list[ApiErrorDetail] | None = None,
    ) -> None:
        super().__init__(message, status_code=429, errors=errors)
        self.retry_after = retry_after


class ProtocolViolation(SocialError):
    """Local precondition failure: a caller programming error.

    Never retried and never attributed to the network.
    """

    def __init__(self, message: str, state: Any = None) -> None:
        super().__init__(message)
        self.state = state


class PaginationError(SocialError):
    """Server returned a next token that does not advance the cursor."""

    def __init__(self, message: str, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


class ConfigurationError(SocialError):
    """Invalid client settings or request parameters."""

    pass
