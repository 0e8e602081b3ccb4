"""Release backend custom exceptions."""

from __future__ import annotations

from typing import Any

from release_gateway.exceptions import ReleaseGatewayError


class BackendError(ReleaseGatewayError):
    """Base exception for release backend RPC errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code returned by the backend (if any).
        response_body: Parsed error body returned by the backend (if any).
        method: The RPC method that was called.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        method: str | None = None,
    ) -> None:
        """Initialize BackendError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the backend.
            response_body: Parsed error body from the backend.
            method: The RPC method that was called.
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.method = method

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.method:
            parts.append(f"[method: {self.method}]")
        return " ".join(parts)


class BackendConnectionError(BackendError):
    """Raised when the backend cannot be reached.

    This includes refused connections, DNS failures and transport timeouts.
    """

    def __init__(
        self,
        message: str = "Failed to connect to release backend",
        method: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message, method=method)
        self.original_error = original_error


class BackendAuthError(BackendError):
    """Raised when the backend rejects the gateway's credentials (401/403)."""

    def __init__(
        self,
        message: str = "Authentication to release backend failed",
        status_code: int | None = 401,
        response_body: dict[str, Any] | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
            method=method,
        )


class BackendNotFoundError(BackendError):
    """Raised when the backend reports a missing release (404)."""

    def __init__(
        self,
        message: str = "Release not found",
        response_body: dict[str, Any] | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            response_body=response_body,
            method=method,
        )


class BackendValidationError(BackendError):
    """Raised when the backend rejects a request as invalid (400)."""

    def __init__(
        self,
        message: str = "Invalid release request",
        response_body: dict[str, Any] | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            response_body=response_body,
            method=method,
        )
