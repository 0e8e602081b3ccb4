"""Base exception shared by the gateway's integrations."""

from __future__ import annotations


class ReleaseGatewayError(Exception):
    """Base exception for failures while serving a release operation.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message
