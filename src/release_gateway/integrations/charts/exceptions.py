"""Chart resolution and loading exceptions."""

from __future__ import annotations

from release_gateway.exceptions import ReleaseGatewayError


class ChartError(ReleaseGatewayError):
    """Base exception for chart reference problems.

    These are raised before any backend call is made, so callers can tell
    a bad chart reference apart from an unavailable backend.

    Attributes:
        message: Human-readable error message.
        repo: Repository name from the chart reference.
        chart: Chart name from the chart reference.
        version: Requested chart version.
    """

    def __init__(
        self,
        message: str,
        repo: str | None = None,
        chart: str | None = None,
        version: str | None = None,
    ) -> None:
        super().__init__(message)
        self.repo = repo
        self.chart = chart
        self.version = version

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.repo and self.chart:
            ref = f"{self.repo}/{self.chart}"
            if self.version:
                ref += f"@{self.version}"
            return f"{self.message} [{ref}]"
        return self.message


class ChartRepositoryError(ChartError):
    """Raised when a repository is unknown, unreachable or serves bad data."""

    def __init__(
        self,
        message: str,
        repo: str | None = None,
        chart: str | None = None,
        version: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message, repo=repo, chart=chart, version=version)
        self.original_error = original_error


class ChartNotFoundError(ChartError):
    """Raised when a repository has no matching chart or chart version."""


class ChartLoadError(ChartError):
    """Raised when a downloaded chart archive cannot be read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message=message)
        self.path = path

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.path:
            return f"{self.message} [archive: {self.path}]"
        return self.message
