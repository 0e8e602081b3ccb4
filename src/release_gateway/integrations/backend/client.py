"""HTTP client for the release backend's RPC gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from release_gateway.integrations.backend.exceptions import (
    BackendAuthError,
    BackendConnectionError,
    BackendError,
    BackendNotFoundError,
    BackendValidationError,
)

if TYPE_CHECKING:
    from release_gateway.integrations.backend.config import BackendConnectionConfig
    from release_gateway.integrations.backend.models import (
        BackendModel,
        GetReleaseContentRequest,
        GetReleaseStatusRequest,
        InstallReleaseRequest,
        ListReleasesRequest,
        RollbackReleaseRequest,
        UninstallReleaseRequest,
        UpdateReleaseRequest,
    )

logger = structlog.get_logger()


class ReleaseBackendClient:
    """Client for the release service exposed over JSON/HTTP.

    Every RPC is a ``POST`` of the request model's camelCase JSON to
    ``{base_url}{service_path}/{Method}``. Calls are synchronous and are
    never retried; a failed call surfaces immediately as a BackendError.

    Example:
        ```python
        from release_gateway.integrations.backend import (
            BackendConnectionConfig,
            ListReleasesRequest,
            ReleaseBackendClient,
        )

        config = BackendConnectionConfig(base_url="http://tiller:44134")
        with ReleaseBackendClient(config) as client:
            releases = client.list_releases(ListReleasesRequest(limit=10))
        ```
    """

    def __init__(self, connection_config: BackendConnectionConfig) -> None:
        """Initialize the backend client.

        Args:
            connection_config: Connection settings (URL, timeout, SSL, token).
        """
        self.connection_config = connection_config
        self._service_path = connection_config.service_path

        headers: dict[str, str] = {}
        if connection_config.token:
            headers["Authorization"] = f"Bearer {connection_config.token}"
            logger.debug("Backend client configured with bearer token")

        self._client = httpx.Client(
            base_url=connection_config.base_url,
            timeout=httpx.Timeout(connection_config.timeout),
            verify=connection_config.verify_ssl,
            headers=headers,
        )

        logger.info(
            "Release backend client initialized",
            base_url=connection_config.base_url,
            service_path=self._service_path,
        )

    def _handle_response(self, response: httpx.Response, method: str) -> dict[str, Any]:
        """Translate an HTTP response into a result dict or a BackendError.

        Args:
            response: The HTTP response from the backend.
            method: The RPC method that was called.

        Returns:
            Parsed JSON response body.

        Raises:
            BackendAuthError: If authentication failed (401/403).
            BackendNotFoundError: If the release does not exist (404).
            BackendValidationError: If the request was rejected (400).
            BackendError: For any other failure.
        """
        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {"raw": response.text}
        if not isinstance(body, dict):
            body = {"result": body}

        if response.is_success:
            return body

        status = response.status_code
        message = body.get("message") or body.get("error") or f"release backend error: {status}"

        if status in (401, 403):
            raise BackendAuthError(
                message=message,
                status_code=status,
                response_body=body,
                method=method,
            )
        if status == 404:
            raise BackendNotFoundError(message=message, response_body=body, method=method)
        if status == 400:
            raise BackendValidationError(message=message, response_body=body, method=method)

        raise BackendError(
            message=message,
            status_code=status,
            response_body=body,
            method=method,
        )

    def _call(self, method: str, request: BackendModel) -> dict[str, Any]:
        """Invoke one RPC method.

        Args:
            method: RPC method name (e.g. ``InstallRelease``).
            request: Request model to serialize as the call body.

        Returns:
            Parsed JSON response body.

        Raises:
            BackendConnectionError: If the backend cannot be reached.
            BackendError: If the backend returns an error response.
        """
        url = f"{self._service_path}/{method}"
        log = logger.bind(method=method, endpoint=url)

        try:
            log.debug("Backend RPC request")
            response = self._client.post(url, json=request.to_payload())
            log.debug("Backend RPC response", status=response.status_code)
        except httpx.ConnectError as e:
            log.error("Backend connection error", error=str(e))
            raise BackendConnectionError(
                message=f"Failed to connect to release backend: {e}",
                method=method,
                original_error=e,
            ) from e
        except httpx.TimeoutException as e:
            log.error("Backend request timeout", error=str(e))
            raise BackendConnectionError(
                message=f"Release backend request timed out: {e}",
                method=method,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            log.error("Backend transport error", error=str(e))
            raise BackendConnectionError(
                message=f"Release backend transport error: {e}",
                method=method,
                original_error=e,
            ) from e
        return self._handle_response(response, method)

    def list_releases(self, request: ListReleasesRequest) -> dict[str, Any]:
        """List releases matching the request's filters."""
        return self._call("ListReleases", request)

    def install_release(self, request: InstallReleaseRequest) -> dict[str, Any]:
        """Install a new release."""
        return self._call("InstallRelease", request)

    def uninstall_release(self, request: UninstallReleaseRequest) -> dict[str, Any]:
        """Uninstall a release."""
        return self._call("UninstallRelease", request)

    def get_release_content(self, request: GetReleaseContentRequest) -> dict[str, Any]:
        """Fetch the content (manifest, chart, config) of a release revision."""
        return self._call("GetReleaseContent", request)

    def get_release_status(self, request: GetReleaseStatusRequest) -> dict[str, Any]:
        """Fetch the status of a release revision."""
        return self._call("GetReleaseStatus", request)

    def update_release(self, request: UpdateReleaseRequest) -> dict[str, Any]:
        """Upgrade a release."""
        return self._call("UpdateRelease", request)

    def rollback_release(self, request: RollbackReleaseRequest) -> dict[str, Any]:
        """Roll a release back to an earlier revision."""
        return self._call("RollbackRelease", request)

    def close(self) -> None:
        """Close the HTTP client and release pooled connections."""
        self._client.close()
        logger.debug("Release backend client closed")

    def __enter__(self) -> ReleaseBackendClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
