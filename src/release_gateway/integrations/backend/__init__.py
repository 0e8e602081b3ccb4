"""Release backend integration - RPC client, configuration and models."""

from release_gateway.integrations.backend.client import ReleaseBackendClient
from release_gateway.integrations.backend.config import BackendConnectionConfig
from release_gateway.integrations.backend.exceptions import (
    BackendAuthError,
    BackendConnectionError,
    BackendError,
    BackendNotFoundError,
    BackendValidationError,
)
from release_gateway.integrations.backend.models import (
    GetReleaseContentRequest,
    GetReleaseResponse,
    GetReleaseStatusRequest,
    InstallReleaseRequest,
    ListReleasesRequest,
    RollbackReleaseRequest,
    SortBy,
    SortOrder,
    StatusCode,
    UninstallReleaseRequest,
    UpdateReleaseRequest,
)

__all__ = [
    "BackendAuthError",
    "BackendConnectionConfig",
    "BackendConnectionError",
    "BackendError",
    "BackendNotFoundError",
    "BackendValidationError",
    "GetReleaseContentRequest",
    "GetReleaseResponse",
    "GetReleaseStatusRequest",
    "InstallReleaseRequest",
    "ListReleasesRequest",
    "ReleaseBackendClient",
    "RollbackReleaseRequest",
    "SortBy",
    "SortOrder",
    "StatusCode",
    "UninstallReleaseRequest",
    "UpdateReleaseRequest",
]
