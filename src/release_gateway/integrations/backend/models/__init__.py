"""Release backend request and payload models."""

from release_gateway.integrations.backend.models.base import BackendModel
from release_gateway.integrations.backend.models.chart import (
    Chart,
    ChartFile,
    ChartMetadata,
    Config,
    Maintainer,
    Template,
    Value,
)
from release_gateway.integrations.backend.models.release import (
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
    "BackendModel",
    "Chart",
    "ChartFile",
    "ChartMetadata",
    "Config",
    "GetReleaseContentRequest",
    "GetReleaseResponse",
    "GetReleaseStatusRequest",
    "InstallReleaseRequest",
    "ListReleasesRequest",
    "Maintainer",
    "RollbackReleaseRequest",
    "SortBy",
    "SortOrder",
    "StatusCode",
    "Template",
    "UninstallReleaseRequest",
    "UpdateReleaseRequest",
    "Value",
]
