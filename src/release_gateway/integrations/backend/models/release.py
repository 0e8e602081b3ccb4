"""Release service request models and enumerations.

Each request model maps one-to-one onto a backend RPC method. Responses are
relayed to HTTP callers untouched, so they are kept as plain dicts.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from release_gateway.integrations.backend.models.base import BackendModel
from release_gateway.integrations.backend.models.chart import Chart, Config

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class SortBy(IntEnum):
    """Field the backend sorts release listings by."""

    UNKNOWN = 0
    NAME = 1
    LAST_RELEASED = 2


class SortOrder(IntEnum):
    """Direction of a release listing."""

    ASC = 0
    DESC = 1


class StatusCode(IntEnum):
    """Release status codes used to filter listings."""

    UNKNOWN = 0
    DEPLOYED = 1
    DELETED = 2
    SUPERSEDED = 3
    FAILED = 4


class ListReleasesRequest(BackendModel):
    """Filter, paging and ordering for ListReleases.

    ``limit`` of zero lets the backend apply its default page size.
    """

    limit: int = 0
    offset: str = ""
    sort_by: SortBy = SortBy.UNKNOWN
    filter: str = ""
    sort_order: SortOrder = SortOrder.ASC
    status_codes: list[StatusCode] = Field(default_factory=list)


class InstallReleaseRequest(BackendModel):
    """Install a new release from a loaded chart."""

    name: str
    namespace: str
    chart: Chart
    values: Config
    wait: bool = False
    timeout: int = 0


class UninstallReleaseRequest(BackendModel):
    """Remove a release, optionally purging its history."""

    name: str
    purge: bool = False


class GetReleaseContentRequest(BackendModel):
    """Fetch a release's manifest and configuration.

    Version zero addresses the most recent revision.
    """

    name: str
    version: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)


class GetReleaseStatusRequest(BackendModel):
    """Fetch a release's deployment status."""

    name: str
    version: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)


class UpdateReleaseRequest(BackendModel):
    """Upgrade an existing release to a new chart and values."""

    name: str
    chart: Chart
    values: Config
    dry_run: bool = False
    disable_hooks: bool = False
    recreate: bool = False
    timeout: int = 0
    reset_values: bool = False
    wait: bool = False
    reuse_values: bool = False
    force: bool = False


class RollbackReleaseRequest(BackendModel):
    """Roll a release back to an earlier revision."""

    name: str
    dry_run: bool = False
    disable_hooks: bool = False
    version: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    recreate: bool = False
    timeout: int = 0
    wait: bool = False
    force: bool = False


class GetReleaseResponse(BaseModel):
    """Content and status of one release revision, fetched back to back."""

    model_config = ConfigDict(extra="forbid")

    content: dict[str, Any]
    status: dict[str, Any]
