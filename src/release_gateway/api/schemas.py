"""Request bodies accepted by the release resources.

Bodies use camelCase keys. Unknown keys are ignored; omitted fields take the
documented defaults (``namespace=default`` and ``version=latest`` for
install, ``version=latest`` for update) or their zero value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from release_gateway.api.params import INT64_MAX, INT64_MIN
from release_gateway.integrations.backend.models.release import INT32_MAX, INT32_MIN
from release_gateway.integrations.charts.resolver import LATEST_VERSION

DEFAULT_NAMESPACE = "default"


class RequestBody(BaseModel):
    """Base class for JSON request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class InstallReleaseBody(RequestBody):
    """Body for ``POST /api/v1/releases``."""

    name: str = Field(description="Release name")
    namespace: str = Field(default=DEFAULT_NAMESPACE, description="Target namespace")
    repo: str = Field(default="", description="Chart repository name")
    chart: str = Field(default="", description="Chart name")
    version: str = Field(default=LATEST_VERSION, description="Chart version")
    values: dict[str, Any] | None = Field(default=None, description="Chart values")
    wait: bool = Field(default=False, description="Wait for resources to be ready")
    timeout: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX, description="Timeout in seconds")

    @field_validator("namespace", mode="before")
    @classmethod
    def default_namespace(cls, v: Any) -> Any:
        """Treat a null or empty namespace as omitted."""
        return DEFAULT_NAMESPACE if v is None or v == "" else v

    @field_validator("version", mode="before")
    @classmethod
    def default_version(cls, v: Any) -> Any:
        """Treat a null or empty version as omitted."""
        return LATEST_VERSION if v is None or v == "" else v


class UpdateReleaseBody(RequestBody):
    """Body for ``PUT /api/v1/releases``."""

    name: str = Field(description="Release name")
    chart: str = Field(default="", description="Chart name")
    repo: str = Field(default="", description="Chart repository name")
    version: str = Field(default=LATEST_VERSION, description="Chart version")
    values: dict[str, Any] | None = Field(default=None, description="Chart values")
    dry_run: bool = Field(default=False, description="Simulate the upgrade")
    disable_hooks: bool = Field(default=False, description="Skip release hooks")
    recreate: bool = Field(default=False, description="Restart pods for updated resources")
    timeout: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX, description="Timeout in seconds")
    reset_values: bool = Field(default=False, description="Reset values to chart defaults")
    wait: bool = Field(default=False, description="Wait for resources to be ready")
    reuse_values: bool = Field(default=False, description="Reuse the last release's values")
    force: bool = Field(default=False, description="Force resource updates via replacement")

    @field_validator("version", mode="before")
    @classmethod
    def default_version(cls, v: Any) -> Any:
        """Treat a null or empty version as omitted."""
        return LATEST_VERSION if v is None or v == "" else v


class RollbackReleaseBody(RequestBody):
    """Body for ``PUT /api/v1/releases/rollback``."""

    name: str = Field(description="Release name")
    dry_run: bool = Field(default=False, description="Simulate the rollback")
    disable_hooks: bool = Field(default=False, description="Skip rollback hooks")
    version: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX, description="Revision to deploy")
    recreate: bool = Field(default=False, description="Restart pods if applicable")
    timeout: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX, description="Timeout in seconds")
    wait: bool = Field(default=False, description="Wait for resources to be ready")
    force: bool = Field(default=False, description="Force resource updates via replacement")
