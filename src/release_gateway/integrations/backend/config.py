"""Release backend connection configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_SERVICE_PATH = "/hapi.services.tiller.ReleaseService"


class BackendConnectionConfig(BaseModel):
    """Where and how to reach the release backend's RPC gateway.

    ``timeout`` bounds the HTTP transport only; ``None`` waits for the
    backend indefinitely so long-running ``wait`` installs are not cut off.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = "http://localhost:44134"
    service_path: str = DEFAULT_SERVICE_PATH
    timeout: float | None = None
    verify_ssl: bool = True
    token: str | None = None

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("service_path")
    @classmethod
    def validate_service_path(cls, v: str) -> str:
        """Normalize to a single leading slash and no trailing slash."""
        return "/" + v.strip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Validate timeout is positive when set."""
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v
