"""Chart repository configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CACHE_DIR = "~/.cache/release-gateway/charts"


class ChartRepositoryConfig(BaseModel):
    """A named chart repository serving an ``index.yaml``."""

    model_config = ConfigDict(extra="forbid")

    name: str
    url: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate the repository name is usable in a chart reference."""
        v = v.strip()
        if not v or "/" in v:
            raise ValueError("repository name must be non-empty and contain no '/'")
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v.rstrip("/")


class ChartsConfig(BaseModel):
    """Chart resolution settings."""

    model_config = ConfigDict(extra="forbid")

    repositories: list[ChartRepositoryConfig] = Field(default_factory=list)
    cache_dir: str = Field(default=DEFAULT_CACHE_DIR, validate_default=True)
    timeout: int = 30
    verify_ssl: bool = True

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, v: str) -> str:
        """Expand ~ in the cache path."""
        return str(Path(v).expanduser())

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("repositories")
    @classmethod
    def validate_unique_names(
        cls, v: list[ChartRepositoryConfig]
    ) -> list[ChartRepositoryConfig]:
        """Reject duplicate repository names."""
        names = [repo.name for repo in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate repository names: {', '.join(duplicates)}")
        return v
