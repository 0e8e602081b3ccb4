"""Gateway configuration models and loading.

Configuration is read from a YAML file and then overridden by ``RG_*``
environment variables, which take precedence.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from release_gateway.exceptions import ReleaseGatewayError
from release_gateway.integrations.backend.config import BackendConnectionConfig
from release_gateway.integrations.charts.config import ChartsConfig

logger = structlog.get_logger()

CONFIG_ENV_VAR = "RG_CONFIG"
DEFAULT_CONFIG_FILE = "release-gateway.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(ReleaseGatewayError):
    """Raised when the configuration file is unreadable or invalid."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} [{self.path}]"
        return self.message


class ServerConfig(BaseModel):
    """HTTP listener settings."""

    model_config = ConfigDict(extra="forbid")

    host: str = "0.0.0.0"
    port: int = 8080

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v


class LoggingConfig(BaseModel):
    """Log verbosity and format."""

    model_config = ConfigDict(extra="forbid")

    verbose: bool = True
    debug: bool = False
    json_output: bool = False
    log_to_file: bool = True


class GatewayConfig(BaseModel):
    """Complete gateway configuration."""

    model_config = ConfigDict(extra="forbid")

    server: ServerConfig = ServerConfig()
    backend: BackendConnectionConfig = BackendConnectionConfig()
    charts: ChartsConfig = ChartsConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> GatewayConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            RG_HOST: Listen address
            RG_PORT: Listen port
            RG_BACKEND_URL: Release backend base URL
            RG_BACKEND_TOKEN: Bearer token for the backend
            RG_BACKEND_TIMEOUT: Transport timeout in seconds
            RG_CHART_CACHE_DIR: Directory for downloaded chart archives
            RG_CHART_REPOS: Repositories as ``name=url,name=url``
            RG_LOG_JSON: Render console logs as JSON
        """
        config_dict: dict[str, Any] = dict(base_config or {})
        for section in ("server", "backend", "charts", "logging"):
            value = config_dict.get(section)
            if value is None:
                config_dict[section] = {}
            elif isinstance(value, dict):
                config_dict[section] = dict(value)
            else:
                raise ValueError(f"config section '{section}' must be a mapping")

        if host := os.environ.get("RG_HOST"):
            config_dict["server"]["host"] = host
        if port := os.environ.get("RG_PORT"):
            config_dict["server"]["port"] = port

        if backend_url := os.environ.get("RG_BACKEND_URL"):
            config_dict["backend"]["base_url"] = backend_url
        if token := os.environ.get("RG_BACKEND_TOKEN"):
            config_dict["backend"]["token"] = token
        if timeout := os.environ.get("RG_BACKEND_TIMEOUT"):
            config_dict["backend"]["timeout"] = timeout

        if cache_dir := os.environ.get("RG_CHART_CACHE_DIR"):
            config_dict["charts"]["cache_dir"] = cache_dir
        if repos := os.environ.get("RG_CHART_REPOS"):
            config_dict["charts"]["repositories"] = _parse_repositories(repos)

        if json_logs := os.environ.get("RG_LOG_JSON"):
            config_dict["logging"]["json_output"] = json_logs.strip().lower() in _TRUE_VALUES

        return cls.model_validate(config_dict)


def _parse_repositories(raw: str) -> list[dict[str, str]]:
    """Parse ``name=url,name=url`` into repository dicts."""
    repositories = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, url = item.partition("=")
        if not sep:
            raise ValueError(f"invalid repository entry {item!r}, expected name=url")
        repositories.append({"name": name.strip(), "url": url.strip()})
    return repositories


def _resolve_config_path(path: str | Path | None) -> tuple[Path, bool]:
    """Return the config path and whether it was explicitly requested."""
    if path is not None:
        return Path(path).expanduser(), True
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path).expanduser(), True
    return Path.cwd() / DEFAULT_CONFIG_FILE, False


def load_config(path: str | Path | None = None) -> GatewayConfig:
    """Load configuration from YAML and the environment.

    Args:
        path: Explicit config file. Falls back to ``$RG_CONFIG`` and then
            ``./release-gateway.yaml``; a missing default file means
            built-in defaults.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the file cannot be read or the result is invalid.
    """
    config_path, explicit = _resolve_config_path(path)
    base_config: dict[str, Any] = {}

    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"unable to read config file: {e}", path=str(config_path)) from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("config file must contain a mapping", path=str(config_path))
        base_config = loaded or {}
        logger.debug("config_file_loaded", path=str(config_path))
    elif explicit:
        raise ConfigError("config file not found", path=str(config_path))

    try:
        return GatewayConfig.from_env(base_config)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"invalid configuration: {e}", path=str(config_path)) from e
