"""Configuration management with Pydantic validation."""

from release_gateway.core.config.models import (
    ConfigError,
    GatewayConfig,
    LoggingConfig,
    ServerConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "GatewayConfig",
    "LoggingConfig",
    "ServerConfig",
    "load_config",
]
