"""Logging configuration for release_gateway."""

from release_gateway.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
