"""REST API for chart releases."""

from release_gateway.api.app import create_app

__all__ = ["create_app"]
