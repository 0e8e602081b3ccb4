"""REST resources."""

from release_gateway.api.resources.releases import ReleaseResource

__all__ = ["ReleaseResource"]
