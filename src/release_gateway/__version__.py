"""Version information for release_gateway."""

__version__ = "0.3.0"
