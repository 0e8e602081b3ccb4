"""REST gateway in front of a chart-based release backend."""

from release_gateway.__version__ import __version__

__all__ = ["__version__"]
