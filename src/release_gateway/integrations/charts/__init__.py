"""Chart repository integration - reference resolution and archive loading."""

from release_gateway.integrations.charts.config import ChartRepositoryConfig, ChartsConfig
from release_gateway.integrations.charts.exceptions import (
    ChartError,
    ChartLoadError,
    ChartNotFoundError,
    ChartRepositoryError,
)
from release_gateway.integrations.charts.loader import load_chart_archive, load_chart_files
from release_gateway.integrations.charts.models import ChartDetails, ChartVersion
from release_gateway.integrations.charts.resolver import LATEST_VERSION, RepoChartResolver

__all__ = [
    "LATEST_VERSION",
    "ChartDetails",
    "ChartError",
    "ChartLoadError",
    "ChartNotFoundError",
    "ChartRepositoryConfig",
    "ChartRepositoryError",
    "ChartVersion",
    "ChartsConfig",
    "RepoChartResolver",
    "load_chart_archive",
    "load_chart_files",
]
