"""Data models for chart resolution.

Typed dataclasses for repository index entries and resolved charts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ChartVersion:
    """One version entry of a chart in a repository ``index.yaml``."""

    name: str
    version: str
    app_version: str = ""
    digest: str = ""
    urls: list[str] = field(default_factory=list)

    @classmethod
    def from_index(cls, data: dict[str, Any]) -> ChartVersion:
        """Create a ChartVersion from an ``index.yaml`` entry."""
        return cls(
            name=str(data.get("name", "")),
            version=str(data.get("version", "")),
            app_version=str(data.get("appVersion", "")),
            digest=str(data.get("digest", "") or ""),
            urls=[str(url) for url in data.get("urls") or []],
        )


@dataclass
class ChartDetails:
    """A chart reference resolved to a local archive."""

    repo: str
    name: str
    version: str
    chart_file: Path
    app_version: str = ""
    digest: str = ""
    urls: list[str] = field(default_factory=list)
