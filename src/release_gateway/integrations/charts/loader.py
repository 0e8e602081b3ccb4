"""Load packaged chart archives into the backend's chart model."""

from __future__ import annotations

import io
import tarfile
from collections import defaultdict
from pathlib import Path, PurePosixPath

import structlog
import yaml
from pydantic import ValidationError

from release_gateway.integrations.backend.models import (
    Chart,
    ChartFile,
    ChartMetadata,
    Config,
    Template,
)
from release_gateway.integrations.charts.exceptions import ChartLoadError

logger = structlog.get_logger()

CHART_FILE = "Chart.yaml"
VALUES_FILE = "values.yaml"
TEMPLATES_DIR = "templates"
CHARTS_DIR = "charts"


def _read_members(tar: tarfile.TarFile, source: str) -> dict[str, bytes]:
    """Read regular files from an archive, keyed by their member path."""
    files: dict[str, bytes] = {}
    for member in tar.getmembers():
        if not member.isfile():
            continue
        path = PurePosixPath(member.name)
        if path.is_absolute() or ".." in path.parts:
            raise ChartLoadError(f"illegal path in chart archive: {member.name}", path=source)
        extracted = tar.extractfile(member)
        if extracted is None:
            continue
        files[str(path)] = extracted.read()
    return files


def _strip_top_dir(files: dict[str, bytes], source: str) -> dict[str, bytes]:
    """Drop the archive's single top-level directory from every path."""
    stripped: dict[str, bytes] = {}
    for name, data in files.items():
        parts = PurePosixPath(name).parts
        if len(parts) < 2:
            # files at the archive root are not part of any chart
            continue
        stripped["/".join(parts[1:])] = data
    if not stripped:
        raise ChartLoadError("chart archive contains no chart directory", path=source)
    return stripped


def _load_archive_bytes(data: bytes, source: str) -> Chart:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tar:
            files = _read_members(tar, source)
    except (tarfile.TarError, EOFError, OSError) as e:
        raise ChartLoadError(f"unable to read chart archive: {e}", path=source) from e
    return load_chart_files(_strip_top_dir(files, source), source=source)


def load_chart_files(files: dict[str, bytes], source: str = "<memory>") -> Chart:
    """Build a Chart from files keyed by path relative to the chart root.

    Args:
        files: Mapping of chart-relative POSIX paths to file contents.
        source: Description of where the files came from, for errors.

    Returns:
        The loaded chart, including nested dependency charts.

    Raises:
        ChartLoadError: If Chart.yaml is missing or invalid, or values.yaml
            is not UTF-8 text.
    """
    if CHART_FILE not in files:
        raise ChartLoadError(f"chart is missing {CHART_FILE}", path=source)

    try:
        raw_metadata = yaml.safe_load(files[CHART_FILE]) or {}
        if not isinstance(raw_metadata, dict):
            raise ChartLoadError(f"{CHART_FILE} is not a mapping", path=source)
        metadata = ChartMetadata.model_validate(raw_metadata)
    except (yaml.YAMLError, ValidationError) as e:
        raise ChartLoadError(f"invalid {CHART_FILE}: {e}", path=source) from e

    values = Config()
    templates: list[Template] = []
    chart_files: list[ChartFile] = []
    dependencies: list[Chart] = []
    subchart_files: dict[str, dict[str, bytes]] = defaultdict(dict)

    for name in sorted(files):
        data = files[name]
        parts = PurePosixPath(name).parts
        if name == CHART_FILE:
            continue
        if name == VALUES_FILE:
            try:
                values = Config(raw=data.decode("utf-8"))
            except UnicodeDecodeError as e:
                raise ChartLoadError(f"{VALUES_FILE} is not valid UTF-8: {e}", path=source) from e
        elif parts[0] == TEMPLATES_DIR:
            templates.append(Template(name=name, data=data))
        elif parts[0] == CHARTS_DIR and len(parts) == 2 and name.endswith((".tgz", ".tar.gz")):
            dependencies.append(_load_archive_bytes(data, f"{source}:{name}"))
        elif parts[0] == CHARTS_DIR and len(parts) > 2:
            subchart_files[parts[1]]["/".join(parts[2:])] = data
        else:
            chart_files.append(ChartFile(type_url=name, value=data))

    for sub_name, sub_files in sorted(subchart_files.items()):
        dependencies.append(load_chart_files(sub_files, source=f"{source}:{CHARTS_DIR}/{sub_name}"))

    return Chart(
        metadata=metadata,
        templates=templates,
        values=values,
        files=chart_files,
        dependencies=dependencies,
    )


def load_chart_archive(path: str | Path) -> Chart:
    """Load a packaged (``.tgz``) chart from disk.

    Args:
        path: Path to the chart archive.

    Returns:
        The loaded chart.

    Raises:
        ChartLoadError: If the archive is unreadable or not a valid chart.
    """
    source = str(path)
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ChartLoadError(f"unable to open chart archive: {e}", path=source) from e

    chart = _load_archive_bytes(data, source)
    logger.debug(
        "chart_loaded",
        chart=chart.metadata.name,
        version=chart.metadata.version,
        templates=len(chart.templates),
        dependencies=len(chart.dependencies),
    )
    return chart
