"""Resolve chart references against chart repository indexes.

A chart reference is ``(repo, chart, version)``. The repository name is
looked up in configuration, its ``index.yaml`` is fetched, the requested
version is selected (``latest`` picks the newest), and the archive is
downloaded into a local cache where the chart loader can read it.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

import httpx
import structlog
import yaml
from packaging.version import InvalidVersion, Version

from release_gateway.integrations.charts.exceptions import (
    ChartNotFoundError,
    ChartRepositoryError,
)
from release_gateway.integrations.charts.models import ChartDetails, ChartVersion

if TYPE_CHECKING:
    from release_gateway.integrations.charts.config import (
        ChartRepositoryConfig,
        ChartsConfig,
    )

logger = structlog.get_logger()

LATEST_VERSION = "latest"
INDEX_FILE = "index.yaml"
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _version_key(version: str) -> tuple[int, Any]:
    """Sort key placing unparseable versions below every valid one."""
    try:
        return (1, Version(version))
    except InvalidVersion:
        return (0, version)


def _is_prerelease(version: str) -> bool:
    try:
        return Version(version).is_prerelease
    except InvalidVersion:
        return False


def select_version(
    entries: list[ChartVersion],
    version: str,
) -> ChartVersion | None:
    """Pick the entry matching ``version``.

    ``latest`` (or an empty version) selects the newest stable version,
    or the newest pre-release when a chart only has pre-releases.

    Args:
        entries: All index entries for one chart.
        version: Requested version string.

    Returns:
        The matching entry, or None.
    """
    if not entries:
        return None

    if version in ("", LATEST_VERSION):
        stable = [e for e in entries if not _is_prerelease(e.version)]
        candidates = stable or entries
        return max(candidates, key=lambda e: _version_key(e.version))

    for entry in entries:
        if entry.version == version:
            return entry

    # "v1.2.0" and "1.2.0" name the same chart version
    wanted = _version_key(version)
    if wanted[0]:
        for entry in entries:
            if _version_key(entry.version) == wanted:
                return entry
    return None


def _sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(DOWNLOAD_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class RepoChartResolver:
    """Chart resolver backed by configured HTTP chart repositories.

    The resolver keeps no per-request state; the archive cache on disk is
    written atomically so concurrent requests for the same chart are safe.
    """

    def __init__(
        self,
        config: ChartsConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Repository list, cache directory and HTTP settings.
            http_client: Optional pre-built httpx client (tests inject one).
        """
        self._repositories = {repo.name: repo for repo in config.repositories}
        self._cache_dir = Path(config.cache_dir)
        self._client = http_client or httpx.Client(
            timeout=httpx.Timeout(config.timeout),
            verify=config.verify_ssl,
            follow_redirects=True,
        )
        self._log = logger.bind(entity="chart_resolver")
        self._log.debug(
            "chart_resolver_initialized",
            repositories=sorted(self._repositories),
            cache_dir=str(self._cache_dir),
        )

    @property
    def repositories(self) -> list[str]:
        """Names of the configured repositories."""
        return sorted(self._repositories)

    def chart_details(self, repo: str, chart: str, version: str) -> ChartDetails:
        """Resolve a chart reference to a downloaded archive.

        Args:
            repo: Configured repository name.
            chart: Chart name within the repository.
            version: Exact chart version, or ``latest``.

        Returns:
            Details of the resolved chart, including the local archive path.

        Raises:
            ChartRepositoryError: Unknown repository, unreadable index,
                failed download or digest mismatch.
            ChartNotFoundError: The chart or version is not in the index.
        """
        repo_config = self._repositories.get(repo)
        if repo_config is None:
            raise ChartRepositoryError(
                "unknown chart repository", repo=repo, chart=chart, version=version
            )

        index = self._fetch_index(repo_config)
        raw_entries = index.get("entries", {}).get(chart) or []
        entries = [ChartVersion.from_index(e) for e in raw_entries if isinstance(e, dict)]
        if not entries:
            raise ChartNotFoundError(
                "chart not found in repository", repo=repo, chart=chart, version=version
            )

        selected = select_version(entries, version)
        if selected is None:
            raise ChartNotFoundError(
                "chart version not found in repository",
                repo=repo,
                chart=chart,
                version=version,
            )

        chart_file = self._download(repo_config, selected)
        self._log.info(
            "chart_resolved",
            repo=repo,
            chart=chart,
            requested=version,
            version=selected.version,
            chart_file=str(chart_file),
        )
        return ChartDetails(
            repo=repo,
            name=selected.name or chart,
            version=selected.version,
            chart_file=chart_file,
            app_version=selected.app_version,
            digest=selected.digest,
            urls=selected.urls,
        )

    def _fetch_index(self, repo: ChartRepositoryConfig) -> dict[str, Any]:
        """Download and parse a repository's ``index.yaml``."""
        url = f"{repo.url}/{INDEX_FILE}"
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ChartRepositoryError(
                f"unable to fetch repository index: {e}",
                repo=repo.name,
                original_error=e,
            ) from e

        try:
            index = yaml.safe_load(response.text)
        except yaml.YAMLError as e:
            raise ChartRepositoryError(
                f"unable to parse repository index: {e}",
                repo=repo.name,
                original_error=e,
            ) from e

        if not isinstance(index, dict) or not isinstance(index.get("entries", {}), dict):
            raise ChartRepositoryError("malformed repository index", repo=repo.name)
        return index

    def _cache_path(self, repo: ChartRepositoryConfig, entry: ChartVersion) -> Path:
        """Cache location for an index entry's archive."""
        for part in (entry.name, entry.version):
            if "/" in part or "\\" in part or ".." in part:
                raise ChartRepositoryError(
                    "unsafe chart name or version in repository index",
                    repo=repo.name,
                    chart=entry.name,
                    version=entry.version,
                )
        return self._cache_dir / repo.name / f"{entry.name}-{entry.version}.tgz"

    def _download(self, repo: ChartRepositoryConfig, entry: ChartVersion) -> Path:
        """Fetch the entry's archive into the cache unless already present."""
        if not entry.urls:
            raise ChartRepositoryError(
                "index entry has no download URL",
                repo=repo.name,
                chart=entry.name,
                version=entry.version,
            )

        target = self._cache_path(repo, entry)
        target_dir = target.parent
        url = urljoin(f"{repo.url}/", entry.urls[0])
        try:
            if target.exists() and (not entry.digest or _sha256(target) == entry.digest):
                self._log.debug("chart_cache_hit", chart_file=str(target))
                return target
            target_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target_dir, suffix=".part")
        except OSError as e:
            raise ChartRepositoryError(
                f"unable to use chart cache: {e}",
                repo=repo.name,
                chart=entry.name,
                version=entry.version,
                original_error=e,
            ) from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh, self._client.stream("GET", url) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                    fh.write(chunk)

            if entry.digest and _sha256(tmp_path) != entry.digest:
                raise ChartRepositoryError(
                    "chart archive digest mismatch",
                    repo=repo.name,
                    chart=entry.name,
                    version=entry.version,
                )
            os.replace(tmp_path, target)
        except httpx.HTTPError as e:
            raise ChartRepositoryError(
                f"unable to download chart archive: {e}",
                repo=repo.name,
                chart=entry.name,
                version=entry.version,
                original_error=e,
            ) from e
        except OSError as e:
            raise ChartRepositoryError(
                f"unable to write chart archive: {e}",
                repo=repo.name,
                chart=entry.name,
                version=entry.version,
                original_error=e,
            ) from e
        finally:
            tmp_path.unlink(missing_ok=True)

        self._log.debug("chart_downloaded", url=url, chart_file=str(target))
        return target

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
