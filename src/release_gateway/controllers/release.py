"""Release controller: translate release operations into backend RPCs.

Each public method performs one logical round trip against the release
backend. Install and update first resolve the chart reference and load the
archive; any failure there is raised as a ChartError before the backend is
contacted, so callers can tell a bad chart reference from a backend outage.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from release_gateway.controllers.values import build_values_config
from release_gateway.integrations.backend.exceptions import BackendError
from release_gateway.integrations.backend.models import (
    Chart,
    GetReleaseContentRequest,
    GetReleaseResponse,
    GetReleaseStatusRequest,
    InstallReleaseRequest,
    RollbackReleaseRequest,
    UninstallReleaseRequest,
    UpdateReleaseRequest,
)
from release_gateway.integrations.charts.exceptions import ChartError
from release_gateway.integrations.charts.loader import load_chart_archive

if TYPE_CHECKING:
    from release_gateway.integrations.backend.client import ReleaseBackendClient
    from release_gateway.integrations.backend.models import ListReleasesRequest
    from release_gateway.integrations.charts.resolver import RepoChartResolver

logger = structlog.get_logger()

ChartLoader = Callable[[Path], Chart]


class ReleaseController:
    """Translation layer between release operations and the backend.

    Holds references to its collaborators only; every request is built and
    discarded within a single call.
    """

    _entity_name: str = "release"

    def __init__(
        self,
        backend: ReleaseBackendClient,
        charts: RepoChartResolver,
        chart_loader: ChartLoader = load_chart_archive,
    ) -> None:
        """Initialize the controller.

        Args:
            backend: Release backend RPC client.
            charts: Resolver turning chart references into archives.
            chart_loader: Loads an archive into the backend chart model.
        """
        self._backend = backend
        self._charts = charts
        self._load_chart = chart_loader
        self._log = logger.bind(entity=self._entity_name)

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _resolve_chart(self, repo: str, chart: str, version: str) -> Chart:
        """Resolve and load a chart reference.

        Raises:
            ChartError: If the reference cannot be resolved or loaded.
        """
        log = self._log.bind(repo=repo, chart=chart, version=version)
        try:
            details = self._charts.chart_details(repo, chart, version)
        except ChartError as e:
            log.error("unable to get chart details", error=str(e))
            raise

        try:
            return self._load_chart(details.chart_file)
        except ChartError as e:
            log.error("unable to load chart details", error=str(e), chart_file=str(details.chart_file))
            raise

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    def list_releases(self, request: ListReleasesRequest) -> dict[str, Any]:
        """List releases using a pre-built filter request.

        Args:
            request: Paging, ordering and status filters.

        Returns:
            The backend's list result.

        Raises:
            BackendError: If the backend call fails.
        """
        try:
            return self._backend.list_releases(request)
        except BackendError as e:
            self._log.error("unable to get list of releases from backend", error=str(e))
            raise

    def install_release(
        self,
        name: str,
        namespace: str,
        repo: str,
        chart: str,
        version: str,
        values: Mapping[str, Any] | None,
        wait: bool,
        timeout: int,
    ) -> dict[str, Any]:
        """Install a new release of the referenced chart.

        Args:
            name: Release name.
            namespace: Target namespace.
            repo: Chart repository name.
            chart: Chart name.
            version: Chart version or ``latest``.
            values: Values overlaid onto the chart's templates.
            wait: Wait for resources to become ready.
            timeout: Backend-enforced timeout in seconds.

        Returns:
            The backend's install result, untouched.

        Raises:
            ChartError: If the chart reference cannot be resolved or loaded.
            BackendError: If the backend call fails.
        """
        loaded = self._resolve_chart(repo, chart, version)
        request = InstallReleaseRequest(
            name=name,
            namespace=namespace,
            chart=loaded,
            values=build_values_config(values),
            wait=wait,
            timeout=timeout,
        )

        self._log.info("installing_release", release=name, namespace=namespace, chart=chart)
        try:
            return self._backend.install_release(request)
        except BackendError as e:
            self._log.error("unable to install new release", release=name, error=str(e))
            raise

    def uninstall_release(self, release_name: str, purge: bool) -> dict[str, Any]:
        """Uninstall a release.

        Raises:
            BackendError: If the backend call fails.
        """
        request = UninstallReleaseRequest(name=release_name, purge=purge)

        self._log.info("uninstalling_release", release=release_name, purge=purge)
        try:
            return self._backend.uninstall_release(request)
        except BackendError as e:
            self._log.error("unable to uninstall release", release=release_name, error=str(e))
            raise

    def get_release(self, name: str, version: int) -> GetReleaseResponse:
        """Fetch content and then status for one release revision.

        Both calls must succeed; nothing is returned if either fails.

        Args:
            name: Release name.
            version: Release revision, ``0`` for the most recent.

        Returns:
            Content and status results side by side.

        Raises:
            BackendError: If either backend call fails.
        """
        try:
            content = self._backend.get_release_content(
                GetReleaseContentRequest(name=name, version=version)
            )
        except BackendError as e:
            self._log.error("unable to get release content", release=name, error=str(e))
            raise

        try:
            status = self._backend.get_release_status(
                GetReleaseStatusRequest(name=name, version=version)
            )
        except BackendError as e:
            self._log.error("unable to get release status", release=name, error=str(e))
            raise

        return GetReleaseResponse(content=content, status=status)

    def update_release(
        self,
        name: str,
        chart: str,
        repo: str,
        version: str,
        values: Mapping[str, Any] | None,
        dry_run: bool,
        disable_hooks: bool,
        recreate: bool,
        timeout: int,
        reset_values: bool,
        wait: bool,
        reuse_values: bool,
        force: bool,
    ) -> dict[str, Any]:
        """Upgrade an installed release to the referenced chart.

        Flags are passed to the backend verbatim.

        Returns:
            The backend's update result, untouched.

        Raises:
            ChartError: If the chart reference cannot be resolved or loaded.
            BackendError: If the backend call fails.
        """
        loaded = self._resolve_chart(repo, chart, version)
        request = UpdateReleaseRequest(
            name=name,
            chart=loaded,
            values=build_values_config(values),
            dry_run=dry_run,
            disable_hooks=disable_hooks,
            recreate=recreate,
            timeout=timeout,
            reset_values=reset_values,
            wait=wait,
            reuse_values=reuse_values,
            force=force,
        )

        self._log.info("updating_release", release=name, chart=chart, dry_run=dry_run)
        try:
            return self._backend.update_release(request)
        except BackendError as e:
            self._log.error("unable to update release", release=name, error=str(e))
            raise

    def rollback_release(
        self,
        name: str,
        dry_run: bool,
        disable_hooks: bool,
        version: int,
        recreate: bool,
        timeout: int,
        wait: bool,
        force: bool,
    ) -> dict[str, Any]:
        """Roll a release back to ``version``.

        Raises:
            BackendError: If the backend call fails.
        """
        request = RollbackReleaseRequest(
            name=name,
            dry_run=dry_run,
            disable_hooks=disable_hooks,
            version=version,
            recreate=recreate,
            timeout=timeout,
            wait=wait,
            force=force,
        )

        self._log.info("rolling_back_release", release=name, version=version, dry_run=dry_run)
        try:
            return self._backend.rollback_release(request)
        except BackendError as e:
            self._log.error("unable to rollback release", release=name, error=str(e))
            raise
