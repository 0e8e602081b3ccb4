"""REST resource for chart releases.

Binds ``/api/v1/releases`` routes to the ReleaseController. Handlers are
plain functions, so FastAPI runs each request on its worker threadpool while
the controller blocks on the backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from fastapi import APIRouter, Body, Path, Query
from fastapi.responses import Response

from release_gateway.api.errors import (
    ERR_GET_RELEASE,
    ERR_INSTALL_RELEASE,
    ERR_LIST_RELEASES,
    ERR_ROLLBACK_RELEASE,
    ERR_UNINSTALL_RELEASE,
    ERR_UPDATE_RELEASE,
    error_response,
    write_entity,
)
from release_gateway.api.params import build_list_request, parse_int32
from release_gateway.api.schemas import (
    InstallReleaseBody,
    RollbackReleaseBody,
    UpdateReleaseBody,
)
from release_gateway.exceptions import ReleaseGatewayError

if TYPE_CHECKING:
    from fastapi import FastAPI

    from release_gateway.controllers.release import ReleaseController

logger = structlog.get_logger()

RELEASES_PATH = "/api/v1/releases"


def _first(values: list[str] | None) -> str | None:
    """First value of a repeated query parameter; later repeats are ignored."""
    return values[0] if values else None


class ReleaseResource:
    """Chart release endpoints."""

    def __init__(self, controller: ReleaseController) -> None:
        self._controller = controller

    def register(self, app: FastAPI) -> None:
        """Add the release routes to ``app``."""
        rollback = APIRouter(prefix=f"{RELEASES_PATH}/rollback", tags=["releases"])
        rollback.add_api_route(
            "",
            self.rollback_release,
            methods=["PUT"],
            operation_id="rollbackRelease",
            summary="rollback release",
            description="Roll a release back to an earlier revision.",
        )

        releases = APIRouter(prefix=RELEASES_PATH, tags=["releases"])
        releases.add_api_route(
            "",
            self.list_releases,
            methods=["GET"],
            operation_id="listReleases",
            summary="list releases",
        )
        releases.add_api_route(
            "",
            self.install_release,
            methods=["POST"],
            operation_id="installRelease",
            summary="install release",
            description="Install a release. defaults: namespace=default, version=latest.",
        )
        releases.add_api_route(
            "",
            self.update_release,
            methods=["PUT"],
            operation_id="updateRelease",
            summary="update release",
            description="Update a release. defaults: version=latest.",
        )
        releases.add_api_route(
            "/{release}",
            self.uninstall_release,
            methods=["DELETE"],
            operation_id="uninstallRelease",
            summary="uninstall release",
        )
        releases.add_api_route(
            "/{release}/{version}",
            self.get_release,
            methods=["GET"],
            operation_id="getRelease",
            summary="get release",
            description="Content and status of one release revision.",
        )

        app.include_router(rollback)
        app.include_router(releases)

    def list_releases(
        self,
        limit: list[str] | None = Query(None, description="max number of releases to return"),
        offset: list[str] | None = Query(None, description="last release name that was seen"),
        sort_by: list[str] | None = Query(
            None, alias="sort-by", description="sort by: unknown, name, last-released"
        ),
        filter: list[str] | None = Query(None, description="regex to filter releases"),
        sort_order: list[str] | None = Query(
            None, alias="sort-order", description="sort order: asc, desc"
        ),
        status_code: list[str] | None = Query(
            None,
            alias="status-code",
            description="comma-separated status codes: unknown, deployed, deleted, superseded, failed",
        ),
    ) -> Response:
        """List installed releases."""
        logger.info("Getting list of releases")
        request = build_list_request(
            limit=_first(limit),
            offset=_first(offset),
            sort_by=_first(sort_by),
            filter=_first(filter),
            sort_order=_first(sort_order),
            status_code=_first(status_code),
        )
        try:
            result = self._controller.list_releases(request)
        except ReleaseGatewayError as e:
            return error_response(ERR_LIST_RELEASES, e, path=RELEASES_PATH)
        return write_entity(result, path=RELEASES_PATH)

    def install_release(self, body: InstallReleaseBody = Body(...)) -> Response:
        """Install a chart as a new release."""
        try:
            result = self._controller.install_release(
                body.name,
                body.namespace,
                body.repo,
                body.chart,
                body.version,
                body.values,
                body.wait,
                body.timeout,
            )
        except ReleaseGatewayError as e:
            return error_response(ERR_INSTALL_RELEASE, e, path=RELEASES_PATH, release=body.name)
        return write_entity(result, path=RELEASES_PATH, release=body.name)

    def update_release(self, body: UpdateReleaseBody = Body(...)) -> Response:
        """Upgrade a release to a new chart version or values."""
        try:
            result = self._controller.update_release(
                body.name,
                body.chart,
                body.repo,
                body.version,
                body.values,
                body.dry_run,
                body.disable_hooks,
                body.recreate,
                body.timeout,
                body.reset_values,
                body.wait,
                body.reuse_values,
                body.force,
            )
        except ReleaseGatewayError as e:
            return error_response(ERR_UPDATE_RELEASE, e, path=RELEASES_PATH, release=body.name)
        return write_entity(result, path=RELEASES_PATH, release=body.name)

    def uninstall_release(
        self,
        release: str = Path(..., description="the release name to be deleted"),
        purge: str | None = Query(None, description="purge the release (presence only)"),
    ) -> Response:
        """Remove a release; ``?purge`` also deletes its history."""
        path = f"{RELEASES_PATH}/{release}"
        try:
            result = self._controller.uninstall_release(release, purge is not None)
        except ReleaseGatewayError as e:
            return error_response(ERR_UNINSTALL_RELEASE, e, path=path, release=release)
        return write_entity(result, path=path, release=release)

    def get_release(
        self,
        release: str = Path(..., description="the release name"),
        version: str = Path(..., description="the release version"),
    ) -> Response:
        """Return content and status for a release revision."""
        path = f"{RELEASES_PATH}/{release}/{version}"
        try:
            result = self._controller.get_release(release, parse_int32(version))
        except ReleaseGatewayError as e:
            return error_response(ERR_GET_RELEASE, e, path=path, release=release)
        return write_entity(result, path=path, release=release)

    def rollback_release(self, body: RollbackReleaseBody = Body(...)) -> Response:
        """Roll a release back to an earlier revision."""
        path = f"{RELEASES_PATH}/rollback"
        try:
            result = self._controller.rollback_release(
                body.name,
                body.dry_run,
                body.disable_hooks,
                body.version,
                body.recreate,
                body.timeout,
                body.wait,
                body.force,
            )
        except ReleaseGatewayError as e:
            return error_response(ERR_ROLLBACK_RELEASE, e, path=path, release=body.name)
        return write_entity(result, path=path, release=body.name)
