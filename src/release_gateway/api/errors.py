"""HTTP error responses and entity writing for the REST resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

logger = structlog.get_logger()


@dataclass(frozen=True)
class ServiceError:
    """A fixed HTTP status and message returned for one failure kind."""

    code: int
    message: str

    def to_body(self) -> dict[str, Any]:
        """Body written to the client."""
        return {"Code": self.code, "Message": self.message}


ERR_READ_REQUEST = ServiceError(status.HTTP_400_BAD_REQUEST, "unable to read request body")
ERR_WRITE_RESPONSE = ServiceError(status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to write response")

ERR_LIST_RELEASES = ServiceError(
    status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to get list of releases"
)
ERR_INSTALL_RELEASE = ServiceError(status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to install releases")
ERR_UNINSTALL_RELEASE = ServiceError(
    status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to uninstall releases"
)
ERR_GET_RELEASE = ServiceError(
    status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to get release content and status"
)
ERR_UPDATE_RELEASE = ServiceError(status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to update release")
ERR_ROLLBACK_RELEASE = ServiceError(
    status.HTTP_500_INTERNAL_SERVER_ERROR, "unable to rollback release"
)


def error_response(
    err: ServiceError,
    cause: Exception | None = None,
    **context: Any,
) -> JSONResponse:
    """Log a failure and build its error response.

    Args:
        err: The service error to report.
        cause: The exception that triggered it, if any.
        **context: Extra fields bound to the log event (path, release...).

    Returns:
        JSON response carrying ``{"Code": ..., "Message": ...}``.
    """
    log = logger.bind(status=err.code, **context)
    if cause is not None:
        log = log.bind(error=str(cause), error_type=type(cause).__name__)
    log.error(err.message)
    return JSONResponse(status_code=err.code, content=err.to_body())


def write_entity(entity: Any, **context: Any) -> Response:
    """Serialize a successful result, or report that writing it failed.

    Args:
        entity: Result returned by the controller.
        **context: Extra fields for the log event if serialization fails.

    Returns:
        The 200 JSON response, or the write-failure error response.
    """
    try:
        return JSONResponse(content=jsonable_encoder(entity))
    except (TypeError, ValueError) as e:
        return error_response(ERR_WRITE_RESPONSE, e, **context)
