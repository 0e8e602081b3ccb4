"""Query and path parameter parsing for the release resources.

Lookup tables are read-only and built once at import time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from release_gateway.integrations.backend.models import (
    ListReleasesRequest,
    SortBy,
    SortOrder,
    StatusCode,
)
from release_gateway.integrations.backend.models.release import INT32_MAX, INT32_MIN

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")

SORT_BY: Mapping[str, SortBy] = MappingProxyType(
    {
        "unknown": SortBy.UNKNOWN,
        "name": SortBy.NAME,
        "last-released": SortBy.LAST_RELEASED,
    }
)

SORT_ORDER: Mapping[str, SortOrder] = MappingProxyType(
    {
        "asc": SortOrder.ASC,
        "desc": SortOrder.DESC,
    }
)

STATUS_CODES: Mapping[str, StatusCode] = MappingProxyType(
    {
        "unknown": StatusCode.UNKNOWN,
        "deployed": StatusCode.DEPLOYED,
        "deleted": StatusCode.DELETED,
        "superseded": StatusCode.SUPERSEDED,
        "failed": StatusCode.FAILED,
    }
)


def _parse_decimal(raw: str | None, low: int, high: int) -> int:
    if not raw or not _DECIMAL.fullmatch(raw):
        return 0
    value = int(raw, 10)
    if not low <= value <= high:
        return 0
    return value


def parse_limit(raw: str | None) -> int:
    """Parse a base-10 page limit; anything unparsable means backend default (0)."""
    return _parse_decimal(raw, INT64_MIN, INT64_MAX)


def parse_int32(raw: str | None) -> int:
    """Parse a base-10 int32; unparsable or out-of-range values become 0."""
    return _parse_decimal(raw, INT32_MIN, INT32_MAX)


def parse_status_codes(raw: str | None) -> list[StatusCode]:
    """Parse a comma-separated status-code filter.

    Every token keeps its position: unrecognized tokens become
    ``StatusCode.UNKNOWN`` instead of being dropped, so
    ``deployed,bogus,failed`` yields three entries.
    """
    if not raw:
        return []
    return [STATUS_CODES.get(token, StatusCode.UNKNOWN) for token in raw.split(",")]


def build_list_request(
    limit: str | None = None,
    offset: str | None = None,
    sort_by: str | None = None,
    filter: str | None = None,
    sort_order: str | None = None,
    status_code: str | None = None,
) -> ListReleasesRequest:
    """Build a ListReleases request from raw query parameter values."""
    return ListReleasesRequest(
        limit=parse_limit(limit),
        offset=offset or "",
        sort_by=SORT_BY.get(sort_by or "", SortBy.UNKNOWN),
        filter=filter or "",
        sort_order=SORT_ORDER.get(sort_order or "", SortOrder.ASC),
        status_codes=parse_status_codes(status_code),
    )
