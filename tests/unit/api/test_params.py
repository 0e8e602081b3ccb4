"""Unit tests for list query parsing."""

from __future__ import annotations

import pytest

from release_gateway.api.params import (
    build_list_request,
    parse_int32,
    parse_limit,
    parse_status_codes,
)
from release_gateway.integrations.backend.models import SortBy, SortOrder, StatusCode


@pytest.mark.unit
class TestParseLimit:
    """Tests for parse_limit."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("10", 10),
            ("+7", 7),
            ("-3", -3),
            ("0", 0),
            ("9223372036854775807", 2**63 - 1),
            ("9223372036854775808", 0),
            ("abc", 0),
            ("1.5", 0),
            (" 5", 0),
            ("0x10", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_parses_decimal(self, raw: str | None, expected: int) -> None:
        """Only in-range base-10 integers should be accepted."""
        assert parse_limit(raw) == expected


@pytest.mark.unit
class TestParseInt32:
    """Tests for parse_int32."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("3", 3),
            ("2147483647", 2147483647),
            ("-2147483648", -2147483648),
            ("2147483648", 0),
            ("latest", 0),
        ],
    )
    def test_bounds(self, raw: str, expected: int) -> None:
        """Values outside int32 should collapse to 0."""
        assert parse_int32(raw) == expected


@pytest.mark.unit
class TestParseStatusCodes:
    """Tests for parse_status_codes."""

    def test_unknown_tokens_keep_their_slot(self) -> None:
        """Unrecognized tokens should map to UNKNOWN in place."""
        assert parse_status_codes("deployed,bogus,failed") == [
            StatusCode.DEPLOYED,
            StatusCode.UNKNOWN,
            StatusCode.FAILED,
        ]

    def test_all_known_codes(self) -> None:
        assert parse_status_codes("unknown,deployed,deleted,superseded,failed") == [
            StatusCode.UNKNOWN,
            StatusCode.DEPLOYED,
            StatusCode.DELETED,
            StatusCode.SUPERSEDED,
            StatusCode.FAILED,
        ]

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_means_no_filter(self, raw: str | None) -> None:
        assert parse_status_codes(raw) == []

    def test_lookup_is_case_sensitive(self) -> None:
        assert parse_status_codes("DEPLOYED") == [StatusCode.UNKNOWN]


@pytest.mark.unit
class TestBuildListRequest:
    """Tests for build_list_request."""

    def test_defaults(self) -> None:
        """No parameters should produce the zero-valued request."""
        request = build_list_request()

        assert request.limit == 0
        assert request.offset == ""
        assert request.sort_by == SortBy.UNKNOWN
        assert request.filter == ""
        assert request.sort_order == SortOrder.ASC
        assert request.status_codes == []

    def test_all_parameters(self) -> None:
        request = build_list_request(
            limit="25",
            offset="web",
            sort_by="last-released",
            filter="^w",
            sort_order="desc",
            status_code="deployed,failed",
        )

        assert request.limit == 25
        assert request.offset == "web"
        assert request.sort_by == SortBy.LAST_RELEASED
        assert request.filter == "^w"
        assert request.sort_order == SortOrder.DESC
        assert request.status_codes == [StatusCode.DEPLOYED, StatusCode.FAILED]

    @pytest.mark.parametrize(
        ("sort_by", "sort_order"),
        [("size", "random"), ("Name", "DESC")],
    )
    def test_unrecognized_sort_falls_back(self, sort_by: str, sort_order: str) -> None:
        """Unknown sort keys should fall back to UNKNOWN and ASC."""
        request = build_list_request(sort_by=sort_by, sort_order=sort_order)

        assert request.sort_by == SortBy.UNKNOWN
        assert request.sort_order == SortOrder.ASC
