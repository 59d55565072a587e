"""Tests for the response envelope and paginated result."""
import math

import pytest
from pydantic import ValidationError

from dam_dispatch.application.dto.responses import ApiResponse, ErrorCode, PaginatedResult


class TestApiResponse:
    """Envelope construction invariants."""

    def test_ok_has_no_errors(self):
        """A success envelope carries data and no errors."""
        response = ApiResponse.ok({"id": 1})
        assert response.success is True
        assert response.data == {"id": 1}
        assert response.errors is None
        assert response.message == "Success"
        assert response.server_time.tzinfo is not None

    def test_ok_allows_absent_data(self):
        response = ApiResponse.ok(None)
        assert response.success is True
        assert response.data is None

    def test_failure_carries_errors_without_data(self):
        """A failure envelope carries the reasons and an error code."""
        response = ApiResponse.failure(["a", "b"], error_code=ErrorCode.VALIDATION_ERROR)
        assert response.success is False
        assert response.data is None
        assert response.errors == ["a", "b"]
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_failure_without_errors_is_rejected(self):
        with pytest.raises(ValidationError):
            ApiResponse.failure([])

    def test_failure_with_data_is_rejected(self):
        with pytest.raises(ValidationError):
            ApiResponse(success=False, data=1, errors=["boom"])

    def test_success_with_errors_is_rejected(self):
        with pytest.raises(ValidationError):
            ApiResponse(success=True, errors=["boom"])

    def test_canceled(self):
        response = ApiResponse.canceled("ref-1")
        assert response.is_canceled
        assert response.success is False
        assert response.reference == "ref-1"

    def test_to_dict_is_json_ready(self):
        """Serialized envelopes use plain JSON types."""
        data = ApiResponse.failure(["x"], error_code=ErrorCode.EXECUTION_ERROR).to_dict()
        assert data["error_code"] == "EXECUTION_ERROR"
        assert isinstance(data["server_time"], str)

    def test_envelope_is_immutable(self):
        response = ApiResponse.ok(1)
        with pytest.raises(ValidationError):
            response.success = False


class TestPaginatedResult:
    """Page container invariants and helpers."""

    @pytest.mark.parametrize(
        "total, page_size",
        [(0, 10), (3, 10), (10, 10), (23, 10), (100, 7), (1, 1), (99, 100)],
    )
    def test_pages_cover_every_item_once(self, total, page_size):
        """Item counts over pages 1..ceil(total / page_size) add up to total."""
        source = list(range(total))
        page_count = math.ceil(total / page_size)
        pages = [
            PaginatedResult.from_sequence(source, page_number, page_size)
            for page_number in range(1, page_count + 1)
        ]

        for page in pages:
            assert len(page.items) <= page_size
            assert page.total_count == total
            assert page.total_pages == page_count
        assert sum(len(page.items) for page in pages) == total
        assert [item for page in pages for item in page.items] == source

    def test_page_contents_and_navigation(self):
        page = PaginatedResult.from_sequence(list(range(23)), 2, 10)
        assert page.items == list(range(10, 20))
        assert page.has_previous_page is True
        assert page.has_next_page is True

    def test_last_page_is_partial(self):
        page = PaginatedResult.from_sequence(list(range(23)), 3, 10)
        assert page.items == [20, 21, 22]
        assert page.has_next_page is False

    def test_page_past_the_end_is_empty(self):
        page = PaginatedResult.from_sequence([1, 2], 5, 10)
        assert page.items == []
        assert page.total_count == 2

    def test_empty_source(self):
        page = PaginatedResult.from_sequence([], 1, 10)
        assert page.total_pages == 0
        assert page.has_previous_page is False
        assert page.has_next_page is False

    def test_more_items_than_page_size_is_rejected(self):
        with pytest.raises(ValidationError):
            PaginatedResult(items=[1, 2, 3], page_number=1, page_size=2, total_count=3)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page_number": 0, "page_size": 10, "total_count": 0},
            {"page_number": 1, "page_size": 0, "total_count": 0},
            {"page_number": 1, "page_size": 10, "total_count": -1},
        ],
    )
    def test_invalid_coordinates_are_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            PaginatedResult(items=[], **kwargs)

    def test_map_keeps_coordinates(self):
        page = PaginatedResult.from_sequence([1, 2, 3], 1, 2).map(lambda n: n * 10)
        assert page.items == [10, 20]
        assert page.total_count == 3
        assert page.page_size == 2

    def test_computed_fields_are_serialized(self):
        data = PaginatedResult.from_sequence([1, 2, 3], 1, 2).to_dict()
        assert data["total_pages"] == 2
        assert data["has_next_page"] is True
