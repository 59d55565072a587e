"""
Response DTOs returned across the dispatch boundary.

``ApiResponse`` is the only shape a dispatch call ever returns, so callers
tell a successful empty page from a failure through ``success`` alone.
``PaginatedResult`` is the generic page container queries return inside it.
"""
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from pydantic import Field, computed_field, model_validator

from dam_dispatch.application.dto.base import BaseDTO

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_SUCCESS_MESSAGE = "Success"
DEFAULT_FAILURE_MESSAGE = "Error"
CANCELED_MESSAGE = "The request was canceled"


class ErrorCode(str, Enum):
    """Failure categories carried by a failed envelope."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CANCELED = "CANCELED"
    NOT_FOUND = "NOT_FOUND"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseDTO, Generic[T]):
    """
    Uniform success/failure envelope.

    Invariants:
        - success=True: ``errors`` is None (``data`` may be None for void or
          absent results).
        - success=False: ``data`` is None and ``errors`` is non-empty.
    """
    success: bool
    data: Optional[T] = None
    message: str = DEFAULT_SUCCESS_MESSAGE
    errors: Optional[List[str]] = None
    error_code: Optional[ErrorCode] = None
    reference: Optional[str] = None
    server_time: datetime = Field(default_factory=_utc_now)

    @model_validator(mode="after")
    def _check_envelope(self) -> "ApiResponse[T]":
        if self.success:
            if self.errors is not None or self.error_code is not None:
                raise ValueError("A successful response cannot carry errors")
        else:
            if self.data is not None:
                raise ValueError("A failed response cannot carry data")
            if not self.errors:
                raise ValueError("A failed response must carry at least one error")
        return self

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> "ApiResponse[T]":
        """Build a success envelope."""
        return cls(success=True, data=data, message=message)

    @classmethod
    def failure(
        cls,
        errors: Sequence[str],
        message: str = DEFAULT_FAILURE_MESSAGE,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        reference: Optional[str] = None,
    ) -> "ApiResponse[T]":
        """Build a failure envelope."""
        return cls(
            success=False,
            message=message,
            errors=list(errors),
            error_code=error_code,
            reference=reference,
        )

    @classmethod
    def canceled(cls, reference: Optional[str] = None) -> "ApiResponse[T]":
        """Build the envelope for a request abandoned by its caller."""
        return cls.failure(
            [CANCELED_MESSAGE],
            message=CANCELED_MESSAGE,
            error_code=ErrorCode.CANCELED,
            reference=reference,
        )

    @property
    def is_canceled(self) -> bool:
        return self.error_code == ErrorCode.CANCELED


class PaginatedResult(BaseDTO, Generic[T]):
    """One page of an ordered result set."""
    items: List[T] = Field(default_factory=list)
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    total_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_page(self) -> "PaginatedResult[T]":
        if len(self.items) > self.page_size:
            raise ValueError(
                f"Page holds {len(self.items)} items but page_size is {self.page_size}"
            )
        return self

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @classmethod
    def from_sequence(
        cls, source: Sequence[T], page_number: int, page_size: int
    ) -> "PaginatedResult[T]":
        """
        Cut one page out of a complete, already ordered sequence.

        Args:
            source: All matching items, before pagination
            page_number: 1-based page to return
            page_size: Maximum items per page

        Returns:
            The requested page; ``total_count`` is ``len(source)``
        """
        start = (page_number - 1) * page_size
        return cls(
            items=list(source[start:start + page_size]),
            page_number=page_number,
            page_size=page_size,
            total_count=len(source),
        )

    def map(self, projection: Callable[[T], U]) -> "PaginatedResult[U]":
        """Project every item while keeping the page coordinates."""
        return PaginatedResult(
            items=[projection(item) for item in self.items],
            page_number=self.page_number,
            page_size=self.page_size,
            total_count=self.total_count,
        )
