import math
from dataclasses import dataclass
from typing import Self

from pydantic import BaseModel, Field

MAX_PAGE_LIMIT = 100


@dataclass(frozen=True)
class PaginationDefaults:
    """Page and limit used when a list request omits them."""

    page: int = 0
    limit: int = 10


class Pagination(BaseModel):
    """Pagination metadata for list endpoints."""

    current_page: int = Field(..., description="Zero-based index of the returned page", ge=0)
    limit: int = Field(..., description="Maximum items per page", ge=0, le=MAX_PAGE_LIMIT)
    total_notes: int = Field(..., description="Total number of notes matching the filters", ge=0)
    total_pages: int = Field(..., description="Number of pages at this limit", ge=0)
    has_next_page: bool = Field(..., description="Whether a page exists after this one")
    has_prev_page: bool = Field(..., description="Whether a page exists before this one")

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> Self:
        """Derive page counts from the total; a zero limit has no pages at all."""
        if limit == 0:
            return cls(
                current_page=page,
                limit=limit,
                total_notes=total,
                total_pages=0,
                has_next_page=False,
                has_prev_page=False,
            )
        total_pages = math.ceil(total / limit)
        return cls(
            current_page=page,
            limit=limit,
            total_notes=total,
            total_pages=total_pages,
            has_next_page=page < total_pages - 1,
            has_prev_page=page > 0,
        )
