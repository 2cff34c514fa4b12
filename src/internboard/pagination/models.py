"""
Pydantic models for paginated listings.

- PaginationQuery / ApplicationPaginationQuery: validated request
  parameters, the upstream guard in front of the (permissive) builders
- PageResult: the page envelope returned by every listing

The default page size and the largest accepted ``limit`` come from
:class:`~internboard.config.settings.Settings`.
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config.settings import get_settings

ApplicationStatus = Literal["Pending", "Read", "Accepted", "Rejected"]


def _default_page_size() -> int:
    return get_settings().default_page_size


def _check_page_size(limit: int) -> int:
    max_page_size = get_settings().max_page_size
    if limit > max_page_size:
        raise ValueError(f"limit must be at most {max_page_size}")
    return limit


class PaginationQuery(BaseModel):
    """Post listing request: paging, sorting and filter parameters."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    page: int = Field(default=1, ge=1, description="Requested page (1-based)")
    limit: int = Field(default_factory=_default_page_size, ge=1, description="Items per page")
    sort: str | None = Field(default=None, description="dateAsc or dateDesc")

    search_query: str | None = Field(default=None, alias="searchQuery")
    title: str | None = None
    description: str | None = None
    duration: str | None = None
    sector: str | None = None
    type: str | None = None
    min_salary: int | None = Field(default=None, alias="minSalary")
    max_salary: int | None = Field(default=None, alias="maxSalary")
    key_skills: str | list[str] | None = Field(default=None, alias="keySkills")
    company_name: str | None = Field(default=None, alias="companyName")
    city: str | None = None
    radius_km: float | None = Field(default=None, ge=0, alias="radiusKm")
    company: str | None = None

    @field_validator("limit")
    @classmethod
    def limit_within_max_page_size(cls, v: int) -> int:
        return _check_page_size(v)

    def filter_params(self) -> dict[str, Any]:
        """Parameter map for :class:`QueryBuilder` (camelCase keys, no paging)."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={"page", "limit", "sort"},
        )


class ApplicationPaginationQuery(BaseModel):
    """Application listing request."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=_default_page_size, ge=1)
    status: ApplicationStatus | list[ApplicationStatus] | None = None
    sort: str | None = None
    post: str | None = None
    student: str | None = None

    @field_validator("limit")
    @classmethod
    def limit_within_max_page_size(cls, v: int) -> int:
        return _check_page_size(v)

    def filter_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True, exclude={"page", "limit"})


class PageResult(BaseModel):
    """
    Page envelope.

    ``total`` counts every document matching the predicate; ``data`` holds
    at most ``limit`` of them.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: list[Any] = Field(default_factory=list)
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")
    has_next: bool = Field(alias="hasNext")
    has_prev: bool = Field(alias="hasPrev")

    @classmethod
    def from_window(cls, data: list[Any], total: int, page: int, limit: int) -> PageResult:
        """Build the envelope and its derived metadata."""
        return cls(
            data=data,
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
            has_next=page * limit < total,
            has_prev=page > 1,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase wire names."""
        return self.model_dump(by_alias=True)
