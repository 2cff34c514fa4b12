"""Offset pagination: request DTOs, the page envelope and the paginator."""

from .models import (
    ApplicationPaginationQuery,
    ApplicationStatus,
    PageResult,
    PaginationQuery,
)
from .paginator import Paginator, Relation

__all__ = [
    "ApplicationPaginationQuery",
    "ApplicationStatus",
    "PageResult",
    "PaginationQuery",
    "Paginator",
    "Relation",
]
