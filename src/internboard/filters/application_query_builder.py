"""Predicates for application listings (by status, post and student)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .clauses import AnyOfClause, Clause, EqualsClause, combine
from .query_builder import ASCENDING, DESCENDING, SORT_FIELD, to_object_id_or_none


class ApplicationQueryBuilder:
    """Build application-listing predicates from a flat parameter map."""

    def __init__(self, params: Mapping[str, Any]):
        self.params = params

    def build(self) -> dict[str, Any]:
        clauses: list[Clause] = []

        status = self.params.get("status")
        if isinstance(status, (list, tuple, set)):
            statuses = tuple(s for s in status if s)
            if statuses:
                clauses.append(AnyOfClause("status", statuses))
        elif status:
            clauses.append(EqualsClause("status", status))

        # Invalid ids are ignored, like the post builder does for companies
        for field in ("post", "student"):
            object_id = to_object_id_or_none(self.params.get(field))
            if object_id is not None:
                clauses.append(EqualsClause(field, object_id))

        return combine(clauses)

    def build_sort(self, sort: str | None = None) -> dict[str, int]:
        """Oldest application first unless ``"dateDesc"`` is requested."""
        if sort is None:
            sort = self.params.get("sort")
        if sort == "dateDesc":
            return {SORT_FIELD: DESCENDING}
        return {SORT_FIELD: ASCENDING}
