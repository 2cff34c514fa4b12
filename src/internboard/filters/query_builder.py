"""
Translate request query parameters into MongoDB predicates for post listings.

The builder is deliberately permissive: malformed optional input (an
invalid company id, a city the geocoder cannot resolve, an unknown sort
value) drops the corresponding clause instead of failing the request.
Validation of user input belongs to the request DTOs upstream.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from bson import ObjectId

from ..geography.geocoder import GeocoderProtocol
from ..utils.fuzzy_search import DEFAULT_MAX_TOKENS, build_fuzzy_regex, tokenize_search_query
from ..utils.parse import to_number_or_none, to_string_or_none
from ..utils.regex import escape_regex_literal
from .clauses import (
    AllOfClause,
    AnyOfClause,
    Clause,
    EqualsClause,
    FuzzySearchClause,
    GeoRadiusClause,
    RegexClause,
    TextSearchClause,
    combine,
)

logger = logging.getLogger("internboard.query_builder")

# Fields scanned by the fuzzy free-text fallback
SEARCH_FIELDS: tuple[str, ...] = ("title", "description", "sector", "duration", "keySkills")

# Fields matched by case-insensitive substring
SUBSTRING_FIELDS: tuple[str, ...] = ("title", "description", "duration")

SORT_FIELD = "createdAt"
ASCENDING = 1
DESCENDING = -1


def to_object_id_or_none(value: Any) -> ObjectId | None:
    """Convert a 24-hex-char string (or an ObjectId) to ObjectId, else None."""
    if isinstance(value, ObjectId):
        return value
    text = to_string_or_none(value)
    if text is None or not ObjectId.is_valid(text):
        return None
    return ObjectId(text)


class QueryBuilder:
    """
    Build post-listing predicates from a flat parameter map.

    Example:
        ```python
        qb = QueryBuilder({"searchQuery": "data engineer", "city": "Lyon", "radiusKm": 20}, geocoder)
        predicate = await qb.build()
        sort = qb.build_sort()
        page = await paginator.paginate(posts, predicate, 1, 10, sort=sort)
        ```
    """

    def __init__(
        self,
        params: Mapping[str, Any],
        geocoder: GeocoderProtocol | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Create a new QueryBuilder.

        Args:
            params: Query parameters (strings, numbers, lists, None)
            geocoder: Optional geocoding capability for the city filter
            max_tokens: Maximum number of free-text search tokens
        """
        self.params = params
        self.geocoder = geocoder
        self.max_tokens = max_tokens

    async def build(self, include_hidden: bool = False) -> dict[str, Any]:
        """
        Build the MongoDB predicate.

        Args:
            include_hidden: Keep hidden posts (forum/moderation context)

        Returns:
            Predicate for ``find``/``$match``/``count_documents``
        """
        clauses: list[Clause] = []

        clauses.extend(self._search_clauses())
        clauses.extend(self._field_clauses())
        clauses.extend(self._salary_clauses())
        clauses.extend(self._key_skills_clauses())
        clauses.extend(await self._geo_clauses())

        if not include_hidden:
            clauses.append(EqualsClause("isVisible", True))

        if self.params.get("_id") is not None:
            clauses.append(EqualsClause("_id", self.params["_id"]))

        return combine(clauses)

    def build_message_filter(self) -> dict[str, Any]:
        """Predicate for message listings: exact match on ``topicId``."""
        topic_id = self.params.get("topicId")
        if topic_id is None:
            return {}
        return {"topicId": to_object_id_or_none(topic_id) or topic_id}

    def build_sort(self, sort: str | None = None) -> dict[str, int]:
        """
        Sort specification for ``$sort``.

        ``"dateAsc"`` sorts oldest first; anything else (``"dateDesc"``,
        unknown values, nothing) sorts newest first.
        """
        if sort is None:
            sort = self.params.get("sort")
        if sort == "dateAsc":
            return {SORT_FIELD: ASCENDING}
        return {SORT_FIELD: DESCENDING}

    def _search_clauses(self) -> list[Clause]:
        """Global free-text search over the searchable fields."""
        query = to_string_or_none(self.params.get("searchQuery"))
        if query is None:
            return []

        tokens = tokenize_search_query(query, self.max_tokens)
        if not tokens:
            return []

        # A single clean word can use the text index
        if len(tokens) == 1 and tokens[0].isalnum():
            return [TextSearchClause(tokens[0])]

        return [
            FuzzySearchClause(
                patterns=tuple(build_fuzzy_regex(token) for token in tokens),
                fields=SEARCH_FIELDS,
            )
        ]

    def _field_clauses(self) -> list[Clause]:
        clauses: list[Clause] = []

        for field in SUBSTRING_FIELDS:
            value = to_string_or_none(self.params.get(field))
            if value is not None:
                clauses.append(RegexClause(field, escape_regex_literal(value)))

        sector = to_string_or_none(self.params.get("sector"))
        if sector is not None:
            clauses.append(RegexClause("sector", f"^{escape_regex_literal(sector)}$"))

        post_type = to_string_or_none(self.params.get("type"))
        if post_type is not None:
            clauses.append(EqualsClause("type", post_type))

        raw_company = self.params.get("company")
        if to_string_or_none(raw_company) is not None:
            company = to_object_id_or_none(raw_company)
            if company is None:
                logger.debug(f"[FILTER] Ignoring invalid company id: {raw_company!r}")
            else:
                clauses.append(EqualsClause("company", company))

        return clauses

    def _salary_clauses(self) -> list[Clause]:
        """
        Keep posts whose salary range lies inside the requested bounds.

        Reversed bounds are swapped rather than rejected.
        """
        min_salary = to_number_or_none(self.params.get("minSalary"))
        max_salary = to_number_or_none(self.params.get("maxSalary"))

        if min_salary is not None and max_salary is not None:
            if min_salary > max_salary:
                min_salary, max_salary = max_salary, min_salary
            conditions = (
                {"minSalary": {"$type": "number", "$gte": min_salary, "$lte": max_salary}},
                {"maxSalary": {"$type": "number", "$lte": max_salary}},
            )
        elif min_salary is not None:
            conditions = ({"minSalary": {"$type": "number", "$gte": min_salary}},)
        elif max_salary is not None:
            conditions = (
                {"minSalary": {"$type": "number", "$lte": max_salary}},
                {
                    "$or": [
                        {"maxSalary": {"$type": "number", "$lte": max_salary}},
                        {"maxSalary": {"$exists": False}},
                    ]
                },
            )
        else:
            return []

        return [AllOfClause(conditions)]

    def _key_skills_clauses(self) -> list[Clause]:
        """Posts requiring any of the given skills (case-insensitive)."""
        raw = self.params.get("keySkills")
        if raw is None:
            return []
        values = raw if isinstance(raw, (list, tuple, set)) else [raw]

        patterns = []
        for value in values:
            skill = to_string_or_none(value)
            if skill is not None:
                patterns.append(re.compile(escape_regex_literal(skill), re.IGNORECASE))

        if not patterns:
            return []
        return [AnyOfClause("keySkills", tuple(patterns))]

    async def _geo_clauses(self) -> list[Clause]:
        """Posts located within ``radiusKm`` of ``city``."""
        city = to_string_or_none(self.params.get("city"))
        radius_km = to_number_or_none(self.params.get("radiusKm"))
        if city is None or radius_km is None or radius_km <= 0:
            return []
        if self.geocoder is None:
            logger.debug("[FILTER] No geocoder configured, skipping city filter")
            return []

        coordinates = await self.geocoder.geocode_address(city)
        if coordinates is None:
            logger.debug(f"[FILTER] Could not geocode '{city}', skipping city filter")
            return []

        return [GeoRadiusClause("location", tuple(coordinates), radius_km)]
