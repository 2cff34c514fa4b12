"""
MongoDB filter builders for internboard listings.

- QueryBuilder: post listings (free-text, field, salary, skills, geo filters)
- ApplicationQueryBuilder: application listings (status, post, student)
- clauses: the condition types both builders combine into a predicate
"""

from .application_query_builder import ApplicationQueryBuilder
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
from .query_builder import SEARCH_FIELDS, QueryBuilder, to_object_id_or_none

__all__ = [
    "ApplicationQueryBuilder",
    "QueryBuilder",
    "SEARCH_FIELDS",
    "to_object_id_or_none",
    "Clause",
    "AllOfClause",
    "AnyOfClause",
    "EqualsClause",
    "FuzzySearchClause",
    "GeoRadiusClause",
    "RegexClause",
    "TextSearchClause",
    "combine",
]
