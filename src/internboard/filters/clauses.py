"""
Filter clauses for MongoDB ``find``/``$match`` predicates.

Each clause is one kind of condition (text search, regex, equality,
containment, range conjunction, geo radius). Builders collect clauses in
order and :func:`combine` turns them into a single predicate dict:

- ``$and`` contributions from every clause are concatenated, so several
  composite conditions (multi-token search, salary range) never clobber
  each other;
- any other key is written in clause order; a later clause for the same
  key replaces the earlier one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger("internboard.filters")

EARTH_RADIUS_KM = 6371


class Clause(Protocol):
    """A single predicate condition."""

    def fragment(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class TextSearchClause:
    """Index-backed ``$text`` search (requires a text index on the collection)."""

    search: str

    def fragment(self) -> dict[str, Any]:
        return {"$text": {"$search": self.search}}


@dataclass(frozen=True)
class FuzzySearchClause:
    """
    Every pattern must match at least one of ``fields``.

    Produces one ``$or`` group per pattern, all of them ANDed together.
    """

    patterns: tuple[re.Pattern[str], ...]
    fields: tuple[str, ...]

    def fragment(self) -> dict[str, Any]:
        return {
            "$and": [
                {"$or": [{field: pattern} for field in self.fields]}
                for pattern in self.patterns
            ]
        }


@dataclass(frozen=True)
class RegexClause:
    """Case-insensitive ``$regex`` match on one field."""

    field: str
    pattern: str

    def fragment(self) -> dict[str, Any]:
        return {self.field: {"$regex": self.pattern, "$options": "i"}}


@dataclass(frozen=True)
class EqualsClause:
    """Exact equality on one field."""

    field: str
    value: Any

    def fragment(self) -> dict[str, Any]:
        return {self.field: self.value}


@dataclass(frozen=True)
class AnyOfClause:
    """Field matches (or, for arrays, contains) any of ``values`` via ``$in``."""

    field: str
    values: tuple[Any, ...]

    def fragment(self) -> dict[str, Any]:
        return {self.field: {"$in": list(self.values)}}


@dataclass(frozen=True)
class AllOfClause:
    """Raw conditions appended to the predicate's shared ``$and`` list."""

    conditions: tuple[dict[str, Any], ...]

    def fragment(self) -> dict[str, Any]:
        return {"$and": list(self.conditions)}


@dataclass(frozen=True)
class GeoRadiusClause:
    """Documents whose ``field`` point lies within ``radius_km`` of ``center``."""

    field: str
    center: tuple[float, float]  # (longitude, latitude)
    radius_km: float

    def fragment(self) -> dict[str, Any]:
        return {
            self.field: {
                "$geoWithin": {
                    "$centerSphere": [list(self.center), self.radius_km / EARTH_RADIUS_KM],
                }
            }
        }


def combine(clauses: Sequence[Clause]) -> dict[str, Any]:
    """
    Merge clauses into one MongoDB predicate.

    Args:
        clauses: Clauses in build order

    Returns:
        Predicate dict ({} when there are no clauses)
    """
    predicate: dict[str, Any] = {}
    conjunction: list[dict[str, Any]] = []

    for clause in clauses:
        for key, value in clause.fragment().items():
            if key == "$and":
                conjunction.extend(value)
                continue
            if key in predicate:
                logger.debug(f"[FILTER] Clause for '{key}' replaces an earlier one")
            predicate[key] = value

    if conjunction:
        predicate["$and"] = conjunction
    return predicate
