"""
Offset pagination over MongoDB collections.

One aggregation reads the page window (with optional sorting and relation
expansion) while ``count_documents`` counts every match; both run
concurrently. They are not read from a shared snapshot, so under
concurrent writes ``total`` and ``data`` may disagree slightly, which is
acceptable for listing pages.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .models import PageResult

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

logger = logging.getLogger("internboard.pagination")


@dataclass(frozen=True)
class Relation:
    """
    Reference field to expand in each returned document.

    Attributes:
        path: Field holding the referenced ``_id`` (replaced in place)
        collection: Collection the reference points to
        select: Fields to keep from the referenced document (all if None)
        many: Keep the lookup result as a list instead of a single document
    """

    path: str
    collection: str
    select: tuple[str, ...] | None = None
    many: bool = False

    def stages(self) -> list[dict[str, Any]]:
        """Aggregation stages performing the expansion."""
        lookup: dict[str, Any] = {
            "from": self.collection,
            "localField": self.path,
            "foreignField": "_id",
            "as": self.path,
        }
        if self.select:
            lookup["pipeline"] = [{"$project": {field: 1 for field in self.select}}]

        stages: list[dict[str, Any]] = [{"$lookup": lookup}]
        if not self.many:
            stages.append({"$unwind": {"path": f"${self.path}", "preserveNullAndEmptyArrays": True}})
        return stages


class Paginator:
    """Execute a predicate with skip/limit windowing and return a PageResult."""

    async def paginate(
        self,
        source: AsyncCollection,
        predicate: Mapping[str, Any],
        page: int,
        limit: int,
        relations: Sequence[Relation] | None = None,
        sort: Mapping[str, int] | None = None,
    ) -> PageResult:
        """
        Run a paginated query.

        Args:
            source: Collection to query
            predicate: Filter, e.g. from QueryBuilder.build()
            page: Page number (1-based); values below 1 are clamped to 1
            limit: Page size; values below 1 are clamped to 1
            relations: Reference fields to expand
            sort: Sort specification, e.g. {"createdAt": -1}

        Returns:
            PageResult with the page items and metadata

        Raises:
            pymongo.errors.PyMongoError: Database errors propagate unchanged
        """
        if page < 1 or limit < 1:
            logger.debug(f"[PAGINATE] Clamping page={page} limit={limit} to at least 1")
        page = max(1, page)
        limit = max(1, limit)
        skip = (page - 1) * limit

        pipeline = self._build_pipeline(predicate, skip, limit, relations, sort)
        logger.debug(f"[PAGINATE] {source.name}: skip={skip} limit={limit}")

        items, total = await asyncio.gather(
            self._fetch(source, pipeline),
            source.count_documents(dict(predicate)),
        )

        return PageResult.from_window(items, total, page, limit)

    @staticmethod
    def _build_pipeline(
        predicate: Mapping[str, Any],
        skip: int,
        limit: int,
        relations: Sequence[Relation] | None,
        sort: Mapping[str, int] | None,
    ) -> list[dict[str, Any]]:
        pipeline: list[dict[str, Any]] = [{"$match": dict(predicate)}]
        if sort:
            pipeline.append({"$sort": dict(sort)})
        pipeline.append({"$skip": skip})
        pipeline.append({"$limit": limit})
        for relation in relations or ():
            pipeline.extend(relation.stages())
        return pipeline

    @staticmethod
    async def _fetch(source: AsyncCollection, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        cursor = await source.aggregate(pipeline)
        return await cursor.to_list(length=None)
