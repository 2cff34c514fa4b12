"""
Listing services: the callers of the filter builders and the paginator.

Each method turns a validated request into a predicate and a sort
specification, then pages through the matching collection with the
relations a listing screen needs expanded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..config.settings import Settings, get_settings
from ..filters.application_query_builder import ApplicationQueryBuilder
from ..filters.query_builder import QueryBuilder
from ..pagination.models import ApplicationPaginationQuery, PageResult, PaginationQuery
from ..pagination.paginator import Paginator, Relation

if TYPE_CHECKING:
    from pymongo.asynchronous.database import AsyncDatabase

    from ..geography.geocoder import GeocoderProtocol

logger = logging.getLogger("internboard.listings")

# Public company fields shown next to a post
COMPANY_FIELDS: tuple[str, ...] = (
    "_id",
    "name",
    "siretNumber",
    "nafCode",
    "structureType",
    "legalStatus",
    "streetNumber",
    "streetName",
    "postalCode",
    "city",
    "country",
    "logo",
    "location",
)

AUTHOR_FIELDS: tuple[str, ...] = ("_id", "firstName", "lastName", "role", "logo")


class ListingService:
    """Paginated listings of posts, forum messages and applications."""

    def __init__(
        self,
        database: AsyncDatabase,
        paginator: Paginator | None = None,
        geocoder: GeocoderProtocol | None = None,
        settings: Settings | None = None,
    ):
        self._db = database
        self._paginator = paginator or Paginator()
        self._geocoder = geocoder
        self._settings = settings or get_settings()

    async def find_posts(self, query: PaginationQuery, include_hidden: bool = False) -> PageResult:
        """
        Posts matching the request filters, newest first by default.

        Args:
            query: Validated paging and filter parameters
            include_hidden: Also list hidden posts (moderation views)
        """
        qb = QueryBuilder(
            query.filter_params(),
            geocoder=self._geocoder,
            max_tokens=self._settings.search_max_tokens,
        )
        predicate = await qb.build(include_hidden=include_hidden)
        sort = qb.build_sort(query.sort)
        logger.debug(f"[LISTING] Post predicate keys: {sorted(predicate)}")

        company = Relation(
            path="company",
            collection=self._settings.companies_collection,
            select=COMPANY_FIELDS,
        )
        return await self._paginator.paginate(
            self._db[self._settings.posts_collection],
            predicate,
            query.page,
            query.limit,
            relations=[company],
            sort=sort,
        )

    async def find_messages(
        self,
        topic_id: Any,
        page: int = 1,
        limit: int | None = None,
        sort: str | None = None,
    ) -> PageResult:
        """
        Messages of one forum topic with their author and parent message.

        Without ``sort`` no ordering is applied (storage order, oldest first
        in practice); ``"dateAsc"`` or ``"dateDesc"`` order by creation time.
        """
        qb = QueryBuilder({"topicId": topic_id, "sort": sort})
        limit = min(limit or self._settings.default_page_size, self._settings.max_page_size)

        relations = [
            Relation(path="author", collection=self._settings.users_collection, select=AUTHOR_FIELDS),
            Relation(path="parentMessage", collection=self._settings.messages_collection),
        ]
        return await self._paginator.paginate(
            self._db[self._settings.messages_collection],
            qb.build_message_filter(),
            page,
            limit,
            relations=relations,
            sort=qb.build_sort() if sort else None,
        )

    async def find_applications(self, query: ApplicationPaginationQuery) -> PageResult:
        """Applications filtered by status, post and student, oldest first by default."""
        qb = ApplicationQueryBuilder(query.filter_params())

        relations = [
            Relation(path="post", collection=self._settings.posts_collection),
            Relation(path="student", collection=self._settings.users_collection, select=AUTHOR_FIELDS),
        ]
        return await self._paginator.paginate(
            self._db[self._settings.applications_collection],
            qb.build(),
            query.page,
            query.limit,
            relations=relations,
            sort=qb.build_sort(),
        )
