"""
MongoDB connection and index management.

Collections:
- posts: internship posts (text index for search, 2dsphere on location)
- companies: referenced by posts.company
- messages: forum messages, listed by topicId
- users: message authors and students
- applications: student applications, listed by post/status
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pymongo import ASCENDING, DESCENDING, GEOSPHERE, TEXT, AsyncMongoClient

from ..filters.query_builder import SEARCH_FIELDS

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase

    from ..config.settings import Settings

logger = logging.getLogger("internboard.mongodb")


class MongoConnection:
    """
    Owns the async MongoDB client for one process.

    Example:
        ```python
        connection = MongoConnection.from_settings(get_settings())
        await connection.connect()
        posts = connection.collection("posts")
        ...
        await connection.close()
        ```
    """

    def __init__(self, uri: str, database: str):
        if not uri:
            raise ValueError("MongoDB URI required. Set MONGODB_URI environment variable.")
        self._uri = uri
        self._database_name = database
        self._client: AsyncMongoClient | None = None
        self._db: AsyncDatabase | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> MongoConnection:
        return cls(settings.mongodb_uri.get_secret_value(), settings.mongodb_database)

    async def connect(self) -> None:
        """Create the client (idempotent)."""
        if self._client is not None:
            return
        logger.info(f"[MONGO] Connecting to database '{self._database_name}'")
        self._client = AsyncMongoClient(self._uri)
        self._db = self._client[self._database_name]

    @property
    def database(self) -> AsyncDatabase:
        if self._db is None:
            raise RuntimeError("MongoConnection not connected. Call 'await connection.connect()' first.")
        return self._db

    def collection(self, name: str) -> AsyncCollection:
        return self.database[name]

    async def ping(self) -> bool:
        """Return True if the server answers a ping."""
        try:
            await self.database.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"[MONGO] Ping failed: {e}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._db = None
            logger.info("[MONGO] Connection closed")


async def ensure_indexes(database: AsyncDatabase, settings: Settings) -> list[str]:
    """
    Create the indexes the listing queries rely on.

    The text index backs the single-word ``$text`` search path and the
    2dsphere index backs the city radius filter.

    Returns:
        Names of the indexes created (or already present)
    """
    posts = database[settings.posts_collection]
    messages = database[settings.messages_collection]
    applications = database[settings.applications_collection]

    names = [
        await posts.create_index(
            [(field, TEXT) for field in SEARCH_FIELDS],
            name="post_text_search",
        ),
        await posts.create_index([("location", GEOSPHERE)], name="post_location"),
        await posts.create_index([("createdAt", DESCENDING)], name="post_created_at"),
        await messages.create_index([("topicId", ASCENDING), ("createdAt", DESCENDING)], name="message_topic"),
        await applications.create_index([("post", ASCENDING), ("status", ASCENDING)], name="application_post_status"),
    ]
    logger.info(f"[MONGO] Indexes ensured: {', '.join(names)}")
    return names
