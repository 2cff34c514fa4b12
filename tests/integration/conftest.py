"""
Integration test configuration.

Provides fixtures for integration tests that require a MongoDB server.
"""

import os
import uuid

import pytest
import pytest_asyncio

from internboard.config.settings import Settings
from internboard.db.mongodb import MongoConnection


@pytest.fixture
def skip_if_no_mongodb():
    """Skip test if MongoDB connection not available."""
    if not os.getenv("MONGODB_URI"):
        pytest.skip("MONGODB_URI not set - skipping integration test")


@pytest.fixture
def integration_settings(skip_if_no_mongodb):
    """Settings pointing at a throwaway database."""
    return Settings(_env_file=None, mongodb_database=f"internboard_test_{uuid.uuid4().hex[:8]}")


@pytest_asyncio.fixture
async def mongo(integration_settings):
    """
    Connected MongoConnection on a unique database.

    Yields:
        MongoConnection; the database is dropped afterwards
    """
    connection = MongoConnection.from_settings(integration_settings)
    await connection.connect()
    yield connection
    await connection.database.client.drop_database(integration_settings.mongodb_database)
    await connection.close()
