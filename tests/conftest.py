"""Shared fixtures for internboard tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from internboard.config.settings import Settings

PARIS = (2.3522, 48.8566)


@pytest.fixture
def settings():
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def geocoder():
    """Geocoding capability that always resolves to Paris."""
    mock = MagicMock()
    mock.geocode_address = AsyncMock(return_value=PARIS)
    return mock


@pytest.fixture
def failing_geocoder():
    """Geocoding capability that never resolves anything."""
    mock = MagicMock()
    mock.geocode_address = AsyncMock(return_value=None)
    return mock


def make_collection(items, total, name="posts"):
    """Mock async collection whose aggregate() yields ``items``."""
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=items)

    collection = MagicMock()
    collection.name = name
    collection.aggregate = AsyncMock(return_value=cursor)
    collection.count_documents = AsyncMock(return_value=total)
    return collection


@pytest.fixture
def collection_factory():
    """Factory for mock async collections."""
    return make_collection
