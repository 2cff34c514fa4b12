"""End-to-end listing queries against a real MongoDB server."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from bson import ObjectId

from internboard.db.mongodb import ensure_indexes
from internboard.pagination.models import PaginationQuery
from internboard.services.listings import ListingService

pytestmark = pytest.mark.integration

PARIS = (2.3522, 48.8566)


def make_post(title, created_minutes_ago, company_id, **fields):
    post = {
        "title": title,
        "description": fields.pop("description", ""),
        "sector": fields.pop("sector", "IT"),
        "duration": "6 months",
        "type": fields.pop("type", "Hybrid"),
        "keySkills": fields.pop("keySkills", []),
        "company": company_id,
        "isVisible": fields.pop("isVisible", True),
        "location": {"type": "Point", "coordinates": list(fields.pop("coordinates", PARIS))},
        "createdAt": datetime.now(timezone.utc) - timedelta(minutes=created_minutes_ago),
    }
    post.update(fields)
    return post


@pytest_asyncio.fixture
async def seeded(mongo, integration_settings):
    db = mongo.database
    company_id = ObjectId()
    await db[integration_settings.companies_collection].insert_one(
        {"_id": company_id, "name": "Acme", "city": "Paris", "siretNumber": "123"}
    )
    await db[integration_settings.posts_collection].insert_many(
        [
            make_post("Développeur Python", 1, company_id, keySkills=["Python", "MongoDB"], minSalary=1200, maxSalary=1500),
            make_post("Data Engineer", 2, company_id, keySkills=["SQL"], minSalary=2000, maxSalary=2500),
            make_post("Designer UX", 3, company_id, sector="Design", coordinates=(4.8357, 45.764)),
            make_post("Hidden post", 4, company_id, isVisible=False),
        ]
    )
    await ensure_indexes(db, integration_settings)
    return db


class TestListingsAgainstMongoDB:
    @pytest.mark.asyncio
    async def test_lists_visible_posts_newest_first(self, seeded, integration_settings):
        service = ListingService(seeded, settings=integration_settings)

        result = await service.find_posts(PaginationQuery(limit=2))

        assert result.total == 3
        assert result.total_pages == 2
        assert [post["title"] for post in result.data] == ["Développeur Python", "Data Engineer"]
        assert result.data[0]["company"]["name"] == "Acme"

    @pytest.mark.asyncio
    async def test_fuzzy_search_folds_accents(self, seeded, integration_settings):
        service = ListingService(seeded, settings=integration_settings)

        result = await service.find_posts(PaginationQuery(search_query="developpeur python"))

        assert [post["title"] for post in result.data] == ["Développeur Python"]

    @pytest.mark.asyncio
    async def test_salary_containment(self, seeded, integration_settings):
        service = ListingService(seeded, settings=integration_settings)

        result = await service.find_posts(PaginationQuery(min_salary=1000, max_salary=1600))

        assert [post["title"] for post in result.data] == ["Développeur Python"]

    @pytest.mark.asyncio
    async def test_city_radius(self, seeded, integration_settings, geocoder):
        service = ListingService(seeded, geocoder=geocoder, settings=integration_settings)

        result = await service.find_posts(PaginationQuery(city="Paris", radius_km=50))

        assert {post["title"] for post in result.data} == {"Développeur Python", "Data Engineer"}

    @pytest.mark.asyncio
    async def test_include_hidden(self, seeded, integration_settings):
        service = ListingService(seeded, settings=integration_settings)

        result = await service.find_posts(PaginationQuery(), include_hidden=True)

        assert result.total == 4
