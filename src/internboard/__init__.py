"""
internboard - search and pagination core for an internship marketplace.

This package provides:
- QueryBuilder: request parameters to MongoDB predicates (fuzzy free-text,
  field, salary range, key skills and city radius filters)
- Paginator: skip/limit pagination with relation expansion and a uniform
  page envelope
- Geocoder: cached, rate-limited address geocoding (Nominatim)
- ListingService: the listings wired together over MongoDB

Quick Start:
    ```python
    from internboard import Geocoder, ListingService, MongoConnection, PaginationQuery, get_settings

    settings = get_settings()
    connection = MongoConnection.from_settings(settings)
    await connection.connect()

    service = ListingService(connection.database, geocoder=Geocoder.from_settings(settings))
    page = await service.find_posts(PaginationQuery(searchQuery="data engineer", city="Lyon", radiusKm=20))
    print(page.to_dict())
    ```
"""

from .config.settings import Settings, get_settings
from .db.mongodb import MongoConnection, ensure_indexes
from .filters import ApplicationQueryBuilder, QueryBuilder
from .geography import Geocoder, GeocoderProtocol, RateLimiter
from .pagination import (
    ApplicationPaginationQuery,
    PageResult,
    PaginationQuery,
    Paginator,
    Relation,
)
from .services import ListingService
from .utils import (
    build_fuzzy_pattern,
    build_fuzzy_regex,
    escape_regex_literal,
    normalize_text,
    tokenize_search_query,
)

__version__ = "0.1.0"
__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "MongoConnection",
    "ensure_indexes",
    # Filters
    "QueryBuilder",
    "ApplicationQueryBuilder",
    # Geography
    "Geocoder",
    "GeocoderProtocol",
    "RateLimiter",
    # Pagination
    "Paginator",
    "Relation",
    "PageResult",
    "PaginationQuery",
    "ApplicationPaginationQuery",
    # Services
    "ListingService",
    # Text utilities
    "build_fuzzy_pattern",
    "build_fuzzy_regex",
    "escape_regex_literal",
    "normalize_text",
    "tokenize_search_query",
]
