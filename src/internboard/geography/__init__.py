"""Geocoding collaborator used by the geospatial post filter."""

from .geocoder import Coordinates, Geocoder, GeocoderProtocol, normalize_address
from .rate_limiter import RateLimiter

__all__ = [
    "Coordinates",
    "Geocoder",
    "GeocoderProtocol",
    "RateLimiter",
    "normalize_address",
]
