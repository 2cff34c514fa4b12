"""
Address geocoding through the Nominatim (OpenStreetMap) search API.

The geocoder is an explicitly constructed component: build one per
process and pass it to whatever needs coordinates. It:
- memoizes every normalized address, successes and failures alike, for
  the lifetime of the instance;
- spaces outbound calls by ``min_interval`` seconds (Nominatim's usage
  policy asks for at most one request per second);
- never raises: timeouts, HTTP errors and empty or malformed answers all
  resolve to ``None``.

Coordinates are returned as ``(longitude, latitude)``, the order MongoDB
expects in GeoJSON and ``$centerSphere``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from ..config.settings import DEFAULT_GEOCODING_URL
from .rate_limiter import RateLimiter

if TYPE_CHECKING:
    from ..config.settings import Settings

logger = logging.getLogger("internboard.geocoder")

Coordinates = tuple[float, float]

DEFAULT_USER_AGENT = "internboard-geocoder/0.1"
DEFAULT_TIMEOUT = 5.0


class GeocoderProtocol(Protocol):
    """Capability consumed by the query builder."""

    async def geocode_address(self, address: str) -> Coordinates | None: ...


def normalize_address(address: str) -> str:
    """Cache key for an address: whitespace collapsed, lowercased."""
    return " ".join(address.split()).lower()


class Geocoder:
    """Cached, rate-limited geocoder backed by Nominatim."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = DEFAULT_GEOCODING_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limiter: RateLimiter | None = None,
    ):
        """
        Initialize the geocoder.

        Args:
            client: Optional shared HTTP client (the geocoder never closes it)
            base_url: Provider search endpoint
            user_agent: User-Agent header sent with every request
            timeout: Network timeout for a single request, in seconds
            rate_limiter: Limiter for outbound calls (default: 1 call/second)
        """
        self._client = client
        self._owns_client = client is None
        self._base_url = base_url
        self._user_agent = user_agent
        self._timeout = timeout
        self._rate_limiter = rate_limiter or RateLimiter(min_interval=1.0)
        self._cache: dict[str, Coordinates | None] = {}

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient | None = None) -> Geocoder:
        """Create a geocoder configured from :class:`Settings`."""
        return cls(
            client=client,
            base_url=settings.geocoding_url,
            user_agent=settings.geocoding_user_agent,
            timeout=settings.geocoding_timeout_seconds,
            rate_limiter=RateLimiter(min_interval=settings.geocoding_min_interval_seconds),
        )

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        """Forget every memoized address."""
        self._cache.clear()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this geocoder created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def geocode_address(self, address: str) -> Coordinates | None:
        """
        Resolve ``address`` to ``(longitude, latitude)``.

        Returns:
            Coordinates, or None when the address is empty, unknown, or the
            provider could not be reached
        """
        key = normalize_address(address)
        if not key:
            return None

        if key in self._cache:
            logger.debug(f"[GEO] Cache hit for '{key}'")
            return self._cache[key]

        async with self._rate_limiter.lock:
            # Another caller may have resolved it while we were queued
            if key in self._cache:
                return self._cache[key]

            await self._rate_limiter.wait()
            coordinates = await self._fetch(address.strip())
            self._cache[key] = coordinates

        return coordinates

    async def _fetch(self, address: str) -> Coordinates | None:
        """Query the provider once; any failure resolves to None."""
        try:
            response = await self._get_client().get(
                self._base_url,
                params={"format": "json", "limit": 1, "q": address},
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
            )
            response.raise_for_status()
            return _parse_coordinates(response.json())
        except httpx.TimeoutException:
            logger.warning(f"[GEO] Geocoding timed out for '{address}'")
        except httpx.HTTPError as e:
            logger.warning(f"[GEO] Geocoding request failed for '{address}': {e}")
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[GEO] Unexpected geocoding response for '{address}': {e}")
        return None


def _parse_coordinates(payload: Any) -> Coordinates | None:
    """
    Extract ``(lon, lat)`` from the first Nominatim result.

    Non-finite or out-of-range values are rejected so they never reach a
    ``$centerSphere`` query.
    """
    if not payload:
        return None
    first = payload[0]
    lon, lat = float(first["lon"]), float(first["lat"])
    if not (math.isfinite(lon) and math.isfinite(lat)):
        logger.warning(f"[GEO] Non-finite coordinates in geocoding response: lon={lon} lat={lat}")
        return None
    if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
        logger.warning(f"[GEO] Out-of-range coordinates in geocoding response: lon={lon} lat={lat}")
        return None
    return lon, lat
