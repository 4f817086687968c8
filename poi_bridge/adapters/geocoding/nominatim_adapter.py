"""Nominatim geocoder adapter.

Wraps geopy's Nominatim client with:
- Caching via CachePort
- Configuration injection
- Typed failures (GeocodeUnavailable) with logging

Each lookup is a single attempt; there is no rate limiter or retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from ...config import GeocodingConfig, get_config
from ...domain.errors import GeocodeUnavailable
from ...domain.models import GeocodeCandidate
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache


@dataclass
class NominatimGeocoderAdapter:
    """Nominatim geocoder adapter with caching.

    Implements GeocoderPort using OpenStreetMap's Nominatim service.

    Attributes:
        config: Geocoding configuration
        cache: Cache for successful lookups
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    cache: CachePort[GeocodeCandidate] = field(
        default_factory=lambda: InMemoryCache(name="geocode")
    )

    _geolocator: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geolocator(self) -> Any:
        """Get or initialize the Nominatim client."""
        if self._geolocator is None:
            self._logger.debug(
                "Initializing Nominatim geocoder",
                extra={
                    "user_agent": self.config.user_agent,
                    "domain": self.config.domain,
                    "timeout": self.config.timeout_seconds,
                },
            )
            self._geolocator = Nominatim(
                user_agent=self.config.user_agent,
                domain=self.config.domain,
                timeout=self.config.timeout_seconds,
            )
        return self._geolocator

    def search(self, query: str) -> GeocodeCandidate:
        """Geocode a free-text place.

        Args:
            query: The location phrase to look up.

        Returns:
            The first candidate returned by Nominatim.

        Raises:
            GeocodeUnavailable: On service errors, unparseable results or
                when nothing was found.
        """
        if not query or not query.strip():
            raise GeocodeUnavailable("Empty geocoding query", query=query)

        cache_key = query.strip().lower()
        cached = self.cache.get(cache_key)
        if cached is not None:
            self._logger.debug("Geocode cache hit", extra={"query": query})
            return cached

        try:
            location = self._get_geolocator().geocode(query, exactly_one=True)
        except GeopyError as e:
            raise GeocodeUnavailable("Geocoding service error", query=query, cause=e)

        if location is None:
            raise GeocodeUnavailable(f"No geocoding result for {query!r}", query=query)

        candidate = self._to_candidate(location.raw, query)
        self._logger.debug(
            "Geocode success",
            extra={"query": query, "display_name": candidate.display_name},
        )
        self.cache.set(cache_key, candidate)
        return candidate

    @staticmethod
    def _to_candidate(raw: dict, query: str) -> GeocodeCandidate:
        try:
            return GeocodeCandidate(
                latitude=float(raw["lat"]),
                longitude=float(raw["lon"]),
                display_name=str(raw.get("display_name") or ""),
                place_type=str(raw.get("type") or raw.get("class") or ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodeUnavailable(
                "Malformed geocoding result", query=query, cause=e
            )
