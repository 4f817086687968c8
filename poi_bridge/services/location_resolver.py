"""Location resolver service.

Turns a free-text location phrase into a LocationQuery. Resolution
order, first match wins:

1. exact gazetteer match of the whole phrase
2. "city, country" split, city part first
3. explicit ``coordinates <lat>, <lon>``
4. substring match against gazetteer place names
5. external geocoder, when one is configured
6. no geographic constraint
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..config import SearchConfig, get_config
from ..domain.errors import GeocodeUnavailable
from ..domain.models import GazetteerEntry, GeocodeCandidate, GeoLocation, LocationQuery
from ..nlp.command import COORDINATES_RE
from ..ports.gazetteer import Gazetteer
from ..ports.geocoding import GeocoderPort

_COUNTRY_CODE_RE = re.compile(r"\b([A-Z]{2})\b")

# Shorter keys are ISO codes; too ambiguous for the substring step
_MIN_SUBSTRING_LENGTH = 3


@dataclass
class LocationResolverService:
    """Resolve location phrases to search parameters.

    Never raises: an unresolvable phrase yields a query without a
    geographic constraint.

    Attributes:
        gazetteer: Read-only place table shared by all requests
        geocoder: Optional external geocoder used as a last resort
        config: Search radii and result limits
    """

    gazetteer: Gazetteer
    geocoder: Optional[GeocoderPort] = None
    config: SearchConfig = field(default_factory=lambda: get_config().search)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(self, location_phrase: str) -> LocationQuery:
        """Resolve a location phrase.

        Args:
            location_phrase: Free text such as "Berlin", "Lyon, FR" or
                "coordinates 48.85, 2.35".

        Returns:
            LocationQuery, possibly without a geographic constraint.
        """
        phrase = location_phrase.strip()

        query: Optional[LocationQuery] = None
        if phrase:
            query = (
                self._match_exact(phrase)
                or self._match_city_country(phrase)
                or self._match_coordinates(phrase)
                or self._match_substring(phrase)
                or self._geocode(phrase)
            )

        if query is None:
            query = LocationQuery(max_results=self.config.max_results)

        self._logger.info(
            "Location resolved",
            extra={
                "location": phrase,
                "source": query.source,
                "latitude": query.latitude,
                "longitude": query.longitude,
                "radius_km": query.radius_km,
                "country_code": query.country_code,
            },
        )
        return query

    # ── Resolution steps ──────────────────────────────────────────

    def _match_exact(self, phrase: str) -> Optional[LocationQuery]:
        entry = self.gazetteer.get(phrase.lower())
        return self._from_entry(entry, "gazetteer") if entry else None

    def _match_city_country(self, phrase: str) -> Optional[LocationQuery]:
        if "," not in phrase:
            return None

        city, country = (part.strip().lower() for part in phrase.split(",", 1))
        for key in (city, country):
            entry = self.gazetteer.get(key) if key else None
            if entry:
                return self._from_entry(entry, "city_country")
        return None

    def _match_coordinates(self, phrase: str) -> Optional[LocationQuery]:
        if "coordinates" not in phrase.lower():
            return None

        match = COORDINATES_RE.search(phrase)
        if not match:
            return None

        try:
            location = GeoLocation(
                latitude=float(match.group(1)), longitude=float(match.group(2))
            )
        except ValueError:
            self._logger.warning(
                "Ignoring out-of-range coordinates",
                extra={"location": phrase},
            )
            return None

        return LocationQuery(
            latitude=location.latitude,
            longitude=location.longitude,
            radius_km=self.config.coordinate_radius_km,
            max_results=self.config.max_results,
            source="coordinates",
        )

    def _match_substring(self, phrase: str) -> Optional[LocationQuery]:
        text = phrase.lower()
        for key, entry in self.gazetteer.items():
            if len(key) < _MIN_SUBSTRING_LENGTH:
                continue
            # Whole words only: "usa" must not match inside "Busan"
            if re.search(rf"\b{re.escape(key)}\b", text) or (
                len(text) >= _MIN_SUBSTRING_LENGTH and text in key
            ):
                return self._from_entry(entry, "substring")
        return None

    def _geocode(self, phrase: str) -> Optional[LocationQuery]:
        if self.geocoder is None:
            return None

        try:
            candidate = self.geocoder.search(phrase)
        except GeocodeUnavailable as e:
            self._logger.warning(
                "Geocoding unavailable, searching without location",
                extra={"location": phrase, "error": str(e)},
            )
            return None

        country_match = _COUNTRY_CODE_RE.search(candidate.display_name)
        try:
            return LocationQuery(
                latitude=candidate.latitude,
                longitude=candidate.longitude,
                radius_km=self._radius_for(candidate),
                country_code=country_match.group(1) if country_match else None,
                max_results=self.config.max_results,
                source="geocoder",
            )
        except ValueError as e:
            self._logger.warning(
                "Discarding invalid geocoding candidate",
                extra={"location": phrase, "error": str(e)},
            )
            return None

    # ── Helpers ───────────────────────────────────────────────────

    def _radius_for(self, candidate: GeocodeCandidate) -> float:
        """Pick a search radius from the candidate's administrative level."""
        components = candidate.display_name.split(",")
        if candidate.place_type == "country" or len(components) <= 2:
            return self.config.country_radius_km
        if candidate.place_type in ("state", "region"):
            return self.config.region_radius_km
        return self.config.city_radius_km

    def _from_entry(self, entry: GazetteerEntry, source: str) -> LocationQuery:
        return LocationQuery(
            latitude=entry.latitude,
            longitude=entry.longitude,
            radius_km=entry.radius_km,
            country_code=entry.country_code,
            max_results=self.config.max_results,
            source=source,
        )
