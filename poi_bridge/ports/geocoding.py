"""Geocoding port - Free-text place lookup.

This protocol defines the contract for the optional external geocoder
consulted when a location phrase matches nothing in the gazetteer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeocodeCandidate


class GeocoderPort(Protocol):
    """Port for geocoding services.

    Implementation: adapters/geocoding/nominatim_adapter.py
    """

    def search(self, query: str) -> GeocodeCandidate:
        """Look up a free-text place and return its first candidate.

        Args:
            query: The raw location phrase (e.g., "Rennes, Bretagne").

        Returns:
            The first candidate returned by the service.

        Raises:
            GeocodeUnavailable: If the lookup failed or found nothing.
        """
        ...
