"""Post-hoc radius filtering of backend POIs.

The backend is given a center and a distance, but nothing guarantees it
honours them, so results are re-checked here against the resolved area.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from ..domain.models import POI, GeoLocation
from .distance import haversine_km


def poi_location(poi: Any) -> Optional[GeoLocation]:
    """Return the address coordinates of a POI, or None if absent.

    Reads ``AddressInfo.Latitude`` and ``AddressInfo.Longitude``. A zero
    coordinate is a valid coordinate; only missing or non-numeric values
    count as absent.
    """
    if not isinstance(poi, dict):
        return None
    address = poi.get("AddressInfo")
    if not isinstance(address, dict):
        return None

    lat = address.get("Latitude")
    lon = address.get("Longitude")
    if lat is None or lon is None:
        return None

    try:
        return GeoLocation(latitude=float(lat), longitude=float(lon))
    except (TypeError, ValueError):
        return None


def filter_by_radius(
    pois: Iterable[POI],
    center: Optional[GeoLocation],
    radius_km: Optional[float],
) -> List[POI]:
    """Keep only POIs within ``radius_km`` of ``center``.

    When no center or radius is given the POIs pass through unchanged.
    POIs without address coordinates are dropped whenever a filter is
    applied.
    """
    items = list(pois)
    if center is None or radius_km is None:
        return items

    kept: List[POI] = []
    for poi in items:
        location = poi_location(poi)
        if location is None:
            continue
        distance = haversine_km(
            center.latitude, center.longitude, location.latitude, location.longitude
        )
        if distance <= radius_km:
            kept.append(poi)
    return kept
