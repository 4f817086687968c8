"""Geographic helpers: great-circle distance and radius filtering."""

from .distance import EARTH_RADIUS_KM, haversine_km
from .filtering import filter_by_radius, poi_location

__all__ = ["EARTH_RADIUS_KM", "haversine_km", "filter_by_radius", "poi_location"]
