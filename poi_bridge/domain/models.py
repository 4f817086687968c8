"""Immutable domain models for the POI bridge.

All models are frozen dataclasses with slots. POIs themselves stay
plain dictionaries: the backend owns their schema and the bridge only
reads the address coordinates out of them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

POI = Dict[str, Any]

UNRECOGNIZED_MESSAGE = (
    'Command not recognized. Try: "Find charging stations in [location]" '
    'or "List tools"'
)
AVAILABLE_COMMANDS = ("Find charging stations in [location]", "List tools")


class Intent(Enum):
    """Classification of an inbound command."""

    LIST_TOOLS = auto()
    SEARCH_POI = auto()
    UNRECOGNIZED = auto()


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class GazetteerEntry:
    """A known place with its default search radius.

    Attributes:
        name: Lowercase place name or ISO country code
        latitude: Center latitude
        longitude: Center longitude
        radius_km: Search radius around the center
        country_code: ISO 3166-1 alpha-2 code, if known
    """

    name: str
    latitude: float
    longitude: float
    radius_km: float
    country_code: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GeocodeCandidate:
    """First candidate returned by an external geocoder.

    Attributes:
        latitude: Candidate latitude
        longitude: Candidate longitude
        display_name: Full comma-separated display name
        place_type: Geocoder ``type`` (or ``class``) of the place
    """

    latitude: float
    longitude: float
    display_name: str = ""
    place_type: str = ""


@dataclass(frozen=True, slots=True)
class LocationQuery:
    """Geographic parameters for one POI search.

    An unset latitude/longitude means no geographic constraint: the
    backend's default result set is returned unfiltered.

    Attributes:
        latitude: Search center latitude
        longitude: Search center longitude
        radius_km: Search radius, required when the center is set
        country_code: Optional ISO country code hint for the backend
        max_results: Upper bound on backend results
        source: Resolution step that produced the query
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: Optional[float] = None
    country_code: Optional[str] = None
    max_results: int = 100
    source: str = "none"

    def __post_init__(self) -> None:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("Latitude and longitude must be set together")
        if self.latitude is not None and (
            self.radius_km is None or self.radius_km <= 0
        ):
            raise ValueError(
                f"radius_km must be positive when a center is set, got {self.radius_km}"
            )

    @property
    def has_constraint(self) -> bool:
        """Check if the query restricts results geographically."""
        return self.latitude is not None and self.longitude is not None

    @property
    def center(self) -> Optional[GeoLocation]:
        """Return the search center, if any."""
        if not self.has_constraint:
            return None
        return GeoLocation(latitude=self.latitude, longitude=self.longitude)  # type: ignore[arg-type]

    def to_params(self) -> Dict[str, Any]:
        """Build the ``list_poi`` tool arguments for this query."""
        params: Dict[str, Any] = {"maxresults": self.max_results}
        if self.has_constraint:
            params["latitude"] = self.latitude
            params["longitude"] = self.longitude
            params["distance"] = self.radius_km
        if self.country_code:
            params["countrycode"] = self.country_code
        return params


@dataclass(frozen=True, slots=True)
class RPCRequest:
    """A single JSON-RPC request envelope."""

    id: int
    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    jsonrpc: str = "2.0"

    def to_json(self) -> str:
        """Serialize to a single newline-free JSON line."""
        return json.dumps(
            {
                "jsonrpc": self.jsonrpc,
                "id": self.id,
                "method": self.method,
                "params": self.params,
            }
        )


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of executing one inbound command.

    Attributes:
        intent: Detected intent
        location_phrase: Location text extracted from the command
        query: Resolved query (POI searches only)
        items: POIs or tool descriptors
        message: Error message for unrecognized commands
        suggestions: Example commands offered with the message
    """

    intent: Intent
    location_phrase: str = ""
    query: Optional[LocationQuery] = None
    items: Any = field(default_factory=list)
    message: Optional[str] = None
    suggestions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_recognized(self) -> bool:
        """Check if the command mapped to a known intent."""
        return self.intent is not Intent.UNRECOGNIZED

    def to_payload(self) -> Any:
        """Build the JSON payload returned to the host."""
        if self.intent is Intent.SEARCH_POI:
            return self.items
        if self.intent is Intent.LIST_TOOLS:
            return {"tools": list(self.items)}
        return {
            "error": self.message or UNRECOGNIZED_MESSAGE,
            "availableCommands": list(self.suggestions or AVAILABLE_COMMANDS),
        }


def tool_names(tools: List[Dict[str, Any]]) -> List[str]:
    """Return the names of tool descriptors, skipping unnamed ones."""
    return [str(tool["name"]) for tool in tools if isinstance(tool, dict) and tool.get("name")]
