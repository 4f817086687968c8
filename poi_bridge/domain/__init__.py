"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    BridgeError,
    ConfigurationError,
    GeocodeUnavailable,
    ProcessError,
    RPCError,
)
from .models import (
    POI,
    CommandResult,
    GazetteerEntry,
    GeocodeCandidate,
    GeoLocation,
    Intent,
    LocationQuery,
    RPCRequest,
)

__all__ = [
    # Models
    "POI",
    "Intent",
    "GeoLocation",
    "GazetteerEntry",
    "GeocodeCandidate",
    "LocationQuery",
    "RPCRequest",
    "CommandResult",
    # Errors
    "BridgeError",
    "ProcessError",
    "RPCError",
    "GeocodeUnavailable",
    "ConfigurationError",
]
