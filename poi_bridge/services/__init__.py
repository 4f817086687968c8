"""Services layer - Application orchestration.

Available services:
- CommandService: executes a free-text command end to end
- LocationResolverService: resolves location phrases to search parameters
"""

from .command_service import CommandService
from .location_resolver import LocationResolverService

__all__ = ["CommandService", "LocationResolverService"]
