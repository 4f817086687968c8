"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .cache import CachePort
from .gazetteer import Gazetteer, GazetteerRepositoryPort
from .geocoding import GeocoderPort
from .nlp import CommandInterpreterPort
from .rpc import ToolBackendPort

__all__ = [
    "CachePort",
    "Gazetteer",
    "GazetteerRepositoryPort",
    "GeocoderPort",
    "CommandInterpreterPort",
    "ToolBackendPort",
]
