"""Gazetteer adapters - Implementations of GazetteerRepositoryPort.

Available implementations:
- CSVGazetteerRepository: place table read from a CSV file
"""

from .csv_gazetteer import CSVGazetteerRepository

__all__ = ["CSVGazetteerRepository"]
