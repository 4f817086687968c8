"""Gazetteer port - Static place-name table."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Protocol

if TYPE_CHECKING:
    from ..domain.models import GazetteerEntry

# Lowercase place name or ISO code -> entry, in source order
Gazetteer = Mapping[str, "GazetteerEntry"]


class GazetteerRepositoryPort(Protocol):
    """Port for loading the gazetteer.

    Implementation: adapters/gazetteer/csv_gazetteer.py

    The table is read once and handed out as a read-only mapping.
    """

    def load(self) -> Gazetteer:
        """Load the gazetteer.

        Returns:
            Read-only mapping of lowercase keys to entries.
        """
        ...
