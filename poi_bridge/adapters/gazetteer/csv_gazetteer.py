"""CSV gazetteer repository adapter.

Loads the static place-name table once and exposes it as a read-only
mapping. Expected columns: ``name, latitude, longitude, radius_km,
country_code``.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Optional

from ...config import GazetteerConfig, get_config
from ...domain.errors import ConfigurationError
from ...domain.models import GazetteerEntry
from ...ports.gazetteer import Gazetteer


@dataclass
class CSVGazetteerRepository:
    """Gazetteer repository backed by a CSV file.

    Attributes:
        config: Gazetteer configuration (data directory, file name)
    """

    config: GazetteerConfig = field(default_factory=lambda: get_config().gazetteer)
    _logger: logging.Logger = field(init=False, repr=False)
    _gazetteer: Optional[Gazetteer] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> Gazetteer:
        """Load the gazetteer from CSV, once.

        Returns:
            Read-only mapping of lowercase names to entries, in file order.

        Raises:
            ConfigurationError: If the file cannot be read.
        """
        if self._gazetteer is not None:
            return self._gazetteer

        path = self.config.path
        try:
            entries = self._read_entries()
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read gazetteer at {path}",
                setting_name="gazetteer.path",
                cause=e,
            )

        self._gazetteer = MappingProxyType(entries)
        self._logger.info(
            "Gazetteer loaded",
            extra={"path": str(path), "entries": len(entries)},
        )
        return self._gazetteer

    def _read_entries(self) -> Dict[str, GazetteerEntry]:
        entries: Dict[str, GazetteerEntry] = {}

        with self.config.path.open(encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                name = (row.get("name") or "").strip().lower()
                if not name:
                    continue

                try:
                    entry = GazetteerEntry(
                        name=name,
                        latitude=float(row["latitude"]),
                        longitude=float(row["longitude"]),
                        radius_km=float(row["radius_km"]),
                        country_code=(row.get("country_code") or "").strip().upper()
                        or None,
                    )
                except (KeyError, TypeError, ValueError) as e:
                    self._logger.warning(
                        "Skipping invalid gazetteer row",
                        extra={"line": line_no, "error": str(e)},
                    )
                    continue

                if entry.radius_km <= 0:
                    self._logger.warning(
                        "Skipping gazetteer row with non-positive radius",
                        extra={"line": line_no, "entry": name},
                    )
                    continue

                entries[name] = entry

        return entries
