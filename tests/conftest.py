"""Shared test fixtures - gazetteer, fake backend and POI builders."""

from unittest.mock import MagicMock

import pytest

from poi_bridge.adapters.gazetteer import CSVGazetteerRepository
from poi_bridge.config import GazetteerConfig, SearchConfig, reset_config
from poi_bridge.container import reset_container


@pytest.fixture(autouse=True)
def _fresh_config():
    """Make sure env overrides from one test never leak into another."""
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture()
def gazetteer():
    """The gazetteer shipped with the package."""
    return CSVGazetteerRepository(GazetteerConfig()).load()


@pytest.fixture()
def search_config():
    return SearchConfig()


@pytest.fixture()
def fake_backend():
    """A ToolBackendPort stand-in with no tools and no POIs."""
    backend = MagicMock()
    backend.call_tool.return_value = []
    backend.list_tools.return_value = []
    return backend


def make_poi(lat, lon, title="Station"):
    """Build a minimal OCM-style POI record."""
    return {
        "ID": title,
        "AddressInfo": {"Title": title, "Latitude": lat, "Longitude": lon},
    }
