import pytest
from pydantic import ValidationError

from poi_bridge.config import AppConfig, RPCConfig, get_config, reset_config


def test_defaults():
    config = AppConfig()

    assert config.rpc.command == ["npx", "ocm-mcp"]
    assert config.rpc.api_key_env == "OCM_API_KEY"
    assert config.search.tool_name == "list_poi"
    assert config.search.max_results == 100
    assert config.search.coordinate_radius_km == 25
    assert config.gazetteer.path.name == "gazetteer.csv"
    assert config.gazetteer.path.exists()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("POI_RPC_COMMAND", '["node", "server.js"]')
    monkeypatch.setenv("POI_RPC_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("POI_GEO_ENABLED", "false")
    monkeypatch.setenv("POI_SEARCH_MAX_RESULTS", "20")

    config = AppConfig()

    assert config.rpc.command == ["node", "server.js"]
    assert config.rpc.timeout_seconds == 5
    assert config.geocoding.enabled is False
    assert config.search.max_results == 20


def test_empty_backend_command_rejected():
    with pytest.raises(ValidationError):
        RPCConfig(command=[])


def test_get_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("POI_SEARCH_TOOL_NAME", "other_tool")
    reset_config()

    assert get_config() is not first
    assert get_config().search.tool_name == "other_tool"
