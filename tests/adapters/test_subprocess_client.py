"""Tests for the subprocess JSON-RPC client.

The backend is a real child process: a small Python script that reads
one request from stdin and answers according to the method and tool
name it was sent.
"""

import sys
import textwrap

import pytest

from poi_bridge.adapters.rpc import SubprocessRPCClient
from poi_bridge.config import RPCConfig
from poi_bridge.domain.errors import ProcessError, RPCError

FAKE_BACKEND = textwrap.dedent(
    """
    import json, os, sys, time

    request = json.loads(sys.stdin.readline())
    rid = request["id"]
    method = request["method"]
    params = request.get("params") or {}
    name = params.get("name")
    args = params.get("arguments") or {}

    def reply(**fields):
        print(json.dumps(dict(jsonrpc="2.0", id=rid, **fields)))

    print("fake backend starting")
    print("warning: not json {", file=sys.stderr)

    if method == "tools/list" and "FAKE_TOOLS_RESULT" in os.environ:
        reply(result=json.loads(os.environ["FAKE_TOOLS_RESULT"]))
    elif method == "tools/list":
        reply(result={"tools": [{"name": "list_poi", "description": "List POIs"}]})
    elif method == "silent":
        pass
    elif method == "wrong_id":
        print(json.dumps({"jsonrpc": "2.0", "id": rid + 1, "result": "stale"}))
        print(json.dumps({"id": rid, "result": "no version tag"}))
        reply(result="right one")
    elif method == "sleep":
        time.sleep(30)
    elif method == "fail":
        reply(error={"message": "Invalid API key"})
    elif method == "fail_without_message":
        reply(error={"code": -32000})
    elif method == "echo_env":
        reply(result={"key": os.environ.get("FAKE_OCM_KEY")})
    elif method == "tools/call" and name == "list_poi":
        pois = [{"ID": 1, "AddressInfo": {"Latitude": 51.5, "Longitude": -0.1}}]
        text = json.dumps({"pois": pois, "arguments": args})
        reply(result={"content": [{"type": "text", "text": text}]})
    elif method == "tools/call" and name == "broken_text":
        reply(result={"content": [{"type": "text", "text": "Rate limited, try later"}]})
    elif method == "tools/call" and name == "image":
        reply(result={"content": [{"type": "image", "data": "abc"}]})
    elif method == "tools/call" and name == "plain":
        reply(result={"value": 7})
    elif method == "tools/call":
        reply(error={"message": "Unknown tool: " + str(name)})
    else:
        reply(result={"method": method, "params": params})
    print("fake backend done")
    """
)


@pytest.fixture()
def client():
    config = RPCConfig(
        command=[sys.executable, "-c", FAKE_BACKEND],
        api_key_env="FAKE_OCM_KEY",
        timeout_seconds=20,
    )
    return SubprocessRPCClient(config)


def test_call_skips_log_lines(client):
    result = client.call("ping", {"a": 1})

    assert result == {"method": "ping", "params": {"a": 1}}


def test_call_requires_matching_id_and_version_tag(client):
    assert client.call("wrong_id") == "right one"


def test_missing_response_raises(client):
    with pytest.raises(RPCError) as exc_info:
        client.call("silent")

    assert exc_info.value.message == "no valid response"
    assert exc_info.value.method == "silent"


def test_error_response_surfaces_message(client):
    with pytest.raises(RPCError) as exc_info:
        client.call("fail")

    assert str(exc_info.value) == "Invalid API key"


def test_error_without_message(client):
    with pytest.raises(RPCError) as exc_info:
        client.call("fail_without_message")

    assert str(exc_info.value) == "RPC error"


def test_api_key_defaults_to_blank(client, monkeypatch):
    monkeypatch.delenv("FAKE_OCM_KEY", raising=False)

    assert client.call("echo_env") == {"key": ""}


def test_api_key_is_forwarded(client, monkeypatch):
    monkeypatch.setenv("FAKE_OCM_KEY", "secret")

    assert client.call("echo_env") == {"key": "secret"}


def test_call_tool_decodes_text_content(client):
    result = client.call_tool("list_poi", {"maxresults": 10, "latitude": 51.5})

    assert result["arguments"] == {"maxresults": 10, "latitude": 51.5}
    assert result["pois"][0]["AddressInfo"]["Latitude"] == 51.5


def test_call_tool_returns_raw_content_when_text_is_not_json(client):
    result = client.call_tool("broken_text")

    assert result == [{"type": "text", "text": "Rate limited, try later"}]


def test_call_tool_returns_non_text_content(client):
    assert client.call_tool("image") == [{"type": "image", "data": "abc"}]


def test_call_tool_returns_result_without_content(client):
    assert client.call_tool("plain") == {"value": 7}


def test_call_tool_propagates_errors(client):
    with pytest.raises(RPCError, match="Unknown tool: missing"):
        client.call_tool("missing")


def test_list_tools(client):
    assert client.list_tools() == [{"name": "list_poi", "description": "List POIs"}]


@pytest.mark.parametrize(
    "result", ['{"tools": 5}', '{"tools": {"name": "list_poi"}}', '{}', '"tools"']
)
def test_list_tools_without_a_tool_list(client, monkeypatch, result):
    monkeypatch.setenv("FAKE_TOOLS_RESULT", result)

    assert client.list_tools() == []


def test_list_tools_swallows_failures():
    config = RPCConfig(command=[sys.executable, "-c", "print('no protocol here')"])

    assert SubprocessRPCClient(config).list_tools() == []


def test_unstartable_backend_raises_process_error():
    config = RPCConfig(command=["definitely-not-a-real-backend-binary"])

    with pytest.raises(ProcessError) as exc_info:
        SubprocessRPCClient(config).call("tools/list")

    assert exc_info.value.command == ("definitely-not-a-real-backend-binary",)


def test_list_tools_swallows_process_error():
    config = RPCConfig(command=["definitely-not-a-real-backend-binary"])

    assert SubprocessRPCClient(config).list_tools() == []


def test_hung_backend_times_out():
    config = RPCConfig(
        command=[sys.executable, "-c", FAKE_BACKEND], timeout_seconds=0.5
    )

    with pytest.raises(RPCError, match="timed out"):
        SubprocessRPCClient(config).call("sleep")


def test_child_ignoring_stdin_still_parsed():
    script = 'import json; print(json.dumps({"jsonrpc": "2.0", "id": 0, "result": 1}))'
    config = RPCConfig(command=[sys.executable, "-c", script])

    # id 0 never matches a timestamp id
    with pytest.raises(RPCError, match="no valid response"):
        SubprocessRPCClient(config).call("anything")
