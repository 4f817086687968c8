"""RPC port - Tool backend spoken to over JSON-RPC.

Each call is one complete request/response exchange; implementations
must not share state between calls.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol


class ToolBackendPort(Protocol):
    """Port for the POI tool backend.

    Implementation: adapters/rpc/subprocess_client.py
    """

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform one JSON-RPC call and return its ``result``.

        Raises:
            ProcessError: If the backend could not be started.
            RPCError: If the response is missing, malformed or an error.
        """
        ...

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke a backend tool, unwrapping JSON text content.

        Raises:
            ProcessError: If the backend could not be started.
            RPCError: If the response is missing, malformed or an error.
        """
        ...

    def list_tools(self) -> List[Dict[str, Any]]:
        """List the backend's tool descriptors; never raises."""
        ...
