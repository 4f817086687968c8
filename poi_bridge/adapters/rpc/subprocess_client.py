"""Subprocess JSON-RPC client adapter.

Every call starts a fresh backend process, writes one request to its
stdin, closes stdin, and waits for the process to exit. The response
is the first stdout line that parses as a JSON-RPC message with the
request's id; any other output (log lines, banners) is skipped.
Stderr is discarded.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ...config import RPCConfig, get_config
from ...domain.errors import BridgeError, ProcessError, RPCError
from ...domain.models import RPCRequest


@dataclass
class SubprocessRPCClient:
    """JSON-RPC client speaking to a one-shot child process.

    Implements ToolBackendPort. The client holds no per-call state, so
    one instance can serve concurrent requests; each call owns its own
    process and output buffer.

    Attributes:
        config: Backend command, credential variable and timeout
    """

    config: RPCConfig = field(default_factory=lambda: get_config().rpc)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    # ── Public API ────────────────────────────────────────────────

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform one JSON-RPC call and return its ``result``.

        Args:
            method: RPC method name (e.g. ``tools/call``).
            params: Method parameters.

        Returns:
            The ``result`` field of the matching response.

        Raises:
            ProcessError: If the backend could not be started.
            RPCError: If no matching response was found, the backend
                timed out, or the response carries an error.
        """
        request = RPCRequest(
            id=self._new_request_id(),
            method=method,
            params=dict(params or {}),
            jsonrpc=self.config.protocol_version,
        )
        self._logger.debug(
            "Sending RPC request",
            extra={"method": method, "request_id": request.id},
        )

        output = self._exchange(request)
        response = self._find_response(output, request.id)

        if response is None:
            raise RPCError("no valid response", method=method, request_id=request.id)

        error = response.get("error")
        if error:
            if isinstance(error, dict):
                message = error.get("message") or "RPC error"
            else:
                message = str(error)
            raise RPCError(str(message), method=method, request_id=request.id)

        return response.get("result")

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke a backend tool via ``tools/call``.

        Results following the ``{"content": [{"type": "text", "text":
        "<json>"}]}`` convention are decoded; if the text is not valid
        JSON the raw ``content`` list is returned instead.

        Raises:
            ProcessError: If the backend could not be started.
            RPCError: If the call failed.
        """
        try:
            result = self.call(
                "tools/call", {"name": name, "arguments": dict(arguments or {})}
            )
        except BridgeError as e:
            self._logger.error(
                "Tool call failed",
                extra={"tool": name, "error": str(e)},
            )
            raise

        return self._unwrap_content(result, name)

    def list_tools(self) -> List[Dict[str, Any]]:
        """List the backend's tools; failures are logged and yield ``[]``."""
        try:
            result = self.call("tools/list", {})
        except BridgeError as e:
            self._logger.warning(
                "Listing tools failed",
                extra={"error": str(e)},
            )
            return []

        tools = result.get("tools") if isinstance(result, dict) else None
        if not isinstance(tools, list):
            self._logger.warning(
                "Backend returned no tool list",
                extra={"result_type": type(tools).__name__},
            )
            return []
        return tools

    # ── Private helpers ───────────────────────────────────────────

    @staticmethod
    def _new_request_id() -> int:
        # Millisecond timestamp
        return int(time.time() * 1000)

    def _child_env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env[self.config.api_key_env] = os.environ.get(self.config.api_key_env, "")
        return env

    def _exchange(self, request: RPCRequest) -> str:
        """Run the backend once and return everything it wrote to stdout."""
        command = list(self.config.command)
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                env=self._child_env(),
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise ProcessError(
                f"Failed to start backend {' '.join(command)!r}",
                command=tuple(command),
                cause=e,
            )

        timeout = self.config.timeout_seconds
        try:
            stdout, _ = process.communicate(request.to_json() + "\n", timeout=timeout)
        except subprocess.TimeoutExpired as e:
            process.kill()
            process.communicate()
            raise RPCError(
                f"Backend timed out after {timeout}s",
                method=request.method,
                request_id=request.id,
                cause=e,
            )

        self._logger.debug(
            "Backend exited",
            extra={
                "method": request.method,
                "returncode": process.returncode,
                "output_bytes": len(stdout or ""),
            },
        )
        return stdout or ""

    @staticmethod
    def _find_response(output: str, request_id: int) -> Optional[Dict[str, Any]]:
        """Return the first output line that is the response to ``request_id``."""
        for line in output.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                message = json.loads(line)
            except ValueError:
                continue
            if (
                isinstance(message, dict)
                and message.get("jsonrpc")
                and message.get("id") == request_id
            ):
                return message
        return None

    def _unwrap_content(self, result: Any, tool_name: str) -> Any:
        if not isinstance(result, dict):
            return result

        content = result.get("content")
        if content is None:
            return result

        if (
            isinstance(content, list)
            and content
            and isinstance(content[0], dict)
            and content[0].get("type") == "text"
        ):
            try:
                return json.loads(content[0].get("text"))
            except (TypeError, ValueError) as e:
                self._logger.warning(
                    "Tool returned non-JSON text content",
                    extra={"tool": tool_name, "error": str(e)},
                )

        return content
