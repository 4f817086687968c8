"""RPC adapters - Implementations of ToolBackendPort.

Available implementations:
- SubprocessRPCClient: one child process per JSON-RPC call over stdio
"""

from .subprocess_client import SubprocessRPCClient

__all__ = ["SubprocessRPCClient"]
