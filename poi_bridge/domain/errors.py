"""Typed domain errors for the POI bridge.

All errors inherit from BridgeError and can optionally wrap a root
cause exception for debugging.

Location resolution has no error type of its own: an unresolvable
phrase degrades to a query without geographic constraint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BridgeError(Exception):
    """Base error for the POI bridge domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ProcessError(BridgeError):
    """The tool backend child process could not be started.

    Attributes:
        command: The command line that failed to launch
    """

    command: tuple[str, ...] = ()


@dataclass
class RPCError(BridgeError):
    """Malformed, missing, timed-out or explicit-error RPC response.

    Attributes:
        method: RPC method that was called
        request_id: Id of the request the response was expected for
    """

    method: str = ""
    request_id: Optional[int] = None


@dataclass
class GeocodeUnavailable(BridgeError):
    """External geocoding failed or returned no candidates.

    Never surfaced to callers of the resolver; logged and skipped.

    Attributes:
        query: The location query that failed
    """

    query: str = ""


@dataclass
class ConfigurationError(BridgeError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
