"""Command service - Main orchestrator.

Runs one inbound command end to end:
1. Intent classification and location extraction
2. Location resolution
3. Tool backend call
4. Radius filtering of the returned POIs
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from ..config import SearchConfig, get_config
from ..domain.errors import BridgeError
from ..domain.models import (
    AVAILABLE_COMMANDS,
    UNRECOGNIZED_MESSAGE,
    CommandResult,
    Intent,
    LocationQuery,
    tool_names,
)
from ..geo.filtering import filter_by_radius
from ..ports.nlp import CommandInterpreterPort
from ..ports.rpc import ToolBackendPort
from .location_resolver import LocationResolverService


@dataclass
class CommandService:
    """Main service for executing free-text POI commands.

    Attributes:
        interpreter: Classifies commands and extracts locations
        resolver: Turns location phrases into search parameters
        backend: POI tool backend
        config: Tool name and result limits
    """

    interpreter: CommandInterpreterPort
    resolver: LocationResolverService
    backend: ToolBackendPort
    config: SearchConfig = field(default_factory=lambda: get_config().search)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def execute(self, command: str) -> CommandResult:
        """Execute a command.

        Args:
            command: The raw command text.

        Returns:
            CommandResult holding POIs, tool descriptors, or an
            unrecognized-command message with suggestions.

        Raises:
            ProcessError: If the backend could not be started.
            RPCError: If the POI search call failed.
        """
        intent, phrase = self.interpreter.interpret(command)
        self._logger.info(
            "Command received",
            extra={"intent": intent.name, "location": phrase},
        )

        if intent is Intent.SEARCH_POI:
            return self._search(phrase)

        if intent is Intent.LIST_TOOLS:
            tools = self.backend.list_tools()
            return CommandResult(intent=intent, items=tools)

        return CommandResult(
            intent=intent,
            message=UNRECOGNIZED_MESSAGE,
            suggestions=AVAILABLE_COMMANDS,
        )

    def execute_safe(self, command: str) -> Tuple[Optional[Any], Optional[str]]:
        """Execute a command, returning an error message instead of raising.

        Returns:
            Tuple of (payload or None, error message or None).
        """
        try:
            return self.execute(command).to_payload(), None
        except BridgeError as e:
            return None, str(e)
        except Exception as e:
            self._logger.exception("Unexpected error while executing command")
            return None, f"Error: {e}"

    def probe(self) -> List[str]:
        """List the backend's tools at startup and log their names."""
        names = tool_names(self.backend.list_tools())
        self._logger.info(
            "Backend ready",
            extra={"tool_count": len(names), "tools": names},
        )
        return names

    def _search(self, phrase: str) -> CommandResult:
        if phrase:
            query = self.resolver.resolve(phrase)
        else:
            query = LocationQuery(max_results=self.config.max_results)

        params = query.to_params()
        self._logger.info("Searching POIs", extra={"params": params})

        result = self.backend.call_tool(self.config.tool_name, params)

        items = result
        if isinstance(result, list):
            items = filter_by_radius(result, query.center, query.radius_km)
            self._logger.info(
                "POIs filtered",
                extra={"received": len(result), "kept": len(items)},
            )
        else:
            self._logger.warning(
                "Backend returned a non-list POI result",
                extra={"result_type": type(result).__name__},
            )

        return CommandResult(
            intent=Intent.SEARCH_POI,
            location_phrase=phrase,
            query=query,
            items=items,
        )
