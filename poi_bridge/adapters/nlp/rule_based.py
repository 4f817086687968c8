"""Rule-based command interpreter adapter.

Wraps the keyword/regex logic from nlp/command.py with the
CommandInterpreterPort interface.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

from ...domain.models import Intent
from ...nlp.command import interpret


@dataclass
class RuleBasedCommandInterpreter:
    """Rule-based implementation of CommandInterpreterPort."""

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def interpret(self, command: str) -> Tuple[Intent, str]:
        """Classify a command and extract its location phrase.

        Args:
            command: The raw command text.

        Returns:
            Tuple of (intent, location phrase).
        """
        intent, phrase = interpret(command)

        self._logger.debug(
            "Command interpreted",
            extra={
                "command_length": len(command),
                "intent": intent.name,
                "location": phrase,
            },
        )

        return intent, phrase
